"""Daily caloric requirement calculator.

Implements the ideal-body-weight method used for screening consultations:

1. Ideal body weight (BBI) from height, reduced by 10% for taller frames
   (men above 160 cm, women from 150 cm).
2. Basal requirement (KKB): 30 kcal/kg BBI for men, 25 kcal/kg for women.
3. Age correction: -5% at 40-59, -10% at 60-69, -20% above 70.
4. Activity correction: +10% rest, +20% light, +30% moderate, +50% heavy.
5. Weight correction from BMI: +20% when underweight (< 18.5),
   -20% when overweight (> 25).

Every correction is a fraction of KKB, never of the running total.
"""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class InvalidInputError(ValueError):
    """Raised when biometrics are missing, zero or out of range."""


class Gender(str, Enum):
    """Gender as stored by the screening records."""

    MALE = "Laki-laki"
    FEMALE = "Perempuan"

    @classmethod
    def _missing_(cls, value: object) -> "Gender | None":
        if isinstance(value, str):
            aliases = {"male": cls.MALE, "female": cls.FEMALE}
            return aliases.get(value.strip().lower())
        return None


class ActivityLevel(str, Enum):
    """Physical activity level."""

    REST = "Istirahat"
    LIGHT = "Ringan"
    MODERATE = "Sedang"
    HEAVY = "Berat"

    @classmethod
    def _missing_(cls, value: object) -> "ActivityLevel | None":
        if isinstance(value, str):
            aliases = {
                "rest": cls.REST,
                "light": cls.LIGHT,
                "moderate": cls.MODERATE,
                "heavy": cls.HEAVY,
            }
            return aliases.get(value.strip().lower())
        return None


# Fraction of KKB added for each activity level
ACTIVITY_FACTORS: dict[ActivityLevel, float] = {
    ActivityLevel.REST: 0.10,
    ActivityLevel.LIGHT: 0.20,
    ActivityLevel.MODERATE: 0.30,
    ActivityLevel.HEAVY: 0.50,
}

# Closed (lowest age, highest age, fraction of KKB) brackets
AGE_BRACKETS: tuple[tuple[int, int, float], ...] = (
    (40, 59, -0.05),
    (60, 69, -0.10),
)
# Applies strictly above this age; age 70 itself matches nothing
ELDERLY_AGE = 70
ELDERLY_FACTOR = -0.20

KCAL_PER_KG_MALE = 30
KCAL_PER_KG_FEMALE = 25

MALE_TALL_THRESHOLD_CM = 160
FEMALE_TALL_THRESHOLD_CM = 150
TALL_FRAME_MULTIPLIER = 0.9

UNDERWEIGHT_BMI = 18.5
OVERWEIGHT_BMI = 25
WEIGHT_CORRECTION_FACTOR = 0.20


@dataclass(frozen=True)
class CalorieInput:
    """Biometrics for one caloric requirement calculation."""

    gender: Gender | str
    height_cm: float
    weight_kg: float
    age: int
    activity_level: ActivityLevel | str


@dataclass(frozen=True)
class CalorieResult:
    """Breakdown of a caloric requirement calculation (kcal/day)."""

    ideal_body_weight: float
    basal_rate: float
    age_correction: float
    activity_correction: float
    weight_correction: float
    total: float
    total_rounded: int
    bmi: float

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the key names of stored calculation snapshots."""
        return {
            "bbi": self.ideal_body_weight,
            "kkb": self.basal_rate,
            "factorAge": self.age_correction,
            "factorActivity": self.activity_correction,
            "factorWeight": self.weight_correction,
            "total": self.total,
            "totalRounded": self.total_rounded,
            "bmi": self.bmi,
        }


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity."""
    return math.floor(value + 0.5)


def round_2dp(value: float) -> float:
    """Round to two decimal places with the same tie rule as round_half_up."""
    return math.floor(value * 100 + 0.5) / 100


def _coerce_enum(enum_cls: type[Enum], value: Any, field: str) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as e:
        raise InvalidInputError(f"Unrecognised {field}: {value!r}") from e


def _validate(data: CalorieInput) -> None:
    for field in ("height_cm", "weight_kg", "age"):
        value = getattr(data, field)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInputError(f"{field} must be provided and non-zero")
        if not value:
            raise InvalidInputError(f"{field} must be provided and non-zero")
        if not math.isfinite(value):
            raise InvalidInputError(f"{field} must be a finite number, got {value}")
        if value < 0:
            raise InvalidInputError(f"{field} must be positive, got {value}")


def normalize_input(data: CalorieInput) -> CalorieInput:
    """Validate biometrics and resolve gender/activity level to enum members.

    Raises:
        InvalidInputError: On missing, zero or negative height, weight or age,
            or an unrecognised gender or activity level
    """
    _validate(data)
    return replace(
        data,
        gender=_coerce_enum(Gender, data.gender, "gender"),
        activity_level=_coerce_enum(ActivityLevel, data.activity_level, "activity level"),
    )


def ideal_body_weight(gender: Gender, height_cm: float) -> float:
    """Ideal body weight (BBI) in kg.

    The male threshold is exclusive (> 160) while the female one is
    inclusive (>= 150).
    """
    if gender is Gender.MALE:
        multiplier = TALL_FRAME_MULTIPLIER if height_cm > MALE_TALL_THRESHOLD_CM else 1.0
    else:
        multiplier = TALL_FRAME_MULTIPLIER if height_cm >= FEMALE_TALL_THRESHOLD_CM else 1.0
    return (height_cm - 100) * multiplier


def age_correction_factor(age: int) -> float:
    """Fraction of KKB applied for the given age."""
    for low, high, factor in AGE_BRACKETS:
        if low <= age <= high:
            return factor
    if age > ELDERLY_AGE:
        return ELDERLY_FACTOR
    return 0.0


def body_mass_index(weight_kg: float, height_cm: float) -> float:
    """BMI in kg/m²."""
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def weight_correction_factor(bmi: float) -> float:
    """Fraction of KKB applied for the given BMI."""
    if bmi < UNDERWEIGHT_BMI:
        return WEIGHT_CORRECTION_FACTOR
    if bmi > OVERWEIGHT_BMI:
        return -WEIGHT_CORRECTION_FACTOR
    return 0.0


def compute_calories(data: CalorieInput) -> CalorieResult:
    """Compute the daily caloric requirement.

    Args:
        data: Biometrics; gender and activity level may be given as enum
              members, stored values ("Perempuan", "Sedang") or English
              aliases ("female", "moderate").

    Returns:
        CalorieResult with every component rounded to 2 decimal places and
        total_rounded as the nearest integer of the unrounded total.

    Raises:
        InvalidInputError: If height, weight or age is missing, zero or
            negative, or gender/activity level is not recognised.
    """
    data = normalize_input(data)
    gender = data.gender
    activity = data.activity_level

    bbi = ideal_body_weight(gender, data.height_cm)

    per_kg = KCAL_PER_KG_FEMALE if gender is Gender.FEMALE else KCAL_PER_KG_MALE
    kkb = bbi * per_kg

    age_corr = age_correction_factor(data.age) * kkb
    activity_corr = ACTIVITY_FACTORS[activity] * kkb

    bmi = body_mass_index(data.weight_kg, data.height_cm)
    weight_corr = weight_correction_factor(bmi) * kkb

    total = kkb + age_corr + activity_corr + weight_corr

    return CalorieResult(
        ideal_body_weight=round_2dp(bbi),
        basal_rate=round_2dp(kkb),
        age_correction=round_2dp(age_corr),
        activity_correction=round_2dp(activity_corr),
        weight_correction=round_2dp(weight_corr),
        total=round_2dp(total),
        total_rounded=round_half_up(total),
        bmi=round_2dp(bmi),
    )
