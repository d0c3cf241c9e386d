"""Pydantic schemas for the caloric requirement calculator."""

from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, Field

from medscreen.scoring.calorie import CalorieInput


class CalorieComputeRequest(BaseModel):
    """Biometrics for a calculation.

    gender and activity_level take stored values (Laki-laki/Perempuan,
    Istirahat/Ringan/Sedang/Berat) or English aliases; unknown values and
    zero or negative biometrics are rejected by the calculator with a 400.
    """

    gender: str
    height_cm: float = Field(validation_alias=AliasChoices("height_cm", "heightCm"))
    weight_kg: float = Field(validation_alias=AliasChoices("weight_kg", "weightKg"))
    age: int
    activity_level: str = Field(validation_alias=AliasChoices("activity_level", "activity"))

    def to_input(self) -> CalorieInput:
        return CalorieInput(
            gender=self.gender,
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            age=self.age,
            activity_level=self.activity_level,
        )


class CalorieResultRead(BaseModel):
    """Calculation breakdown in kcal/day."""

    ideal_body_weight: float
    basal_rate: float
    age_correction: float
    activity_correction: float
    weight_correction: float
    total: float
    total_rounded: int
    bmi: float

    model_config = {"from_attributes": True}


class CalorieCalculationCreate(CalorieComputeRequest):
    """Save a calculation for a patient or caregiver."""

    target_type: Literal["patient", "caregiver"] = Field(
        validation_alias=AliasChoices("target_type", "targetType")
    )
    target_id: str = Field(validation_alias=AliasChoices("target_id", "targetId"))


class CalorieCalculationRead(BaseModel):
    """Saved calculation with its result snapshot."""

    id: str
    doctor_id: str
    patient_id: str | None = None
    caregiver_id: str | None = None
    gender: str
    height_cm: float
    weight_kg: float
    age: int
    activity_level: str
    result: dict[str, Any]
    created_at: datetime

    model_config = {"from_attributes": True}
