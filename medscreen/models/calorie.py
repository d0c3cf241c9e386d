"""Saved caloric requirement calculations."""

from sqlalchemy import JSON, CheckConstraint, Float, ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from medscreen.db.base import Base, TimestampMixin


class CalorieCalculation(Base, TimestampMixin):
    """Snapshot of a calculation for either a patient or a caregiver."""

    __tablename__ = "calorie_calculations"
    __table_args__ = (
        CheckConstraint(
            "(patient_id IS NULL) <> (caregiver_id IS NULL)",
            name="single_target",
        ),
    )

    doctor_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("doctors.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    patient_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("patients.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    caregiver_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("caregivers.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    gender: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )
    height_cm: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )
    weight_kg: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )
    age: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    activity_level: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )
    # CalorieResult.to_dict() at the time of saving
    result: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
    )

    @property
    def target_type(self) -> str:
        return "patient" if self.patient_id else "caregiver"

    @property
    def target_id(self) -> str:
        return self.patient_id or self.caregiver_id

    def __repr__(self) -> str:
        return f"<CalorieCalculation {self.target_type}={self.target_id[:8]}>"
