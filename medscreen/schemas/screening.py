"""Pydantic schemas for screenings and respondent submissions.

Answers are passed through untouched (questionIndex, selected,
selectedOptions, value, customText) and validated by the scoring engine,
so structural problems surface as 400s with the engine's message.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, computed_field


class ScreeningResultCreate(BaseModel):
    """Doctor-administered screening of a patient."""

    patient_id: str
    template_id: str
    answers: list[dict[str, Any]] = Field(..., description="One entry per answered question")


class ScoredRecordRead(BaseModel):
    """Fields shared by every scored record."""

    id: str
    template_id: str
    answers: list[dict[str, Any]]
    total_score: float
    result_label: str | None = None
    recommendation: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def tier_resolved(self) -> bool:
        """False when the total matched none of the template's tiers."""
        return self.result_label is not None


class ScreeningResultRead(ScoredRecordRead):
    """Stored screening result."""

    doctor_id: str
    patient_id: str


class RespondentSubmissionCreate(BaseModel):
    """Questionnaire filled in through the respondent portal."""

    template_id: str
    fill_as: str = Field(..., description="Pasien or Caregiver")
    answers: list[dict[str, Any]]


class RespondentSubmissionRead(ScoredRecordRead):
    """Stored respondent submission."""

    respondent_id: str
    fill_as: str
