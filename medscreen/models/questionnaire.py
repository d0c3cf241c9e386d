"""Questionnaire templates and scored submissions."""

from enum import Enum

from sqlalchemy import JSON, Boolean, Float, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from medscreen.db.base import Base, TimestampMixin


class Audience(str, Enum):
    """Who a questionnaire template is meant to be filled in by."""

    PATIENT = "Pasien"
    CAREGIVER = "Caregiver"
    BOTH = "Keduanya"


class QuestionnaireTemplate(Base, TimestampMixin):
    """Doctor-authored questionnaire.

    questions and result_tiers are stored as JSON in the shape the scoring
    engine reads (see medscreen.scoring.questionnaire).
    """

    __tablename__ = "questionnaire_templates"

    doctor_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("doctors.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    audience: Mapped[Audience] = mapped_column(
        String(20),
        nullable=False,
    )
    questions: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
    )
    result_tiers: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
    )
    # Listed on the respondent portal
    is_public: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<QuestionnaireTemplate {self.title} ({self.audience})>"


class ScreeningResult(Base, TimestampMixin):
    """Screening administered by a doctor to a patient.

    result_label and recommendation are null when the total matched no tier.
    """

    __tablename__ = "screening_results"

    doctor_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("doctors.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    patient_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("patients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    template_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("questionnaire_templates.id", ondelete="CASCADE"),
        nullable=False,
    )
    answers: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
    )
    total_score: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )
    result_label: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    recommendation: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<ScreeningResult patient={self.patient_id[:8]} score={self.total_score}>"


class RespondentSubmission(Base, TimestampMixin):
    """Public questionnaire filled in through the respondent portal."""

    __tablename__ = "respondent_submissions"

    respondent_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("respondents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    template_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("questionnaire_templates.id", ondelete="CASCADE"),
        nullable=False,
    )
    # Role the respondent filled in as: Pasien or Caregiver
    fill_as: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )
    answers: Mapped[list] = mapped_column(
        JSON,
        nullable=False,
    )
    total_score: Mapped[float] = mapped_column(
        Float,
        nullable=False,
    )
    result_label: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    recommendation: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<RespondentSubmission respondent={self.respondent_id[:8]} score={self.total_score}>"
