"""Scoring of screenings and respondent submissions.

Totals and tiers are always computed here from the stored template; scores
sent by clients are never trusted. A scoring error aborts the request before
anything is written.
"""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medscreen.core.logging import audit_logger
from medscreen.models.doctor import Doctor
from medscreen.models.patient import Caregiver
from medscreen.models.questionnaire import (
    Audience,
    QuestionnaireTemplate,
    RespondentSubmission,
    ScreeningResult,
)
from medscreen.models.respondent import Respondent
from medscreen.scoring.questionnaire import ScoringError, ScoringOutcome, score_submission
from medscreen.services.access import NotFoundError, can_see, scoped
from medscreen.services.patient import PatientService
from medscreen.services.questionnaire import QuestionnaireService, definition_of

logger = logging.getLogger(__name__)


class AudienceMismatchError(ValueError):
    """Raised when fill_as does not suit the template's audience."""
    pass


# Roles a respondent may fill in as, per template audience
ALLOWED_FILL_AS: dict[Audience, set[str]] = {
    Audience.PATIENT: {Audience.PATIENT.value},
    Audience.CAREGIVER: {Audience.CAREGIVER.value},
    Audience.BOTH: {Audience.PATIENT.value, Audience.CAREGIVER.value},
}


def check_fill_as(audience: str, fill_as: str) -> None:
    """Validate the role a respondent declares against the template audience.

    Raises:
        AudienceMismatchError: If the role is not accepted by the template
    """
    allowed = ALLOWED_FILL_AS.get(Audience(audience), set())
    if fill_as not in allowed:
        if Audience(audience) is Audience.BOTH:
            raise AudienceMismatchError(
                f"fill_as must be one of {sorted(allowed)}, got {fill_as!r}"
            )
        raise AudienceMismatchError(f"This questionnaire is for {audience} only")


def score_template(template: QuestionnaireTemplate, answers: list[dict[str, Any]]) -> ScoringOutcome:
    """Score answers against a stored template, logging the outcome.

    Raises:
        ScoringError: On malformed answers or questions; nothing is persisted
    """
    try:
        outcome = score_submission(definition_of(template), answers)
    except ScoringError as e:
        logger.warning(f"Rejected answers for questionnaire {template.id[:8]}: {e}")
        raise

    if not outcome.is_resolved:
        logger.info(
            f"Score {outcome.total_score} matched no tier of questionnaire {template.id[:8]}"
        )
    return outcome


class ScreeningService:
    """Record and list scored questionnaires."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # --- Doctor-administered screenings ---

    async def record_screening(
        self,
        doctor: Doctor,
        patient_id: str,
        template_id: str,
        answers: list[dict[str, Any]],
    ) -> ScreeningResult:
        """Score and store a screening of one of the doctor's patients.

        Raises:
            NotFoundError: If the patient or template is not visible
            ScoringError: If the answers do not fit the template
        """
        patient = await PatientService(self.session).get_patient(doctor, patient_id)
        template = await QuestionnaireService(self.session).get_for_doctor(doctor, template_id)

        outcome = score_template(template, answers)

        result = ScreeningResult(
            doctor_id=doctor.id,
            patient_id=patient.id,
            template_id=template.id,
            answers=answers,
            total_score=outcome.total_score,
            result_label=outcome.label,
            recommendation=outcome.recommendation,
        )
        self.session.add(result)
        await self.session.commit()
        await self.session.refresh(result)

        audit_logger.log(
            "screening_recorded",
            "doctor",
            doctor.id,
            "screening_result",
            result.id,
            {"total_score": outcome.total_score, "tier": outcome.label},
        )
        return result

    async def list_screenings(
        self, doctor: Doctor, patient_id: str | None = None
    ) -> list[ScreeningResult]:
        query = scoped(select(ScreeningResult), doctor, ScreeningResult.doctor_id)
        if patient_id:
            query = query.where(ScreeningResult.patient_id == patient_id)
        result = await self.session.execute(query.order_by(ScreeningResult.created_at.desc()))
        return list(result.scalars().all())

    async def get_screening(self, doctor: Doctor, result_id: str) -> ScreeningResult:
        result = await self.session.get(ScreeningResult, result_id)
        if result is None or not can_see(doctor, result.doctor_id):
            raise NotFoundError("Screening result not found")
        return result

    async def list_caregiver_history(
        self, doctor: Doctor, caregiver_id: str
    ) -> tuple[Caregiver, list[ScreeningResult]]:
        """Caregiver plus the screenings of the patient they look after.

        Non-admin doctors only see screenings they recorded themselves.

        Raises:
            NotFoundError: If the caregiver is not visible
        """
        caregiver = await PatientService(self.session).get_caregiver(doctor, caregiver_id)
        if caregiver.patient_id is None:
            return caregiver, []

        query = scoped(select(ScreeningResult), doctor, ScreeningResult.doctor_id).where(
            ScreeningResult.patient_id == caregiver.patient_id
        )
        result = await self.session.execute(query.order_by(ScreeningResult.created_at.desc()))
        return caregiver, list(result.scalars().all())

    # --- Respondent portal ---

    async def submit_respondent(
        self,
        respondent: Respondent,
        template_id: str,
        fill_as: str,
        answers: list[dict[str, Any]],
    ) -> RespondentSubmission:
        """Score and store a public questionnaire filled in by a respondent.

        Raises:
            NotFoundError: If the template does not exist or is not public
            AudienceMismatchError: If fill_as does not suit the template
            ScoringError: If the answers do not fit the template
        """
        template = await QuestionnaireService(self.session).get_public(template_id)
        check_fill_as(template.audience, fill_as)

        outcome = score_template(template, answers)

        submission = RespondentSubmission(
            respondent_id=respondent.id,
            template_id=template.id,
            fill_as=fill_as,
            answers=answers,
            total_score=outcome.total_score,
            result_label=outcome.label,
            recommendation=outcome.recommendation,
        )
        self.session.add(submission)
        await self.session.commit()
        await self.session.refresh(submission)

        audit_logger.log(
            "submission_created",
            "respondent",
            respondent.id,
            "respondent_submission",
            submission.id,
            {"total_score": outcome.total_score, "tier": outcome.label},
        )
        return submission

    async def list_submissions(self, respondent: Respondent) -> list[RespondentSubmission]:
        result = await self.session.execute(
            select(RespondentSubmission)
            .where(RespondentSubmission.respondent_id == respondent.id)
            .order_by(RespondentSubmission.created_at.desc())
        )
        return list(result.scalars().all())
