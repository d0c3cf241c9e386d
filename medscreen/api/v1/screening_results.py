"""Doctor-administered screening endpoints.

Totals and tiers are computed server-side from the stored template.
"""

from fastapi import APIRouter, HTTPException, status

from medscreen.api.deps import CurrentDoctor, DbSession
from medscreen.models.questionnaire import ScreeningResult
from medscreen.schemas.screening import ScreeningResultCreate, ScreeningResultRead
from medscreen.scoring.questionnaire import ScoringError
from medscreen.services.access import NotFoundError
from medscreen.services.screening import ScreeningService

router = APIRouter(prefix="/screening-results", tags=["screening"])


@router.post("", response_model=ScreeningResultRead, status_code=status.HTTP_201_CREATED)
async def record_screening(
    body: ScreeningResultCreate, doctor: CurrentDoctor, session: DbSession
) -> ScreeningResult:
    """Score and store a screening of one of the doctor's patients."""
    try:
        return await ScreeningService(session).record_screening(
            doctor, body.patient_id, body.template_id, body.answers
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ScoringError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("", response_model=list[ScreeningResultRead])
async def list_screenings(
    doctor: CurrentDoctor,
    session: DbSession,
    patient_id: str | None = None,
) -> list[ScreeningResult]:
    """List stored screenings, newest first."""
    return await ScreeningService(session).list_screenings(doctor, patient_id)


@router.get("/{result_id}", response_model=ScreeningResultRead)
async def get_screening(
    result_id: str, doctor: CurrentDoctor, session: DbSession
) -> ScreeningResult:
    try:
        return await ScreeningService(session).get_screening(doctor, result_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
