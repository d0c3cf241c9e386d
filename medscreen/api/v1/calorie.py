"""Caloric requirement calculator endpoints."""

from fastapi import APIRouter, HTTPException, status

from medscreen.api.deps import CurrentDoctor, DbSession
from medscreen.models.calorie import CalorieCalculation
from medscreen.schemas.calorie import (
    CalorieCalculationCreate,
    CalorieCalculationRead,
    CalorieComputeRequest,
    CalorieResultRead,
)
from medscreen.scoring.calorie import CalorieResult, InvalidInputError, compute_calories
from medscreen.services.access import NotFoundError
from medscreen.services.calorie import CalorieService

router = APIRouter(tags=["calorie"])


@router.post("/calorie/compute", response_model=CalorieResultRead)
async def compute(body: CalorieComputeRequest, doctor: CurrentDoctor) -> CalorieResult:
    """Compute a calculation without saving it."""
    try:
        return compute_calories(body.to_input())
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post(
    "/calorie-calculations",
    response_model=CalorieCalculationRead,
    status_code=status.HTTP_201_CREATED,
)
async def save_calculation(
    body: CalorieCalculationCreate, doctor: CurrentDoctor, session: DbSession
) -> CalorieCalculation:
    """Compute and save a calculation for a patient or caregiver."""
    try:
        return await CalorieService(session).save_calculation(
            doctor, body.target_type, body.target_id, body.to_input()
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        # InvalidInputError included
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/calorie-calculations", response_model=list[CalorieCalculationRead])
async def list_calculations(
    doctor: CurrentDoctor,
    session: DbSession,
    target_type: str | None = None,
    target_id: str | None = None,
) -> list[CalorieCalculation]:
    """List saved calculations, optionally for one patient or caregiver."""
    return await CalorieService(session).list_calculations(doctor, target_type, target_id)
