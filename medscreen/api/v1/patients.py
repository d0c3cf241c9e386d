"""Patient and caregiver endpoints for doctors.

Doctors manage their own records; ADMIN doctors see everyone's.
"""

from fastapi import APIRouter, HTTPException, status

from medscreen.api.deps import CurrentDoctor, DbSession
from medscreen.models.patient import Caregiver, Patient
from medscreen.schemas.patient import (
    CaregiverCreate,
    CaregiverHistoryRead,
    CaregiverRead,
    CaregiverUpdate,
    PatientCreate,
    PatientRead,
)
from medscreen.schemas.screening import ScreeningResultRead
from medscreen.services.access import NotFoundError
from medscreen.services.patient import PatientService
from medscreen.services.screening import ScreeningService

router = APIRouter(prefix="/patients", tags=["patients"])
caregiver_router = APIRouter(prefix="/caregivers", tags=["caregivers"])


def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# =============================================================================
# Patients
# =============================================================================


@router.get("", response_model=list[PatientRead])
async def list_patients(doctor: CurrentDoctor, session: DbSession) -> list[Patient]:
    """List patients visible to the doctor."""
    return await PatientService(session).list_patients(doctor)


@router.post("", response_model=PatientRead, status_code=status.HTTP_201_CREATED)
async def create_patient(
    body: PatientCreate, doctor: CurrentDoctor, session: DbSession
) -> Patient:
    """Create a patient owned by the doctor."""
    return await PatientService(session).create_patient(doctor, body)


@router.get("/{patient_id}", response_model=PatientRead)
async def get_patient(patient_id: str, doctor: CurrentDoctor, session: DbSession) -> Patient:
    try:
        return await PatientService(session).get_patient(doctor, patient_id)
    except NotFoundError as e:
        raise _not_found(e)


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_patient(patient_id: str, doctor: CurrentDoctor, session: DbSession) -> None:
    try:
        await PatientService(session).delete_patient(doctor, patient_id)
    except NotFoundError as e:
        raise _not_found(e)


# =============================================================================
# Caregivers
# =============================================================================


@caregiver_router.get("", response_model=list[CaregiverRead])
async def list_caregivers(
    doctor: CurrentDoctor,
    session: DbSession,
    patient_id: str | None = None,
) -> list[Caregiver]:
    """List caregivers visible to the doctor, optionally for one patient."""
    return await PatientService(session).list_caregivers(doctor, patient_id)


@caregiver_router.post("", response_model=CaregiverRead, status_code=status.HTTP_201_CREATED)
async def create_caregiver(
    body: CaregiverCreate, doctor: CurrentDoctor, session: DbSession
) -> Caregiver:
    """Create a caregiver, optionally linked to one of the doctor's patients."""
    try:
        return await PatientService(session).create_caregiver(doctor, body)
    except NotFoundError as e:
        raise _not_found(e)


@caregiver_router.get("/{caregiver_id}", response_model=CaregiverRead)
async def get_caregiver(
    caregiver_id: str, doctor: CurrentDoctor, session: DbSession
) -> Caregiver:
    try:
        return await PatientService(session).get_caregiver(doctor, caregiver_id)
    except NotFoundError as e:
        raise _not_found(e)


@caregiver_router.put("/{caregiver_id}", response_model=CaregiverRead)
async def update_caregiver(
    caregiver_id: str, body: CaregiverUpdate, doctor: CurrentDoctor, session: DbSession
) -> Caregiver:
    """Update a caregiver; a newly linked patient must be visible too."""
    try:
        return await PatientService(session).update_caregiver(doctor, caregiver_id, body)
    except NotFoundError as e:
        raise _not_found(e)


@caregiver_router.get("/{caregiver_id}/history", response_model=CaregiverHistoryRead)
async def get_caregiver_history(
    caregiver_id: str, doctor: CurrentDoctor, session: DbSession
) -> CaregiverHistoryRead:
    """Caregiver with the screening results of the patient they look after."""
    try:
        caregiver, results = await ScreeningService(session).list_caregiver_history(
            doctor, caregiver_id
        )
    except NotFoundError as e:
        raise _not_found(e)

    return CaregiverHistoryRead(
        **CaregiverRead.model_validate(caregiver).model_dump(),
        results=[ScreeningResultRead.model_validate(r) for r in results],
    )


@caregiver_router.delete("/{caregiver_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_caregiver(caregiver_id: str, doctor: CurrentDoctor, session: DbSession) -> None:
    try:
        await PatientService(session).delete_caregiver(doctor, caregiver_id)
    except NotFoundError as e:
        raise _not_found(e)
