"""Patient and caregiver records, scoped to the owning doctor."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medscreen.core.logging import audit_logger
from medscreen.models.doctor import Doctor
from medscreen.models.patient import Caregiver, Patient
from medscreen.schemas.patient import CaregiverCreate, CaregiverUpdate, PatientCreate
from medscreen.services.access import NotFoundError, can_see, ensure_found, scoped


class PatientService:
    """CRUD for patients and caregivers."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # --- Patients ---

    async def create_patient(self, doctor: Doctor, data: PatientCreate) -> Patient:
        patient = Patient(doctor_id=doctor.id, **data.model_dump())
        self.session.add(patient)
        await self.session.commit()
        await self.session.refresh(patient)

        audit_logger.log("patient_created", "doctor", doctor.id, "patient", patient.id)
        return patient

    async def list_patients(self, doctor: Doctor) -> list[Patient]:
        query = scoped(select(Patient), doctor, Patient.doctor_id)
        result = await self.session.execute(query.order_by(Patient.created_at.desc()))
        return list(result.scalars().all())

    async def get_patient(self, doctor: Doctor, patient_id: str) -> Patient:
        """Get a patient visible to the doctor.

        Raises:
            NotFoundError: If missing or owned by another doctor
        """
        patient = await self.session.get(Patient, patient_id)
        if patient is None or not can_see(doctor, patient.doctor_id):
            raise NotFoundError("Patient not found")
        return patient

    async def delete_patient(self, doctor: Doctor, patient_id: str) -> None:
        patient = await self.get_patient(doctor, patient_id)
        await self.session.delete(patient)
        await self.session.commit()

        audit_logger.log("patient_deleted", "doctor", doctor.id, "patient", patient_id)

    # --- Caregivers ---

    async def create_caregiver(self, doctor: Doctor, data: CaregiverCreate) -> Caregiver:
        if data.patient_id:
            # Linked patient must be visible to the same doctor
            await self.get_patient(doctor, data.patient_id)

        caregiver = Caregiver(doctor_id=doctor.id, **data.model_dump())
        self.session.add(caregiver)
        await self.session.commit()
        await self.session.refresh(caregiver)

        audit_logger.log("caregiver_created", "doctor", doctor.id, "caregiver", caregiver.id)
        return caregiver

    async def list_caregivers(
        self, doctor: Doctor, patient_id: str | None = None
    ) -> list[Caregiver]:
        query = scoped(select(Caregiver), doctor, Caregiver.doctor_id)
        if patient_id:
            query = query.where(Caregiver.patient_id == patient_id)
        result = await self.session.execute(query.order_by(Caregiver.created_at.desc()))
        return list(result.scalars().all())

    async def get_caregiver(self, doctor: Doctor, caregiver_id: str) -> Caregiver:
        caregiver = ensure_found(await self.session.get(Caregiver, caregiver_id), "Caregiver")
        if not can_see(doctor, caregiver.doctor_id):
            raise NotFoundError("Caregiver not found")
        return caregiver

    async def update_caregiver(
        self, doctor: Doctor, caregiver_id: str, data: CaregiverUpdate
    ) -> Caregiver:
        """Update a caregiver visible to the doctor.

        Raises:
            NotFoundError: If the caregiver, or a newly linked patient, is not visible
        """
        caregiver = await self.get_caregiver(doctor, caregiver_id)

        changes = data.model_dump(exclude_unset=True)
        if changes.get("name") is None:
            changes.pop("name", None)
        if changes.get("patient_id"):
            await self.get_patient(doctor, changes["patient_id"])
        for field, value in changes.items():
            setattr(caregiver, field, value)

        await self.session.commit()
        await self.session.refresh(caregiver)

        audit_logger.log(
            "caregiver_updated",
            "doctor",
            doctor.id,
            "caregiver",
            caregiver.id,
            {"fields": sorted(changes)},
        )
        return caregiver

    async def delete_caregiver(self, doctor: Doctor, caregiver_id: str) -> None:
        caregiver = await self.get_caregiver(doctor, caregiver_id)
        await self.session.delete(caregiver)
        await self.session.commit()

        audit_logger.log("caregiver_deleted", "doctor", doctor.id, "caregiver", caregiver_id)
