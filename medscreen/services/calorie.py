"""Saving and listing caloric requirement calculations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medscreen.core.logging import audit_logger
from medscreen.models.calorie import CalorieCalculation
from medscreen.models.doctor import Doctor
from medscreen.scoring.calorie import CalorieInput, compute_calories, normalize_input
from medscreen.services.access import scoped
from medscreen.services.patient import PatientService

TARGET_TYPES = ("patient", "caregiver")


class CalorieService:
    """Persist calculations against a patient or caregiver."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save_calculation(
        self,
        doctor: Doctor,
        target_type: str,
        target_id: str,
        data: CalorieInput,
    ) -> CalorieCalculation:
        """Compute and snapshot a calculation for a visible patient or caregiver.

        The result is recomputed here rather than taken from the client.

        Raises:
            ValueError: If target_type is not patient or caregiver
            NotFoundError: If the target is not visible to the doctor
            InvalidInputError: If the biometrics are rejected
        """
        if target_type not in TARGET_TYPES:
            raise ValueError("target_type must be patient or caregiver")

        data = normalize_input(data)
        result = compute_calories(data)

        patients = PatientService(self.session)
        if target_type == "patient":
            target = await patients.get_patient(doctor, target_id)
        else:
            target = await patients.get_caregiver(doctor, target_id)

        calculation = CalorieCalculation(
            doctor_id=doctor.id,
            patient_id=target.id if target_type == "patient" else None,
            caregiver_id=target.id if target_type == "caregiver" else None,
            gender=data.gender.value,
            height_cm=data.height_cm,
            weight_kg=data.weight_kg,
            age=data.age,
            activity_level=data.activity_level.value,
            result=result.to_dict(),
        )
        self.session.add(calculation)
        await self.session.commit()
        await self.session.refresh(calculation)

        audit_logger.log(
            "calorie_calculation_saved",
            "doctor",
            doctor.id,
            target_type,
            target.id,
            {"total_rounded": result.total_rounded},
        )
        return calculation

    async def list_calculations(
        self,
        doctor: Doctor,
        target_type: str | None = None,
        target_id: str | None = None,
    ) -> list[CalorieCalculation]:
        query = scoped(select(CalorieCalculation), doctor, CalorieCalculation.doctor_id)
        if target_type == "patient" and target_id:
            query = query.where(CalorieCalculation.patient_id == target_id)
        elif target_type == "caregiver" and target_id:
            query = query.where(CalorieCalculation.caregiver_id == target_id)

        result = await self.session.execute(
            query.order_by(CalorieCalculation.created_at.desc())
        )
        return list(result.scalars().all())
