"""Authentication service for doctors and respondents."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from medscreen.core.security import (
    PRINCIPAL_DOCTOR,
    PRINCIPAL_RESPONDENT,
    create_access_token,
    hash_password,
    verify_password,
)
from medscreen.models.doctor import Doctor, DoctorRole
from medscreen.models.respondent import Respondent
from medscreen.schemas.auth import DoctorRegisterRequest, RespondentRegisterRequest


class EmailAlreadyRegisteredError(Exception):
    """Raised when registering an email that already has an account."""
    pass


class AuthService:
    """Service for handling authentication operations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    # --- Doctors ---

    async def register_doctor(self, data: DoctorRegisterRequest) -> Doctor:
        """Register a doctor account.

        The very first doctor becomes ADMIN so a fresh deployment has
        someone able to author questionnaires.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken
        """
        existing = await self.session.execute(
            select(Doctor.id).where(Doctor.email == data.email)
        )
        if existing.scalar_one_or_none():
            raise EmailAlreadyRegisteredError("Doctor with this email already exists")

        doctor_count = await self.session.scalar(select(func.count(Doctor.id)))

        doctor = Doctor(
            email=data.email,
            name=data.name,
            hashed_password=hash_password(data.password),
            role=DoctorRole.ADMIN if not doctor_count else DoctorRole.USER,
            is_active=True,
        )
        self.session.add(doctor)
        await self.session.commit()
        await self.session.refresh(doctor)
        return doctor

    async def authenticate_doctor(self, email: str, password: str) -> Doctor | None:
        """Authenticate a doctor with email and password.

        Returns:
            Doctor if credentials valid and account active, None otherwise
        """
        result = await self.session.execute(
            select(Doctor).where(Doctor.email == email.lower())
        )
        doctor = result.scalar_one_or_none()

        if not doctor or not doctor.is_active:
            return None

        if not verify_password(password, doctor.hashed_password):
            return None

        return doctor

    def create_doctor_token(self, doctor: Doctor) -> str:
        """Create JWT access token for a doctor."""
        return create_access_token(
            subject=doctor.id,
            principal=PRINCIPAL_DOCTOR,
            additional_claims={
                "role": doctor.role.value if hasattr(doctor.role, "value") else doctor.role,
                "email": doctor.email,
            },
        )

    async def get_doctor_by_id(self, doctor_id: str) -> Doctor | None:
        result = await self.session.execute(select(Doctor).where(Doctor.id == doctor_id))
        return result.scalar_one_or_none()

    # --- Respondents ---

    async def register_respondent(self, data: RespondentRegisterRequest) -> Respondent:
        """Register a respondent account for the public portal.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken
        """
        existing = await self.session.execute(
            select(Respondent.id).where(Respondent.email == data.email)
        )
        if existing.scalar_one_or_none():
            raise EmailAlreadyRegisteredError("Email is already registered")

        respondent = Respondent(
            email=data.email,
            name=data.name,
            hashed_password=hash_password(data.password),
            patient_name=data.patient.name,
            patient_age=data.patient.age,
            patient_gender=data.patient.gender,
            caregiver_name=data.caregiver.name if data.caregiver else None,
            caregiver_relation=data.caregiver.relation if data.caregiver else None,
        )
        self.session.add(respondent)
        await self.session.commit()
        await self.session.refresh(respondent)
        return respondent

    async def authenticate_respondent(self, email: str, password: str) -> Respondent | None:
        """Authenticate a respondent with email and password."""
        result = await self.session.execute(
            select(Respondent).where(Respondent.email == email.lower())
        )
        respondent = result.scalar_one_or_none()

        if not respondent or not verify_password(password, respondent.hashed_password):
            return None

        return respondent

    def create_respondent_token(self, respondent: Respondent) -> str:
        """Create JWT access token for a respondent."""
        return create_access_token(
            subject=respondent.id,
            principal=PRINCIPAL_RESPONDENT,
            additional_claims={"email": respondent.email},
        )

    async def get_respondent_by_id(self, respondent_id: str) -> Respondent | None:
        result = await self.session.execute(
            select(Respondent).where(Respondent.id == respondent_id)
        )
        return result.scalar_one_or_none()
