"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from medscreen.core.security import hash_password
from medscreen.db.base import Base
from medscreen.db.session import get_db
from medscreen.main import app
from medscreen.models.doctor import Doctor, DoctorRole
from medscreen.models.patient import Caregiver, Patient
from medscreen.models.questionnaire import Audience, QuestionnaireTemplate
from medscreen.models.respondent import Respondent
from medscreen.services.auth import AuthService

# Use SQLite for testing (simpler than spinning up postgres)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def async_engine():
    """Create async test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def async_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create async database session for tests."""
    async_session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest.fixture(scope="function")
async def client(async_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an HTTP client bound to the app with overridden dependencies."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield async_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


async def _make_doctor(
    session: AsyncSession, email: str, name: str, role: DoctorRole
) -> Doctor:
    doctor = Doctor(
        email=email,
        name=name,
        hashed_password=hash_password("doctorpassword123"),
        role=role,
        is_active=True,
    )
    session.add(doctor)
    await session.commit()
    await session.refresh(doctor)
    return doctor


@pytest.fixture
async def admin_doctor(async_session: AsyncSession) -> Doctor:
    """Create an ADMIN doctor."""
    return await _make_doctor(async_session, "admin@medscreen.local", "Dr Admin", DoctorRole.ADMIN)


@pytest.fixture
async def doctor(async_session: AsyncSession) -> Doctor:
    """Create a USER doctor."""
    return await _make_doctor(async_session, "doctor@medscreen.local", "Dr User", DoctorRole.USER)


@pytest.fixture
async def other_doctor(async_session: AsyncSession) -> Doctor:
    """Create a second USER doctor."""
    return await _make_doctor(async_session, "other@medscreen.local", "Dr Other", DoctorRole.USER)


@pytest.fixture
def admin_headers(admin_doctor: Doctor, async_session: AsyncSession) -> dict[str, str]:
    token = AuthService(async_session).create_doctor_token(admin_doctor)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def doctor_headers(doctor: Doctor, async_session: AsyncSession) -> dict[str, str]:
    token = AuthService(async_session).create_doctor_token(doctor)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_doctor_headers(other_doctor: Doctor, async_session: AsyncSession) -> dict[str, str]:
    token = AuthService(async_session).create_doctor_token(other_doctor)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def respondent(async_session: AsyncSession) -> Respondent:
    """Create a respondent registered for a patient with a caregiver."""
    respondent = Respondent(
        email="respondent@example.com",
        name="Siti",
        hashed_password=hash_password("respondentpass123"),
        patient_name="Budi",
        patient_age=58,
        patient_gender="Laki-laki",
        caregiver_name="Siti",
        caregiver_relation="Istri",
    )
    async_session.add(respondent)
    await async_session.commit()
    await async_session.refresh(respondent)
    return respondent


@pytest.fixture
def respondent_headers(respondent: Respondent, async_session: AsyncSession) -> dict[str, str]:
    token = AuthService(async_session).create_respondent_token(respondent)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def patient(async_session: AsyncSession, doctor: Doctor) -> Patient:
    """Create a patient owned by the USER doctor."""
    patient = Patient(doctor_id=doctor.id, name="Budi Santoso", gender="Laki-laki")
    async_session.add(patient)
    await async_session.commit()
    await async_session.refresh(patient)
    return patient


@pytest.fixture
async def caregiver(async_session: AsyncSession, doctor: Doctor, patient: Patient) -> Caregiver:
    """Create a caregiver of the patient, owned by the same doctor."""
    caregiver = Caregiver(
        doctor_id=doctor.id,
        patient_id=patient.id,
        name="Siti Santoso",
        relationship_to_patient="Istri",
    )
    async_session.add(caregiver)
    await async_session.commit()
    await async_session.refresh(caregiver)
    return caregiver


SAMPLE_QUESTIONS = [
    {
        "text": "Apakah Anda merasa lelah?",
        "type": "multiple_choice",
        "options": [
            {"text": "A", "score": 0, "type": "fixed"},
            {"text": "B", "score": 2, "type": "fixed"},
        ],
    },
    {
        "text": "Keluhan yang dirasakan",
        "type": "multiple_selection",
        "options": [
            {"text": "Mual", "score": 1, "type": "fixed"},
            {"text": "Nyeri", "score": 2, "type": "fixed"},
            {"text": "Lainnya", "score": 1, "type": "custom"},
        ],
    },
    {
        "text": "Catatan tambahan",
        "type": "text_input",
        "placeholder": "Tulis di sini",
    },
]

SAMPLE_TIERS = [
    {"minScore": 0, "maxScore": 1, "label": "Low", "recommendation": "Kontrol rutin"},
    {"minScore": 2, "maxScore": 10, "label": "High", "recommendation": "Konsultasi dokter"},
]


async def _make_template(
    session: AsyncSession, owner: Doctor, audience: Audience, is_public: bool
) -> QuestionnaireTemplate:
    template = QuestionnaireTemplate(
        doctor_id=owner.id,
        title="Skrining Kelelahan",
        description="Kuesioner contoh",
        audience=audience.value,
        questions=SAMPLE_QUESTIONS,
        result_tiers=SAMPLE_TIERS,
        is_public=is_public,
    )
    session.add(template)
    await session.commit()
    await session.refresh(template)
    return template


@pytest.fixture
async def template(async_session: AsyncSession, doctor: Doctor) -> QuestionnaireTemplate:
    """Private template owned by the USER doctor."""
    return await _make_template(async_session, doctor, Audience.BOTH, is_public=False)


@pytest.fixture
async def public_patient_template(
    async_session: AsyncSession, admin_doctor: Doctor
) -> QuestionnaireTemplate:
    """Public template meant for patients only."""
    return await _make_template(async_session, admin_doctor, Audience.PATIENT, is_public=True)


@pytest.fixture
async def public_shared_template(
    async_session: AsyncSession, admin_doctor: Doctor
) -> QuestionnaireTemplate:
    """Public template for patients and caregivers alike."""
    return await _make_template(async_session, admin_doctor, Audience.BOTH, is_public=True)
