"""Doctor and respondent authentication endpoints."""

from fastapi import APIRouter, HTTPException, status

from medscreen.api.deps import CurrentDoctor, DbSession
from medscreen.core.config import settings
from medscreen.core.logging import audit_logger
from medscreen.models.doctor import Doctor
from medscreen.schemas.auth import (
    DoctorRead,
    DoctorRegisterRequest,
    LoginRequest,
    RespondentRead,
    RespondentRegisterRequest,
    RespondentTokenResponse,
    TokenResponse,
)
from medscreen.services.auth import AuthService, EmailAlreadyRegisteredError

router = APIRouter()


def _token_response(access_token: str) -> TokenResponse:
    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60,
    )


# =============================================================================
# Doctors
# =============================================================================


@router.post(
    "/register",
    response_model=DoctorRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a doctor",
)
async def register_doctor(body: DoctorRegisterRequest, session: DbSession) -> Doctor:
    """Register a doctor account. The first account registered becomes ADMIN."""
    try:
        doctor = await AuthService(session).register_doctor(body)
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    audit_logger.log("doctor_registered", "doctor", doctor.id, "doctor", doctor.id, {"role": doctor.role})
    return doctor


@router.post("/login", response_model=TokenResponse, summary="Doctor login")
async def login_doctor(credentials: LoginRequest, session: DbSession) -> TokenResponse:
    """Authenticate a doctor and return a JWT."""
    auth_service = AuthService(session)
    doctor = await auth_service.authenticate_doctor(credentials.email, credentials.password)

    if not doctor:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    return _token_response(auth_service.create_doctor_token(doctor))


@router.get("/me", response_model=DoctorRead, summary="Current doctor")
async def get_me(doctor: CurrentDoctor) -> Doctor:
    """Return the authenticated doctor."""
    return doctor


# =============================================================================
# Respondents
# =============================================================================


@router.post(
    "/respondent/register",
    response_model=RespondentTokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a respondent",
)
async def register_respondent(
    body: RespondentRegisterRequest, session: DbSession
) -> RespondentTokenResponse:
    """Register a respondent account and log it in straight away."""
    auth_service = AuthService(session)
    try:
        respondent = await auth_service.register_respondent(body)
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    token = _token_response(auth_service.create_respondent_token(respondent))
    return RespondentTokenResponse(
        **token.model_dump(),
        respondent=RespondentRead.model_validate(respondent),
    )


@router.post("/respondent/login", response_model=TokenResponse, summary="Respondent login")
async def login_respondent(credentials: LoginRequest, session: DbSession) -> TokenResponse:
    """Authenticate a respondent and return a JWT."""
    auth_service = AuthService(session)
    respondent = await auth_service.authenticate_respondent(
        credentials.email, credentials.password
    )

    if not respondent:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    return _token_response(auth_service.create_respondent_token(respondent))
