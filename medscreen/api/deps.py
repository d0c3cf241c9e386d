"""FastAPI dependency injection utilities."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from medscreen.core.security import PRINCIPAL_DOCTOR, PRINCIPAL_RESPONDENT, decode_access_token
from medscreen.db.session import get_db
from medscreen.models.doctor import Doctor
from medscreen.models.respondent import Respondent
from medscreen.services.auth import AuthService

# Security scheme
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> dict | None:
    """Extract and decode the bearer token, if any.

    Returns:
        Decoded token payload, or None when absent or invalid
    """
    if not credentials:
        return None
    return decode_access_token(credentials.credentials)


async def get_current_doctor(
    token: Annotated[dict | None, Depends(get_current_token)],
    session: Annotated[AsyncSession, Depends(get_db)],
) -> Doctor:
    """Get the authenticated doctor.

    Raises:
        HTTPException: 401 if not authenticated, 403 if not a doctor or disabled
    """
    if not token:
        raise _unauthorized()

    if token.get("principal") != PRINCIPAL_DOCTOR:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Doctor authentication required",
        )

    doctor = await AuthService(session).get_doctor_by_id(token["sub"])
    if not doctor:
        raise _unauthorized("Doctor not found")

    if not doctor.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Doctor account is disabled",
        )

    return doctor


async def get_current_respondent(
    token: Annotated[dict | None, Depends(get_current_token)],
    session: Annotated[AsyncSession, Depends(get_db)],
) -> Respondent:
    """Get the authenticated respondent.

    Raises:
        HTTPException: 401 if not authenticated, 403 if not a respondent
    """
    if not token:
        raise _unauthorized()

    if token.get("principal") != PRINCIPAL_RESPONDENT:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Respondent authentication required",
        )

    respondent = await AuthService(session).get_respondent_by_id(token["sub"])
    if not respondent:
        raise _unauthorized("Respondent not found")

    return respondent


async def get_optional_doctor(
    token: Annotated[dict | None, Depends(get_current_token)],
    session: Annotated[AsyncSession, Depends(get_db)],
) -> Doctor | None:
    """Get the doctor if a doctor token was sent, otherwise None."""
    if not token or token.get("principal") != PRINCIPAL_DOCTOR:
        return None
    doctor = await AuthService(session).get_doctor_by_id(token["sub"])
    return doctor if doctor and doctor.is_active else None


# Type aliases for cleaner dependency injection
CurrentDoctor = Annotated[Doctor, Depends(get_current_doctor)]
CurrentRespondent = Annotated[Respondent, Depends(get_current_respondent)]
OptionalDoctor = Annotated[Doctor | None, Depends(get_optional_doctor)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
