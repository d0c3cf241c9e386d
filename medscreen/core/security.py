"""Password hashing and JWT access tokens.

Doctors and respondents log in through separate endpoints but share one
token format; the principal claim tells them apart.
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from medscreen.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

PRINCIPAL_DOCTOR = "doctor"
PRINCIPAL_RESPONDENT = "respondent"
PRINCIPALS = (PRINCIPAL_DOCTOR, PRINCIPAL_RESPONDENT)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    subject: str,
    principal: str,
    expires_delta: timedelta | None = None,
    additional_claims: dict | None = None,
) -> str:
    """Create a signed access token.

    Args:
        subject: Doctor or respondent ID
        principal: PRINCIPAL_DOCTOR or PRINCIPAL_RESPONDENT
        expires_delta: Lifetime, defaults to access_token_expire_minutes
        additional_claims: Extra claims such as the doctor's role and email

    Raises:
        ValueError: If principal is not a known principal type
    """
    if principal not in PRINCIPALS:
        raise ValueError(f"Unknown principal {principal!r}")

    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)

    claims = dict(additional_claims or {})
    claims.update(
        sub=subject,
        type="access",
        principal=principal,
        iat=issued_at,
        exp=issued_at + lifetime,
    )
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode an access token.

    Returns:
        The claims, or None if the token is invalid, expired, not an access
        token or carries no known principal
    """
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None

    if claims.get("type") != "access" or claims.get("principal") not in PRINCIPALS:
        return None
    return claims
