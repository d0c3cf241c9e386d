"""Authentication schemas."""

import re
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def normalize_email(v: str) -> str:
    """Lower-case an email address, accepting .local domains used in dev."""
    v = v.strip()
    if not EMAIL_PATTERN.match(v):
        raise ValueError("Invalid email address")
    return v.lower()


LenientEmail = Annotated[str, AfterValidator(normalize_email)]


class LoginRequest(BaseModel):
    """Email and password login, for doctors and respondents alike."""

    email: LenientEmail
    password: str = Field(min_length=1, max_length=128)


class DoctorRegisterRequest(BaseModel):
    """Doctor self-registration. The first doctor registered becomes ADMIN."""

    email: LenientEmail
    password: str = Field(min_length=8, max_length=128)
    name: str = Field(min_length=1, max_length=255)


class DoctorRead(BaseModel):
    """Doctor account as returned by the API."""

    id: str
    email: str
    name: str
    role: str
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class RespondentPatientInfo(BaseModel):
    """Patient the respondent account is registered for."""

    name: str = Field(min_length=1, max_length=255)
    age: int | None = Field(default=None, ge=0, le=150)
    gender: str | None = Field(default=None, max_length=20)


class RespondentCaregiverInfo(BaseModel):
    """Optional caregiver sharing the respondent account."""

    name: str = Field(min_length=1, max_length=255)
    relation: str | None = Field(default=None, max_length=100)


class RespondentRegisterRequest(BaseModel):
    """Respondent self-registration from the public portal."""

    email: LenientEmail
    password: str = Field(min_length=8, max_length=128)
    name: str | None = Field(default=None, max_length=255)
    patient: RespondentPatientInfo
    caregiver: RespondentCaregiverInfo | None = None


class RespondentRead(BaseModel):
    """Respondent account as returned by the API."""

    id: str
    email: str
    name: str | None = None
    patient_name: str
    patient_age: int | None = None
    patient_gender: str | None = None
    caregiver_name: str | None = None
    caregiver_relation: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class RespondentTokenResponse(TokenResponse):
    """Token plus the freshly registered respondent."""

    respondent: RespondentRead
