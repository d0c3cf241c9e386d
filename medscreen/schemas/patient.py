"""Pydantic schemas for patients and caregivers."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from medscreen.schemas.screening import ScreeningResultRead


class PatientBase(BaseModel):
    """Base schema for patient."""

    name: str = Field(..., min_length=1, max_length=255)
    date_of_birth: date | None = None
    gender: str | None = Field(None, max_length=20)
    phone: str | None = Field(None, max_length=50)
    address: str | None = None
    diagnosis: str | None = Field(None, description="Diagnosis, stage and treatment notes")


class PatientCreate(PatientBase):
    """Schema for creating a patient."""

    pass


class PatientRead(PatientBase):
    """Schema for reading a patient."""

    id: str
    doctor_id: str
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class CaregiverBase(BaseModel):
    """Base schema for caregiver."""

    name: str = Field(..., min_length=1, max_length=255)
    patient_id: str | None = Field(None, description="Patient this caregiver looks after")
    relationship_to_patient: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=50)


class CaregiverCreate(CaregiverBase):
    """Schema for creating a caregiver."""

    pass


class CaregiverUpdate(BaseModel):
    """Schema for updating a caregiver (all fields optional)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    patient_id: str | None = None
    relationship_to_patient: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=50)


class CaregiverRead(CaregiverBase):
    """Schema for reading a caregiver."""

    id: str
    doctor_id: str
    created_at: datetime
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class CaregiverHistoryRead(CaregiverRead):
    """Caregiver with the screening results of the patient they look after."""

    results: list[ScreeningResultRead] = Field(default_factory=list)
