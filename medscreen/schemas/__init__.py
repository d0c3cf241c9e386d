"""Pydantic schemas for request/response validation."""

from medscreen.schemas.auth import (
    DoctorRead,
    DoctorRegisterRequest,
    LoginRequest,
    RespondentRead,
    RespondentRegisterRequest,
    RespondentTokenResponse,
    TokenResponse,
)
from medscreen.schemas.calorie import (
    CalorieCalculationCreate,
    CalorieCalculationRead,
    CalorieComputeRequest,
    CalorieResultRead,
)
from medscreen.schemas.patient import CaregiverCreate, CaregiverRead, PatientCreate, PatientRead
from medscreen.schemas.questionnaire import (
    QuestionnaireCreate,
    QuestionnaireRead,
    QuestionnaireSummary,
    QuestionnaireUpdate,
)
from medscreen.schemas.screening import (
    RespondentSubmissionCreate,
    RespondentSubmissionRead,
    ScreeningResultCreate,
    ScreeningResultRead,
)

__all__ = [
    # Auth
    "LoginRequest",
    "DoctorRegisterRequest",
    "DoctorRead",
    "RespondentRegisterRequest",
    "RespondentRead",
    "TokenResponse",
    "RespondentTokenResponse",
    # Patients
    "PatientCreate",
    "PatientRead",
    "CaregiverCreate",
    "CaregiverRead",
    # Questionnaires
    "QuestionnaireCreate",
    "QuestionnaireUpdate",
    "QuestionnaireSummary",
    "QuestionnaireRead",
    # Screening
    "ScreeningResultCreate",
    "ScreeningResultRead",
    "RespondentSubmissionCreate",
    "RespondentSubmissionRead",
    # Calorie
    "CalorieComputeRequest",
    "CalorieResultRead",
    "CalorieCalculationCreate",
    "CalorieCalculationRead",
]
