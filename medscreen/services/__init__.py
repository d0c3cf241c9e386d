"""Business logic services."""

from medscreen.services.access import AccessDeniedError, NotFoundError
from medscreen.services.auth import AuthService, EmailAlreadyRegisteredError
from medscreen.services.calorie import CalorieService
from medscreen.services.patient import PatientService
from medscreen.services.questionnaire import QuestionnaireService
from medscreen.services.screening import AudienceMismatchError, ScreeningService

__all__ = [
    "AccessDeniedError",
    "NotFoundError",
    "AuthService",
    "EmailAlreadyRegisteredError",
    "CalorieService",
    "PatientService",
    "QuestionnaireService",
    "AudienceMismatchError",
    "ScreeningService",
]
