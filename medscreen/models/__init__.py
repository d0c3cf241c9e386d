"""Database models for the screening service."""

from medscreen.models.calorie import CalorieCalculation
from medscreen.models.doctor import Doctor, DoctorRole
from medscreen.models.patient import Caregiver, Patient
from medscreen.models.questionnaire import (
    Audience,
    QuestionnaireTemplate,
    RespondentSubmission,
    ScreeningResult,
)
from medscreen.models.respondent import Respondent

__all__ = [
    # Accounts
    "Doctor",
    "DoctorRole",
    "Respondent",
    # Subjects
    "Patient",
    "Caregiver",
    # Questionnaires
    "Audience",
    "QuestionnaireTemplate",
    "ScreeningResult",
    "RespondentSubmission",
    # Calculator
    "CalorieCalculation",
]
