"""API v1 router aggregating all endpoints."""

from fastapi import APIRouter

from medscreen.api.v1 import (
    auth,
    calorie,
    health,
    patients,
    questionnaires,
    respondent,
    screening_results,
)

api_router = APIRouter()

# Health check
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"],
)

# Authentication
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["auth"],
)

# Patients and caregivers
api_router.include_router(patients.router)
api_router.include_router(patients.caregiver_router)

# Questionnaires
api_router.include_router(questionnaires.router)

# Screening
api_router.include_router(screening_results.router)

# Respondent portal
api_router.include_router(respondent.router)

# Calorie calculator
api_router.include_router(calorie.router)
