"""Questionnaire template endpoints.

Anonymous callers and respondents only see public templates. Doctors see
their own templates, ADMIN doctors see every template and are the only
ones allowed to author them.
"""

from fastapi import APIRouter, HTTPException, status

from medscreen.api.deps import CurrentDoctor, DbSession, OptionalDoctor
from medscreen.models.questionnaire import QuestionnaireTemplate
from medscreen.schemas.questionnaire import (
    QuestionnaireCreate,
    QuestionnaireRead,
    QuestionnaireSummary,
    QuestionnaireUpdate,
)
from medscreen.services.access import AccessDeniedError, NotFoundError
from medscreen.services.questionnaire import QuestionnaireService

router = APIRouter(prefix="/questionnaires", tags=["questionnaires"])


@router.get("", response_model=list[QuestionnaireSummary])
async def list_questionnaires(
    doctor: OptionalDoctor, session: DbSession
) -> list[QuestionnaireTemplate]:
    """List the templates visible to the caller."""
    service = QuestionnaireService(session)
    if doctor is None:
        return await service.list_public()
    return await service.list_for_doctor(doctor)


@router.post("", response_model=QuestionnaireRead, status_code=status.HTTP_201_CREATED)
async def create_questionnaire(
    body: QuestionnaireCreate, doctor: CurrentDoctor, session: DbSession
) -> QuestionnaireTemplate:
    """Create a template (ADMIN only)."""
    try:
        return await QuestionnaireService(session).create(doctor, body)
    except AccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))


@router.get("/{template_id}", response_model=QuestionnaireRead)
async def get_questionnaire(
    template_id: str, doctor: OptionalDoctor, session: DbSession
) -> QuestionnaireTemplate:
    service = QuestionnaireService(session)
    try:
        if doctor is None:
            return await service.get_public(template_id)
        return await service.get_for_doctor(doctor, template_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{template_id}", response_model=QuestionnaireRead)
async def update_questionnaire(
    template_id: str,
    body: QuestionnaireUpdate,
    doctor: CurrentDoctor,
    session: DbSession,
) -> QuestionnaireTemplate:
    """Update a template (ADMIN only). Stored scores are not recomputed."""
    try:
        return await QuestionnaireService(session).update(doctor, template_id, body)
    except AccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_questionnaire(
    template_id: str, doctor: CurrentDoctor, session: DbSession
) -> None:
    try:
        await QuestionnaireService(session).delete(doctor, template_id)
    except AccessDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
