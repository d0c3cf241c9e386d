"""Respondent portal endpoints.

Respondents browse public questionnaires and submit answers as the patient
or as the caregiver, depending on the questionnaire's audience.
"""

from fastapi import APIRouter, HTTPException, status

from medscreen.api.deps import CurrentRespondent, DbSession
from medscreen.models.questionnaire import QuestionnaireTemplate, RespondentSubmission
from medscreen.schemas.questionnaire import QuestionnaireRead, QuestionnaireSummary
from medscreen.schemas.screening import RespondentSubmissionCreate, RespondentSubmissionRead
from medscreen.scoring.questionnaire import ScoringError
from medscreen.services.access import NotFoundError
from medscreen.services.questionnaire import QuestionnaireService
from medscreen.services.screening import AudienceMismatchError, ScreeningService

router = APIRouter(prefix="/respondent", tags=["respondent"])


@router.get("/questionnaires", response_model=list[QuestionnaireSummary])
async def list_public_questionnaires(
    respondent: CurrentRespondent, session: DbSession
) -> list[QuestionnaireTemplate]:
    """List questionnaires published for respondents."""
    return await QuestionnaireService(session).list_public()


@router.get("/questionnaires/{template_id}", response_model=QuestionnaireRead)
async def get_public_questionnaire(
    template_id: str, respondent: CurrentRespondent, session: DbSession
) -> QuestionnaireTemplate:
    try:
        return await QuestionnaireService(session).get_public(template_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "/submissions",
    response_model=RespondentSubmissionRead,
    status_code=status.HTTP_201_CREATED,
)
async def submit_questionnaire(
    body: RespondentSubmissionCreate,
    respondent: CurrentRespondent,
    session: DbSession,
) -> RespondentSubmission:
    """Score and store a submission.

    Returns 400 when fill_as does not suit the questionnaire's audience or
    the answers do not fit its questions.
    """
    try:
        return await ScreeningService(session).submit_respondent(
            respondent, body.template_id, body.fill_as, body.answers
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (AudienceMismatchError, ScoringError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/submissions", response_model=list[RespondentSubmissionRead])
async def list_my_submissions(
    respondent: CurrentRespondent, session: DbSession
) -> list[RespondentSubmission]:
    """List the respondent's own submissions, newest first."""
    return await ScreeningService(session).list_submissions(respondent)
