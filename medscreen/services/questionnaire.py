"""Questionnaire template management."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medscreen.core.logging import audit_logger
from medscreen.models.doctor import Doctor
from medscreen.models.questionnaire import QuestionnaireTemplate
from medscreen.schemas.questionnaire import QuestionnaireCreate, QuestionnaireUpdate
from medscreen.scoring.questionnaire import QuestionnaireDefinition
from medscreen.services.access import (
    NotFoundError,
    can_see,
    ensure_found,
    require_admin,
    scoped,
)


def definition_of(template: QuestionnaireTemplate) -> QuestionnaireDefinition:
    """Build the scoring definition of a stored template.

    Tier bounds stored with the legacy min/max keys are normalised here.
    """
    return QuestionnaireDefinition.from_raw(template.questions, template.result_tiers)


class QuestionnaireService:
    """Create, list, edit and delete questionnaire templates.

    Only ADMIN doctors author templates; every doctor can list and use the
    ones visible to them.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_for_doctor(self, doctor: Doctor) -> list[QuestionnaireTemplate]:
        query = scoped(select(QuestionnaireTemplate), doctor, QuestionnaireTemplate.doctor_id)
        result = await self.session.execute(
            query.order_by(QuestionnaireTemplate.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_public(self) -> list[QuestionnaireTemplate]:
        result = await self.session.execute(
            select(QuestionnaireTemplate)
            .where(QuestionnaireTemplate.is_public == True)  # noqa: E712
            .order_by(QuestionnaireTemplate.created_at.desc())
        )
        return list(result.scalars().all())

    async def get(self, template_id: str) -> QuestionnaireTemplate:
        """Get a template regardless of owner.

        Raises:
            NotFoundError: If the template does not exist
        """
        template = await self.session.get(QuestionnaireTemplate, template_id)
        return ensure_found(template, "Questionnaire")

    async def get_for_doctor(self, doctor: Doctor, template_id: str) -> QuestionnaireTemplate:
        template = await self.get(template_id)
        if not can_see(doctor, template.doctor_id):
            raise NotFoundError("Questionnaire not found")
        return template

    async def get_public(self, template_id: str) -> QuestionnaireTemplate:
        template = await self.get(template_id)
        if not template.is_public:
            raise NotFoundError("Questionnaire not found")
        return template

    async def create(self, doctor: Doctor, data: QuestionnaireCreate) -> QuestionnaireTemplate:
        """Create a template.

        Raises:
            AccessDeniedError: If the doctor is not ADMIN
        """
        require_admin(doctor, "create questionnaires")

        template = QuestionnaireTemplate(
            doctor_id=doctor.id,
            title=data.title,
            description=data.description,
            audience=data.audience.value,
            questions=[q.model_dump(mode="json") for q in data.questions],
            result_tiers=[t.model_dump(mode="json") for t in data.result_tiers],
            is_public=data.is_public,
        )
        self.session.add(template)
        await self.session.commit()
        await self.session.refresh(template)

        audit_logger.log(
            "questionnaire_created",
            "doctor",
            doctor.id,
            "questionnaire",
            template.id,
            {"questions": len(template.questions), "tiers": len(template.result_tiers)},
        )
        return template

    async def update(
        self, doctor: Doctor, template_id: str, data: QuestionnaireUpdate
    ) -> QuestionnaireTemplate:
        """Update a template.

        Stored screenings keep their recorded score; editing options or tiers
        does not rescore them.
        """
        require_admin(doctor, "edit questionnaires")
        template = await self.get(template_id)

        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True, mode="json").items()
            # Only the description may be cleared
            if value is not None or field == "description"
        }
        for field, value in changes.items():
            setattr(template, field, value)

        await self.session.commit()
        await self.session.refresh(template)

        audit_logger.log(
            "questionnaire_updated",
            "doctor",
            doctor.id,
            "questionnaire",
            template.id,
            {"fields": sorted(changes)},
        )
        return template

    async def delete(self, doctor: Doctor, template_id: str) -> None:
        require_admin(doctor, "delete questionnaires")
        template = await self.get(template_id)
        await self.session.delete(template)
        await self.session.commit()

        audit_logger.log("questionnaire_deleted", "doctor", doctor.id, "questionnaire", template_id)
