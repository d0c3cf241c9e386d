"""Bulk import of questionnaire templates from a JSON export.

Every imported template is assigned to one target doctor. Existing
templates are matched on (title, audience, doctor) and handled per mode:

- skip: leave the existing template untouched
- upsert: overwrite its description, questions, tiers and visibility
- force: always create a new template, duplicates included
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medscreen.core.logging import audit_logger
from medscreen.models.doctor import Doctor
from medscreen.models.questionnaire import Audience, QuestionnaireTemplate
from medscreen.scoring.questionnaire import CHOICE_KINDS, coerce_score, validate_result_tiers

logger = logging.getLogger(__name__)

# Title of the template shipped in the example import file
PLACEHOLDER_TITLE = "Contoh Judul"


class ImportMode(str, Enum):
    SKIP = "skip"
    UPSERT = "upsert"
    FORCE = "force"


class ImportFileError(ValueError):
    """Raised when the import payload has no recognisable template list."""
    pass


@dataclass
class ImportReport:
    """Outcome of an import run, one action line per template."""

    created: int = 0
    updated: int = 0
    skipped: int = 0
    actions: list[str] = field(default_factory=list)
    refused: bool = False


def extract_templates(payload: Any) -> list[dict[str, Any]]:
    """Accept either a bare list or {"templates": [...]}.

    Raises:
        ImportFileError: If neither shape is found
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("templates"), list):
        return payload["templates"]
    raise ImportFileError('Unrecognised file format, expected a list or {"templates": [...]}')


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def normalize_template(raw: dict[str, Any]) -> dict[str, Any]:
    """Normalise option scores and kinds and tier bounds of one template.

    Option scores become numbers (unusable values count as 0) and options
    without a kind become fixed. Tier bounds given as min/max are renamed
    to minScore/maxScore; missing bounds default to 0.
    """
    template = dict(raw)

    questions = template.get("questions")
    if isinstance(questions, list):
        normalized_questions = []
        for question in questions:
            question = dict(question) if isinstance(question, dict) else question
            if (
                isinstance(question, dict)
                and question.get("type") in {k.value for k in CHOICE_KINDS}
                and isinstance(question.get("options"), list)
            ):
                question["options"] = [
                    {
                        **option,
                        "score": coerce_score(option.get("score")),
                        "type": option.get("type") or "fixed",
                    }
                    for option in question["options"]
                    if isinstance(option, dict)
                ]
            normalized_questions.append(question)
        template["questions"] = normalized_questions

    tiers = template.get("resultTiers")
    if isinstance(tiers, list):
        normalized_tiers = []
        for tier in tiers:
            tier = tier if isinstance(tier, dict) else {}
            low = tier.get("minScore") if _is_number(tier.get("minScore")) else tier.get("min")
            high = tier.get("maxScore") if _is_number(tier.get("maxScore")) else tier.get("max")
            normalized_tiers.append(
                {
                    "minScore": low if _is_number(low) else 0,
                    "maxScore": high if _is_number(high) else 0,
                    "label": tier.get("label") or "",
                    "recommendation": tier.get("recommendation") or "",
                }
            )
        template["resultTiers"] = normalized_tiers

    return template


def _format_problem(template: dict[str, Any]) -> str | None:
    """Describe why a normalised template cannot be imported, if it can't."""
    for key in ("title", "jenis_kuesioner", "questions", "resultTiers"):
        if not template.get(key):
            return "title, jenis_kuesioner, questions and resultTiers are required"
    try:
        Audience(template["jenis_kuesioner"])
    except ValueError:
        return f"unknown jenis_kuesioner {template['jenis_kuesioner']!r}"
    try:
        validate_result_tiers(template["resultTiers"])
    except ValueError as e:
        return str(e)
    return None


async def find_doctor(session: AsyncSession, email_or_id: str) -> Doctor | None:
    """Look a doctor up by email, falling back to id."""
    doctor = await session.scalar(select(Doctor).where(Doctor.email == email_or_id.lower()))
    if doctor is None and "@" not in email_or_id:
        doctor = await session.get(Doctor, email_or_id)
    return doctor


async def import_templates(
    session: AsyncSession,
    doctor: Doctor,
    templates: list[dict[str, Any]],
    mode: ImportMode = ImportMode.SKIP,
    dry_run: bool = False,
) -> ImportReport:
    """Import templates for a doctor and report what was done.

    Nothing is written when dry_run is set; the report still lists what
    would have happened.
    """
    report = ImportReport()

    if len(templates) == 1 and templates[0].get("title") == PLACEHOLDER_TITLE:
        logger.warning("Import file still holds the example template, refusing to import")
        report.refused = True
        return report

    for raw in templates:
        template = normalize_template(raw) if isinstance(raw, dict) else {}
        title = template.get("title")

        problem = _format_problem(template)
        if problem:
            report.skipped += 1
            report.actions.append(f"[SKIP FORMAT] {title}: {problem}")
            continue

        audience = Audience(template["jenis_kuesioner"])
        existing = await session.scalar(
            select(QuestionnaireTemplate).where(
                QuestionnaireTemplate.title == title,
                QuestionnaireTemplate.audience == audience.value,
                QuestionnaireTemplate.doctor_id == doctor.id,
            )
        )

        if existing is not None and mode is ImportMode.SKIP:
            report.skipped += 1
            report.actions.append(f"[SKIP EXISTS] {title} ({audience.value})")
            continue

        if existing is not None and mode is ImportMode.UPSERT:
            if not dry_run:
                existing.description = template.get("description") or None
                existing.questions = template["questions"]
                existing.result_tiers = template["resultTiers"]
                if template.get("isPublic") is not None:
                    existing.is_public = bool(template["isPublic"])
            report.updated += 1
            report.actions.append(f"[UPDATE] {title} ({audience.value})")
            continue

        if not dry_run:
            session.add(
                QuestionnaireTemplate(
                    doctor_id=doctor.id,
                    title=title,
                    description=template.get("description") or None,
                    audience=audience.value,
                    questions=template["questions"],
                    result_tiers=template["resultTiers"],
                    is_public=bool(template.get("isPublic", False)),
                )
            )
        report.created += 1
        report.actions.append(f"[CREATE] {title} ({audience.value})")

    if not dry_run:
        await session.commit()
        audit_logger.log(
            "questionnaires_imported",
            "doctor",
            doctor.id,
            "questionnaire",
            None,
            {"created": report.created, "updated": report.updated, "skipped": report.skipped},
        )

    return report
