"""Tests for questionnaire template import."""

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medscreen.models.doctor import Doctor
from medscreen.models.questionnaire import QuestionnaireTemplate
from medscreen.services.importer import (
    ImportFileError,
    ImportMode,
    extract_templates,
    find_doctor,
    import_templates,
    normalize_template,
)


def _raw_template(title: str = "Skrining Gizi", **overrides) -> dict:
    template = {
        "title": title,
        "description": "Penilaian status gizi",
        "jenis_kuesioner": "Pasien",
        "isPublic": True,
        "questions": [
            {
                "text": "Berat badan turun?",
                "type": "multiple_choice",
                "options": [{"text": "Tidak", "score": "0"}, {"text": "Ya", "score": "abc"}],
            },
            {"text": "Catatan", "type": "text_input"},
        ],
        "resultTiers": [{"min": 0, "max": 2, "label": "Baik"}],
    }
    template.update(overrides)
    return template


async def _templates(session: AsyncSession) -> list[QuestionnaireTemplate]:
    result = await session.execute(select(QuestionnaireTemplate))
    return list(result.scalars().all())


class TestNormalizeTemplate:
    def test_option_scores_and_kinds(self) -> None:
        template = normalize_template(_raw_template())
        options = template["questions"][0]["options"]

        assert options == [
            {"text": "Tidak", "score": 0, "type": "fixed"},
            {"text": "Ya", "score": 0, "type": "fixed"},
        ]

    def test_tier_bounds_renamed(self) -> None:
        template = normalize_template(_raw_template())

        assert template["resultTiers"] == [
            {"minScore": 0, "maxScore": 2, "label": "Baik", "recommendation": ""}
        ]

    def test_free_text_question_untouched(self) -> None:
        template = normalize_template(_raw_template())
        assert template["questions"][1] == {"text": "Catatan", "type": "text_input"}


class TestExtractTemplates:
    def test_accepts_list_and_wrapper(self) -> None:
        assert extract_templates([{"title": "A"}]) == [{"title": "A"}]
        assert extract_templates({"templates": [{"title": "A"}]}) == [{"title": "A"}]

    def test_rejects_other_shapes(self) -> None:
        with pytest.raises(ImportFileError):
            extract_templates({"title": "A"})


class TestImportTemplates:
    async def test_creates_templates(
        self, async_session: AsyncSession, admin_doctor: Doctor
    ) -> None:
        report = await import_templates(async_session, admin_doctor, [_raw_template()])

        assert report.created == 1
        templates = await _templates(async_session)
        assert len(templates) == 1
        assert templates[0].doctor_id == admin_doctor.id
        assert templates[0].audience == "Pasien"
        assert templates[0].result_tiers[0]["minScore"] == 0

    async def test_skip_mode_leaves_existing(
        self, async_session: AsyncSession, admin_doctor: Doctor
    ) -> None:
        await import_templates(async_session, admin_doctor, [_raw_template()])
        report = await import_templates(
            async_session, admin_doctor, [_raw_template(description="Baru")], ImportMode.SKIP
        )

        assert report.skipped == 1
        templates = await _templates(async_session)
        assert templates[0].description == "Penilaian status gizi"

    async def test_upsert_mode_updates_existing(
        self, async_session: AsyncSession, admin_doctor: Doctor
    ) -> None:
        await import_templates(async_session, admin_doctor, [_raw_template()])
        report = await import_templates(
            async_session, admin_doctor, [_raw_template(description="Baru")], ImportMode.UPSERT
        )

        assert report.updated == 1
        templates = await _templates(async_session)
        assert len(templates) == 1
        assert templates[0].description == "Baru"

    async def test_force_mode_duplicates(
        self, async_session: AsyncSession, admin_doctor: Doctor
    ) -> None:
        await import_templates(async_session, admin_doctor, [_raw_template()])
        report = await import_templates(
            async_session, admin_doctor, [_raw_template()], ImportMode.FORCE
        )

        assert report.created == 1
        assert len(await _templates(async_session)) == 2

    async def test_dry_run_writes_nothing(
        self, async_session: AsyncSession, admin_doctor: Doctor
    ) -> None:
        report = await import_templates(
            async_session, admin_doctor, [_raw_template()], dry_run=True
        )

        assert report.created == 1
        assert await _templates(async_session) == []

    async def test_incomplete_and_invalid_entries_skipped(
        self, async_session: AsyncSession, admin_doctor: Doctor
    ) -> None:
        report = await import_templates(
            async_session,
            admin_doctor,
            [
                _raw_template(title=""),
                _raw_template(title="Salah jenis", jenis_kuesioner="Dokter"),
                _raw_template(title="Terbalik", resultTiers=[{"min": 5, "max": 1, "label": "X"}]),
                _raw_template(title="Valid"),
            ],
        )

        assert (report.created, report.skipped) == (1, 3)
        assert [t.title for t in await _templates(async_session)] == ["Valid"]

    async def test_refuses_example_file(
        self, async_session: AsyncSession, admin_doctor: Doctor
    ) -> None:
        report = await import_templates(
            async_session, admin_doctor, [_raw_template(title="Contoh Judul")]
        )

        assert report.refused is True
        assert await _templates(async_session) == []


async def test_find_doctor_by_email_or_id(async_session: AsyncSession, doctor: Doctor) -> None:
    assert (await find_doctor(async_session, doctor.email.upper())).id == doctor.id
    assert (await find_doctor(async_session, doctor.id)).id == doctor.id
    assert await find_doctor(async_session, "nobody@klinik.id") is None
