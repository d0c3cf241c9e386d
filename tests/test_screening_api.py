"""Tests for server-side scoring of screenings and respondent submissions."""

from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from medscreen.models.patient import Patient
from medscreen.models.questionnaire import (
    QuestionnaireTemplate,
    RespondentSubmission,
    ScreeningResult,
)

HIGH_ANSWERS = [
    {"questionIndex": 0, "selected": {"text": "B"}},
    {"questionIndex": 1, "selectedOptions": [{"text": "Mual"}]},
    {"questionIndex": 2, "value": "Sulit tidur"},
]


class TestRecordScreening:
    async def test_server_computes_score_and_tier(
        self,
        client: AsyncClient,
        patient: Patient,
        template: QuestionnaireTemplate,
        doctor_headers: dict,
    ) -> None:
        response = await client.post(
            "/api/v1/screening-results",
            json={
                "patient_id": patient.id,
                "template_id": template.id,
                "answers": HIGH_ANSWERS,
                # Client totals are ignored
                "total_score": 0,
            },
            headers=doctor_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["total_score"] == 3
        assert data["result_label"] == "High"
        assert data["recommendation"] == "Konsultasi dokter"
        assert data["tier_resolved"] is True

    async def test_unresolved_tier_is_stored(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        patient: Patient,
        template: QuestionnaireTemplate,
        doctor_headers: dict,
    ) -> None:
        template.result_tiers = [{"minScore": 50, "maxScore": 60, "label": "Never"}]
        await async_session.commit()

        response = await client.post(
            "/api/v1/screening-results",
            json={"patient_id": patient.id, "template_id": template.id, "answers": HIGH_ANSWERS},
            headers=doctor_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["total_score"] == 3
        assert data["result_label"] is None
        assert data["tier_resolved"] is False

    async def test_invalid_option_rejected_and_not_persisted(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        patient: Patient,
        template: QuestionnaireTemplate,
        doctor_headers: dict,
    ) -> None:
        response = await client.post(
            "/api/v1/screening-results",
            json={
                "patient_id": patient.id,
                "template_id": template.id,
                "answers": [{"questionIndex": 0, "selected": {"text": "Z"}}],
            },
            headers=doctor_headers,
        )

        assert response.status_code == 400
        count = await async_session.scalar(select(func.count(ScreeningResult.id)))
        assert count == 0

    async def test_index_out_of_range_rejected(
        self,
        client: AsyncClient,
        patient: Patient,
        template: QuestionnaireTemplate,
        doctor_headers: dict,
    ) -> None:
        response = await client.post(
            "/api/v1/screening-results",
            json={
                "patient_id": patient.id,
                "template_id": template.id,
                "answers": [{"questionIndex": 7, "selected": {"text": "A"}}],
            },
            headers=doctor_headers,
        )

        assert response.status_code == 400

    async def test_other_doctors_patient_not_found(
        self,
        client: AsyncClient,
        patient: Patient,
        template: QuestionnaireTemplate,
        other_doctor_headers: dict,
    ) -> None:
        response = await client.post(
            "/api/v1/screening-results",
            json={"patient_id": patient.id, "template_id": template.id, "answers": []},
            headers=other_doctor_headers,
        )

        assert response.status_code == 404

    async def test_list_and_get(
        self,
        client: AsyncClient,
        patient: Patient,
        template: QuestionnaireTemplate,
        doctor_headers: dict,
        other_doctor_headers: dict,
        admin_headers: dict,
    ) -> None:
        created = await client.post(
            "/api/v1/screening-results",
            json={"patient_id": patient.id, "template_id": template.id, "answers": HIGH_ANSWERS},
            headers=doctor_headers,
        )
        result_id = created.json()["id"]

        mine = await client.get(
            "/api/v1/screening-results", params={"patient_id": patient.id}, headers=doctor_headers
        )
        theirs = await client.get("/api/v1/screening-results", headers=other_doctor_headers)
        admin = await client.get(f"/api/v1/screening-results/{result_id}", headers=admin_headers)

        assert [r["id"] for r in mine.json()] == [result_id]
        assert theirs.json() == []
        assert admin.status_code == 200


class TestRespondentSubmission:
    async def test_submission_flow(
        self,
        client: AsyncClient,
        public_shared_template: QuestionnaireTemplate,
        respondent_headers: dict,
    ) -> None:
        listed = await client.get("/api/v1/respondent/questionnaires", headers=respondent_headers)
        assert [t["id"] for t in listed.json()] == [public_shared_template.id]

        response = await client.post(
            "/api/v1/respondent/submissions",
            json={
                "template_id": public_shared_template.id,
                "fill_as": "Caregiver",
                "answers": [{"questionIndex": 0, "selected": {"text": "A"}}],
            },
            headers=respondent_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["total_score"] == 0
        assert data["result_label"] == "Low"
        assert data["fill_as"] == "Caregiver"

        mine = await client.get("/api/v1/respondent/submissions", headers=respondent_headers)
        assert [s["id"] for s in mine.json()] == [data["id"]]

    async def test_audience_mismatch_rejected(
        self,
        client: AsyncClient,
        async_session: AsyncSession,
        public_patient_template: QuestionnaireTemplate,
        respondent_headers: dict,
    ) -> None:
        response = await client.post(
            "/api/v1/respondent/submissions",
            json={
                "template_id": public_patient_template.id,
                "fill_as": "Caregiver",
                "answers": [],
            },
            headers=respondent_headers,
        )

        assert response.status_code == 400
        count = await async_session.scalar(select(func.count(RespondentSubmission.id)))
        assert count == 0

    async def test_unknown_fill_as_rejected(
        self,
        client: AsyncClient,
        public_shared_template: QuestionnaireTemplate,
        respondent_headers: dict,
    ) -> None:
        response = await client.post(
            "/api/v1/respondent/submissions",
            json={"template_id": public_shared_template.id, "fill_as": "Tetangga", "answers": []},
            headers=respondent_headers,
        )

        assert response.status_code == 400

    async def test_private_template_not_found(
        self,
        client: AsyncClient,
        template: QuestionnaireTemplate,
        respondent_headers: dict,
    ) -> None:
        response = await client.post(
            "/api/v1/respondent/submissions",
            json={"template_id": template.id, "fill_as": "Pasien", "answers": []},
            headers=respondent_headers,
        )

        assert response.status_code == 404

    async def test_bad_answers_rejected(
        self,
        client: AsyncClient,
        public_patient_template: QuestionnaireTemplate,
        respondent_headers: dict,
    ) -> None:
        response = await client.post(
            "/api/v1/respondent/submissions",
            json={
                "template_id": public_patient_template.id,
                "fill_as": "Pasien",
                "answers": [{"questionIndex": "0", "selected": {"text": "A"}}],
            },
            headers=respondent_headers,
        )

        assert response.status_code == 400
