"""Tests for questionnaire template endpoints."""

from httpx import AsyncClient

from medscreen.models.questionnaire import QuestionnaireTemplate

NEW_TEMPLATE = {
    "title": "Skrining Nyeri",
    "description": "Penilaian nyeri harian",
    "jenis_kuesioner": "Keduanya",
    "isPublic": True,
    "questions": [
        {
            "text": "Seberapa sering nyeri muncul?",
            "type": "multiple_choice",
            "options": [
                {"text": "Jarang", "score": 0},
                {"text": "Sering", "score": 3},
            ],
        },
        {"text": "Ceritakan keluhan Anda", "type": "text_input"},
    ],
    "resultTiers": [
        {"min": 0, "max": 1, "label": "Ringan", "recommendation": "Pantau"},
        {"minScore": 2, "maxScore": 3, "label": "Berat", "recommendation": "Rujuk"},
    ],
}


class TestCreateQuestionnaire:
    async def test_admin_creates_template(self, client: AsyncClient, admin_headers: dict) -> None:
        response = await client.post("/api/v1/questionnaires", json=NEW_TEMPLATE, headers=admin_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["audience"] == "Keduanya"
        assert data["is_public"] is True
        # Legacy min/max keys are stored as minScore/maxScore
        assert data["result_tiers"][0]["minScore"] == 0
        assert data["result_tiers"][0]["maxScore"] == 1
        assert data["questions"][0]["options"][1]["type"] == "fixed"

    async def test_user_doctor_forbidden(self, client: AsyncClient, doctor_headers: dict) -> None:
        response = await client.post("/api/v1/questionnaires", json=NEW_TEMPLATE, headers=doctor_headers)
        assert response.status_code == 403

    async def test_anonymous_unauthorized(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/questionnaires", json=NEW_TEMPLATE)
        assert response.status_code == 401

    async def test_inverted_tier_rejected(self, client: AsyncClient, admin_headers: dict) -> None:
        body = {**NEW_TEMPLATE, "resultTiers": [{"minScore": 5, "maxScore": 1, "label": "Bad"}]}
        response = await client.post("/api/v1/questionnaires", json=body, headers=admin_headers)
        assert response.status_code == 422

    async def test_choice_question_needs_options(self, client: AsyncClient, admin_headers: dict) -> None:
        body = {
            **NEW_TEMPLATE,
            "questions": [{"text": "Kosong", "type": "multiple_choice", "options": []}],
        }
        response = await client.post("/api/v1/questionnaires", json=body, headers=admin_headers)
        assert response.status_code == 422

    async def test_unknown_question_type_rejected(self, client: AsyncClient, admin_headers: dict) -> None:
        body = {**NEW_TEMPLATE, "questions": [{"text": "Geser", "type": "slider"}]}
        response = await client.post("/api/v1/questionnaires", json=body, headers=admin_headers)
        assert response.status_code == 422


class TestListQuestionnaires:
    async def test_doctor_sees_own_templates(
        self,
        client: AsyncClient,
        template: QuestionnaireTemplate,
        public_shared_template: QuestionnaireTemplate,
        doctor_headers: dict,
    ) -> None:
        response = await client.get("/api/v1/questionnaires", headers=doctor_headers)

        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == [template.id]

    async def test_admin_sees_all(
        self,
        client: AsyncClient,
        template: QuestionnaireTemplate,
        public_shared_template: QuestionnaireTemplate,
        admin_headers: dict,
    ) -> None:
        response = await client.get("/api/v1/questionnaires", headers=admin_headers)

        ids = {t["id"] for t in response.json()}
        assert ids == {template.id, public_shared_template.id}

    async def test_anonymous_sees_public_only(
        self,
        client: AsyncClient,
        template: QuestionnaireTemplate,
        public_shared_template: QuestionnaireTemplate,
    ) -> None:
        response = await client.get("/api/v1/questionnaires")

        assert [t["id"] for t in response.json()] == [public_shared_template.id]

    async def test_private_template_hidden_from_anonymous(
        self, client: AsyncClient, template: QuestionnaireTemplate
    ) -> None:
        response = await client.get(f"/api/v1/questionnaires/{template.id}")
        assert response.status_code == 404

    async def test_private_template_hidden_from_other_doctor(
        self,
        client: AsyncClient,
        template: QuestionnaireTemplate,
        other_doctor_headers: dict,
    ) -> None:
        response = await client.get(
            f"/api/v1/questionnaires/{template.id}", headers=other_doctor_headers
        )
        assert response.status_code == 404


class TestEditQuestionnaire:
    async def test_admin_updates_title_only(
        self,
        client: AsyncClient,
        template: QuestionnaireTemplate,
        admin_headers: dict,
    ) -> None:
        response = await client.put(
            f"/api/v1/questionnaires/{template.id}",
            json={"title": "Judul Baru"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Judul Baru"
        assert len(data["questions"]) == len(template.questions)

    async def test_admin_updates_with_legacy_keys(
        self,
        client: AsyncClient,
        template: QuestionnaireTemplate,
        admin_headers: dict,
    ) -> None:
        response = await client.put(
            f"/api/v1/questionnaires/{template.id}",
            json={
                "resultTiers": [{"min": 0, "max": 5, "label": "Rendah"}],
                "isPublic": True,
                "jenis_kuesioner": "Pasien",
            },
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["is_public"] is True
        assert data["audience"] == "Pasien"
        assert data["result_tiers"] == [
            {"minScore": 0, "maxScore": 5, "label": "Rendah", "recommendation": ""}
        ]

    async def test_user_cannot_update(
        self,
        client: AsyncClient,
        template: QuestionnaireTemplate,
        doctor_headers: dict,
    ) -> None:
        response = await client.put(
            f"/api/v1/questionnaires/{template.id}",
            json={"title": "Judul Baru"},
            headers=doctor_headers,
        )
        assert response.status_code == 403

    async def test_admin_deletes(
        self,
        client: AsyncClient,
        template: QuestionnaireTemplate,
        admin_headers: dict,
    ) -> None:
        response = await client.delete(f"/api/v1/questionnaires/{template.id}", headers=admin_headers)
        assert response.status_code == 204

        response = await client.get(f"/api/v1/questionnaires/{template.id}", headers=admin_headers)
        assert response.status_code == 404
