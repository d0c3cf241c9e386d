"""Tests for the calorie calculator endpoints."""

from httpx import AsyncClient

from medscreen.models.patient import Caregiver, Patient

FEMALE_MODERATE = {
    "gender": "Perempuan",
    "heightCm": 150,
    "weightKg": 60,
    "age": 45,
    "activity": "Sedang",
}


class TestCompute:
    async def test_compute_preview(self, client: AsyncClient, doctor_headers: dict) -> None:
        response = await client.post(
            "/api/v1/calorie/compute", json=FEMALE_MODERATE, headers=doctor_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["ideal_body_weight"] == 45.0
        assert data["basal_rate"] == 1125.0
        assert data["age_correction"] == -56.25
        assert data["total_rounded"] == 1181

    async def test_english_aliases(self, client: AsyncClient, doctor_headers: dict) -> None:
        body = {
            "gender": "female",
            "height_cm": 150,
            "weight_kg": 60,
            "age": 45,
            "activity_level": "moderate",
        }
        response = await client.post("/api/v1/calorie/compute", json=body, headers=doctor_headers)

        assert response.json()["total_rounded"] == 1181

    async def test_zero_height_rejected(self, client: AsyncClient, doctor_headers: dict) -> None:
        response = await client.post(
            "/api/v1/calorie/compute",
            json={**FEMALE_MODERATE, "heightCm": 0},
            headers=doctor_headers,
        )

        assert response.status_code == 400

    async def test_non_finite_height_rejected(self, client: AsyncClient, doctor_headers: dict) -> None:
        # Starlette parses the JSON body with json.loads, which accepts Infinity
        body = b'{"gender": "Perempuan", "heightCm": Infinity, "weightKg": 60, "age": 45, "activity": "Sedang"}'
        response = await client.post(
            "/api/v1/calorie/compute",
            content=body,
            headers={**doctor_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "finite" in response.json()["detail"]

    async def test_unknown_activity_rejected(self, client: AsyncClient, doctor_headers: dict) -> None:
        response = await client.post(
            "/api/v1/calorie/compute",
            json={**FEMALE_MODERATE, "activity": "Olimpiade"},
            headers=doctor_headers,
        )

        assert response.status_code == 400

    async def test_requires_doctor(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/calorie/compute", json=FEMALE_MODERATE)
        assert response.status_code == 401


class TestSavedCalculations:
    async def test_save_for_patient(
        self, client: AsyncClient, patient: Patient, doctor_headers: dict
    ) -> None:
        response = await client.post(
            "/api/v1/calorie-calculations",
            json={**FEMALE_MODERATE, "targetType": "patient", "targetId": patient.id},
            headers=doctor_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["patient_id"] == patient.id
        assert data["caregiver_id"] is None
        assert data["gender"] == "Perempuan"
        assert data["activity_level"] == "Sedang"
        assert data["result"]["totalRounded"] == 1181
        assert data["result"]["factorAge"] == -56.25

    async def test_save_for_caregiver_stores_canonical_values(
        self, client: AsyncClient, caregiver: Caregiver, doctor_headers: dict
    ) -> None:
        response = await client.post(
            "/api/v1/calorie-calculations",
            json={
                **FEMALE_MODERATE,
                "gender": "female",
                "activity": "moderate",
                "targetType": "caregiver",
                "targetId": caregiver.id,
            },
            headers=doctor_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["caregiver_id"] == caregiver.id
        assert data["gender"] == "Perempuan"
        assert data["activity_level"] == "Sedang"

    async def test_other_doctors_patient_not_found(
        self, client: AsyncClient, patient: Patient, other_doctor_headers: dict
    ) -> None:
        response = await client.post(
            "/api/v1/calorie-calculations",
            json={**FEMALE_MODERATE, "targetType": "patient", "targetId": patient.id},
            headers=other_doctor_headers,
        )

        assert response.status_code == 404

    async def test_invalid_target_type(
        self, client: AsyncClient, patient: Patient, doctor_headers: dict
    ) -> None:
        response = await client.post(
            "/api/v1/calorie-calculations",
            json={**FEMALE_MODERATE, "targetType": "doctor", "targetId": patient.id},
            headers=doctor_headers,
        )

        assert response.status_code == 422

    async def test_negative_weight_rejected(
        self, client: AsyncClient, patient: Patient, doctor_headers: dict
    ) -> None:
        response = await client.post(
            "/api/v1/calorie-calculations",
            json={**FEMALE_MODERATE, "weightKg": -60, "targetType": "patient", "targetId": patient.id},
            headers=doctor_headers,
        )

        assert response.status_code == 400

    async def test_list_filters_by_target(
        self,
        client: AsyncClient,
        patient: Patient,
        caregiver: Caregiver,
        doctor_headers: dict,
        admin_headers: dict,
    ) -> None:
        for target_type, target_id in (("patient", patient.id), ("caregiver", caregiver.id)):
            await client.post(
                "/api/v1/calorie-calculations",
                json={**FEMALE_MODERATE, "targetType": target_type, "targetId": target_id},
                headers=doctor_headers,
            )

        for_patient = await client.get(
            "/api/v1/calorie-calculations",
            params={"target_type": "patient", "target_id": patient.id},
            headers=doctor_headers,
        )
        everything = await client.get("/api/v1/calorie-calculations", headers=admin_headers)

        assert len(for_patient.json()) == 1
        assert for_patient.json()[0]["patient_id"] == patient.id
        assert len(everything.json()) == 2
