import pytest
from fastapi.testclient import TestClient
from clinical_intake.api.dependencies import get_intake_session_manager
from main import app

PREFIX = "/api/v1/intake"


@pytest.fixture
def client(session_manager):
    app.dependency_overrides[get_intake_session_manager] = lambda: session_manager
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestServiceEndpoints:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["dependencies"]["mongodb"] == "not used"
        assert body["zones"] > 0

    def test_root(self, client):
        assert client.get("/").json()["docs"] == "/docs"


class TestZoneEndpoints:
    def test_get_zone(self, client):
        response = client.get(f"{PREFIX}/zones/LEFT_PRECORDIAL")
        assert response.status_code == 200
        assert response.json()["id"] == "LEFT_PRECORDIAL"

    def test_unknown_zone(self, client):
        assert client.get(f"{PREFIX}/zones/NOT_A_ZONE").status_code == 404
        assert client.get(f"{PREFIX}/zones/NOT_A_ZONE/path").status_code == 404

    def test_list_terminal_zones(self, client):
        zones = client.get(f"{PREFIX}/zones", params={"terminal": True}).json()
        assert zones
        assert all(z["terminal"] for z in zones)

    def test_list_by_category_in_urdu(self, client):
        zones = client.get(f"{PREFIX}/zones", params={"category": "chest", "language": "ur"}).json()
        precordial = next(z for z in zones if z["id"] == "LEFT_PRECORDIAL")
        assert precordial["label"] == "بایاں سینہ (دل کا علاقہ)"

    def test_search(self, client):
        zones = client.get(f"{PREFIX}/zones/search", params={"q": "heart"}).json()
        assert "LEFT_PRECORDIAL" in [z["id"] for z in zones]

    def test_path_and_related(self, client):
        path = client.get(f"{PREFIX}/zones/LEFT_PRECORDIAL/path").json()
        assert path[-1]["id"] == "LEFT_PRECORDIAL"
        related = client.get(f"{PREFIX}/zones/LEFT_PRECORDIAL/related").json()
        assert "LEFT_ARM" in [z["id"] for z in related]

    def test_tree(self, client):
        roots = client.get(f"{PREFIX}/zones/tree").json()
        assert all(r["depth"] == 0 for r in roots)


class TestAnalysisEndpoints:
    def test_analysis(self, client):
        response = client.post(
            f"{PREFIX}/analysis",
            json={"zone_ids": ["LEFT_PRECORDIAL", "LEFT_ARM"], "description": "I am sweating"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["insight"]["pattern"]["type"] == "radiation"
        assert body["red_flags"][0]["severity"] == "immediate"
        assert body["symptoms"] == ["diaphoresis"]

    def test_analysis_requires_zones(self, client):
        assert client.post(f"{PREFIX}/analysis", json={"zone_ids": []}).status_code == 422

    def test_questions(self, client):
        body = client.post(
            f"{PREFIX}/questions",
            json={"zone_id": "RIGHT_ILIAC", "answers": {"abd-nausea": "yes"}},
        ).json()
        ids = [q["id"] for q in body["questions"]]
        assert body["bank"] == "abdomen"
        assert ids[0] == "duration"
        assert "abd-vomiting-blood" in ids

    def test_triage_score(self, client):
        body = client.post(
            f"{PREFIX}/triage-score",
            json={"answers": {"head-sudden": "yes", "severity": 9}},
        ).json()
        # emergency rule (40) + severity 9 (18)
        assert body["score"] == 58
        assert body["category"] == "urgent"
        assert [f["id"] for f in body["red_flags"]] == ["head-thunderclap"]
        assert [f["id"] for f in body["question_flags"]] == ["head-sudden", "severity"]

    def test_pain_assessment(self, client):
        body = client.post(
            f"{PREFIX}/pain-assessment",
            json={"pain_points": [{"zone_id": "LEFT_KNEE", "intensity": 9}]},
        ).json()
        assert body["assessment"]["should_escalate"] is True
        assert body["primary"]["zone_id"] == "LEFT_KNEE"
        assert body["zone_severities"] == {"LEFT_KNEE": "MODERATE"}


class TestEncounterEndpoint:
    def test_emergency_encounter(self, client):
        body = client.post(
            f"{PREFIX}/encounters",
            json={"answers": {"Are you having chest pain RIGHT NOW?": True}},
        ).json()
        assert body["result"]["triage_level"] == "EMERGENCY"
        assert body["result"]["note"]["emergency"] is True
        assert body["alerts"]
        assert body["transcript"][0]["role"] == "assistant"

    def test_chest_pain_encounter(self, client, session_manager):
        body = client.post(
            f"{PREFIX}/encounters",
            json={"pain_points": [{"zone_id": "LEFT_PRECORDIAL", "intensity": 6}]},
        ).json()
        assert body["result"]["recommended_specialty"] == "CARDIOLOGY"
        assert body["result"]["triage_level"] == "URGENT"
        assert session_manager.load_session() is None


class TestSessionEndpoints:
    def test_session_lifecycle(self, client):
        assert client.get(f"{PREFIX}/session").status_code == 404

        created = client.post(f"{PREFIX}/session", json={"patient_id": "p-7"})
        assert created.status_code == 201
        session_id = created.json()["session_id"]

        fetched = client.get(f"{PREFIX}/session").json()
        assert fetched["session_id"] == session_id
        assert fetched["encounter"]["patient_id"] == "p-7"

        back = client.post(f"{PREFIX}/session/back").json()
        assert back["removed_step"] is None
        assert back["can_go_back"] is False

        assert client.delete(f"{PREFIX}/session").json() == {"status": "cleared"}
        assert client.get(f"{PREFIX}/session").status_code == 404

    def test_baseline_validation(self, client):
        client.post(f"{PREFIX}/session", json={})

        response = client.post(
            f"{PREFIX}/session/baseline", json={"past_medical_history": "Asthma"}
        )
        assert response.status_code == 422
        assert response.json()["detail"]["missing_fields"] == [
            "family history conditions",
            "social history",
        ]

        response = client.post(
            f"{PREFIX}/session/baseline",
            json={
                "past_medical_history": "Asthma",
                "family_history_conditions": ["Diabetes"],
                "social_history": "Smoker",
            },
        )
        assert response.status_code == 200
        assert response.json()["encounter"]["baseline_committed"] is True

    def test_baseline_without_session(self, client):
        assert client.post(f"{PREFIX}/session/baseline", json={}).status_code == 404
