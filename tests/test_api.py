"""
HealthRisk API - Endpoint Tests
Runs the FastAPI app against an in-memory record store.
"""

import pytest
import sys
import os

from fastapi.testclient import TestClient

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main import app
from healthrisk.api.router import resolve_user_key
from healthrisk.submission import IdempotencyGuard, InMemoryRecordStore, get_guard
from healthrisk.submission import guard as guard_module
from healthrisk.submission import store as store_module


ANSWERS = {
    "age": "52",
    "family_history": "Yes, I have first-degree relative with BC",
    "exercise": "No, little or no regular exercise",
    "last_screening": ">2 years ago",
}


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture
def guard():
    return IdempotencyGuard(store=InMemoryRecordStore())


@pytest.fixture
def client(guard):
    app.dependency_overrides[get_guard] = lambda: guard
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============================================================
# TEST: SUBMIT
# ============================================================

class TestSubmit:

    def test_submit_then_resubmit(self, client):
        first = client.post("/api/v1/assessments/submit", json={"answers": ANSWERS, "user_id": "u1"})
        assert first.status_code == 200
        body = first.json()
        assert body["ok"] is True
        assert body["cached"] is False

        second = client.post("/api/v1/assessments/submit", json={"answers": ANSWERS, "user_id": "u1"})
        assert second.json() == {"ok": True, "session_id": body["session_id"], "cached": True}

    def test_idempotency_header(self, client):
        headers = {"Idempotency-Key": "client-key-1"}
        first = client.post("/api/v1/assessments/submit", json={"answers": ANSWERS, "user_id": "u1"}, headers=headers)
        changed = {**ANSWERS, "smoke": "Yes"}
        second = client.post("/api/v1/assessments/submit", json={"answers": changed, "user_id": "u1"}, headers=headers)
        assert second.json()["session_id"] == first.json()["session_id"]
        assert second.json()["cached"] is True

    def test_anonymous_callers_share_fingerprint_per_session_header(self, client):
        headers = {"X-Session-Id": "browser-session-1"}
        first = client.post("/api/v1/assessments/submit", json={"answers": ANSWERS}, headers=headers)
        second = client.post("/api/v1/assessments/submit", json={"answers": ANSWERS}, headers=headers)
        assert second.json()["session_id"] == first.json()["session_id"]

        other = client.post("/api/v1/assessments/submit", json={"answers": ANSWERS},
                            headers={"X-Session-Id": "browser-session-2"})
        assert other.json()["session_id"] != first.json()["session_id"]

    def test_invalid_answers(self, client):
        response = client.post("/api/v1/assessments/submit", json={"answers": {"age": [42]}})
        assert response.status_code == 400
        assert response.json()["ok"] is False
        assert response.json()["code"] == "VALIDATION"

    def test_missing_answers(self, client):
        response = client.post("/api/v1/assessments/submit", json={"user_id": "u1"})
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION"

    def test_malformed_body(self, client):
        response = client.post("/api/v1/assessments/submit", json=["not", "an", "object"])
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION"

    def test_conflict(self, client, guard):
        async def lose_race(record, report):
            return False

        guard.store.insert_if_absent = lose_race
        response = client.post("/api/v1/assessments/submit", json={"answers": ANSWERS, "user_id": "u1"})
        assert response.status_code == 409
        assert response.json()["code"] == "CONFLICT"

    def test_server_error(self, client, guard):
        async def down(user_key, content_hash):
            raise ConnectionError("db down")

        guard.store.find_by_key_and_hash = down
        response = client.post("/api/v1/assessments/submit", json={"answers": ANSWERS, "user_id": "u1"})
        assert response.status_code == 500
        assert response.json() == {
            "ok": False,
            "code": "SERVER_ERROR",
            "message": "Record store unavailable during lookup, please retry",
        }


# ============================================================
# TEST: REPORT / SCHEMA / HEALTH
# ============================================================

class TestReadEndpoints:

    def test_report_fetch(self, client):
        session_id = client.post(
            "/api/v1/assessments/submit", json={"answers": ANSWERS, "user_id": "u1"}
        ).json()["session_id"]
        response = client.get(f"/api/v1/assessments/{session_id}/report")
        assert response.status_code == 200
        report = response.json()
        assert report["userProfile"] == "premenopausal"
        assert report["insights"]["urgency"]["has_urgent_issues"] is True
        assert report["reportData"]["narrative"]["source"] == "template"

    def test_unknown_report(self, client):
        response = client.get("/api/v1/assessments/sess_unknown/report")
        assert response.status_code == 404
        assert response.json()["ok"] is False
        assert response.json()["code"] == "NOT_FOUND"

    def test_questionnaire_schema(self, client):
        schema = client.get("/api/v1/assessments/questionnaire-schema").json()
        ids = {q["id"] for q in schema["questions"]}
        assert {"age", "family_history", "exercise", "last_screening", "weight", "height"} <= ids

    def test_health(self, client):
        body = client.get("/api/v1/health").json()
        assert body["status"] == "healthy"
        assert body["record_store"] == "memory"
        assert body["narrative_service"] is False


class TestResolveUserKey:

    def test_explicit_user_id_wins(self):
        assert resolve_user_key(" u1 ", "sess", "1.2.3.4", "agent") == "u1"

    def test_session_header_fingerprint(self):
        key = resolve_user_key(None, "sess", "1.2.3.4", "agent")
        assert key.startswith("fp_")
        assert key == resolve_user_key(None, "sess", "5.6.7.8", "other")

    def test_client_fingerprint(self):
        assert resolve_user_key(None, None, "1.2.3.4", "agent") != resolve_user_key(None, None, "1.2.3.5", "agent")

    def test_anonymous(self):
        assert resolve_user_key(None, None, None, None) == "anonymous"


class TestLifespan:

    def test_shutdown_closes_record_store(self, monkeypatch):
        closed = []

        class ClosingStore(InMemoryRecordStore):
            async def close(self):
                closed.append(True)

        monkeypatch.setattr(guard_module, "_guard", None)
        monkeypatch.setattr(store_module, "_store", ClosingStore())
        with TestClient(app) as test_client:
            assert test_client.get("/api/v1/health").status_code == 200
        assert closed == [True]
        assert store_module._store is None
