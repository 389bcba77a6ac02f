"""
API Evals -- HTTP surface via FastAPI's TestClient.

Each test builds its own app so auth settings and rate-limit windows never
leak between tests. The safeguard catalog is shared.
"""

import pytest
from fastapi.testclient import TestClient

from framework_mapper.api.gateway import create_app
from framework_mapper.config import Settings
from framework_mapper.service import MappingService

from evals.samples import SCENARIO_A, SCENARIO_B

VALIDATE_BODY = {
    "vendor_name": "ScanCo",
    "safeguard_id": "1.1",
    "claimed_role": "full",
    "supporting_text": SCENARIO_B,
}


@pytest.fixture
def make_client(manager):
    def _make(**overrides) -> TestClient:
        settings = Settings(**overrides)
        app = create_app(settings=settings, service=MappingService(settings=settings, manager=manager))
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client):
    return make_client()


class TestHealth:
    """Eval: Liveness and metrics endpoints."""

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["safeguards_loaded"] == 153

    def test_metrics_count_requests(self, client):
        client.post("/api/v1/validate", json=VALIDATE_BODY)
        data = client.get("/metrics").json()
        assert data["total_requests"] == 1
        assert data["operations"]["validate_mapping"]["count"] == 1
        assert data["cache"]["max_size"] == 1000


class TestSafeguardRoutes:
    """Eval: Catalog browsing over HTTP."""

    def test_list(self, client):
        data = client.get("/api/v1/safeguards").json()
        assert data["framework"] == "CIS Controls v8.1"
        assert data["count"] == 153

    def test_list_filtered(self, client):
        data = client.get("/api/v1/safeguards", params={"implementation_group": "IG1"}).json()
        assert data["count"] == 57

    def test_details_with_examples(self, client):
        resp = client.get("/api/v1/safeguards/7.1", params={"include_examples": "true"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["required_tool_types"] == ["vulnerability_management"]
        assert any("Qualys" in s for s in data["implementation_suggestions"])

    def test_malformed_id_is_400(self, client):
        assert client.get("/api/v1/safeguards/abc").status_code == 400

    def test_unknown_id_is_404(self, client):
        resp = client.get("/api/v1/safeguards/99.99")
        assert resp.status_code == 404
        assert "99.99" in resp.json()["detail"]


class TestAnalysisRoutes:
    """Eval: Engine operations over HTTP."""

    def test_validate(self, client):
        resp = client.post("/api/v1/validate", json=VALIDATE_BODY)
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "UNSUPPORTED"
        assert data["claimed_role"] == "full"
        assert data["effective_role"] == "facilitates"
        assert data["domain_adjusted"] is True
        assert data["confidence_score"] == 10

    def test_analyze(self, client):
        resp = client.post("/api/v1/analyze", json={
            "vendor_name": "Lansweeper",
            "safeguard_id": "1.1",
            "response_text": SCENARIO_A,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["role"] == "full"
        assert data["role_breakdown"]["full"] is True

    def test_tool_type(self, client):
        resp = client.post("/api/v1/tool-type", json={"text": SCENARIO_B})
        assert resp.status_code == 200
        assert resp.json()["tool_type"] == "vulnerability_management"

    def test_bad_role_is_400(self, client):
        resp = client.post("/api/v1/validate", json={**VALIDATE_BODY, "claimed_role": "most"})
        assert resp.status_code == 400

    def test_short_text_is_400(self, client):
        resp = client.post("/api/v1/validate", json={**VALIDATE_BODY, "supporting_text": "short"})
        assert resp.status_code == 400

    def test_unknown_safeguard_is_404(self, client):
        resp = client.post("/api/v1/validate", json={**VALIDATE_BODY, "safeguard_id": "99.9"})
        assert resp.status_code == 404

    def test_missing_field_is_422(self, client):
        resp = client.post("/api/v1/validate", json={"vendor_name": "x"})
        assert resp.status_code == 422


class TestAuth:
    """Eval: Bearer key enforcement."""

    def test_missing_key_is_401(self, make_client):
        client = make_client(api_key="secret")
        assert client.post("/api/v1/validate", json=VALIDATE_BODY).status_code == 401

    def test_wrong_key_is_403(self, make_client):
        client = make_client(api_key="secret")
        resp = client.post(
            "/api/v1/validate", json=VALIDATE_BODY, headers={"Authorization": "Bearer wrong"}
        )
        assert resp.status_code == 403

    def test_correct_key(self, make_client):
        client = make_client(api_key="secret")
        resp = client.post(
            "/api/v1/validate", json=VALIDATE_BODY, headers={"Authorization": "Bearer secret"}
        )
        assert resp.status_code == 200

    def test_catalog_stays_public(self, make_client):
        client = make_client(api_key="secret")
        assert client.get("/api/v1/safeguards/1.1").status_code == 200

    def test_production_requires_key(self, manager):
        settings = Settings(env="production")
        with pytest.raises(RuntimeError, match="API_KEY is required"):
            create_app(settings=settings, service=MappingService(settings=settings, manager=manager))

    def test_production_auth_explicitly_disabled(self, make_client):
        client = make_client(env="production", auth_disabled=True)
        assert client.post("/api/v1/validate", json=VALIDATE_BODY).status_code == 200


class TestRateLimit:
    """Eval: Requests past the per-minute limit get 429."""

    def test_limit(self, make_client):
        client = make_client(rate_limit_per_minute=2)
        assert client.post("/api/v1/validate", json=VALIDATE_BODY).status_code == 200
        assert client.post("/api/v1/tool-type", json={"text": SCENARIO_B}).status_code == 200
        resp = client.post("/api/v1/validate", json=VALIDATE_BODY)
        assert resp.status_code == 429
        assert resp.headers["Retry-After"] == "60"

    def test_windows_are_per_app(self, make_client):
        first = make_client(rate_limit_per_minute=1)
        second = make_client(rate_limit_per_minute=1)
        assert first.post("/api/v1/validate", json=VALIDATE_BODY).status_code == 200
        assert second.post("/api/v1/validate", json=VALIDATE_BODY).status_code == 200
