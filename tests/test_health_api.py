# =============================================================================
# tests/test_health_api.py - Tests for the Health Check Endpoint
# =============================================================================

from fastapi.testclient import TestClient

from app.main import create_app
from lib.repository import InMemoryRepository


class UnhealthyRepository(InMemoryRepository):
    async def health_check(self):
        return False, "connection refused"


class ExplodingRepository(InMemoryRepository):
    async def health_check(self):
        raise RuntimeError("driver crashed")


class TestHealthCheck:
    """Tests for GET /api/health."""

    def test_healthy(self, client):
        """A reachable database gives 200 and ok=true."""
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["database"] == {"status": "connected", "message": "connected"}
        assert body["uptime"] >= 0
        assert "T" in body["timestamp"]

    def test_unhealthy(self):
        """An unreachable database gives 503."""
        with TestClient(create_app(repository=UnhealthyRepository())) as client:
            response = client.get("/api/health")

        assert response.status_code == 503
        assert response.json()["ok"] is False
        assert response.json()["database"] == {
            "status": "disconnected",
            "message": "connection refused",
        }

    def test_check_raises(self):
        """A failing check is reported rather than crashing the endpoint."""
        with TestClient(create_app(repository=ExplodingRepository())) as client:
            response = client.get("/api/health")

        assert response.status_code == 503
        assert response.json()["database"] == {
            "status": "error",
            "message": "Database check failed",
        }


class TestLifespan:
    """Tests for repository connect/disconnect around the app lifetime."""

    def test_connects_and_disconnects(self, app, repository):
        """The repository is connected while the app runs."""
        with TestClient(app) as client:
            assert repository.connected is True
            client.get("/api/health")

        assert repository.connected is False
