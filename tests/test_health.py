# =============================================================================
# tests/test_health.py - Health Endpoint Tests
# =============================================================================

from unittest.mock import MagicMock, patch

from lib.supabase_client import SupabaseClient


class TestHealth:
    """Tests for the /api/health endpoints."""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_live(self, client):
        assert client.get("/api/health/live").json()["status"] == "alive"

    def test_ready_when_store_answers(self, client):
        with patch.object(SupabaseClient, "get_client", return_value=MagicMock()):
            data = client.get("/api/health/ready").json()

        assert data["status"] == "ready"
        assert data["database"] == "healthy"

    def test_degraded_when_store_fails(self, client):
        with patch.object(SupabaseClient, "get_client", side_effect=RuntimeError("down")):
            data = client.get("/api/health/ready").json()

        assert data["status"] == "degraded"
        assert data["database"].startswith("unhealthy")
