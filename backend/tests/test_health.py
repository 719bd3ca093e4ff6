"""
Tests for health check and cross-cutting response behaviour.
"""


class TestHealthEndpoints:
    """Test health check API endpoints."""

    def test_health_check(self, client):
        """Basic health check should return healthy status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "havens-pos-api"

    def test_request_id_echoed(self, client):
        """Incoming X-Request-ID is echoed back."""
        response = client.get("/api/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    def test_request_id_generated(self, client):
        """A request id is generated when none is sent."""
        response = client.get("/api/health")
        assert response.headers.get("X-Request-ID")

    def test_security_headers(self, client):
        """Security headers are set on every response."""
        response = client.get("/api/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_unknown_route_uses_error_shape(self, client):
        """Framework 404s are rendered as {error}."""
        response = client.get("/api/does-not-exist")
        assert response.status_code == 404
        assert "error" in response.json()
