"""
Tests for middlewares and shared infrastructure: security headers,
request correlation, safe_commit and log helpers.
"""

import json
import logging
from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from havens_api.core.middlewares import SecurityHeadersMiddleware, register_middlewares
from havens_shared.config.logging import StructuredFormatter, mask_email
from havens_shared.infrastructure.correlation import (
    CorrelationIdFilter,
    CorrelationIdMiddleware,
    request_id_var,
)
from havens_shared.infrastructure.db import safe_commit


def _app(*middlewares) -> FastAPI:
    app = FastAPI()
    for middleware in middlewares:
        app.add_middleware(middleware)

    @app.get("/test")
    def test_endpoint():
        return {"message": "ok"}

    return app


# =============================================================================
# SecurityHeadersMiddleware Tests
# =============================================================================

class TestSecurityHeadersMiddleware:
    """Tests for security headers middleware."""

    def test_adds_basic_headers(self):
        """Should add nosniff, frame and referrer headers."""
        response = TestClient(_app(SecurityHeadersMiddleware)).get("/test")

        assert response.headers.get("X-Content-Type-Options") == "nosniff"
        assert response.headers.get("X-Frame-Options") == "DENY"
        assert response.headers.get("Referrer-Policy") == "strict-origin-when-cross-origin"

    def test_adds_hsts_in_production(self):
        """Should add HSTS header only in production."""
        with patch("havens_api.core.middlewares.settings") as mock_settings:
            mock_settings.environment = "production"
            response = TestClient(_app(SecurityHeadersMiddleware)).get("/test")

        assert "max-age=31536000" in response.headers.get("Strict-Transport-Security", "")

    def test_no_hsts_in_development(self):
        """Should not add HSTS header in development."""
        with patch("havens_api.core.middlewares.settings") as mock_settings:
            mock_settings.environment = "development"
            response = TestClient(_app(SecurityHeadersMiddleware)).get("/test")

        assert "Strict-Transport-Security" not in response.headers


# =============================================================================
# Correlation Tests
# =============================================================================

class TestCorrelationIdMiddleware:
    """Tests for correlation ID middleware."""

    def test_generates_request_id_when_not_provided(self):
        """Should generate a UUID when the header is missing."""
        response = TestClient(_app(CorrelationIdMiddleware)).get("/test")
        assert len(response.headers["X-Request-ID"]) == 36

    def test_uses_provided_request_id(self):
        """Should echo the caller's request id."""
        response = TestClient(_app(CorrelationIdMiddleware)).get(
            "/test", headers={"X-Request-ID": "custom-id-123"}
        )
        assert response.headers["X-Request-ID"] == "custom-id-123"


class TestCorrelationIdFilter:
    """Tests for correlation ID logging filter."""

    def test_adds_request_id_to_log_record(self):
        """Should add request_id attribute to log record."""
        token = request_id_var.set("test-request-123")
        try:
            record = MagicMock()
            assert CorrelationIdFilter().filter(record) is True
            assert record.request_id == "test-request-123"
        finally:
            request_id_var.reset(token)

    def test_uses_dash_when_no_request_id(self):
        """Should use '-' when no request ID is set."""
        token = request_id_var.set("")
        try:
            record = MagicMock()
            CorrelationIdFilter().filter(record)
            assert record.request_id == "-"
        finally:
            request_id_var.reset(token)


# =============================================================================
# safe_commit Tests
# =============================================================================

class TestSafeCommit:
    """Tests for safe_commit utility."""

    def test_commits_successfully(self):
        """Should commit when no error occurs."""
        mock_db = MagicMock()
        safe_commit(mock_db)
        mock_db.commit.assert_called_once()
        mock_db.rollback.assert_not_called()

    def test_rollbacks_and_reraises(self):
        """Should rollback and re-raise when commit fails."""
        mock_db = MagicMock()
        mock_db.commit.side_effect = RuntimeError("Database error")

        with pytest.raises(RuntimeError, match="Database error"):
            safe_commit(mock_db)
        mock_db.rollback.assert_called_once()


# =============================================================================
# Logging helpers
# =============================================================================

class TestLoggingHelpers:
    """Tests for log masking and the JSON formatter."""

    def test_mask_email(self):
        """Only the first two characters of the local part survive."""
        assert mask_email("waiter@example.com") == "wa***@example.com"
        assert mask_email("a@example.com") == "a***@example.com"
        assert mask_email(None) == "<no-email>"
        assert mask_email("not-an-email") == "***@invalid"

    def test_structured_formatter_outputs_json(self):
        """Records become one JSON object with request id and extra data."""
        record = logging.LogRecord("havens_api", logging.INFO, __file__, 1, "Order created", (), None)
        record.request_id = "req-1"
        record.extra_data = {"order_id": 7}

        data = json.loads(StructuredFormatter().format(record))
        assert data["message"] == "Order created"
        assert data["level"] == "INFO"
        assert data["request_id"] == "req-1"
        assert data["data"] == {"order_id": 7}


# =============================================================================
# register_middlewares Tests
# =============================================================================

class TestRegisterMiddlewares:
    """Tests for middleware registration."""

    def test_registers_all_middlewares(self):
        """Should register the security and correlation middlewares."""
        app = FastAPI()
        register_middlewares(app)

        middleware_classes = [m.cls for m in app.user_middleware]
        assert SecurityHeadersMiddleware in middleware_classes
        assert CorrelationIdMiddleware in middleware_classes
