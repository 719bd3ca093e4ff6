"""
Tests for menu image uploads.
"""

import pytest

from havens_api.services.storage import generate_key, store_image
from havens_shared.config.settings import settings
from havens_shared.utils.exceptions import ValidationError


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class TestUploadEndpoint:
    """Test POST /api/upload."""

    def test_upload_image(self, client, auth_headers, image_storage):
        """An image is stored and its public URL returned."""
        response = client.post(
            "/api/upload",
            files={"file": ("samosa.png", PNG_BYTES, "image/png")},
            headers=auth_headers,
        )
        assert response.status_code == 200
        url = response.json()["url"]
        assert url.startswith("https://images.test/")
        assert url.endswith(".png")

        key = url.rsplit("/", 1)[1]
        assert image_storage.objects[key] == (PNG_BYTES, "image/png")

    def test_non_image_rejected(self, client, auth_headers, image_storage):
        """Only image content types are accepted."""
        response = client.post(
            "/api/upload",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert image_storage.objects == {}

    def test_svg_rejected(self, client, auth_headers, image_storage):
        """SVG can carry script, so it is not accepted as an image."""
        response = client.post(
            "/api/upload",
            files={"file": ("logo.svg", b"<svg onload='alert(1)'/>", "image/svg+xml")},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert image_storage.objects == {}

    def test_oversized_upload_rejected(self, client, auth_headers, image_storage, monkeypatch):
        """Uploads above upload_max_bytes are refused without being stored."""
        monkeypatch.setattr(settings, "upload_max_bytes", 16)
        response = client.post(
            "/api/upload",
            files={"file": ("big.png", PNG_BYTES, "image/png")},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert "too large" in response.json()["error"]
        assert image_storage.objects == {}

    def test_missing_file(self, client, auth_headers):
        """The file field is required."""
        response = client.post("/api/upload", headers=auth_headers)
        assert response.status_code == 400

    def test_waiter_cannot_upload(self, client, waiter_headers):
        """Uploads need manage_menu."""
        response = client.post(
            "/api/upload",
            files={"file": ("samosa.png", PNG_BYTES, "image/png")},
            headers=waiter_headers,
        )
        assert response.status_code == 403


class TestStoreImage:
    """Test store_image validation."""

    def test_empty_upload(self, image_storage):
        """Zero bytes is rejected."""
        with pytest.raises(ValidationError):
            store_image(image_storage, b"", "a.png", "image/png")

    def test_too_large(self, image_storage):
        """Uploads above the limit are rejected."""
        with pytest.raises(ValidationError):
            store_image(image_storage, PNG_BYTES, "a.png", "image/png", max_bytes=8)

    def test_keys_are_unique(self):
        """Two uploads of the same file never share a key."""
        assert generate_key("a.png", "image/png") != generate_key("a.png", "image/png")

    def test_key_extension_from_content_type(self):
        """Without a filename the extension comes from the content type."""
        assert generate_key(None, "image/png").endswith(".png")
