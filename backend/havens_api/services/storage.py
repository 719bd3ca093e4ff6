"""
Object storage for menu images.

Two backends, selected by STORAGE_BACKEND:
- "s3": any S3-compatible store (AWS S3, Cloudflare R2, MinIO) through boto3
- "local": a directory on disk, served by whatever fronts STORAGE_PUBLIC_BASE_URL

Objects are stored under a generated unique key; the returned URL is
treated as an opaque string by the catalog.
"""

from __future__ import annotations

import mimetypes
import uuid
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path, PurePath

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from havens_shared.config.logging import get_logger
from havens_shared.config.settings import Settings, settings
from havens_shared.utils.exceptions import InternalError, ValidationError

logger = get_logger(__name__)

ALLOWED_IMAGE_TYPES = frozenset({
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
})


class ImageStorage(ABC):
    """Stores bytes under a key and returns the public URL."""

    def __init__(self, public_base_url: str):
        self._public_base_url = public_base_url.rstrip("/")

    def public_url(self, key: str) -> str:
        return f"{self._public_base_url}/{key}"

    @abstractmethod
    def save(self, key: str, data: bytes, content_type: str) -> str:
        """Store the object and return its public URL."""


class S3ImageStorage(ImageStorage):
    """S3-compatible bucket storage."""

    def __init__(self, config: Settings):
        super().__init__(config.storage_public_base_url)
        self._bucket = config.storage_bucket
        self._client = boto3.client(
            "s3",
            endpoint_url=config.storage_endpoint_url or None,
            region_name=config.storage_region,
            aws_access_key_id=config.storage_access_key_id or None,
            aws_secret_access_key=config.storage_secret_access_key or None,
        )

    def save(self, key: str, data: bytes, content_type: str) -> str:
        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            raise InternalError("Failed to store image", key=key, error=str(e))
        return self.public_url(key)


class LocalImageStorage(ImageStorage):
    """Directory-on-disk storage for development."""

    def __init__(self, config: Settings):
        super().__init__(config.storage_public_base_url)
        self._root = Path(config.storage_local_dir)

    def save(self, key: str, data: bytes, content_type: str) -> str:
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            (self._root / key).write_bytes(data)
        except OSError as e:
            raise InternalError("Failed to store image", key=key, error=str(e))
        return self.public_url(key)


def build_storage(config: Settings) -> ImageStorage:
    """Instantiate the configured backend."""
    backend = config.storage_backend.lower()
    if backend == "s3":
        return S3ImageStorage(config)
    if backend == "local":
        return LocalImageStorage(config)
    raise ValueError(f"Unknown STORAGE_BACKEND: {config.storage_backend}")


@lru_cache
def get_image_storage() -> ImageStorage:
    """FastAPI dependency returning the process-wide storage backend."""
    return build_storage(settings)


def generate_key(filename: str | None, content_type: str) -> str:
    """Unique object key: uuid4 hex plus the original (or inferred) extension."""
    suffix = PurePath(filename).suffix.lower() if filename else ""
    if not suffix:
        suffix = mimetypes.guess_extension(content_type) or ""
    return f"{uuid.uuid4().hex}{suffix}"


def store_image(
    storage: ImageStorage,
    data: bytes,
    filename: str | None,
    content_type: str | None,
    max_bytes: int | None = None,
) -> str:
    """
    Validate and store an uploaded image.

    Raises:
        ValidationError: Empty upload, non-image content type, or too large.
        InternalError: The backend failed to store the object.
    """
    if not data:
        raise ValidationError("No file provided", field="file")

    content_type = (content_type or "").split(";")[0].strip().lower()
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError("Only image uploads are allowed", content_type=content_type)

    limit = max_bytes if max_bytes is not None else settings.upload_max_bytes
    if len(data) > limit:
        raise ValidationError(f"File too large. Maximum size is {limit} bytes", size=len(data))

    key = generate_key(filename, content_type)
    url = storage.save(key, data, content_type)
    logger.info("Image stored", key=key, size=len(data), content_type=content_type)
    return url
