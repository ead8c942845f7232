import logging
import re
import time
import uuid
from urllib.parse import quote

import aioboto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from voiceclone.api.settings import Settings, get_settings
from voiceclone.errors import StorageError

logger = logging.getLogger(__name__)


def timestamp_ms() -> int:
    """Milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def unique_token() -> str:
    """Short random token so keys written in the same millisecond never collide."""
    return uuid.uuid4().hex[:8]


def sanitize_name(name: str) -> str:
    """Reduce a display name to characters that are safe in keys and URLs."""
    safe = re.sub(r"[^A-Za-z0-9._-]+", "_", name).strip("_.")
    return safe or "sample"


def voice_sample_key(
    project_id: str, name: str, timestamp: int | None = None, token: str | None = None
) -> str:
    ts = timestamp if timestamp is not None else timestamp_ms()
    return f"{project_id}/{ts}_{token or unique_token()}_{sanitize_name(name)}.wav"


def generated_audio_key(
    project_id: str, timestamp: int | None = None, token: str | None = None
) -> str:
    ts = timestamp if timestamp is not None else timestamp_ms()
    return f"{project_id}/generated/{ts}_{token or unique_token()}_generated.mp3"


class StorageClient:
    """S3-compatible object storage client bound to a single bucket."""

    def __init__(self, bucket: str, settings: Settings | None = None):
        settings = settings or get_settings()
        self.bucket = bucket
        self.endpoint = settings.storage_endpoint
        self.public_url = settings.storage_public_url
        self._session = aioboto3.Session()
        self._client_params = {
            "service_name": "s3",
            "region_name": settings.storage_region,
            "endpoint_url": settings.storage_endpoint,
            "aws_access_key_id": settings.storage_key,
            "aws_secret_access_key": settings.storage_secret,
            "config": Config(signature_version="s3v4"),
        }

    async def upload_audio(self, key: str, audio_data: bytes, content_type: str) -> None:
        """Upload audio bytes as a publicly readable object."""
        try:
            async with self._session.client(**self._client_params) as s3:
                await s3.put_object(
                    Bucket=self.bucket,
                    Key=key,
                    Body=audio_data,
                    ContentType=content_type,
                    ACL="public-read",
                )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"[Storage] Audio upload failed: {self.bucket}/{key}: {e}")
            raise StorageError(f"Failed to store {key}: {e}") from e
        logger.info(f"[Storage] Audio upload successful: {self.bucket}/{key}")

    async def delete_object(self, key: str) -> None:
        try:
            async with self._session.client(**self._client_params) as s3:
                await s3.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to delete {key}: {e}") from e
        logger.info(f"[Storage] Deleted object: {self.bucket}/{key}")

    def get_public_url(self, key: str) -> str:
        """Return the stable public URL of an object, with the key percent-encoded."""
        base = self.public_url.rstrip("/") if self.public_url else self.endpoint
        return f"{base}/{self.bucket}/{quote(key, safe='/')}"
