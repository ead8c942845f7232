import logging

from sqlalchemy.ext.asyncio import AsyncSession

from voiceclone.database import VoiceProject, VoiceSample
from voiceclone.errors import InvalidAudioError, InvalidRequestError, ProjectNotFoundError
from voiceclone.infrastructure.audio_data import decode_data_url
from voiceclone.infrastructure.storage import StorageClient, voice_sample_key

from ._compensation import discard_orphaned_object

logger = logging.getLogger(__name__)

SAMPLE_CONTENT_TYPE = "audio/wav"


class SampleUploadService:
    """Persist a recorded voice sample: one stored object plus one row."""

    def __init__(
        self,
        db: AsyncSession,
        storage: StorageClient,
        max_bytes: int | None = None,
    ) -> None:
        self.db = db
        self.storage = storage
        self.max_bytes = max_bytes

    async def upload(
        self,
        *,
        project_id: str,
        name: str,
        audio_data: str,
        duration: int | None = None,
    ) -> VoiceSample:
        name = name.strip()
        if not name:
            raise InvalidRequestError("Sample name is required")

        audio = decode_data_url(audio_data)
        if self.max_bytes is not None and len(audio) > self.max_bytes:
            raise InvalidAudioError(
                f"Voice sample is {len(audio)} bytes, limit is {self.max_bytes}"
            )

        if await self.db.get(VoiceProject, project_id) is None:
            raise ProjectNotFoundError(project_id)

        key = voice_sample_key(project_id, name)
        await self.storage.upload_audio(key, audio, SAMPLE_CONTENT_TYPE)
        audio_url = self.storage.get_public_url(key)

        sample = VoiceSample(
            project_id=project_id,
            name=name,
            audio_url=audio_url,
            duration_seconds=duration,
        )
        try:
            self.db.add(sample)
            await self.db.commit()
            await self.db.refresh(sample)
        except Exception:
            logger.error(f"Failed to record voice sample {key}", exc_info=True)
            await self.db.rollback()
            await discard_orphaned_object(self.storage, key)
            raise

        logger.info(
            f"Stored voice sample {sample.id} for project {project_id} "
            f"({len(audio)} bytes, {duration}s)"
        )
        return sample
