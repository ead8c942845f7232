import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from voiceclone.database import GeneratedAudio, VoiceProject
from voiceclone.errors import InvalidRequestError, ProjectNotFoundError
from voiceclone.infrastructure.storage import StorageClient, generated_audio_key
from voiceclone.infrastructure.tts import TTSProvider
from voiceclone.models import SampleReference

from ._compensation import discard_orphaned_object

logger = logging.getLogger(__name__)

GENERATED_CONTENT_TYPE = "audio/mpeg"


class SpeechGenerationService:
    """Synthesize text, store the audio, and record a GeneratedAudio row."""

    def __init__(self, db: AsyncSession, storage: StorageClient, provider: TTSProvider) -> None:
        self.db = db
        self.storage = storage
        self.provider = provider

    async def generate(
        self,
        *,
        project_id: str,
        text: str,
        samples: list[SampleReference] | None = None,
    ) -> GeneratedAudio:
        if not text.strip():
            raise InvalidRequestError("Text is required")

        if await self.db.get(VoiceProject, project_id) is None:
            raise ProjectNotFoundError(project_id)

        # Samples are not used for synthesis yet; the provider's fixed voice is.
        voice = self.provider.default_voice
        logger.info(
            f"Generating speech for project {project_id} with {self.provider.name} "
            f"voice {voice} ({len(samples or [])} samples submitted)"
        )
        audio = await asyncio.to_thread(
            self.provider.synthesize, text=text, voice=voice, format="mp3"
        )

        key = generated_audio_key(project_id)
        await self.storage.upload_audio(key, audio, GENERATED_CONTENT_TYPE)
        audio_url = self.storage.get_public_url(key)

        generated = GeneratedAudio(project_id=project_id, text_input=text, audio_url=audio_url)
        try:
            self.db.add(generated)
            await self.db.commit()
            await self.db.refresh(generated)
        except Exception:
            logger.error(f"Failed to record generated audio {key}", exc_info=True)
            await self.db.rollback()
            await discard_orphaned_object(self.storage, key)
            raise

        logger.info(f"Stored generated audio {generated.id} for project {project_id}")
        return generated
