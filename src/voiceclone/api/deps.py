"""FastAPI dependencies for the storage buckets and the synthesis provider."""

from fastapi import Depends

from voiceclone.api.settings import Settings, get_settings
from voiceclone.infrastructure.storage import StorageClient
from voiceclone.infrastructure.tts import ElevenLabsProvider, OpenAIProvider, TTSProvider


def get_sample_storage(settings: Settings = Depends(get_settings)) -> StorageClient:
    return StorageClient(settings.voice_samples_bucket, settings)


def get_generated_audio_storage(settings: Settings = Depends(get_settings)) -> StorageClient:
    return StorageClient(settings.generated_audio_bucket, settings)


def get_tts_provider(settings: Settings = Depends(get_settings)) -> TTSProvider:
    """Build the configured provider; raises ConfigurationError without a key."""
    if settings.tts_provider == "openai":
        return OpenAIProvider(api_key=settings.openai_api_key)
    return ElevenLabsProvider(api_key=settings.elevenlabs_api_key, voice_id=settings.default_voice_id)
