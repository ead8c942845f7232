from __future__ import annotations

import logging
import os

from elevenlabs import ElevenLabs, VoiceSettings
from elevenlabs import Voice as ElevenVoice
from elevenlabs.core.api_error import ApiError

from voiceclone.errors import ConfigurationError, SynthesisError
from voiceclone.infrastructure.tts.base import ResponseFormat, TTSProvider, Voice

logger = logging.getLogger(__name__)

# Aria
DEFAULT_VOICE_ID = "9BWtsMINqrJLrRacOk9x"

OUTPUT_FORMATS: dict[str, str] = {
    "mp3": "mp3_44100_128",
    "pcm": "pcm_44100",
}


class ElevenLabsProvider(TTSProvider):
    """TTS provider for ElevenLabs API."""

    name: str = "elevenlabs"
    model_id: str = "eleven_multilingual_v2"

    def __init__(self, api_key: str | None = None, voice_id: str | None = None) -> None:
        key = api_key or os.getenv("ELEVENLABS_API_KEY") or os.getenv("ELEVEN_API_KEY")
        if not key:
            raise ConfigurationError("ElevenLabs API key not found")
        self.client = ElevenLabs(api_key=key)
        self._default_voice = voice_id or DEFAULT_VOICE_ID

    @property
    def default_voice(self) -> str:
        return self._default_voice

    def list_voices(self) -> list[Voice]:
        """Return all available voices, mapping from ElevenLabs specific model."""
        eleven_voices = self.client.voices.search().voices
        return [self._map_voice(v) for v in eleven_voices]

    def synthesize(
        self,
        *,
        text: str,
        voice: str,
        format: ResponseFormat = "mp3",
    ) -> bytes:
        """Synthesize audio using the ElevenLabs text-to-speech endpoint."""
        output_format = OUTPUT_FORMATS.get(format)
        if output_format is None:
            logger.warning(f"ElevenLabs does not support '{format}', falling back to mp3")
            output_format = OUTPUT_FORMATS["mp3"]

        try:
            audio_stream = self.client.text_to_speech.convert(
                voice_id=voice,
                text=text,
                model_id=self.model_id,
                output_format=output_format,
                voice_settings=VoiceSettings(stability=0.5, similarity_boost=0.75),
            )
            audio = b"".join(chunk for chunk in audio_stream if isinstance(chunk, bytes))
        except ApiError as e:
            logger.error(f"ElevenLabs synthesis failed with status {e.status_code}: {e.body}")
            raise SynthesisError() from e

        if not audio:
            raise SynthesisError()
        return audio

    def _map_voice(self, eleven_voice: ElevenVoice) -> Voice:
        """Convert an ElevenLabs Voice object to our internal `Voice` dataclass."""
        labels = getattr(eleven_voice, "labels", None) or {}
        voice_id = (
            getattr(eleven_voice, "voice_id", None)
            or getattr(eleven_voice, "id", None)
            or "unknown"
        )
        return Voice(
            id=str(voice_id),
            name=getattr(eleven_voice, "name", None) or "Unknown ElevenLabs Voice",
            gender=labels.get("gender"),
            description=labels.get("description"),
            tags=list(labels.keys()),
        )
