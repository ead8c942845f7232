from __future__ import annotations

import logging
import os

from openai import APIError, OpenAI

from voiceclone.errors import ConfigurationError, SynthesisError
from voiceclone.infrastructure.tts.base import ResponseFormat, TTSProvider, Voice

logger = logging.getLogger(__name__)


class OpenAIProvider(TTSProvider):
    """TTS provider for OpenAI API (v1.0+).

    Uses tts-1-hd by default. OpenAI offers a fixed voice set, so this
    provider is an alternative synthesis backend rather than a cloning one.
    """

    name: str = "openai"

    def __init__(
        self, api_key: str | None = None, voice_id: str | None = None, model: str = "tts-1-hd"
    ) -> None:
        key = api_key or os.getenv("OPENAI_API_KEY")
        if not key:
            raise ConfigurationError("OpenAI API key not found")
        self.client = OpenAI(api_key=key)
        self.model = model
        self._default_voice = voice_id or "alloy"

    @property
    def default_voice(self) -> str:
        return self._default_voice

    def list_voices(self) -> list[Voice]:
        """OpenAI has fixed voices, map them to our internal `Voice` model."""
        return [
            Voice(id="alloy", name="Alloy", gender="neutral", description="Versatile, balanced neutral voice."),
            Voice(id="echo", name="Echo", gender="male", description="Warm, engaging male voice."),
            Voice(id="fable", name="Fable", gender="male", description="Storyteller, classic male narrator voice."),
            Voice(id="onyx", name="Onyx", gender="male", description="Deep, resonant male voice."),
            Voice(id="nova", name="Nova", gender="female", description="Bright, expressive female voice."),
            Voice(id="shimmer", name="Shimmer", gender="female", description="Clear, gentle female voice."),
        ]

    def synthesize(
        self,
        *,
        text: str,
        voice: str,
        format: ResponseFormat = "mp3",
    ) -> bytes:
        """Synthesize audio using OpenAI TTS API."""
        try:
            response = self.client.audio.speech.create(
                model=self.model,
                voice=voice,  # type: ignore[arg-type]
                input=text,
                response_format=format,
            )
        except APIError as e:
            logger.error(f"OpenAI synthesis failed: {e}")
            raise SynthesisError() from e
        return response.content
