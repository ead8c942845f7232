"""Speech synthesis provider implementations (ElevenLabs, OpenAI)."""

# Re-export for easier access, e.g. `from voiceclone.infrastructure.tts import ElevenLabsProvider`
from .base import ResponseFormat, TTSProvider, Voice
from .elevenlabs_provider import ElevenLabsProvider
from .openai_provider import OpenAIProvider

__all__ = [
    "ElevenLabsProvider",
    "OpenAIProvider",
    "ResponseFormat",
    "TTSProvider",
    "Voice",
]
