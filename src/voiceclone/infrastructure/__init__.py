"""I/O boundary adapters (object storage, speech synthesis providers)."""

from .audio_data import decode_data_url, encode_data_url
from .storage import StorageClient
from .tts import (
    ElevenLabsProvider,
    OpenAIProvider,
    ResponseFormat,
    TTSProvider,
    Voice,
)

__all__ = [
    "ElevenLabsProvider",
    "OpenAIProvider",
    "ResponseFormat",
    "StorageClient",
    "TTSProvider",
    "Voice",
    "decode_data_url",
    "encode_data_url",
]
