"""Conversion between raw audio bytes and base64 ``data:`` URLs."""

import base64
import binascii

from voiceclone.errors import InvalidAudioError


def encode_data_url(audio: bytes, mime_type: str = "audio/wav") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(audio).decode('ascii')}"


def decode_data_url(data_url: str) -> bytes:
    """Return the binary payload of a base64 data URL.

    A bare base64 string (no ``data:...,`` header) is accepted as well.
    """
    header, sep, payload = data_url.partition(",")
    if not sep:
        payload = header
    elif not header.endswith(";base64"):
        raise InvalidAudioError("Audio data must be base64 encoded")

    try:
        audio = base64.b64decode(payload.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidAudioError(f"Invalid audio data: {e}") from e

    if not audio:
        raise InvalidAudioError("Audio data is empty")
    return audio
