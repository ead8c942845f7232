"""
Microphone capture for voice samples.

``VoiceRecorder`` moves through idle -> recording -> captured -> idle.
Audio frames arrive from a ``sounddevice.InputStream`` callback and are
encoded to WAV with ``soundfile`` when recording stops.
"""

import io
import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
import soundfile as sf

from voiceclone.infrastructure.audio_data import encode_data_url

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_RATE = 22050


class RecorderState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"
    CAPTURED = "captured"


class MicrophoneAccessError(Exception):
    """Raised when the input device cannot be opened (e.g. permission denied)."""


@dataclass
class CapturedAudio:
    """A finished recording, ready for playback or upload."""

    data: bytes
    duration: int
    sample_rate: int
    mime_type: str = "audio/wav"

    def to_data_url(self) -> str:
        return encode_data_url(self.data, self.mime_type)


def _open_input_stream(samplerate: int, channels: int, callback: Callable[..., None]) -> Any:
    # Imported lazily: sounddevice loads PortAudio at import time.
    import sounddevice as sd

    try:
        return sd.InputStream(
            samplerate=samplerate, channels=channels, dtype="float32", callback=callback
        )
    except sd.PortAudioError as e:
        raise MicrophoneAccessError(f"Microphone unavailable: {e}") from e


class VoiceRecorder:
    """Record a single voice sample at a time."""

    def __init__(
        self,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
        channels: int = 1,
        stream_factory: Callable[[int, int, Callable[..., None]], Any] = _open_input_stream,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.sample_rate = sample_rate
        self.channels = channels
        self._stream_factory = stream_factory
        self._clock = clock
        self._lock = threading.Lock()
        self._frames: list[np.ndarray] = []
        self._stream: Any = None
        self._started_at: float | None = None
        self._duration = 0
        self.state = RecorderState.IDLE
        self.audio: CapturedAudio | None = None

    @property
    def is_recording(self) -> bool:
        return self.state == RecorderState.RECORDING

    @property
    def duration(self) -> int:
        """Elapsed whole seconds; ticks while recording, frozen once stopped."""
        if self.is_recording and self._started_at is not None:
            return int(self._clock() - self._started_at)
        return self._duration

    def _on_audio(self, indata, frames, time_info, status) -> None:
        if status:
            logger.warning(f"Input stream status: {status}")
        with self._lock:
            self._frames.append(indata.copy())

    def start(self) -> None:
        """Begin capturing from the default input device.

        A no-op while already recording. Raises MicrophoneAccessError and
        stays idle when the device cannot be opened.
        """
        if self.is_recording:
            return

        stream = self._stream_factory(self.sample_rate, self.channels, self._on_audio)
        with self._lock:
            self._frames = []
        try:
            stream.start()
        except Exception as e:
            stream.close()
            raise MicrophoneAccessError(f"Could not start recording: {e}") from e

        self.audio = None
        self._duration = 0
        self._stream = stream
        self._started_at = self._clock()
        self.state = RecorderState.RECORDING
        logger.info("Recording started")

    def stop(self) -> CapturedAudio | None:
        """Finish the capture and return the encoded audio."""
        if not self.is_recording:
            return self.audio

        self._duration = self.duration
        self._stream.stop()
        self._stream.close()
        self._stream = None
        self._started_at = None

        with self._lock:
            frames = self._frames
            self._frames = []

        if frames:
            samples = np.concatenate(frames, axis=0)
        else:
            samples = np.zeros((0, self.channels), dtype="float32")

        buffer = io.BytesIO()
        sf.write(buffer, samples, self.sample_rate, format="WAV", subtype="PCM_16")
        self.audio = CapturedAudio(
            data=buffer.getvalue(), duration=self._duration, sample_rate=self.sample_rate
        )
        self.state = RecorderState.CAPTURED
        logger.info(f"Recording stopped after {self._duration}s ({len(self.audio.data)} bytes)")
        return self.audio

    def reset(self) -> None:
        """Discard the captured audio and return to idle."""
        if self.is_recording:
            self._stream.stop()
            self._stream.close()
            self._stream = None
            self._started_at = None
        self._frames = []
        self.audio = None
        self._duration = 0
        self.state = RecorderState.IDLE

    def play(self) -> None:
        """Play back the captured sample on the default output device."""
        if self.audio is None:
            return
        import sounddevice as sd

        samples, sample_rate = sf.read(io.BytesIO(self.audio.data), dtype="float32")
        sd.play(samples, sample_rate)
        sd.wait()
