import io

import numpy as np
import pytest
import soundfile as sf

from voiceclone.client.recorder import MicrophoneAccessError, RecorderState, VoiceRecorder


class FakeStream:
    def __init__(self, callback, fail_on_start=False):
        self.callback = callback
        self.fail_on_start = fail_on_start
        self.started = False
        self.closed = False

    def start(self):
        if self.fail_on_start:
            raise RuntimeError("device busy")
        self.started = True

    def stop(self):
        self.started = False

    def close(self):
        self.closed = True

    def feed(self, seconds, sample_rate, channels=1):
        frames = np.full((int(seconds * sample_rate), channels), 0.25, dtype="float32")
        self.callback(frames, len(frames), None, None)


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def streams():
    return []


@pytest.fixture
def recorder(clock, streams):
    def factory(samplerate, channels, callback):
        stream = FakeStream(callback)
        streams.append(stream)
        return stream

    return VoiceRecorder(sample_rate=8000, stream_factory=factory, clock=clock)


def test_record_twelve_seconds(recorder, clock, streams):
    recorder.start()
    assert recorder.state == RecorderState.RECORDING
    streams[0].feed(2, 8000)

    clock.now += 12.4
    assert recorder.duration == 12
    audio = recorder.stop()

    assert recorder.state == RecorderState.CAPTURED
    assert streams[0].closed
    assert audio.duration == 12
    assert audio.mime_type == "audio/wav"
    assert audio.to_data_url().startswith("data:audio/wav;base64,")

    samples, sample_rate = sf.read(io.BytesIO(audio.data))
    assert sample_rate == 8000
    assert len(samples) == 16000

    clock.now += 30
    assert recorder.duration == 12


def test_start_while_recording_is_a_no_op(recorder, clock, streams):
    recorder.start()
    clock.now += 3
    recorder.start()

    assert len(streams) == 1
    assert recorder.duration == 3


def test_reset_returns_to_idle(recorder, clock):
    recorder.start()
    clock.now += 5
    recorder.stop()

    recorder.reset()

    assert recorder.state == RecorderState.IDLE
    assert recorder.audio is None
    assert recorder.duration == 0


def test_new_recording_replaces_previous(recorder, clock, streams):
    recorder.start()
    clock.now += 5
    first = recorder.stop()

    recorder.start()
    assert recorder.audio is None
    clock.now += 2
    second = recorder.stop()

    assert first.duration == 5
    assert second.duration == 2


def test_microphone_denied_stays_idle(clock):
    def denied(samplerate, channels, callback):
        raise MicrophoneAccessError("Microphone unavailable: permission denied")

    recorder = VoiceRecorder(stream_factory=denied, clock=clock)

    with pytest.raises(MicrophoneAccessError):
        recorder.start()
    assert recorder.state == RecorderState.IDLE
    assert recorder.audio is None


def test_stream_start_failure_closes_stream(clock):
    created = []

    def factory(samplerate, channels, callback):
        created.append(FakeStream(callback, fail_on_start=True))
        return created[0]

    recorder = VoiceRecorder(stream_factory=factory, clock=clock)

    with pytest.raises(MicrophoneAccessError, match="device busy"):
        recorder.start()
    assert created[0].closed
    assert recorder.state == RecorderState.IDLE
