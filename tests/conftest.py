"""Shared pytest fixtures for the voiceclone test suite.

Runs the API against an in-memory SQLite database, with object storage
and the speech synthesis provider replaced by in-process fakes.
"""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ENV"] = "dev"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from voiceclone.api.deps import get_generated_audio_storage, get_sample_storage, get_tts_provider
from voiceclone.api.main import app as fastapi_app
from voiceclone.database import Base, User, VoiceProject, get_db
from voiceclone.errors import StorageError, SynthesisError
from voiceclone.infrastructure.tts import TTSProvider, Voice
from voiceclone.services.accounts import create_access_token

# A tiny but well-formed WAV payload (RIFF header, no frames)
WAV_BYTES = (
    b"RIFF$\x00\x00\x00WAVEfmt \x10\x00\x00\x00\x01\x00\x01\x00"
    b"\x22\x56\x00\x00\x44\xac\x00\x00\x02\x00\x10\x00data\x00\x00\x00\x00"
)


class FakeStorage:
    """In-memory stand-in for StorageClient."""

    def __init__(self, bucket: str, fail_upload: bool = False) -> None:
        self.bucket = bucket
        self.fail_upload = fail_upload
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.deleted: list[str] = []

    async def upload_audio(self, key: str, audio_data: bytes, content_type: str) -> None:
        if self.fail_upload:
            raise StorageError(f"Failed to store {key}: bucket unavailable")
        self.objects[key] = (audio_data, content_type)

    async def delete_object(self, key: str) -> None:
        self.objects.pop(key, None)
        self.deleted.append(key)

    def get_public_url(self, key: str) -> str:
        return f"https://storage.test/{self.bucket}/{key}"


class FakeProvider(TTSProvider):
    """Synthesis provider returning canned MP3 bytes."""

    name = "fake"

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[dict] = []

    @property
    def default_voice(self) -> str:
        return "fixed-voice"

    def list_voices(self) -> list[Voice]:
        return [Voice(id="fixed-voice", name="Fixed")]

    def synthesize(self, *, text: str, voice: str, format="mp3") -> bytes:
        self.calls.append({"text": text, "voice": voice, "format": format})
        if self.fail:
            raise SynthesisError()
        return b"ID3" + text.encode("utf-8")


@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def sample_storage():
    return FakeStorage("voice-samples")


@pytest.fixture
def generated_storage():
    return FakeStorage("generated-audio")


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def app(session_factory, sample_storage, generated_storage, provider):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_sample_storage] = lambda: sample_storage
    fastapi_app.dependency_overrides[get_generated_audio_storage] = lambda: generated_storage
    fastapi_app.dependency_overrides[get_tts_provider] = lambda: provider
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def user(db_session) -> User:
    user = User(id="user-1", email="owner@example.com", hashed_password="not-a-real-hash")
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
def auth_headers(user) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest_asyncio.fixture
async def project(db_session, user) -> VoiceProject:
    project = VoiceProject(id="project-1", user_id=user.id, name="Demo", description=None)
    db_session.add(project)
    await db_session.commit()
    return project
