import re
from unittest.mock import AsyncMock

import httpx
import pytest
from conftest import WAV_BYTES, FakeStorage
from sqlalchemy import func, select

from voiceclone.api.settings import Settings
from voiceclone.database import VoiceSample
from voiceclone.errors import InvalidAudioError, StorageError
from voiceclone.infrastructure.audio_data import encode_data_url
from voiceclone.infrastructure.storage import StorageClient
from voiceclone.services import SampleUploadService


def upload_body(project_id="project-1", name="Sample A", audio_data=None, duration=12):
    return {
        "projectId": project_id,
        "name": name,
        "audioData": audio_data if audio_data is not None else encode_data_url(WAV_BYTES),
        "duration": duration,
    }


async def count_samples(db_session) -> int:
    return (await db_session.execute(select(func.count(VoiceSample.id)))).scalar_one()


@pytest.mark.asyncio
async def test_upload_stores_object_and_row(async_client, db_session, project, sample_storage):
    resp = await async_client.post("/upload-voice-sample", json=upload_body())

    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    [(key, (data, content_type))] = sample_storage.objects.items()
    assert re.fullmatch(r"project-1/\d+_[0-9a-f]{8}_Sample_A\.wav", key)
    assert data == WAV_BYTES
    assert content_type == "audio/wav"

    sample = (await db_session.execute(select(VoiceSample))).scalar_one()
    assert sample.project_id == "project-1"
    assert sample.name == "Sample A"
    assert sample.duration_seconds == 12
    assert sample.audio_url == f"https://storage.test/voice-samples/{key}"


@pytest.mark.asyncio
async def test_upload_accepts_missing_duration(async_client, db_session, project):
    resp = await async_client.post("/upload-voice-sample", json=upload_body(duration=None))

    assert resp.status_code == 200
    sample = (await db_session.execute(select(VoiceSample))).scalar_one()
    assert sample.duration_seconds is None


@pytest.mark.asyncio
async def test_upload_rejects_invalid_base64(async_client, db_session, project, sample_storage):
    resp = await async_client.post(
        "/upload-voice-sample", json=upload_body(audio_data="data:audio/wav;base64,@@not-base64@@")
    )

    assert resp.status_code == 400
    assert resp.json()["error"].startswith("Invalid audio data")
    assert sample_storage.objects == {}
    assert await count_samples(db_session) == 0


@pytest.mark.asyncio
async def test_upload_rejects_blank_name(async_client, db_session, project, sample_storage):
    resp = await async_client.post("/upload-voice-sample", json=upload_body(name="   "))

    assert resp.status_code == 400
    assert resp.json() == {"error": "Sample name is required"}
    assert sample_storage.objects == {}


@pytest.mark.asyncio
async def test_upload_unknown_project(async_client, db_session, user, sample_storage):
    resp = await async_client.post("/upload-voice-sample", json=upload_body(project_id="missing"))

    assert resp.status_code == 400
    assert resp.json() == {"error": "Project not found: missing"}
    assert sample_storage.objects == {}
    assert await count_samples(db_session) == 0


@pytest.mark.asyncio
async def test_upload_storage_failure_writes_no_row(async_client, db_session, project, sample_storage):
    sample_storage.fail_upload = True

    resp = await async_client.post("/upload-voice-sample", json=upload_body())

    assert resp.status_code == 400
    assert "bucket unavailable" in resp.json()["error"]
    assert await count_samples(db_session) == 0


@pytest.mark.asyncio
async def test_upload_enforces_size_limit(db_session, project):
    storage = FakeStorage("voice-samples")
    service = SampleUploadService(db_session, storage, max_bytes=8)

    with pytest.raises(InvalidAudioError, match="limit is 8"):
        await service.upload(
            project_id="project-1", name="Too long", audio_data=encode_data_url(WAV_BYTES)
        )
    assert storage.objects == {}


@pytest.mark.asyncio
async def test_failed_insert_removes_stored_object(db_session, project):
    storage = FakeStorage("voice-samples")
    service = SampleUploadService(db_session, storage)
    db_session.commit = AsyncMock(side_effect=RuntimeError("database is locked"))

    with pytest.raises(RuntimeError, match="database is locked"):
        await service.upload(
            project_id="project-1", name="Sample A", audio_data=encode_data_url(WAV_BYTES)
        )

    assert storage.objects == {}
    assert len(storage.deleted) == 1
    assert storage.deleted[0].endswith("_Sample_A.wav")


@pytest.mark.asyncio
async def test_failed_cleanup_keeps_original_error(db_session, project):
    storage = FakeStorage("voice-samples")
    storage.delete_object = AsyncMock(side_effect=StorageError("delete refused"))
    service = SampleUploadService(db_session, storage)
    db_session.commit = AsyncMock(side_effect=RuntimeError("database is locked"))

    with pytest.raises(RuntimeError, match="database is locked"):
        await service.upload(
            project_id="project-1", name="Sample A", audio_data=encode_data_url(WAV_BYTES)
        )
    storage.delete_object.assert_awaited_once()


@pytest.mark.asyncio
async def test_cors_preflight_allows_any_origin(async_client):
    resp = await async_client.options(
        "/upload-voice-sample",
        headers={
            "Origin": "https://app.example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type,authorization",
        },
    )

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] in ("*", "https://app.example.com")


@pytest.mark.asyncio
async def test_missing_field_returns_error_envelope(async_client, db_session, project, sample_storage):
    resp = await async_client.post(
        "/upload-voice-sample", json={"projectId": "project-1", "name": "A"}
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid request: audioData: Field required"}
    assert sample_storage.objects == {}
    assert await count_samples(db_session) == 0


@pytest.mark.asyncio
async def test_non_integer_duration_returns_error_envelope(async_client, project):
    resp = await async_client.post("/upload-voice-sample", json=upload_body(duration="twelve"))

    assert resp.status_code == 400
    assert set(resp.json()) == {"error"}
    assert resp.json()["error"].startswith("Invalid request: duration:")


@pytest.mark.asyncio
async def test_reserved_characters_in_name_give_resolvable_url(db_session, project):
    storage = StorageClient(
        "voice-samples", Settings(jwt_secret_key="k", storage_region="nyc3")
    )
    storage.upload_audio = AsyncMock()
    service = SampleUploadService(db_session, storage)

    sample = await service.upload(
        project_id="project-1", name="Take #1?", audio_data=encode_data_url(WAV_BYTES)
    )

    key = storage.upload_audio.call_args.args[0]
    assert re.fullmatch(r"project-1/\d+_[0-9a-f]{8}_Take_1\.wav", key)
    url = httpx.URL(sample.audio_url)
    assert url.host == "nyc3.digitaloceanspaces.com"
    assert url.path == f"/voice-samples/{key}"
    assert url.query == b""
    assert url.fragment == ""
    assert sample.name == "Take #1?"
