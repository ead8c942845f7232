from datetime import timedelta

import pytest

from voiceclone.api.settings import Settings, get_settings
from voiceclone.errors import AuthenticationError, RegistrationError
from voiceclone.services import AccountService
from voiceclone.services.accounts import create_access_token


@pytest.mark.asyncio
async def test_register_login_and_me(async_client):
    resp = await async_client.post(
        "/api/v1/auth/register", json={"email": "new@example.com", "password": "hunter22"}
    )
    assert resp.status_code == 200
    user_id = resp.json()["id"]

    resp = await async_client.post(
        "/api/v1/auth/login", json={"email": "new@example.com", "password": "hunter22"}
    )
    assert resp.status_code == 200
    token = resp.json()["access_token"]
    assert resp.json()["token_type"] == "bearer"

    resp = await async_client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.json()["id"] == user_id
    assert resp.json()["email"] == "new@example.com"


@pytest.mark.asyncio
async def test_duplicate_email_is_rejected(async_client):
    body = {"email": "dup@example.com", "password": "hunter22"}
    assert (await async_client.post("/api/v1/auth/register", json=body)).status_code == 200

    resp = await async_client.post("/api/v1/auth/register", json=body)

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email already registered"


@pytest.mark.asyncio
async def test_wrong_password_is_unauthorized(async_client):
    await async_client.post(
        "/api/v1/auth/register", json={"email": "pw@example.com", "password": "right-one"}
    )

    resp = await async_client.post(
        "/api/v1/auth/login", json={"email": "pw@example.com", "password": "wrong-one"}
    )

    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_signups_closed_outside_dev(app, async_client):
    app.dependency_overrides[get_settings] = lambda: Settings(
        jwt_secret_key="test-secret-key", env="production", DATABASE_URL="sqlite+aiosqlite://"
    )

    resp = await async_client.post(
        "/api/v1/auth/register", json={"email": "late@example.com", "password": "hunter22"}
    )

    assert resp.status_code == 503
    assert resp.json()["detail"] == "Signups are temporarily disabled"


@pytest.mark.asyncio
async def test_token_for_unknown_user_is_rejected(async_client):
    token = create_access_token("no-such-user")

    resp = await async_client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Could not validate credentials"


@pytest.mark.asyncio
async def test_expired_token_is_rejected(async_client, user):
    token = create_access_token(user.id, expires_delta=timedelta(seconds=-1))

    resp = await async_client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_account_service_login_error(db_session):
    accounts = AccountService(db_session, Settings(jwt_secret_key="k", env="dev"))
    await accounts.register("svc@example.com", "right-one")

    with pytest.raises(AuthenticationError, match="Incorrect email or password"):
        await accounts.login("svc@example.com", "wrong-one")
    with pytest.raises(RegistrationError, match="Email already registered"):
        await accounts.register("svc@example.com", "another")
