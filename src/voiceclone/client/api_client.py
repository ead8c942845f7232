"""
Asynchronous HTTP client for the voiceclone API.

Every call is attempted exactly once; failures surface as ``APIError``.
"""

import logging
import os
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000"


class APIError(Exception):
    """User-facing API error with categorized message.

    Categories: "connection", "timeout", "http", "network".
    """

    def __init__(self, message: str, category: str = "unknown", status_code: int | None = None):
        self.message = message
        self.category = category
        self.status_code = status_code
        super().__init__(message)


class APIClient:
    """Thin wrapper around ``httpx.AsyncClient`` for the voiceclone backend."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 60.0,
    ) -> None:
        self._base_url = (base_url or os.getenv("VOICECLONE_API_URL") or DEFAULT_API_URL).rstrip("/")
        self.token = token if token is not None else os.getenv("VOICECLONE_TOKEN")
        self._client = httpx.AsyncClient(
            base_url=self._base_url, timeout=timeout, transport=transport
        )

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request, translating failures into ``APIError``."""
        try:
            resp = await self._client.request(method, path, headers=self._headers(), **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.ConnectError:
            raise APIError(
                f"Cannot reach the voiceclone API at {self._base_url}", category="connection"
            ) from None
        except httpx.TimeoutException:
            raise APIError("Request timed out", category="timeout") from None
        except httpx.HTTPStatusError as exc:
            try:
                body = exc.response.json()
                detail = body.get("error") or body.get("detail") or exc.response.text
            except ValueError:
                detail = exc.response.text or str(exc)
            raise APIError(
                str(detail), category="http", status_code=exc.response.status_code
            ) from None
        except httpx.HTTPError as exc:
            raise APIError(f"Network error: {exc}", category="network") from None

    # -- auth --

    async def register(self, email: str, password: str) -> dict:
        body = {"email": email, "password": password}
        return (await self._request("POST", "/api/v1/auth/register", json=body)).json()

    async def login(self, email: str, password: str) -> str:
        """Log in and keep the returned bearer token for later calls."""
        body = {"email": email, "password": password}
        data = (await self._request("POST", "/api/v1/auth/login", json=body)).json()
        self.token = data["access_token"]
        return self.token

    # -- projects --

    async def create_project(self, name: str, description: str | None = None) -> dict:
        body = {"name": name, "description": description}
        return (await self._request("POST", "/api/v1/projects", json=body)).json()

    async def list_projects(self) -> list[dict]:
        return (await self._request("GET", "/api/v1/projects")).json()

    async def get_project(self, project_id: str) -> dict:
        return (await self._request("GET", f"/api/v1/projects/{project_id}")).json()

    async def list_samples(self, project_id: str) -> list[dict]:
        return (await self._request("GET", f"/api/v1/projects/{project_id}/samples")).json()

    async def list_generated_audio(self, project_id: str) -> list[dict]:
        return (await self._request("GET", f"/api/v1/projects/{project_id}/generated-audio")).json()

    # -- functions --

    async def upload_voice_sample(
        self, project_id: str, name: str, audio_data: str, duration: int | None
    ) -> dict:
        body = {
            "projectId": project_id,
            "name": name,
            "audioData": audio_data,
            "duration": duration,
        }
        return (await self._request("POST", "/upload-voice-sample", json=body)).json()

    async def generate_speech(self, project_id: str, text: str, samples: list[dict]) -> dict:
        body = {
            "projectId": project_id,
            "text": text,
            "samples": [{"name": s["name"], "audioUrl": s["audio_url"]} for s in samples],
        }
        return (await self._request("POST", "/generate-speech", json=body, timeout=300.0)).json()

    # -- audio --

    async def download_audio(self, audio_url: str, destination: Path) -> Path:
        """Fetch a stored audio object by its public URL."""
        try:
            async with httpx.AsyncClient(timeout=120.0) as client:
                resp = await client.get(audio_url)
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise APIError(f"Download failed: {exc}", category="network") from None
        destination.write_bytes(resp.content)
        logger.info(f"Downloaded {audio_url} to {destination}")
        return destination
