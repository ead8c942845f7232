"""
View state for the dashboard, project page and sample recorder.

Each view owns its state as plain attributes, exposes coroutines for
loading and user actions, and renders itself as text. Mutations are
followed by a full refetch; nothing is cached between refreshes.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime

from voiceclone.client.api_client import APIClient, APIError
from voiceclone.client.recorder import VoiceRecorder

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    title: str
    description: str
    variant: str = "default"  # or "destructive"


Notifier = Callable[[Notification], None]


def log_notification(notification: Notification) -> None:
    level = logging.ERROR if notification.variant == "destructive" else logging.INFO
    logger.log(level, f"{notification.title}: {notification.description}")


def format_time(seconds: int) -> str:
    """Format whole seconds as ``m:ss``."""
    mins, secs = divmod(max(0, int(seconds)), 60)
    return f"{mins}:{secs:02d}"


def format_date(value: str | datetime) -> str:
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    return value.strftime("%Y-%m-%d")


class _View:
    def __init__(self, api: APIClient, notify: Notifier | None = None) -> None:
        self.api = api
        self._notify = notify or log_notification

    def notify(self, title: str, description: str, variant: str = "default") -> None:
        self._notify(Notification(title, description, variant))

    def error(self, description: str) -> None:
        self.notify("Error", description, "destructive")


class DashboardView(_View):
    """The user's project list plus the create-project dialog."""

    def __init__(self, api: APIClient, notify: Notifier | None = None) -> None:
        super().__init__(api, notify)
        self.projects: list[dict] = []
        self.loading = True
        self.creating = False

    async def refresh(self) -> None:
        try:
            self.projects = await self.api.list_projects()
        except APIError as e:
            logger.error(f"Error fetching projects: {e}")
            self.error("Failed to load projects")
        finally:
            self.loading = False

    async def create_project(self, name: str, description: str = "") -> bool:
        """Create a project; a blank name is ignored without calling the API."""
        if not name.strip():
            return False

        self.creating = True
        try:
            await self.api.create_project(name.strip(), description.strip() or None)
        except APIError as e:
            logger.error(f"Error creating project: {e}")
            self.error("Failed to create project. Please try again.")
            return False
        finally:
            self.creating = False

        self.notify("Project created", "Your voice cloning project has been created successfully.")
        await self.refresh()
        return True

    def render(self) -> str:
        if self.loading:
            return "Loading..."
        if not self.projects:
            return "No projects yet. Create your first voice cloning project to get started."

        lines = []
        for project in self.projects:
            lines.append(f"{project['name']}  ({format_date(project['created_at'])})")
            lines.append(f"  {project.get('description') or 'No description'}")
            lines.append(
                f"  Voice samples: {project.get('sample_count', 0)} • "
                f"Generated: {project.get('generated_count', 0)}"
            )
            lines.append(f"  id: {project['id']}")
        return "\n".join(lines)


class RecorderPanel(_View):
    """Record, name and upload one voice sample."""

    def __init__(
        self,
        api: APIClient,
        project_id: str,
        recorder: VoiceRecorder,
        on_uploaded: Callable[[], Awaitable[None]] | None = None,
        notify: Notifier | None = None,
    ) -> None:
        super().__init__(api, notify)
        self.project_id = project_id
        self.recorder = recorder
        self.on_uploaded = on_uploaded
        self.sample_name = ""
        self.uploading = False

    async def upload(self) -> bool:
        audio = self.recorder.audio
        if audio is None:
            self.error("Please record a voice sample first")
            return False
        if not self.sample_name.strip():
            self.error("Please provide a name for the voice sample")
            return False

        self.uploading = True
        try:
            await self.api.upload_voice_sample(
                self.project_id, self.sample_name.strip(), audio.to_data_url(), audio.duration
            )
        except APIError as e:
            logger.error(f"Upload error: {e}")
            self.error("Failed to upload voice sample")
            return False
        finally:
            self.uploading = False

        self.notify("Success", "Voice sample uploaded successfully")
        self.recorder.reset()
        self.sample_name = ""
        if self.on_uploaded is not None:
            await self.on_uploaded()
        return True

    def render(self) -> str:
        if self.recorder.audio is None:
            status = "Recording..." if self.recorder.is_recording else "Ready"
            return f"{format_time(self.recorder.duration)}  {status}"
        return f"Recorded Sample  {format_time(self.recorder.duration)}"


class ProjectDetailView(_View):
    """A project with its voice samples and generated audio."""

    def __init__(
        self,
        api: APIClient,
        project_id: str,
        recorder: VoiceRecorder | None = None,
        notify: Notifier | None = None,
    ) -> None:
        super().__init__(api, notify)
        self.project_id = project_id
        self.project: dict | None = None
        self.samples: list[dict] = []
        self.generated_audio: list[dict] = []
        self.input_text = ""
        self.generating = False
        self.loading = True
        self.recorder_panel = RecorderPanel(
            api, project_id, recorder or VoiceRecorder(), on_uploaded=self.refresh, notify=notify
        )

    async def refresh(self) -> None:
        try:
            self.project = await self.api.get_project(self.project_id)
            self.samples = await self.api.list_samples(self.project_id)
            self.generated_audio = await self.api.list_generated_audio(self.project_id)
        except APIError as e:
            logger.error(f"Error fetching project data: {e}")
            self.error("Failed to load project data")
        finally:
            self.loading = False

    async def generate_speech(self) -> bool:
        if not self.input_text.strip():
            self.error("Please enter text to generate speech")
            return False

        if not self.samples:
            self.error("Please upload at least one voice sample first")
            return False

        self.generating = True
        try:
            await self.api.generate_speech(self.project_id, self.input_text, self.samples)
        except APIError as e:
            logger.error(f"Generation error: {e}")
            self.error("Failed to generate speech")
            return False
        finally:
            self.generating = False

        self.notify("Success", "Speech generated successfully")
        self.input_text = ""
        await self.refresh()
        return True

    def render(self) -> str:
        if self.loading:
            return "Loading..."
        if self.project is None:
            return "Project not found"

        lines = [
            self.project["name"],
            self.project.get("description") or "No description",
            "",
            f"Voice Samples ({len(self.samples)})",
        ]
        if not self.samples:
            lines.append("  No voice samples yet. Record your first sample above.")
        for sample in self.samples:
            duration = sample.get("duration_seconds")
            lines.append(f"  {sample['name']}  {f'{duration}s' if duration else 'Unknown duration'}")

        lines += ["", f"Generated Audio ({len(self.generated_audio)})"]
        if not self.generated_audio:
            lines.append("  No generated audio yet. Create your first speech above.")
        for audio in self.generated_audio:
            lines.append(f"  {audio['text_input']}  ({format_date(audio['created_at'])})")
            lines.append(f"    {audio['audio_url']}")
        return "\n".join(lines)
