"""Client side: API access, microphone recording and view state."""

from .api_client import APIClient, APIError
from .recorder import CapturedAudio, MicrophoneAccessError, RecorderState, VoiceRecorder
from .views import DashboardView, Notification, ProjectDetailView, RecorderPanel

__all__ = [
    "APIClient",
    "APIError",
    "CapturedAudio",
    "DashboardView",
    "MicrophoneAccessError",
    "Notification",
    "ProjectDetailView",
    "RecorderPanel",
    "RecorderState",
    "VoiceRecorder",
]
