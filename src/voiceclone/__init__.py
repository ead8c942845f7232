"""
Voiceclone – record voice samples and generate speech per project.

This top-level package exposes the request/response models shared by the
API server and the client.
"""

from .models import (
    CreateProjectRequest,
    GeneratedAudioResponse,
    GenerateSpeechRequest,
    ProjectResponse,
    UploadVoiceSampleRequest,
    VoiceSampleResponse,
)

__all__ = [
    "CreateProjectRequest",
    "GeneratedAudioResponse",
    "GenerateSpeechRequest",
    "ProjectResponse",
    "UploadVoiceSampleRequest",
    "VoiceSampleResponse",
]
