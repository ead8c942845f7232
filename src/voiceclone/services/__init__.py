"""Server-side pipelines that write to object storage and the database."""

from .accounts import AccountService
from .sample_upload import SampleUploadService
from .speech_generation import SpeechGenerationService

__all__ = ["AccountService", "SampleUploadService", "SpeechGenerationService"]
