"""
Voiceclone exception hierarchy.

Every pipeline error derives from VoiceCloneError so the function
handlers can turn it into a single ``{"error": ...}`` envelope.
"""


class VoiceCloneError(Exception):
    """Base exception for all voiceclone errors."""

    def __init__(self, message: str = "An unexpected error occurred") -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(VoiceCloneError):
    """Raised when a required credential or setting is missing."""


class InvalidRequestError(VoiceCloneError):
    """Raised when a handler receives a request it cannot act on."""


class InvalidAudioError(InvalidRequestError):
    """Raised when submitted audio data cannot be decoded or is too large."""


class ProjectNotFoundError(VoiceCloneError):
    """Raised when a project ID does not exist."""

    def __init__(self, project_id: str) -> None:
        self.project_id = project_id
        super().__init__(f"Project not found: {project_id}")


class StorageError(VoiceCloneError):
    """Raised when an object storage write fails."""


class SynthesisError(VoiceCloneError):
    """Raised when the speech synthesis provider rejects a request."""

    def __init__(self, message: str = "Failed to generate speech") -> None:
        super().__init__(message)


class AuthenticationError(VoiceCloneError):
    """Raised when credentials or a bearer token cannot be verified."""

    def __init__(self, message: str = "Could not validate credentials") -> None:
        super().__init__(message)


class RegistrationError(VoiceCloneError):
    """Raised when a new account cannot be created."""


class RegistrationClosedError(RegistrationError):
    """Raised when signups are disabled for the current environment."""

    def __init__(self, message: str = "Signups are temporarily disabled") -> None:
        super().__init__(message)
