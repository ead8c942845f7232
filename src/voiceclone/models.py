from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Project Models
# =============================================================================


class CreateProjectRequest(BaseModel):
    """Request model for creating a voice project."""

    name: str = Field(..., description="Project name (required, non-empty after trimming)")
    description: str | None = Field(None, description="Optional project description")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name is required")
        return v

    @field_validator("description")
    @classmethod
    def blank_description_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class ProjectResponse(BaseModel):
    """Response model for a voice project."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    description: str | None = None
    created_at: datetime
    sample_count: int = 0
    generated_count: int = 0


# =============================================================================
# Voice Sample / Generated Audio Models
# =============================================================================


class VoiceSampleResponse(BaseModel):
    """Response model for a recorded voice sample."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    name: str
    audio_url: str
    duration_seconds: int | None = None
    created_at: datetime


class GeneratedAudioResponse(BaseModel):
    """Response model for synthesized speech."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    text_input: str
    audio_url: str
    created_at: datetime


# =============================================================================
# Function Handler Models
# =============================================================================


class UploadVoiceSampleRequest(BaseModel):
    """Body of ``POST /upload-voice-sample``."""

    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(..., alias="projectId")
    name: str = Field(..., description="Display name of the sample")
    audio_data: str = Field(..., alias="audioData", description="Base64 data URL of the recording")
    duration: int | None = Field(None, ge=0, description="Recording length in whole seconds")


class SampleReference(BaseModel):
    """Sample metadata forwarded with a generation request."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    audio_url: str = Field(..., alias="audioUrl")


class GenerateSpeechRequest(BaseModel):
    """Body of ``POST /generate-speech``."""

    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(..., alias="projectId")
    text: str = Field(..., description="Text to synthesize")
    samples: list[SampleReference] = Field(default_factory=list)


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
