"""Service-side handlers for sample upload and speech generation.

Both endpoints answer ``{"success": true}`` on success and
``400 {"error": "<message>"}`` on any failure; nothing is retried.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from voiceclone.api.deps import get_generated_audio_storage, get_sample_storage, get_tts_provider
from voiceclone.api.settings import Settings, get_settings
from voiceclone.database import get_db
from voiceclone.infrastructure.storage import StorageClient
from voiceclone.infrastructure.tts import TTSProvider
from voiceclone.models import (
    ErrorResponse,
    GenerateSpeechRequest,
    SuccessResponse,
    UploadVoiceSampleRequest,
)
from voiceclone.services import SampleUploadService, SpeechGenerationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Functions"])

FUNCTION_PATHS = frozenset({"/upload-voice-sample", "/generate-speech"})


def error_response(e: Exception) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(e)})


def validation_error_message(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into one line, e.g. ``Invalid request: audioData: Field required``."""
    problems = []
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            return "Invalid request: body is not valid JSON"
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    return "Invalid request: " + "; ".join(problems)


@router.post(
    "/upload-voice-sample",
    response_model=SuccessResponse,
    responses={400: {"model": ErrorResponse}},
)
async def upload_voice_sample(
    request: UploadVoiceSampleRequest,
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_sample_storage),
    settings: Settings = Depends(get_settings),
):
    """Store a recorded voice sample and record its metadata."""
    logger.info(f"Uploading voice sample '{request.name}' for project {request.project_id}")

    try:
        service = SampleUploadService(db, storage, max_bytes=settings.max_sample_bytes)
        await service.upload(
            project_id=request.project_id,
            name=request.name,
            audio_data=request.audio_data,
            duration=request.duration,
        )
    except Exception as e:
        logger.error(f"Voice sample upload failed: {e!s}", exc_info=True)
        return error_response(e)

    return SuccessResponse()


@router.post(
    "/generate-speech",
    response_model=SuccessResponse,
    responses={400: {"model": ErrorResponse}},
)
async def generate_speech(
    request: GenerateSpeechRequest,
    db: AsyncSession = Depends(get_db),
    storage: StorageClient = Depends(get_generated_audio_storage),
    provider: TTSProvider = Depends(get_tts_provider),
):
    """Synthesize speech for the given text and store the result."""
    logger.info(f"Generating speech for project {request.project_id}")

    try:
        service = SpeechGenerationService(db, storage, provider)
        await service.generate(
            project_id=request.project_id,
            text=request.text,
            samples=request.samples,
        )
    except Exception as e:
        logger.error(f"Speech generation failed: {e!s}", exc_info=True)
        return error_response(e)

    return SuccessResponse()
