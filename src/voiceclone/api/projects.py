"""Project, voice sample and generated audio listing endpoints."""

import logging
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from voiceclone.api.auth import get_current_user
from voiceclone.database import GeneratedAudio, User, VoiceProject, VoiceSample, get_db
from voiceclone.models import (
    CreateProjectRequest,
    GeneratedAudioResponse,
    ProjectResponse,
    VoiceSampleResponse,
)

from .utils import get_user_project

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/projects", tags=["Projects"])


def _sample_count():
    return (
        select(func.count(VoiceSample.id))
        .where(VoiceSample.project_id == VoiceProject.id)
        .correlate(VoiceProject)
        .scalar_subquery()
    )


def _generated_count():
    return (
        select(func.count(GeneratedAudio.id))
        .where(GeneratedAudio.project_id == VoiceProject.id)
        .correlate(VoiceProject)
        .scalar_subquery()
    )


def _project_response(project: VoiceProject, sample_count: int = 0, generated_count: int = 0):
    response = ProjectResponse.model_validate(project)
    response.sample_count = sample_count or 0
    response.generated_count = generated_count or 0
    return response


@router.post("", response_model=ProjectResponse)
async def create_project(
    request: CreateProjectRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    """Create a new voice project owned by the current user."""
    logger.info(f"Creating project for user {current_user.id}: {request.name}")

    try:
        project = VoiceProject(
            id=str(uuid4()),
            user_id=current_user.id,
            name=request.name,
            description=request.description,
        )
        db.add(project)
        await db.commit()
        await db.refresh(project)
        return _project_response(project)

    except Exception as e:
        logger.error(f"Failed to create project: {e!s}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to create project: {e!s}") from e


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[ProjectResponse]:
    """List the current user's projects, newest first."""
    logger.info(f"Listing projects for user {current_user.id}")

    query = (
        select(VoiceProject, _sample_count(), _generated_count())
        .where(VoiceProject.user_id == current_user.id)
        .order_by(VoiceProject.created_at.desc())
    )
    result = await db.execute(query)
    return [_project_response(*row) for row in result.all()]


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    project = await get_user_project(project_id, current_user.id, db)
    result = await db.execute(
        select(_sample_count(), _generated_count())
        .select_from(VoiceProject)
        .where(VoiceProject.id == project.id)
    )
    sample_count, generated_count = result.one()
    return _project_response(project, sample_count, generated_count)


@router.get("/{project_id}/samples", response_model=list[VoiceSampleResponse])
async def list_voice_samples(
    project_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[VoiceSampleResponse]:
    """List a project's voice samples, newest first."""
    await get_user_project(project_id, current_user.id, db)
    result = await db.execute(
        select(VoiceSample)
        .where(VoiceSample.project_id == project_id)
        .order_by(VoiceSample.created_at.desc())
    )
    return [VoiceSampleResponse.model_validate(s) for s in result.scalars().all()]


@router.get("/{project_id}/generated-audio", response_model=list[GeneratedAudioResponse])
async def list_generated_audio(
    project_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[GeneratedAudioResponse]:
    """List a project's generated audio, newest first."""
    await get_user_project(project_id, current_user.id, db)
    result = await db.execute(
        select(GeneratedAudio)
        .where(GeneratedAudio.project_id == project_id)
        .order_by(GeneratedAudio.created_at.desc())
    )
    return [GeneratedAudioResponse.model_validate(a) for a in result.scalars().all()]
