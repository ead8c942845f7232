import logging

from fastapi import HTTPException
from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from voiceclone.database import VoiceProject

logger = logging.getLogger(__name__)


async def get_user_project(project_id: str, user_id: str, db: AsyncSession) -> VoiceProject:
    """Return the project if it belongs to the user or raise HTTPException."""
    result = await db.execute(
        select(VoiceProject).where(
            and_(VoiceProject.id == project_id, VoiceProject.user_id == user_id)
        )
    )
    project = result.scalar_one_or_none()

    if not project:
        logger.info("Project %s not found or access denied for user %s", project_id, user_id)
        raise HTTPException(status_code=404, detail=f"Project {project_id} not found or access denied")

    return project
