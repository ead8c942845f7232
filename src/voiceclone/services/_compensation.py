import logging

from voiceclone.errors import StorageError
from voiceclone.infrastructure.storage import StorageClient

logger = logging.getLogger(__name__)


async def discard_orphaned_object(storage: StorageClient, key: str) -> None:
    """Delete an object whose metadata row could not be written.

    A failed delete is logged and left for manual cleanup; the caller
    re-raises the original database error either way.
    """
    try:
        await storage.delete_object(key)
        logger.info(f"Removed orphaned object {storage.bucket}/{key}")
    except StorageError as e:
        logger.error(f"Could not remove orphaned object {storage.bucket}/{key}: {e}")
