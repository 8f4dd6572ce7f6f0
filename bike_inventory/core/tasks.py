# bike_inventory/core/tasks.py

"""
ARQ worker tasks.

- health_check_database_task: periodic database connectivity check.
- delete_storage_object_task: retries an object delete that failed after
  its row change was committed.
- cleanup_orphaned_objects_task: daily sweep deleting objects under the
  image collections that no row references any more.
"""

import logging
from datetime import datetime, timedelta, UTC
from typing import Any, Dict, Set

from arq import Retry
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from bike_inventory.core.config import settings
from bike_inventory.core.database import get_async_session_context
from bike_inventory.core.exceptions import StorageError
from bike_inventory.core.storage import ObjectStorage

logger = logging.getLogger(__name__)

MAX_DELETE_TRIES = 5


def _storage(ctx: Dict[str, Any]) -> ObjectStorage:
    storage = ctx.get("storage")
    if storage is None:
        storage = ObjectStorage.from_settings()
        ctx["storage"] = storage
    return storage


async def worker_startup(ctx: Dict[str, Any]) -> None:
    ctx["storage"] = ObjectStorage.from_settings()
    logger.info("ARQ worker started; storage bucket '%s'", settings.AWS_S3_BUCKET)


async def health_check_database_task(ctx: Dict[str, Any]) -> Dict[str, str]:
    """
    Runs a trivial query to confirm the database is reachable.
    """
    logger.info("Running database health check")
    try:
        async with get_async_session_context() as db:
            result = await db.execute(select(1))
            if result.scalar_one_or_none() == 1:
                logger.info("Database health check succeeded")
                return {"status": "success", "message": "Database connection successful."}
            error_msg = "Database health check failed: No result from test query."
            logger.error(error_msg)
            return {"status": "failed", "message": error_msg}
    except (SQLAlchemyError, OSError) as e:
        error_msg = f"Database connection error: {e}"
        logger.error(error_msg)
        return {"status": "failed", "message": error_msg}


async def delete_storage_object_task(ctx: Dict[str, Any], key: str) -> Dict[str, str]:
    """
    Deletes one object; re-queued with a growing delay until it succeeds or
    MAX_DELETE_TRIES is reached.
    """
    job_try = ctx.get("job_try", 1)
    try:
        await _storage(ctx).delete(key)
    except StorageError:
        if job_try >= MAX_DELETE_TRIES:
            logger.error("Giving up deleting '%s' after %d tries; left for the orphan sweep", key, job_try)
            return {"status": "failed", "key": key}
        raise Retry(defer=job_try * 60)
    return {"status": "success", "key": key}


async def _referenced_keys(storage: ObjectStorage, model: Any, field: str) -> Set[str]:
    column = getattr(model, field)
    async with get_async_session_context() as db:
        result = await db.execute(select(column).where(column.is_not(None)))
        locations = result.scalars().all()
    return {key for key in (storage.key_from_location(location) for location in locations) if key}


async def cleanup_orphaned_objects_task(ctx: Dict[str, Any]) -> Dict[str, int]:
    """
    Deletes objects under each image collection that no row references and
    that are older than ORPHAN_MIN_AGE_HOURS (fresh uploads may not be
    committed yet).
    """
    from bike_inventory.domains.models import OBJECT_REFERENCES

    storage = _storage(ctx)
    cutoff = datetime.now(UTC) - timedelta(hours=settings.ORPHAN_MIN_AGE_HOURS)
    scanned = deleted = failed = 0

    for model, field, collection in OBJECT_REFERENCES:
        referenced = await _referenced_keys(storage, model, field)
        for key, last_modified in await storage.list_objects(f"{collection}/"):
            scanned += 1
            if key in referenced or last_modified > cutoff:
                continue
            try:
                await storage.delete(key)
                deleted += 1
            except StorageError:
                failed += 1

    logger.info("Orphan sweep: scanned=%d deleted=%d failed=%d", scanned, deleted, failed)
    return {"scanned": scanned, "deleted": deleted, "failed": failed}
