# tests/core/test_tasks.py

"""
Tests for the ARQ worker tasks (bike_inventory.core.tasks).

The tasks open their own sessions through `get_async_session_context`;
it is patched here to hand out the test session.
"""

import pytest
from contextlib import asynccontextmanager

from arq import Retry
from sqlmodel.ext.asyncio.session import AsyncSession

from bike_inventory.core import tasks
from bike_inventory.core.storage import ObjectStorage
from bike_inventory.domains.inv import models as inv_models


@pytest.fixture
def task_session(monkeypatch, db_session: AsyncSession):
    @asynccontextmanager
    async def _session_context():
        yield db_session

    monkeypatch.setattr(tasks, "get_async_session_context", _session_context)
    return db_session


@pytest.mark.asyncio
async def test_health_check_database_task(task_session):
    result = await tasks.health_check_database_task({})
    assert result == {"status": "success", "message": "Database connection successful."}


# =============================================================================
# delete retries
# =============================================================================
@pytest.mark.asyncio
async def test_delete_task_removes_object(storage: ObjectStorage, bucket_keys):
    await storage.upload("brands/brand-x-1-logo.png", b"png", "image/png")

    result = await tasks.delete_storage_object_task({"storage": storage, "job_try": 1}, "brands/brand-x-1-logo.png")
    assert result == {"status": "success", "key": "brands/brand-x-1-logo.png"}
    assert bucket_keys() == []


@pytest.mark.asyncio
async def test_delete_task_retries_with_growing_delay(s3_client):
    broken = ObjectStorage(s3_client, bucket="missing-bucket", region="us-east-1")

    with pytest.raises(Retry) as exc_info:
        await tasks.delete_storage_object_task({"storage": broken, "job_try": 2}, "brands/x.png")
    assert exc_info.value.defer_score == 120 * 1000


@pytest.mark.asyncio
async def test_delete_task_gives_up_after_max_tries(s3_client):
    broken = ObjectStorage(s3_client, bucket="missing-bucket", region="us-east-1")

    result = await tasks.delete_storage_object_task(
        {"storage": broken, "job_try": tasks.MAX_DELETE_TRIES}, "brands/x.png"
    )
    assert result == {"status": "failed", "key": "brands/x.png"}


# =============================================================================
# orphan sweep
# =============================================================================
@pytest.mark.asyncio
async def test_cleanup_deletes_only_unreferenced_objects(
    task_session: AsyncSession, storage: ObjectStorage, bucket_keys, monkeypatch
):
    # every object counts as old enough
    monkeypatch.setattr(tasks.settings, "ORPHAN_MIN_AGE_HOURS", -1)

    kept_location = await storage.upload("brands/brand-trek-1-logo.png", b"png", "image/png")
    await storage.upload("brands/brand-trek-0-orphan.png", b"png", "image/png")
    await storage.upload("users/user-ann-0-orphan.png", b"png", "image/png")
    # outside every image collection
    await storage.upload("exports/report.csv", b"csv", "text/csv")

    task_session.add(inv_models.Brand(name="Trek", logo=kept_location))
    await task_session.commit()

    result = await tasks.cleanup_orphaned_objects_task({"storage": storage})
    print(f"Sweep result: {result}")

    assert result == {"scanned": 3, "deleted": 2, "failed": 0}
    assert bucket_keys() == ["brands/brand-trek-1-logo.png", "exports/report.csv"]


@pytest.mark.asyncio
async def test_cleanup_spares_recent_objects(task_session: AsyncSession, storage: ObjectStorage, bucket_keys):
    await storage.upload("brands/brand-new-0-upload.png", b"png", "image/png")

    result = await tasks.cleanup_orphaned_objects_task({"storage": storage})

    assert result == {"scanned": 1, "deleted": 0, "failed": 0}
    assert bucket_keys() == ["brands/brand-new-0-upload.png"]
