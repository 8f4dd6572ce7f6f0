# tests/conftest.py

"""
Shared pytest fixtures.

- In-memory SQLite (aiosqlite) database, rebuilt for every test.
- S3 bucket mocked with moto; the app's ``get_storage`` dependency is
  overridden with an ``ObjectStorage`` bound to it.
- Users, the admin role and authenticated clients.
"""

import os

# required settings must exist before the application modules are imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["AWS_SECURITY_TOKEN"] = "testing"
os.environ["AWS_SESSION_TOKEN"] = "testing"
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
os.environ["REDIS_URL"] = ""

import boto3  # noqa: E402
from botocore.config import Config  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from contextlib import asynccontextmanager  # noqa: E402
from typing import AsyncGenerator, Awaitable, Callable, Optional  # noqa: E402

from httpx import AsyncClient, ASGITransport  # noqa: E402
from moto import mock_aws  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from bike_inventory.main import app as main_app  # noqa: E402
from bike_inventory.core import dependencies as deps  # noqa: E402
from bike_inventory.core.database import get_session  # noqa: E402
from bike_inventory.core.security import ADMIN_ROLE_NAME, get_password_hash  # noqa: E402
from bike_inventory.core.storage import ObjectStorage  # noqa: E402
from bike_inventory.domains.usr import models as usr_models  # noqa: E402
import bike_inventory.domains.models  # noqa: F401, E402

TEST_BUCKET = "bike-inventory-test"
TEST_REGION = "us-east-1"

# smallest byte string accepted as a PNG upload
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


# =============================================================================
# 1. Database
# =============================================================================
@pytest_asyncio.fixture(scope="function")
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """
    One session per test, shared by the app (through the overrides) and the test.
    """
    TestingSessionLocal = sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with TestingSessionLocal() as session:
        yield session


# =============================================================================
# 2. Object storage
# =============================================================================
@pytest.fixture(scope="function")
def s3_client():
    with mock_aws():
        client = boto3.client("s3", region_name=TEST_REGION, config=Config(signature_version="s3v4"))
        client.create_bucket(Bucket=TEST_BUCKET)
        yield client


@pytest.fixture(scope="function")
def storage(s3_client) -> ObjectStorage:
    return ObjectStorage(s3_client, bucket=TEST_BUCKET, region=TEST_REGION)


@pytest.fixture(scope="function")
def bucket_keys(s3_client) -> Callable[[str], list]:
    """Returns a function listing the keys currently in the test bucket."""
    def _keys(prefix: str = "") -> list:
        response = s3_client.list_objects_v2(Bucket=TEST_BUCKET, Prefix=prefix)
        return sorted(item["Key"] for item in response.get("Contents", []))
    return _keys


class RecordingJobQueue:
    """Stands in for the ArqRedis pool; records enqueued jobs."""

    def __init__(self):
        self.jobs = []

    async def enqueue_job(self, function: str, *args, **kwargs):
        self.jobs.append((function, args))


@pytest.fixture(scope="function")
def job_queue(storage: ObjectStorage) -> RecordingJobQueue:
    queue = RecordingJobQueue()
    storage.job_queue = queue
    return queue


# =============================================================================
# 3. Users
# =============================================================================
@pytest_asyncio.fixture(scope="function")
async def test_admin_role(db_session: AsyncSession) -> usr_models.Role:
    role = usr_models.Role(name=ADMIN_ROLE_NAME, description="Full management rights")
    db_session.add(role)
    await db_session.commit()
    await db_session.refresh(role)
    return role


@pytest.fixture(scope="function")
def user_factory(db_session: AsyncSession) -> Callable[..., Awaitable[usr_models.User]]:
    """
    Returns a factory creating users directly in the database.
    Extra keyword arguments are passed to the User model.
    """
    async def _create_user(
        username: str,
        password: str,
        role_id: Optional[int] = None,
        email: Optional[str] = None,
        **kwargs,
    ) -> usr_models.User:
        user = usr_models.User(
            username=username,
            email=email or f"{username}@example.com",
            password_hash=get_password_hash(password),
            role_id=role_id,
            **kwargs,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user
    return _create_user


@pytest_asyncio.fixture(scope="function")
async def test_admin_user(user_factory: Callable, test_admin_role: usr_models.Role) -> usr_models.User:
    return await user_factory("sysadm", "sysadmpass123", role_id=test_admin_role.id)


@pytest_asyncio.fixture(scope="function")
async def test_user(user_factory: Callable) -> usr_models.User:
    return await user_factory("testuser", "testpass123")


# =============================================================================
# 4. Clients
# =============================================================================
@pytest.fixture(scope="function")
def app_overrides(db_session: AsyncSession, storage: ObjectStorage):
    """
    Points the app at the test session and the mocked bucket; restores the
    original overrides afterwards.
    """
    async def override_get_session():
        yield db_session

    def override_get_storage():
        return storage

    original_overrides = main_app.dependency_overrides.copy()
    main_app.dependency_overrides.update({
        get_session: override_get_session,
        deps.get_storage: override_get_storage,
    })
    yield main_app.dependency_overrides
    main_app.dependency_overrides.clear()
    main_app.dependency_overrides.update(original_overrides)


@pytest_asyncio.fixture(scope="function")
async def client(app_overrides) -> AsyncGenerator[AsyncClient, None]:
    """Unauthenticated client; authentication goes through real tokens."""
    transport = ASGITransport(app=main_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture(scope="function")
def authorized_client_factory(app_overrides):
    """
    Returns an async context manager yielding a client logged in as ``user``.
    """
    @asynccontextmanager
    async def _create_client_context(user: usr_models.User, password: str, *, is_admin: bool = False):
        def override_get_current_user():
            return user

        app_overrides[deps.get_current_active_user] = override_get_current_user
        if is_admin:
            app_overrides[deps.get_current_admin_user] = override_get_current_user

        transport = ASGITransport(app=main_app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            login_data = {"username": user.username, "password": password}
            res = await ac.post("/api/users/auth/token", data=login_data)
            assert res.status_code == 200, f"Login failed: {res.text}"
            ac.headers["Authorization"] = f"Bearer {res.json()['access_token']}"
            yield ac

    return _create_client_context


@pytest_asyncio.fixture(scope="function")
async def admin_client(authorized_client_factory, test_admin_user: usr_models.User) -> AsyncGenerator[AsyncClient, None]:
    """Client authenticated as an admin."""
    async with authorized_client_factory(test_admin_user, "sysadmpass123", is_admin=True) as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def authorized_client(authorized_client_factory, test_user: usr_models.User) -> AsyncGenerator[AsyncClient, None]:
    """Client authenticated as a user without the admin role."""
    async with authorized_client_factory(test_user, "testpass123") as ac:
        yield ac
