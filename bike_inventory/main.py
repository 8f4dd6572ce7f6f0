# bike_inventory/main.py

"""
FastAPI application entry point.

- Lifespan: object storage client, optional ARQ Redis pool, optional table
  creation (development), engine disposal on shutdown.
- Middleware: CORS and Prometheus request metrics.
- Error translation into the JSON error envelope.
- Domain routers under API_PREFIX, plus /api/health, /api/cicd-working,
  /metrics and the root welcome message.
- ArqWorkerSettings: `arq bike_inventory.main.ArqWorkerSettings`.
"""

import logging
from datetime import datetime, UTC
from typing import AsyncGenerator
from contextlib import asynccontextmanager

from arq import cron
from arq.connections import create_pool, RedisSettings
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bike_inventory import API_PREFIX, CICD_MESSAGE, SERVICE_NAME
from bike_inventory.core.config import settings
from bike_inventory.core.database import engine, create_db_and_tables
from bike_inventory.core.exceptions import register_exception_handlers
from bike_inventory.core.metrics import metrics_middleware, metrics_response
from bike_inventory.core.schemas import ServiceStatus
from bike_inventory.core.storage import ObjectStorage
from bike_inventory.core import tasks as core_tasks

from bike_inventory.domains.usr.routers import router as usr_router
from bike_inventory.domains.ref.routers import router as ref_router
from bike_inventory.domains.org.routers import router as org_router
from bike_inventory.domains.inv.routers import router as inv_router
from bike_inventory.domains.sal.routers import router as sal_router
from bike_inventory.domains.pay.routers import router as pay_router
from bike_inventory.domains.ship.routers import router as ship_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# ARQ worker task functions
worker_functions = [
    core_tasks.health_check_database_task,
    core_tasks.delete_storage_object_task,
    core_tasks.cleanup_orphaned_objects_task,
]


class ArqWorkerSettings:
    redis_settings = RedisSettings.from_dsn(settings.REDIS_URL or "redis://localhost:6379")
    functions = worker_functions
    on_startup = core_tasks.worker_startup
    cron_jobs = [
        # daily at 00:00
        cron(core_tasks.health_check_database_task, hour={0}, minute={0}, timeout=300, keep_result=600),
        # daily at 01:00
        cron(core_tasks.cleanup_orphaned_objects_task, hour={1}, minute={0}, timeout=1800, keep_result=3600),
    ]


# -- Application lifespan --
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Builds the per-process collaborators on startup and releases them on shutdown.
    """
    logger.info("Starting %s (%s)", settings.APP_NAME, settings.APP_ENV)

    # 1. tables (development only; Alembic otherwise)
    if settings.CREATE_TABLES:
        await create_db_and_tables()

    # 2. object storage client
    app.state.storage = ObjectStorage.from_settings(settings)
    logger.info("Object storage bucket: %s", settings.AWS_S3_BUCKET)

    # 3. ARQ Redis pool, used to queue storage delete retries
    app.state.redis = None
    if settings.REDIS_URL:
        app.state.redis = await create_pool(ArqWorkerSettings.redis_settings)
        app.state.storage.job_queue = app.state.redis
        logger.info("ARQ Redis pool created")
    else:
        logger.info("REDIS_URL not set; background retries disabled")

    yield

    logger.info("Shutting down %s", settings.APP_NAME)
    if app.state.redis is not None:
        await app.state.redis.close()
        logger.info("ARQ Redis pool closed")
    await engine.dispose()
    logger.info("Database pool disposed")


# -- FastAPI application --
app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# -- CORS --
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -- Prometheus request metrics --
app.middleware("http")(metrics_middleware)

# -- Error envelope --
register_exception_handlers(app)

# -- Domain routers --
app.include_router(usr_router, prefix=API_PREFIX)
app.include_router(ref_router, prefix=API_PREFIX)
app.include_router(org_router, prefix=API_PREFIX)
app.include_router(inv_router, prefix=API_PREFIX)
app.include_router(sal_router, prefix=API_PREFIX)
app.include_router(pay_router, prefix=API_PREFIX)
app.include_router(ship_router, prefix=API_PREFIX)


# -- Root endpoint --
@app.get("/", summary="API Root", response_description="Welcome message and documentation link.")
async def read_root():
    return {"message": f"Welcome to {settings.APP_NAME}. Visit /docs for interactive API documentation."}


# -- Service endpoints --
def _service_status(service: str = SERVICE_NAME) -> ServiceStatus:
    return ServiceStatus(status="OK", timestamp=datetime.now(UTC), service=service)


@app.get(f"{API_PREFIX}/health", response_model=ServiceStatus, summary="Health check", tags=["Service"])
async def health_check():
    return _service_status()


@app.get(f"{API_PREFIX}/cicd-working", response_model=ServiceStatus, summary="Deployment check", tags=["Service"])
async def cicd_working():
    return _service_status(CICD_MESSAGE)


@app.get("/metrics", include_in_schema=False)
async def metrics():
    return metrics_response()


def run() -> None:
    """`bike-inventory` console script: serves the app with uvicorn."""
    import uvicorn

    uvicorn.run("bike_inventory.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
