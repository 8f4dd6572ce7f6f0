# bike_inventory/core/config.py

from typing import Any, Optional
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
import os

# project root (two levels above this package)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class Settings(BaseSettings):
    """
    Pydantic BaseSettings model holding every application setting.
    Values are loaded from environment variables and the project's .env file.
    """

    # --- Pydantic Settings ---
    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, '.env'),
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=True
    )

    # --- Application ---
    APP_NAME: str = "Bike Inventory API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Inventory and sales management REST backend"
    APP_ENV: str = Field("development", description="Application environment (development, production, testing)")
    DEBUG_MODE: bool = Field(False, description="Echo SQL statements and expose detailed errors")
    LOG_LEVEL: str = Field("INFO", description="Root log level")
    HOST: str = Field("0.0.0.0", description="Bind address used by `bike-inventory` runner")
    PORT: int = Field(3000, description="Port used by `bike-inventory` runner")

    # --- Database ---
    DATABASE_URL: SecretStr = Field(..., description="Async SQLAlchemy database URL (postgresql+asyncpg://...)")
    CREATE_TABLES: bool = Field(False, description="Create missing tables on startup (development only)")

    # --- JWT (JSON Web Token) ---
    SECRET_KEY: SecretStr = Field(..., description="Secret key for JWT token signing")
    ALGORITHM: str = Field("HS256", description="Algorithm used for JWT signing")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(30, description="Access token expiration time in minutes")

    # --- Object storage (S3) ---
    AWS_REGION: str = Field("us-east-1", description="S3 region")
    AWS_ACCESS_KEY_ID: Optional[SecretStr] = Field(None, description="S3 access key")
    AWS_SECRET_ACCESS_KEY: Optional[SecretStr] = Field(None, description="S3 secret key")
    AWS_S3_BUCKET: str = Field("bike-inventory", description="Bucket holding image assets")
    S3_ENDPOINT_URL: Optional[str] = Field(None, description="Custom endpoint for S3-compatible stores (MinIO, LocalStack)")
    PRESIGNED_URL_EXPIRES: int = Field(3600, description="Presigned GET URL lifetime in seconds")

    # --- Uploads ---
    MAX_UPLOAD_SIZE: int = Field(5 * 1024 * 1024, description="Maximum image upload size in bytes")

    # --- Background jobs (ARQ) ---
    REDIS_URL: Optional[str] = Field(None, description="Redis DSN for the ARQ worker; jobs are disabled when unset")
    ORPHAN_MIN_AGE_HOURS: int = Field(24, description="Minimum age of an unreferenced object before the sweep deletes it")

    def model_post_init(self, __context: Any) -> None:  # noqa: ANN001
        self.LOG_LEVEL = self.LOG_LEVEL.upper()


settings = Settings()
