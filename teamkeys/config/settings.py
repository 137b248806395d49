from typing import Any, List, Optional
import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "teamkeys"
    PROJECT_DESCRIPTION: str = "Team-scoped API key management service"
    VERSION: str = "0.1.0"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"

    CORS_ORIGINS: List[str] = ["*"]  # Default to allow all origins

    # Database settings
    DATABASE_TYPE: str = os.getenv("DATABASE_TYPE", "postgres")  # 'postgres' or 'sqlite'
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "teamkeys"
    POSTGRES_PORT: str = "5432"
    SQLITE_DB_PATH: str = os.getenv("SQLITE_DB_PATH", "./teamkeys.db")
    DATABASE_URI: Optional[str] = None

    @field_validator("DATABASE_URI", mode="before")
    def assemble_db_connection(cls, v: Optional[str], info) -> Any:
        if isinstance(v, str):
            return v

        db_type = info.data.get("DATABASE_TYPE", "postgres")

        if db_type.lower() == "sqlite":
            sqlite_path = info.data.get("SQLITE_DB_PATH", "./teamkeys.db")
            return f"sqlite+aiosqlite:///{sqlite_path}"
        return (
            f"postgresql+asyncpg://{info.data.get('POSTGRES_USER')}:{info.data.get('POSTGRES_PASSWORD')}"
            f"@{info.data.get('POSTGRES_SERVER')}:{info.data.get('POSTGRES_PORT', 5432)}"
            f"/{info.data.get('POSTGRES_DB') or ''}"
        )

    # Security settings
    SECRET_KEY: str = "development_secret_key"
    JWT_ALGORITHM: str = "HS256"
    # 60 minutes * 24 hours * 8 days = 8 days
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 8

    # API keys
    API_KEY_PREFIX: str = "tk_api_"
    API_KEY_SECRET_LENGTH: int = 38
    # last_active_at is written at most once per window
    API_KEY_ACTIVITY_THROTTLE_SECONDS: int = 300

    # Pagination
    PAGINATION_DEFAULT_LIMIT: int = 25
    PAGINATION_MAX_LIMIT: int = 100

    # API Documentation
    DOCS_ENABLED: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = os.getenv("LOG_DIR", "./logs")

    # Server settings
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000
    DEBUG_MODE: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )


settings = Settings()
