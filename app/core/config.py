# app/core/config.py - CareRelay configuration
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, SecretStr
from typing import List

class Settings(BaseSettings):
    """
    Settings for the CareRelay API
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Database Settings
    DATABASE_URL: str = Field(..., description="Async SQLAlchemy database URL (asyncpg or aiosqlite)")

    # JWT Authentication Settings
    JWT_SECRET_KEY: SecretStr = Field(..., description="Secret key for signing JWT tokens")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Application Settings
    ENVIRONMENT: str = Field("development", description="Environment name")
    LOG_LEVEL: str = Field("INFO", description="Log level")

    # Logging Configuration
    ENABLE_JSON_LOGGING: bool = Field(True, description="Enable JSON structured logging")

    # OpenTelemetry Tracing Settings
    ENABLE_OTEL_EXPORTER: bool = Field(True, description="Install the OpenTelemetry tracer provider")
    ENABLE_OTEL_CONSOLE_EXPORT: bool = Field(False, description="Enable OpenTelemetry console export (JSON spam)")

    # CORS Settings
    CORS_ORIGINS: str = Field(
        "http://localhost:3000,http://127.0.0.1:3000",
        description="Comma-separated list of allowed CORS origins"
    )

    # Rate Limiting Settings
    RATE_LIMIT_ENABLED: bool = Field(True, description="Enable rate limiting")
    DEFAULT_RATE_LIMIT: str = Field("100/minute", description="Default rate limit")
    LOGIN_RATE_LIMIT: str = Field("5/minute", description="Login rate limit")

    # Performance Settings
    DB_POOL_SIZE: int = Field(20, description="Database connection pool size")
    DB_MAX_OVERFLOW: int = Field(0, description="Database max overflow connections")

    # Blob Storage Settings
    STORAGE_DIR: str = Field("./storage", description="Directory holding uploaded blobs")
    PUBLIC_BASE_URL: str = Field("http://localhost:8000", description="Base URL used when building fetch URLs")
    UPLOAD_URL_EXPIRE_MINUTES: int = Field(60, description="Lifetime of a one-time upload slot")
    MAX_LOGO_BYTES: int = Field(5 * 1024 * 1024, description="Largest accepted logo upload")

    # Analytics Settings
    RECENT_TASK_WINDOW_DAYS: int = Field(7, description="Trailing window for the recent task count")

    @property
    def cors_origins_list(self) -> List[str]:
        """Convert CORS_ORIGINS string to list"""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def should_use_json_logging(self) -> bool:
        """Use JSON logging in production or when explicitly enabled"""
        return self.ENVIRONMENT == "production" or self.ENABLE_JSON_LOGGING

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

# Create settings instance
settings = Settings()
