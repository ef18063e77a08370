"""Application configuration using Pydantic settings."""

from pydantic import AnyHttpUrl, Field, validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # API Configuration
    API_TITLE: str = "CRM API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Customer relationship management backend with role-based access control"
    API_PREFIX: str = "/api/v1"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    TESTING: bool = False

    # Database
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./crm.db", description="Async SQLAlchemy database URL"
    )

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"

    # JWT Configuration
    JWT_SECRET_KEY: str = Field(
        default="dev-jwt-secret-key-super-long-for-local-development-only",
        min_length=32,
        description="Secret key for access tokens",
    )
    JWT_REFRESH_SECRET_KEY: str = Field(
        default="dev-jwt-refresh-secret-key-super-long-for-local-development",
        min_length=32,
        description="Secret key for refresh tokens",
    )
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 hours
    JWT_REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_WINDOW_SECONDS: int = 15 * 60
    RATE_LIMIT_MAX_REQUESTS: int = 100

    # CORS
    ALLOWED_ORIGINS: list[str] = ["http://localhost:5173"]
    ALLOWED_METHODS: list[str] = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
    ALLOWED_HEADERS: list[str] = ["*"]

    # Password Policy
    PASSWORD_MIN_LENGTH: int = 6

    # Monitoring
    LOG_LEVEL: str = "INFO"

    # Seed data
    ADMIN_EMAIL: str = "admin@crm.com"
    ADMIN_PASSWORD: str = "admin123"

    @validator("ENVIRONMENT")
    def validate_environment(cls, v):
        """Validate environment setting."""
        allowed = ["development", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @validator("LOG_LEVEL")
    def validate_log_level(cls, v):
        """Validate logging level name."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @validator("ALLOWED_ORIGINS")
    def validate_origins(cls, v):
        """Validate CORS origins."""
        validated_origins = []
        for origin in v:
            if origin == "*":
                validated_origins.append(origin)
            else:
                try:
                    AnyHttpUrl(origin)
                    validated_origins.append(origin)
                except Exception:
                    raise ValueError(f"Invalid origin URL: {origin}")
        return validated_origins

    class Config:
        """Pydantic config."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


# Global settings instance
settings = Settings()
