"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Batch eligibility
    BATCH_MAX_WORKERS: int = 8

    # Scholarship record layout
    REQUIREMENTS_FIELD: str = "requirements"
    SCHOLARSHIP_NAME_FIELD: str = "name"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
