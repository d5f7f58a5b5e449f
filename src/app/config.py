from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Pydantic Settings automatically reads env vars matching field names (case-insensitive).
    In development, it also reads from .env file if present.
    """

    # Shown in the OpenAPI schema and /docs
    api_title: str = "People API"
    api_version: str = "0.1.0"

    # Root log level for structlog and stdlib loggers. Process-global: applied once
    # from the module-level settings when app.logging is first imported
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
        populate_by_name=True,
    )


settings = Settings()
