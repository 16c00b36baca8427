from __future__ import annotations

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application-level settings for the enterprise ledger service.

    Values are read from environment variables (or a local .env file).
    """

    # FastAPI metadata
    APP_NAME: str = Field(default="Enterprise Ledger API")
    APP_DESCRIPTION: str = Field(
        default=(
            "In-process operations core for the enterprise dashboard: stock ledger, "
            "production workflow engine and order fulfillment."
        )
    )
    APP_VERSION: str = Field(default="0.1.0")

    LOG_LEVEL: str = Field(default="INFO", description="Root log level name.")

    # CORS
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Comma-separated list or JSON array of allowed origins. Default: *",
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True)
    CORS_ALLOW_METHODS: List[str] = Field(default_factory=lambda: ["*"])
    CORS_ALLOW_HEADERS: List[str] = Field(default_factory=lambda: ["*"])

    # Ledger behavior
    DEFAULT_WAREHOUSE_ID: str = Field(
        default="wh-main",
        description="Warehouse whose raw/wip/fg role mapping drives production and fulfillment moves.",
    )
    ENABLE_STATE_RESET: bool = Field(
        default=False,
        description="If true, expose POST /api/v1/system/reset to restore the seed snapshot.",
    )

    # Environment label
    ENVIRONMENT: Optional[str] = Field(
        default=None, description="Environment label (dev/test/prod)"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        """
        Accept both JSON array format and comma-separated formats for CORS origins.
        """
        if v is None:
            return ["*"]
        if isinstance(v, str):
            parts = [p.strip() for p in v.split(",") if p.strip()]
            return parts or ["*"]
        if isinstance(v, list):
            return v or ["*"]
        return ["*"]

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalize_log_level(cls, v):
        if v is None:
            return "INFO"
        return str(v).strip().upper() or "INFO"


# PUBLIC_INTERFACE
def get_app_settings() -> AppSettings:
    """
    Return a new AppSettings instance populated from environment variables.

    Note:
      A new instance is constructed on each call so tests can tweak the environment.
    """
    return AppSettings()
