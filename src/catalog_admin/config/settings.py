"""Application settings loaded from the environment.

Only the CLI wiring reads settings; the core components receive their
collaborators through their constructors.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from catalog_admin.config.constants import Limits


class Settings(BaseSettings):
    """Environment-driven settings (prefix ``CATALOG_ADMIN_``)."""

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_ADMIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: Literal["gcp", "memory"] = Field(
        default="gcp",
        description="'gcp' for Firestore + Cloud Storage, 'memory' for a throwaway local store",
    )
    gcp_project: str | None = Field(default=None, description="Google Cloud project id")
    gcs_bucket: str = Field(default="", description="Bucket holding uploaded images")
    firestore_database: str | None = Field(
        default=None,
        description="Firestore database id (None selects the default database)",
    )
    verify_bucket: bool = Field(default=True, description="Probe bucket access at start-up")
    public_urls: bool = Field(
        default=True,
        description="Return public object URLs instead of signed URLs",
    )
    signed_url_minutes: int = Field(default=60 * 24 * 7, ge=1)
    max_upload_mb: int = Field(default=Limits.MAX_UPLOAD_MB, ge=1)
    upload_concurrency: int = Field(default=Limits.UPLOAD_CONCURRENCY, ge=1)
    page_size: int = Field(default=Limits.PAGE_SIZE, ge=1)
    log_level: str = Field(default="INFO")

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
