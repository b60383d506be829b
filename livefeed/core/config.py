from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from livefeed.core.errors import ConfigurationError


class SheetCategory(BaseModel):
    """A published sheet listing the channels of one live category."""

    name: str
    gid: str


DEFAULT_LIVE_CATEGORIES = {
    "sspx": SheetCategory(name="SSPX Latin Mass", gid="0"),
    "non-sspx": SheetCategory(name="Non-SSPX Latin Mass", gid="309403613"),
}


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    youtube_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("LIVEFEED_YOUTUBE_API_KEY", "YOUTUBE_API_KEY"),
    )
    spreadsheet_id: str = "2PACX-1vTlFYSEP7Prs4aDZ9qKFrMvk2oikkqViTAwyTASE2d1E6a59dWcMM4IO-L3QJ_G5wZ_SwkLAKN4pG3h"
    live_categories: dict[str, SheetCategory] = Field(default_factory=lambda: dict(DEFAULT_LIVE_CATEGORIES))
    recent_sheet_gid: str = "1666416706"
    output_dir: Path = Path("data")
    live_output_filename: str = "livestreams.json"
    recent_output_filename: str = "recent-videos.json"
    live_max_results: int = Field(default=15, ge=1, le=50)
    channel_delay_ms: int = Field(default=100, ge=0)
    request_timeout_seconds: float = Field(default=30.0, gt=0)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LIVEFEED_",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("youtube_api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, value: str | None) -> str | None:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def live_output_path(self) -> Path:
        return self.output_dir / self.live_output_filename

    @property
    def recent_output_path(self) -> Path:
        return self.output_dir / self.recent_output_filename

    def require_api_key(self) -> str:
        """Return the YouTube API key or fail before any network call is made."""

        if not self.youtube_api_key:
            raise ConfigurationError("YOUTUBE_API_KEY is not set")
        return self.youtube_api_key


@lru_cache

def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()
