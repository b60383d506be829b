"""Pydantic models for channel directory rows."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MAX_DAYS = 7
DEFAULT_MAX_VIDEOS = 5


class ChannelRecord(BaseModel):
    """A single channel row read from a published sheet."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name, or the category label in the recency sheet")
    channel_id: str
    url: str | None = None
    max_days: int = Field(DEFAULT_MAX_DAYS, gt=0)
    max_videos: int = Field(DEFAULT_MAX_VIDEOS, gt=0)

    @property
    def uploads_playlist_id(self) -> str:
        """Return the channel's uploads playlist (``UC...`` becomes ``UU...``)."""

        return "UU" + self.channel_id[2:]
