"""Pydantic models for the subset of YouTube Data API payloads we consume."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Thumbnail(_ApiModel):
    url: str | None = None


class Thumbnails(_ApiModel):
    default: Thumbnail | None = None
    medium: Thumbnail | None = None
    high: Thumbnail | None = None

    def preferred_url(self) -> str | None:
        """Return the medium thumbnail URL, falling back to the default one."""

        for thumb in (self.medium, self.default):
            if thumb is not None and thumb.url:
                return thumb.url
        return None


class Snippet(_ApiModel):
    title: str = ""
    description: str | None = None
    channel_title: str | None = Field(None, alias="channelTitle")
    published_at: str | None = Field(None, alias="publishedAt")
    thumbnails: Thumbnails = Field(default_factory=Thumbnails)
    live_broadcast_content: str | None = Field(None, alias="liveBroadcastContent")


class LiveStreamingDetails(_ApiModel):
    scheduled_start_time: str | None = Field(None, alias="scheduledStartTime")
    actual_start_time: str | None = Field(None, alias="actualStartTime")
    actual_end_time: str | None = Field(None, alias="actualEndTime")


class VideoItem(_ApiModel):
    """A ``videos.list`` item."""

    id: str
    snippet: Snippet = Field(default_factory=Snippet)
    live_streaming_details: LiveStreamingDetails | None = Field(None, alias="liveStreamingDetails")


class PlaylistItemContentDetails(_ApiModel):
    video_id: str = Field(..., alias="videoId")


class PlaylistItem(_ApiModel):
    """A ``playlistItems.list`` item; only the video id is used."""

    content_details: PlaylistItemContentDetails = Field(..., alias="contentDetails")

    @property
    def video_id(self) -> str:
        return self.content_details.video_id
