"""Pydantic models for the JSON documents consumed by the front end."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _OutputModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class LiveVideoEntry(_OutputModel):
    id: str
    title: str
    channel: str
    channel_id: str = Field(..., alias="channelId")
    thumbnail: str | None
    status: Literal["live", "upcoming"]
    scheduled_time: str | None = Field(None, alias="scheduledTime")


class RecentVideoEntry(_OutputModel):
    id: str
    title: str
    # written as null when the API omits channelTitle; every entry keeps the same keys
    channel: str | None
    channel_id: str = Field(..., alias="channelId")
    description: str
    thumbnail: str | None
    published_at: str = Field(..., alias="publishedAt")
    category: str


class LiveCategoryResult(BaseModel):
    name: str
    videos: list[LiveVideoEntry] = Field(default_factory=list)


class LiveResultDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    last_updated: str = Field(..., alias="lastUpdated")
    categories: dict[str, LiveCategoryResult]


class RecentResultDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    last_updated: str = Field(..., alias="lastUpdated")
    videos: list[RecentVideoEntry] = Field(default_factory=list)
