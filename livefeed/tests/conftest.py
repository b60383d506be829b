"""Shared fixtures: settings and a fake Sheets/YouTube backend."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import httpx
import pytest

from livefeed.core.config import SheetCategory, Settings

NOW = datetime(2024, 7, 16, 12, 0, tzinfo=timezone.utc)


def iso(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def video_item(
    video_id: str,
    *,
    tag: str = "none",
    title: str | None = None,
    published_at: datetime | str | None = None,
    description: str | None = "",
    channel_title: str | None = "Channel Title",
    scheduled: datetime | str | None = None,
    started: datetime | str | None = None,
    ended: datetime | str | None = None,
    live_details: bool | None = None,
    thumbnails: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a ``videos.list`` item as returned by the Data API."""

    def _ts(value: datetime | str | None) -> str | None:
        if isinstance(value, datetime):
            return iso(value)
        return value

    snippet: dict[str, Any] = {
        "title": title or f"Video {video_id}",
        "description": description,
        "channelTitle": channel_title,
        "publishedAt": _ts(published_at) or iso(NOW - timedelta(hours=1)),
        "liveBroadcastContent": tag,
        "thumbnails": thumbnails
        if thumbnails is not None
        else {
            "default": {"url": f"https://i.ytimg.com/vi/{video_id}/default.jpg"},
            "medium": {"url": f"https://i.ytimg.com/vi/{video_id}/mqdefault.jpg"},
        },
    }
    item: dict[str, Any] = {"id": video_id, "snippet": snippet}

    details = {
        key: _ts(value)
        for key, value in (
            ("scheduledStartTime", scheduled),
            ("actualStartTime", started),
            ("actualEndTime", ended),
        )
        if value is not None
    }
    if live_details is None:
        live_details = bool(details)
    if live_details:
        item["liveStreamingDetails"] = details
    return item


@dataclass
class FakeBackend:
    """Routes requests for the published sheets and the YouTube Data API."""

    sheets: dict[str, str] = field(default_factory=dict)
    uploads: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    playlist_errors: dict[str, dict[str, Any]] = field(default_factory=dict)
    video_errors: set[str] = field(default_factory=set)
    gateway_failures: set[str] = field(default_factory=set)
    sheet_status: int = 200
    requests: list[httpx.Request] = field(default_factory=list)

    def add_channel(self, channel_id: str, items: list[dict[str, Any]]) -> None:
        self.uploads["UU" + channel_id[2:]] = items

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        params = request.url.params
        if request.url.host == "docs.google.com":
            if self.sheet_status != 200:
                return httpx.Response(self.sheet_status, text="unavailable")
            return httpx.Response(200, text=self.sheets.get(params["gid"], "header\n"))

        if request.url.path.endswith("/playlistItems"):
            playlist_id = params["playlistId"]
            if playlist_id in self.gateway_failures:
                return httpx.Response(502, text="<html>bad gateway</html>")
            if playlist_id in self.playlist_errors:
                return httpx.Response(403, json={"error": self.playlist_errors[playlist_id]})
            items = self.uploads.get(playlist_id, [])[: int(params["maxResults"])]
            return httpx.Response(
                200,
                json={"items": [{"snippet": {}, "contentDetails": {"videoId": item["id"]}} for item in items]},
            )

        if request.url.path.endswith("/videos"):
            ids = params["id"].split(",")
            if self.video_errors.intersection(ids):
                return httpx.Response(400, json={"error": {"code": 400, "message": "bad video request"}})
            by_id = {item["id"]: item for items in self.uploads.values() for item in items}
            return httpx.Response(200, json={"items": [by_id[video_id] for video_id in ids if video_id in by_id]})

        return httpx.Response(404, json={"error": {"code": 404, "message": "not found"}})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def calls_to(self, suffix: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.path.endswith(suffix)]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        youtube_api_key="dummy-key",
        spreadsheet_id="SHEET",
        live_categories={
            "sspx": SheetCategory(name="SSPX Latin Mass", gid="0"),
            "non-sspx": SheetCategory(name="Non-SSPX Latin Mass", gid="1"),
        },
        recent_sheet_gid="2",
        output_dir=tmp_path / "data",
        channel_delay_ms=0,
    )
