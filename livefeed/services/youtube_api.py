"""Thin async client for the YouTube Data API v3 endpoints we rely on."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from livefeed.core.errors import YouTubeAPIError
from livefeed.schema.youtube import PlaylistItem, VideoItem

logger = logging.getLogger(__name__)

YOUTUBE_API_BASE = "https://www.googleapis.com/youtube/v3"
MAX_PAGE_SIZE = 50
LIVE_VIDEO_PARTS = "snippet,liveStreamingDetails,status"
RECENT_VIDEO_PARTS = "snippet,contentDetails"


class YouTubeClient:
    """Wraps ``playlistItems.list`` and ``videos.list`` keyed by an API key."""

    def __init__(self, client: httpx.AsyncClient, api_key: str, *, base_url: str = YOUTUBE_API_BASE) -> None:
        self._client = client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    async def _get(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._base_url}/{endpoint}"
        # httpx exception messages embed the request URL, which carries the API key
        try:
            response = await self._client.get(url, params={**params, "key": self._api_key})
        except httpx.HTTPError as exc:
            raise YouTubeAPIError(f"{type(exc).__name__} calling {endpoint}") from None

        try:
            payload = response.json()
        except ValueError:
            if response.is_error:
                raise YouTubeAPIError(
                    f"HTTP {response.status_code} from {endpoint}", code=response.status_code
                ) from None
            raise ValueError(f"Invalid JSON from YouTube Data API ({endpoint})") from None

        if not isinstance(payload, dict):
            raise ValueError(f"Unexpected payload type from YouTube Data API ({endpoint})")

        error = payload.get("error")
        if error:
            message = error.get("message", "unknown error") if isinstance(error, dict) else str(error)
            code = error.get("code") if isinstance(error, dict) else None
            raise YouTubeAPIError(message, code=code)

        if response.is_error:
            raise YouTubeAPIError(f"HTTP {response.status_code} from {endpoint}", code=response.status_code)
        return payload

    async def list_playlist_items(self, playlist_id: str, *, max_results: int) -> list[PlaylistItem]:
        """Return up to ``max_results`` most recent items of a playlist."""

        payload = await self._get(
            "playlistItems",
            {
                "part": "snippet,contentDetails",
                "playlistId": playlist_id,
                "maxResults": max(1, min(max_results, MAX_PAGE_SIZE)),
            },
        )
        return [PlaylistItem.model_validate(item) for item in payload.get("items") or []]

    async def list_videos(self, video_ids: Iterable[str], *, parts: str) -> list[VideoItem]:
        """Return full metadata for a batch of video ids in a single call."""

        ids = [video_id for video_id in video_ids if video_id]
        if not ids:
            return []
        payload = await self._get("videos", {"part": parts, "id": ",".join(ids)})
        return [VideoItem.model_validate(item) for item in payload.get("items") or []]

    async def fetch_uploads(
        self,
        playlist_id: str,
        *,
        max_results: int,
        parts: str,
    ) -> list[VideoItem]:
        """Fetch the most recent uploads of a playlist with their full metadata."""

        playlist_items = await self.list_playlist_items(playlist_id, max_results=max_results)
        if not playlist_items:
            logger.debug("Playlist %s has no items", playlist_id)
            return []
        return await self.list_videos((item.video_id for item in playlist_items), parts=parts)
