"""Recency filter for the regular (non-broadcast) uploads feed."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from livefeed.core.timestamps import parse_timestamp
from livefeed.schema.channel import ChannelRecord
from livefeed.schema.video import RecentVideoEntry
from livefeed.schema.youtube import VideoItem

logger = logging.getLogger(__name__)

DESCRIPTION_LIMIT = 200


def playlist_fetch_size(max_videos: int) -> int:
    """Fetch twice the wanted count so filtered-out items can be replaced."""

    return min(max_videos * 2, 50)


def select_recent_entries(items: list[VideoItem], channel: ChannelRecord, *, now: datetime) -> list[RecentVideoEntry]:
    """Return up to ``channel.max_videos`` regular uploads newer than ``channel.max_days``."""

    max_age = timedelta(days=channel.max_days)
    entries: list[RecentVideoEntry] = []

    for item in items:
        snippet = item.snippet
        published_at = parse_timestamp(snippet.published_at)
        if published_at is None:
            logger.info("  Skipping %s: Invalid publish time %r", item.id, snippet.published_at)
            continue

        if now - published_at > max_age:
            continue

        if snippet.live_broadcast_content != "none":
            continue

        entries.append(
            RecentVideoEntry(
                id=item.id,
                title=snippet.title,
                channel=snippet.channel_title,
                channel_id=channel.channel_id,
                description=(snippet.description or "")[:DESCRIPTION_LIMIT],
                thumbnail=snippet.thumbnails.preferred_url(),
                published_at=snippet.published_at,
                category=channel.name,
            )
        )
        if len(entries) >= channel.max_videos:
            break

    return entries
