"""Recent uploads pipeline: sheet -> uploads -> recency filter -> sort -> JSON."""

from __future__ import annotations

import logging
from datetime import datetime

import httpx

from livefeed.core.config import Settings
from livefeed.core.errors import YouTubeAPIError
from livefeed.core.timestamps import format_timestamp, utc_now
from livefeed.schema.channel import ChannelRecord
from livefeed.schema.video import RecentResultDocument, RecentVideoEntry
from livefeed.services.aggregator import sort_recent_entries
from livefeed.services.persister import write_document
from livefeed.services.recent_filter import playlist_fetch_size, select_recent_entries
from livefeed.services.runner import collect_per_channel, http_client
from livefeed.services.sheet_loader import load_recent_channels
from livefeed.services.youtube_api import RECENT_VIDEO_PARTS, YouTubeClient

logger = logging.getLogger(__name__)


async def fetch_channel_videos(
    youtube: YouTubeClient,
    channel: ChannelRecord,
    *,
    now: datetime | None = None,
) -> list[RecentVideoEntry]:
    """Return the recent regular uploads of one channel; never raises for API trouble."""

    try:
        items = await youtube.fetch_uploads(
            channel.uploads_playlist_id,
            max_results=playlist_fetch_size(channel.max_videos),
            parts=RECENT_VIDEO_PARTS,
        )
    except YouTubeAPIError as exc:
        logger.warning("  Error for %s: %s", channel.name, exc.message)
        return []
    except (httpx.HTTPError, ValueError):
        logger.exception("Error fetching %s", channel.name)
        return []

    return select_recent_entries(items, channel, now=now or utc_now())


async def build_recent_document(
    settings: Settings,
    *,
    client: httpx.AsyncClient | None = None,
    now: datetime | None = None,
) -> RecentResultDocument:
    """Collect recent uploads of every listed channel without writing them."""

    api_key = settings.require_api_key()
    started = now or utc_now()
    logger.info("Starting recent videos fetch (time=%s)", format_timestamp(started))

    async with http_client(settings, client) as http:
        youtube = YouTubeClient(http, api_key)

        async def fetch(channel: ChannelRecord) -> list[RecentVideoEntry]:
            logger.info(
                "  Fetching: %s (max %d videos, %d days)",
                channel.name,
                channel.max_videos,
                channel.max_days,
            )
            videos = await fetch_channel_videos(youtube, channel, now=now)
            logger.info("    Found %d videos", len(videos))
            return videos

        channels = await load_recent_channels(http, settings)
        entries = await collect_per_channel(channels, fetch, delay_ms=settings.channel_delay_ms)

    videos = sort_recent_entries(entries)
    logger.info("Total videos: %d", len(videos))
    return RecentResultDocument(last_updated=format_timestamp(started), videos=videos)


async def run_recent_pipeline(
    settings: Settings,
    *,
    client: httpx.AsyncClient | None = None,
    now: datetime | None = None,
) -> RecentResultDocument:
    """Run the recency pipeline end to end and overwrite the recent output file."""

    document = await build_recent_document(settings, client=client, now=now)
    write_document(document, settings.recent_output_path)
    return document
