"""Live/upcoming broadcast pipeline: sheet -> uploads -> classify -> sort -> JSON."""

from __future__ import annotations

import logging
from datetime import datetime

import httpx

from livefeed.core.config import Settings
from livefeed.core.errors import YouTubeAPIError
from livefeed.core.timestamps import format_timestamp, utc_now
from livefeed.schema.channel import ChannelRecord
from livefeed.schema.video import LiveCategoryResult, LiveResultDocument, LiveVideoEntry
from livefeed.services.aggregator import sort_live_entries
from livefeed.services.live_classifier import select_live_entries
from livefeed.services.persister import write_document
from livefeed.services.runner import collect_per_channel, http_client
from livefeed.services.sheet_loader import load_live_channels
from livefeed.services.youtube_api import LIVE_VIDEO_PARTS, YouTubeClient

logger = logging.getLogger(__name__)


async def fetch_channel_livestreams(
    youtube: YouTubeClient,
    channel: ChannelRecord,
    *,
    max_results: int,
    now: datetime | None = None,
) -> list[LiveVideoEntry]:
    """Return the live and upcoming broadcasts of one channel; never raises for API trouble."""

    try:
        items = await youtube.fetch_uploads(
            channel.uploads_playlist_id,
            max_results=max_results,
            parts=LIVE_VIDEO_PARTS,
        )
    except YouTubeAPIError as exc:
        logger.warning("  Error for %s: %s", channel.name, exc.message)
        return []
    except (httpx.HTTPError, ValueError):
        logger.exception("Error fetching %s", channel.name)
        return []

    return select_live_entries(items, channel, now=now or utc_now())


async def build_live_document(
    settings: Settings,
    *,
    client: httpx.AsyncClient | None = None,
    now: datetime | None = None,
) -> LiveResultDocument:
    """Collect every configured category into a result document without writing it."""

    api_key = settings.require_api_key()
    started = now or utc_now()
    logger.info("Starting data fetch (time=%s)", format_timestamp(started))

    categories: dict[str, LiveCategoryResult] = {}
    async with http_client(settings, client) as http:
        youtube = YouTubeClient(http, api_key)

        async def fetch(channel: ChannelRecord) -> list[LiveVideoEntry]:
            logger.info("  Fetching: %s", channel.name)
            return await fetch_channel_livestreams(
                youtube,
                channel,
                max_results=settings.live_max_results,
                now=now,
            )

        for key, sheet in settings.live_categories.items():
            logger.info("Processing %s...", key)
            channels = await load_live_channels(http, settings, key)
            entries = await collect_per_channel(channels, fetch, delay_ms=settings.channel_delay_ms)
            videos = sort_live_entries(entries)
            logger.info("Found %d live/upcoming videos for %s", len(videos), key)
            categories[key] = LiveCategoryResult(name=sheet.name, videos=videos)

    return LiveResultDocument(last_updated=format_timestamp(started), categories=categories)


async def run_live_pipeline(
    settings: Settings,
    *,
    client: httpx.AsyncClient | None = None,
    now: datetime | None = None,
) -> LiveResultDocument:
    """Run the live pipeline end to end and overwrite the live output file."""

    document = await build_live_document(settings, client=client, now=now)
    write_document(document, settings.live_output_path)
    return document
