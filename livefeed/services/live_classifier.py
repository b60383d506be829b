"""Classification rules for the live/upcoming broadcast feed.

Rules are evaluated in order and the first match wins:

1. a regular video (tag ``none``) with no live-streaming details is rejected;
2. a broadcast with an actual end time has concluded and is rejected;
3. tag ``live``, or a start time without an end time, is accepted as ``live``;
4. tag ``upcoming`` with a scheduled start is accepted as ``upcoming`` only when
   the start is no more than an hour overdue and at most 24 hours away;
5. tag ``upcoming`` without a scheduled start is rejected;
6. everything else is rejected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from livefeed.core.timestamps import parse_timestamp
from livefeed.schema.channel import ChannelRecord
from livefeed.schema.video import LiveVideoEntry
from livefeed.schema.youtube import VideoItem

logger = logging.getLogger(__name__)

OVERDUE_GRACE = timedelta(hours=1)
UPCOMING_HORIZON = timedelta(hours=24)


@dataclass(slots=True, frozen=True)
class Classification:
    """Outcome of classifying one video item."""

    entry: LiveVideoEntry | None
    reason: str

    @property
    def accepted(self) -> bool:
        return self.entry is not None


def _reject(reason: str) -> Classification:
    return Classification(entry=None, reason=reason)


def _build_entry(item: VideoItem, channel: ChannelRecord, *, status: str, scheduled_time: str | None) -> LiveVideoEntry:
    return LiveVideoEntry(
        id=item.id,
        title=item.snippet.title,
        channel=channel.name,
        channel_id=channel.channel_id,
        thumbnail=item.snippet.thumbnails.preferred_url(),
        status=status,
        scheduled_time=scheduled_time,
    )


def classify_live_item(item: VideoItem, channel: ChannelRecord, *, now: datetime) -> Classification:
    """Decide whether a video belongs in the live feed and how it is labelled."""

    tag = item.snippet.live_broadcast_content
    details = item.live_streaming_details

    if tag == "none" and details is None:
        return _reject("not a broadcast")

    actual_start = details.actual_start_time if details else None
    actual_end = details.actual_end_time if details else None
    scheduled = details.scheduled_start_time if details else None

    if actual_end:
        return _reject("broadcast ended")

    if tag == "live" or actual_start:
        return Classification(entry=_build_entry(item, channel, status="live", scheduled_time=None), reason="live")

    if tag != "upcoming":
        return _reject("not live or upcoming")

    if not scheduled:
        logger.info("  Skipping %s: No scheduled time (uncertain)", item.snippet.title)
        return _reject("no scheduled time")

    scheduled_at = parse_timestamp(scheduled)
    if scheduled_at is None:
        logger.info("  Skipping %s: Invalid scheduled time %r", item.snippet.title, scheduled)
        return _reject("invalid scheduled time")

    if scheduled_at < now:
        overdue = now - scheduled_at
        if overdue > OVERDUE_GRACE:
            logger.info(
                "  Skipping %s: Overdue by %.1f hours",
                item.snippet.title,
                overdue.total_seconds() / 3600,
            )
            return _reject("overdue")

    if scheduled_at > now + UPCOMING_HORIZON:
        logger.info("  Skipping %s: More than 24h away", item.snippet.title)
        return _reject("too far out")

    return Classification(
        entry=_build_entry(item, channel, status="upcoming", scheduled_time=scheduled),
        reason="upcoming",
    )


def select_live_entries(items: list[VideoItem], channel: ChannelRecord, *, now: datetime) -> list[LiveVideoEntry]:
    """Return accepted entries for a channel in fetch order."""

    entries: list[LiveVideoEntry] = []
    for item in items:
        result = classify_live_item(item, channel, now=now)
        if result.entry is not None:
            entries.append(result.entry)
    return entries
