"""Deterministic ordering of merged per-channel results."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from livefeed.core.timestamps import parse_timestamp
from livefeed.schema.video import LiveVideoEntry, RecentVideoEntry

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _live_key(entry: LiveVideoEntry) -> tuple[int, int, datetime]:
    scheduled = parse_timestamp(entry.scheduled_time)
    rank = 0 if entry.status == "live" else 1
    if scheduled is None:
        return (rank, 1, _EPOCH)
    return (rank, 0, scheduled)


def sort_live_entries(entries: Iterable[LiveVideoEntry]) -> list[LiveVideoEntry]:
    """Live entries first, then by ascending scheduled start.

    Entries without a scheduled start keep their fetch order after the
    scheduled ones of the same status (the sort is stable).
    """

    return sorted(entries, key=_live_key)


def _published_key(entry: RecentVideoEntry) -> datetime:
    return parse_timestamp(entry.published_at) or _EPOCH


def sort_recent_entries(entries: Iterable[RecentVideoEntry]) -> list[RecentVideoEntry]:
    """Newest first; ties keep fetch order."""

    return sorted(entries, key=_published_key, reverse=True)
