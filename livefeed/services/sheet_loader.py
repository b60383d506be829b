"""Load channel directories from published Google Sheets CSV exports.

The export is a known, constrained format, so rows are split by a small
two-state machine (unquoted/quoted) rather than a full RFC 4180 parser.
A ``"`` only toggles the quoted state; escaped or doubled quotes inside a
quoted field are not supported.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from urllib.parse import urlencode

import httpx

from livefeed.core.config import Settings
from livefeed.core.errors import FetchError
from livefeed.schema.channel import DEFAULT_MAX_DAYS, DEFAULT_MAX_VIDEOS, ChannelRecord

logger = logging.getLogger(__name__)

SHEETS_PUB_URL = "https://docs.google.com/spreadsheets/d/e/{spreadsheet_id}/pub"
LIVE_SHEET_FIELDS = 3
RECENT_SHEET_FIELDS = 4
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def sheet_csv_url(spreadsheet_id: str, gid: str) -> str:
    """Return the CSV export URL for one sheet of a published spreadsheet."""

    params = urlencode({"gid": gid, "single": "true", "output": "csv"})
    return f"{SHEETS_PUB_URL.format(spreadsheet_id=spreadsheet_id)}?{params}"


async def fetch_sheet_csv(client: httpx.AsyncClient, url: str) -> str:
    """Download a sheet export; raises :class:`FetchError` on any failure."""

    try:
        response = await client.get(url, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise FetchError(f"Failed to fetch channel sheet {url}: {exc}") from exc

    text = response.text
    logger.debug("CSV preview: %s", text[:300])
    return text


def split_csv_line(line: str) -> list[str]:
    """Split one CSV line on commas that fall outside double-quoted spans."""

    values: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            values.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    values.append("".join(current).strip())
    return values


def _clean_field(value: str) -> str:
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value.strip()


def parse_csv_rows(csv_text: str, *, min_fields: int) -> list[list[str]]:
    """Return cleaned data rows, skipping the header and any short rows."""

    rows: list[list[str]] = []
    for index, raw_line in enumerate(csv_text.split("\n")):
        if index == 0:
            continue
        line = raw_line.strip()
        if not line:
            continue
        values = split_csv_line(line)
        if len(values) < min_fields:
            logger.debug("Dropping short row %d (%d fields)", index, len(values))
            continue
        rows.append([_clean_field(value) for value in values])
    return rows


def _parse_positive_int(raw: str, default: int) -> int:
    match = _LEADING_INT_RE.match(raw)
    if not match:
        return default
    value = int(match.group(1))
    return value if value > 0 else default


def parse_live_channels(csv_text: str) -> list[ChannelRecord]:
    """Parse a live-category sheet with columns ``name, url, channelId``."""

    return [
        ChannelRecord(name=row[0], url=row[1] or None, channel_id=row[2])
        for row in parse_csv_rows(csv_text, min_fields=LIVE_SHEET_FIELDS)
    ]


def parse_recent_channels(csv_text: str) -> list[ChannelRecord]:
    """Parse the recency sheet with columns ``channelId, maxDays, maxVideos, description``."""

    return [
        ChannelRecord(
            name=row[3],
            channel_id=row[0],
            max_days=_parse_positive_int(row[1], DEFAULT_MAX_DAYS),
            max_videos=_parse_positive_int(row[2], DEFAULT_MAX_VIDEOS),
        )
        for row in parse_csv_rows(csv_text, min_fields=RECENT_SHEET_FIELDS)
    ]


async def _load_channels(
    client: httpx.AsyncClient,
    url: str,
    parse: Callable[[str], list[ChannelRecord]],
) -> list[ChannelRecord]:
    logger.info("Fetching channels from %s", url)
    csv_text = await fetch_sheet_csv(client, url)
    channels = parse(csv_text)
    logger.info("Found %d channels", len(channels))
    return channels


async def load_live_channels(client: httpx.AsyncClient, settings: Settings, category: str) -> list[ChannelRecord]:
    """Fetch and parse the channel sheet of one live category."""

    sheet = settings.live_categories[category]
    url = sheet_csv_url(settings.spreadsheet_id, sheet.gid)
    return await _load_channels(client, url, parse_live_channels)


async def load_recent_channels(client: httpx.AsyncClient, settings: Settings) -> list[ChannelRecord]:
    """Fetch and parse the recency sheet."""

    url = sheet_csv_url(settings.spreadsheet_id, settings.recent_sheet_gid)
    return await _load_channels(client, url, parse_recent_channels)
