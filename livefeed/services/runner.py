"""Shared plumbing for the pipeline runs."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from contextlib import asynccontextmanager
from typing import TypeVar

import httpx

from livefeed.core.config import Settings
from livefeed.schema.channel import ChannelRecord

logger = logging.getLogger(__name__)

USER_AGENT = "livefeed/0.1"

T = TypeVar("T")


@asynccontextmanager
async def http_client(settings: Settings, client: httpx.AsyncClient | None = None) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the caller's client, or a run-scoped one that is closed afterwards."""

    if client is not None:
        yield client
        return

    async with httpx.AsyncClient(
        headers={"User-Agent": USER_AGENT},
        timeout=settings.request_timeout_seconds,
    ) as owned:
        yield owned


async def collect_per_channel(
    channels: Sequence[ChannelRecord],
    fetch: Callable[[ChannelRecord], Awaitable[list[T]]],
    *,
    delay_ms: int,
) -> list[T]:
    """Fetch channels one at a time, pausing between them, and merge in sheet order."""

    merged: list[T] = []
    for index, channel in enumerate(channels):
        if index and delay_ms > 0:
            await asyncio.sleep(delay_ms / 1000)
        merged.extend(await fetch(channel))
    return merged
