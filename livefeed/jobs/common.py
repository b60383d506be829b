"""Command-line plumbing shared by the fetch jobs."""

from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path

from pydantic import BaseModel, ValidationError

from livefeed.core.config import Settings, get_settings
from livefeed.core.errors import LivefeedError
from livefeed.core.log import configure_logging

logger = logging.getLogger(__name__)

Pipeline = Callable[[Settings], Awaitable[BaseModel]]


def build_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--output-dir", type=Path, default=None, help="Directory for the JSON output")
    parser.add_argument("--log-level", default=None, help="Logging level (default from LIVEFEED_LOG_LEVEL)")
    return parser


def settings_from_args(args: argparse.Namespace, base: Settings | None = None) -> Settings:
    """Apply command-line overrides on top of the environment settings."""

    settings = base or get_settings()
    overrides: dict[str, object] = {}
    if args.output_dir is not None:
        overrides["output_dir"] = args.output_dir
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    return settings.model_copy(update=overrides) if overrides else settings


def run_job(
    pipeline: Pipeline,
    *,
    description: str,
    argv: Sequence[str] | None = None,
    settings: Settings | None = None,
) -> int:
    """Parse arguments, run ``pipeline`` once and map the outcome to an exit status."""

    args = build_parser(description).parse_args(argv)
    try:
        resolved = settings_from_args(args, settings)
    except ValidationError:
        configure_logging()
        logger.exception("Invalid configuration")
        return 1

    configure_logging(resolved.log_level)
    try:
        asyncio.run(pipeline(resolved))
    except LivefeedError as exc:
        logger.error("Fatal error: %s", exc)
        return 1
    except Exception:  # noqa: BLE001 - top-level guard maps failures to exit status
        logger.exception("Fatal error")
        return 1

    logger.info("Done!")
    return 0
