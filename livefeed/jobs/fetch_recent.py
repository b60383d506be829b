"""Fetch recent regular uploads for the channels listed in the recency sheet.

Usage: python -m livefeed.jobs.fetch_recent [--output-dir DIR]
"""

from __future__ import annotations

from collections.abc import Sequence

from livefeed.jobs.common import run_job
from livefeed.services.recent_pipeline import run_recent_pipeline


def main(argv: Sequence[str] | None = None) -> int:
    return run_job(
        run_recent_pipeline,
        description="Fetch recent uploads into recent-videos.json",
        argv=argv,
    )


if __name__ == "__main__":
    raise SystemExit(main())
