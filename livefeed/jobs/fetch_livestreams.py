"""Fetch live and upcoming broadcasts for every configured category.

Usage: python -m livefeed.jobs.fetch_livestreams [--output-dir DIR]
"""

from __future__ import annotations

from collections.abc import Sequence

from livefeed.jobs.common import run_job
from livefeed.services.live_pipeline import run_live_pipeline


def main(argv: Sequence[str] | None = None) -> int:
    return run_job(
        run_live_pipeline,
        description="Fetch live and upcoming broadcasts into livestreams.json",
        argv=argv,
    )


if __name__ == "__main__":
    raise SystemExit(main())
