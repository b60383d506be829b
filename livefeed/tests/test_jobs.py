"""Exit-status tests for the command-line jobs."""

from __future__ import annotations

from pathlib import Path

import pytest

from livefeed.core.config import Settings
from livefeed.core.errors import FetchError
from livefeed.jobs import common, fetch_livestreams, fetch_recent
from livefeed.jobs.common import run_job, settings_from_args


def test_run_job_returns_zero_on_success(settings: Settings) -> None:
    seen: list[Settings] = []

    async def pipeline(resolved: Settings) -> None:
        seen.append(resolved)

    assert run_job(pipeline, description="test", argv=[], settings=settings) == 0
    assert seen == [settings]


def test_run_job_applies_output_dir_override(settings: Settings, tmp_path: Path) -> None:
    seen: list[Settings] = []

    async def pipeline(resolved: Settings) -> None:
        seen.append(resolved)

    argv = ["--output-dir", str(tmp_path / "out"), "--log-level", "debug"]
    assert run_job(pipeline, description="test", argv=argv, settings=settings) == 0
    assert seen[0].output_dir == tmp_path / "out"
    assert seen[0].log_level == "DEBUG"
    assert settings.output_dir != tmp_path / "out"


def test_run_job_maps_fatal_errors_to_non_zero(settings: Settings) -> None:
    async def failing(resolved: Settings) -> None:
        raise FetchError("sheet unavailable")

    async def crashing(resolved: Settings) -> None:
        raise RuntimeError("unexpected")

    assert run_job(failing, description="test", argv=[], settings=settings) == 1
    assert run_job(crashing, description="test", argv=[], settings=settings) == 1


@pytest.mark.parametrize("job", [fetch_livestreams, fetch_recent])
def test_jobs_exit_non_zero_without_api_key(
    job, settings: Settings, monkeypatch: pytest.MonkeyPatch
) -> None:
    without_key = settings.model_copy(update={"youtube_api_key": None})
    monkeypatch.setattr(common, "get_settings", lambda: without_key)

    assert job.main([]) == 1
    assert not without_key.output_dir.exists()


def test_settings_from_args_without_overrides_returns_same_instance(settings: Settings) -> None:
    args = common.build_parser("test").parse_args([])
    assert settings_from_args(args, settings) is settings
