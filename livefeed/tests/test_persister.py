"""Tests for JSON document persistence."""

from __future__ import annotations

import json

from livefeed.schema.video import LiveCategoryResult, LiveResultDocument, RecentResultDocument
from livefeed.services.persister import write_document


def test_write_document_creates_directory_and_uses_camel_case(tmp_path) -> None:
    document = LiveResultDocument(
        last_updated="2024-07-16T12:00:00.000Z",
        categories={"sspx": LiveCategoryResult(name="SSPX Latin Mass")},
    )
    target = tmp_path / "nested" / "data" / "livestreams.json"

    write_document(document, target)

    text = target.read_text(encoding="utf-8")
    assert text.startswith("{\n  ")
    assert json.loads(text) == {
        "lastUpdated": "2024-07-16T12:00:00.000Z",
        "categories": {"sspx": {"name": "SSPX Latin Mass", "videos": []}},
    }


def test_write_document_overwrites_previous_output(tmp_path) -> None:
    target = tmp_path / "recent-videos.json"
    target.write_text('{"stale": true, "videos": [1, 2, 3]}', encoding="utf-8")

    write_document(RecentResultDocument(last_updated="2024-07-16T12:00:00.000Z"), target)

    assert json.loads(target.read_text(encoding="utf-8")) == {
        "lastUpdated": "2024-07-16T12:00:00.000Z",
        "videos": [],
    }
