"""Tests for conversation export."""

from __future__ import annotations

import json
from datetime import datetime

import pytest

from vidchat.models import HistoryEntry, VideoMetadata
from vidchat.services.export import (
    default_export_filename,
    export_conversation_json,
    export_conversation_markdown,
    write_export,
)

META = VideoMetadata(title="Intro to Rust", author="Ferris", duration=754, video_id="abcdefghijk")
URL = "https://www.youtube.com/watch?v=abcdefghijk"
WHEN = datetime(2026, 3, 14, 15, 9, 26)


def _history() -> list[HistoryEntry]:
    return [
        HistoryEntry(timestamp=datetime(2026, 3, 14, 15, 0, 0), role="user", content="Summarize it"),
        HistoryEntry(
            timestamp=datetime(2026, 3, 14, 15, 0, 4),
            role="assistant",
            content="It is about **ownership**.",
            full_messages=[
                {"role": "user", "content": "Summarize it"},
                {"role": "assistant", "content": "It is about **ownership**."},
            ],
        ),
    ]


class TestMarkdownExport:
    def test_header_and_messages(self) -> None:
        md = export_conversation_markdown(_history(), META, URL, "en", exported_at=WHEN)
        assert md.startswith('# Conversation about "Intro to Rust"')
        assert "*Author: Ferris*" in md
        assert "*Duration: 12:34*" in md
        assert f"*Source: {URL}*" in md
        assert "*Exported: 2026-03-14 15:09*" in md
        assert "## You (15:00:00)" in md
        assert "## Assistant (15:00:04)" in md
        assert md.index("Summarize it") < md.index("It is about **ownership**.")

    def test_localized_labels(self) -> None:
        md = export_conversation_markdown(_history(), META, URL, "de", exported_at=WHEN)
        assert "## Du (15:00:00)" in md
        assert "## Assistent (15:00:04)" in md

    def test_no_author_or_url(self) -> None:
        md = export_conversation_markdown(_history(), VideoMetadata(title="T"), "", "en", exported_at=WHEN)
        assert "Author" not in md
        assert "Source" not in md


class TestJsonExport:
    def test_payload_shape(self) -> None:
        data = json.loads(export_conversation_json(_history(), META, URL, exported_at=WHEN))
        assert data["video"]["title"] == "Intro to Rust"
        assert data["video"]["video_id"] == "abcdefghijk"
        assert data["exported_at"] == "2026-03-14T15:09:26"
        assert data["messages"][0] == {
            "timestamp": "2026-03-14T15:00:00",
            "role": "user",
            "content": "Summarize it",
        }
        assert len(data["messages"][1]["full_messages"]) == 2


class TestWriteExport:
    def test_creates_parent_dirs(self, tmp_path) -> None:
        target = tmp_path / "a" / "b" / "chat.md"
        assert write_export(target, _history(), META, URL, "en") == target
        assert target.read_text(encoding="utf-8").startswith("# Conversation")

    def test_rejects_unknown_format(self, tmp_path) -> None:
        with pytest.raises(ValueError, match="Unsupported export format"):
            write_export(tmp_path / "x.pdf", _history(), META, URL, "en", fmt="pdf")

    def test_default_filename(self) -> None:
        assert default_export_filename(META, "json", now=WHEN) == "intro-to-rust-20260314-150926.json"
