"""Data records shared by the chat loop, the commands and the export service."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Literal

Role = Literal["user", "assistant"]


@dataclass(frozen=True)
class VideoMetadata:
    title: str
    author: str = ""
    duration: float = 0.0  # seconds
    video_id: str = ""
    transcript_language: str = "en"


@dataclass(frozen=True)
class LocaleContext:
    """Display locale plus the UI and transcript language codes.

    Never mutated in place; the /lang command hands back a replacement.
    """

    locale: str = "en"
    ui_language: str = "en"
    transcript_language: str = "en"

    def with_ui_language(self, code: str) -> LocaleContext:
        return replace(self, locale=code, ui_language=code)


@dataclass
class HistoryEntry:
    timestamp: datetime
    role: Role
    content: str
    full_messages: list[dict[str, Any]] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "role": self.role,
            "content": self.content,
        }
        if self.full_messages is not None:
            data["full_messages"] = self.full_messages
        return data


@dataclass
class Transcript:
    metadata: VideoMetadata
    text: str
    source_url: str = ""
    segments: list[dict[str, Any]] = field(default_factory=list)
