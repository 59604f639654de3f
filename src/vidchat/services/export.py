"""Markdown and JSON export for conversations."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence

from ..formatting import format_timestamp, slugify
from ..localization import get_message
from ..models import HistoryEntry, VideoMetadata

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("md", "json")


def export_conversation_markdown(
    history: Sequence[HistoryEntry],
    metadata: VideoMetadata,
    source_url: str,
    locale: str,
    *,
    exported_at: datetime | None = None,
) -> str:
    exported_at = exported_at or datetime.now()
    lines: list[str] = []
    lines.append(f"# {get_message('export_title', locale, {'title': metadata.title})}")
    lines.append("")
    if metadata.author:
        lines.append(f"*{get_message('video_info_author', locale, {'author': metadata.author})}*")
    lines.append(f"*{get_message('video_info_duration', locale, {'duration': format_timestamp(metadata.duration)})}*")
    if source_url:
        lines.append(f"*{get_message('export_source', locale, {'url': source_url})}*")
    lines.append(f"*{get_message('export_exported_at', locale, {'date': exported_at.strftime('%Y-%m-%d %H:%M')})}*")
    lines.append("")
    lines.append("---")
    lines.append("")

    for entry in history:
        role_label = get_message(f"export_role_{entry.role}", locale)
        lines.append(f"## {role_label} ({entry.timestamp.strftime('%H:%M:%S')})")
        lines.append("")
        lines.append(entry.content)
        lines.append("")
        lines.append("---")
        lines.append("")

    return "\n".join(lines)


def export_conversation_json(
    history: Sequence[HistoryEntry],
    metadata: VideoMetadata,
    source_url: str,
    *,
    exported_at: datetime | None = None,
) -> str:
    exported_at = exported_at or datetime.now()
    payload: dict[str, Any] = {
        "video": {
            "title": metadata.title,
            "author": metadata.author,
            "duration": metadata.duration,
            "video_id": metadata.video_id,
            "transcript_language": metadata.transcript_language,
            "url": source_url,
        },
        "exported_at": exported_at.isoformat(),
        "messages": [entry.to_dict() for entry in history],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


def default_export_filename(metadata: VideoMetadata, fmt: str, now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"{slugify(metadata.title)}-{now.strftime('%Y%m%d-%H%M%S')}.{fmt}"


def write_export(
    path: Path,
    history: Sequence[HistoryEntry],
    metadata: VideoMetadata,
    source_url: str,
    locale: str,
    fmt: str = "md",
) -> Path:
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}")
    if fmt == "json":
        body = export_conversation_json(history, metadata, source_url)
    else:
        body = export_conversation_markdown(history, metadata, source_url, locale)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")
    logger.info("Exported %d messages to %s", len(history), path)
    return path
