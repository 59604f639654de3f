"""Load transcripts from disk.

Two formats are accepted:

* plain text, one caption per line;
* JSON or YAML with optional ``title``/``author``/``duration``/``video_id``/
  ``language`` keys and either a ``text`` string or a ``segments`` list of
  ``{"start": seconds, "text": str}`` items.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any
from urllib.parse import parse_qs, urlparse

import yaml

from ..formatting import format_timestamp
from ..models import Transcript, VideoMetadata

logger = logging.getLogger(__name__)

_VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")


def extract_video_id(url: str) -> str:
    """Pull the 11-character id out of the common YouTube URL shapes; '' if none."""
    if not url:
        return ""
    if _VIDEO_ID_RE.match(url):
        return url
    parsed = urlparse(url)
    host = (parsed.hostname or "").lower()
    if host.endswith("youtu.be"):
        candidate = parsed.path.lstrip("/").split("/", 1)[0]
        return candidate if _VIDEO_ID_RE.match(candidate) else ""
    if "youtube" in host:
        query_id = parse_qs(parsed.query).get("v", [""])[0]
        if _VIDEO_ID_RE.match(query_id):
            return query_id
        parts = [p for p in parsed.path.split("/") if p]
        if len(parts) >= 2 and parts[0] in ("embed", "shorts", "live", "v"):
            return parts[1] if _VIDEO_ID_RE.match(parts[1]) else ""
    return ""


def _segments_to_text(segments: list[dict[str, Any]]) -> str:
    lines = []
    for seg in segments:
        text = str(seg.get("text", "")).strip()
        if not text:
            continue
        start = seg.get("start")
        lines.append(f"[{format_timestamp(start)}] {text}" if start is not None else text)
    return "\n".join(lines)


def load_transcript(
    path: Path,
    source_url: str = "",
    *,
    title: str | None = None,
    author: str | None = None,
    duration: float | None = None,
    language: str | None = None,
) -> Transcript:
    """Read *path*; explicit keyword arguments override values found in the file."""
    raw_text = path.read_text(encoding="utf-8")
    data: dict[str, Any] = {}
    if path.suffix.lower() in (".json", ".yaml", ".yml"):
        try:
            parsed = json.loads(raw_text) if path.suffix.lower() == ".json" else yaml.safe_load(raw_text)
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: invalid YAML: {e}") from e
        if isinstance(parsed, list):
            data = {"segments": parsed}
        elif isinstance(parsed, dict):
            data = parsed
        else:
            raise ValueError(f"{path}: expected an object or a list of segments")

    segments: list[dict[str, Any]] = [s for s in data.get("segments", []) if isinstance(s, dict)]
    if data:
        text = str(data.get("text") or _segments_to_text(segments))
    else:
        text = raw_text
    if not text.strip():
        raise ValueError(f"{path}: transcript is empty")

    if duration is None:
        duration = data.get("duration")
    if duration is None and segments:
        tail = segments[-1]
        duration = float(tail.get("start", 0) or 0) + float(tail.get("duration", 0) or 0)

    metadata = VideoMetadata(
        title=title or data.get("title") or path.stem,
        author=author or data.get("author", ""),
        duration=float(duration or 0),
        video_id=data.get("video_id") or extract_video_id(source_url),
        transcript_language=(language or data.get("language") or "en").lower(),
    )
    logger.info("Loaded transcript %s (%d chars, %d segments)", path, len(text), len(segments))
    return Transcript(metadata=metadata, text=text, source_url=source_url, segments=segments)
