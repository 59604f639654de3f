"""Small text helpers for terminal layout and time display."""

from __future__ import annotations

import re
import shutil

_DEFAULT_COLUMNS = 80
_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w\-]+", re.UNICODE)


def terminal_width(default: int = _DEFAULT_COLUMNS) -> int:
    return shutil.get_terminal_size((default, 24)).columns or default


def terminal_separator(char: str = "─", width: int | None = None) -> str:
    """A line of *char* spanning the terminal."""
    return char * (width if width is not None else terminal_width())


def format_timestamp(seconds: float | int | None) -> str:
    """Format a duration as ``M:SS`` or ``H:MM:SS``.

    >>> format_timestamp(75)
    '1:15'
    >>> format_timestamp(3725)
    '1:02:05'
    """
    if not seconds or seconds < 0:
        return "0:00"
    total = int(seconds)
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def slugify(text: str, max_len: int = 60) -> str:
    slug = _UNSAFE_FILENAME_CHARS.sub("-", text.strip().lower()).strip("-")
    return slug[:max_len].rstrip("-") or "conversation"
