"""Slash commands available at the chat prompt."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Sequence

from ..localization import SUPPORTED_LOCALES, get_language_name, get_message
from ..models import HistoryEntry, LocaleContext, VideoMetadata
from ..services.export import EXPORT_FORMATS, default_export_filename, write_export
from . import display
from .input import LineReader

logger = logging.getLogger(__name__)


class ChatCommand(Enum):
    EMPTY = "empty"
    EXIT = "exit"
    EXPORT = "/export"
    LANG = "/lang"
    MESSAGE = "message"


_KEYWORDS: dict[str, ChatCommand] = {
    "exit": ChatCommand.EXIT,
    "quit": ChatCommand.EXIT,
    "/export": ChatCommand.EXPORT,
    "/lang": ChatCommand.LANG,
}


def parse_command(text: str) -> ChatCommand:
    """Classify already-trimmed input.  Keywords match case-insensitively."""
    if not text:
        return ChatCommand.EMPTY
    return _KEYWORDS.get(text.lower(), ChatCommand.MESSAGE)


async def handle_export_command(
    reader: LineReader,
    history: Sequence[HistoryEntry],
    metadata: VideoMetadata,
    source_url: str,
    locale_ctx: LocaleContext,
    *,
    export_dir: Path | None = None,
) -> None:
    locale = locale_ctx.locale
    if not history:
        display.display_info("export_empty", locale)
        return

    fmt = (await reader.readline(get_message("export_format_prompt", locale))).strip().lower() or "md"
    if fmt == "markdown":
        fmt = "md"
    if fmt not in EXPORT_FORMATS:
        display.display_error("export_format_invalid", locale, {"format": fmt})
        return

    default_name = default_export_filename(metadata, fmt)
    name = (await reader.readline(get_message("export_filename_prompt", locale, {"filename": default_name}))).strip()
    path = Path(name or default_name).expanduser()
    if not path.suffix:
        path = path.with_suffix(f".{fmt}")
    if not path.is_absolute():
        path = (export_dir or Path.cwd()) / path

    try:
        write_export(path, history, metadata, source_url, locale, fmt)
    except OSError as e:
        logger.warning("Export to %s failed: %s", path, e)
        display.display_error("export_failed", locale, {"error": str(e)})
        return
    display.display_success("export_success", locale, {"path": str(path)})


async def handle_lang_command(reader: LineReader, locale_ctx: LocaleContext) -> LocaleContext:
    """Ask for a new interface language; returns the context to use from now on."""
    locale = locale_ctx.locale
    display.display_info("lang_current", locale, {"language": get_language_name(locale_ctx.ui_language)})
    available = ", ".join(f"{code} ({get_language_name(code)})" for code in SUPPORTED_LOCALES)
    display.display_info("lang_available", locale, {"languages": available})

    code = (await reader.readline(get_message("lang_prompt", locale))).strip().lower()
    if not code or code == locale_ctx.ui_language:
        display.display_info("lang_unchanged", locale)
        return locale_ctx
    if code not in SUPPORTED_LOCALES:
        display.display_error("lang_invalid", locale, {"code": code})
        return locale_ctx

    new_ctx = locale_ctx.with_ui_language(code)
    logger.info("Interface language changed %s -> %s", locale_ctx.ui_language, code)
    display.display_success("lang_changed", new_ctx.locale, {"language": get_language_name(code)})
    return new_ctx
