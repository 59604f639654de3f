"""Rich-based terminal output for the chat client."""

from __future__ import annotations

import logging
import sys
from typing import IO, Any

from rich.console import Console
from rich.markdown import Markdown
from rich.status import Status
from rich.text import Text

from ..formatting import format_timestamp
from ..localization import get_language_name, get_message
from ..models import VideoMetadata

logger = logging.getLogger(__name__)

_stdout_console = Console(highlight=False)
_stderr_console = Console(stderr=True, highlight=False)

# ---------------------------------------------------------------------------
# Color palette, explicit values for readability on dark terminals.
# ---------------------------------------------------------------------------

GOLD = "#C5A059"  # spinners
SLATE = "#94A3B8"  # header rules
MUTED = "#8b8b8b"  # secondary text (command feedback)
SUCCESS_GREEN = "#7FB77E"
ERROR_RED = "#CD6B6B"  # inline errors

_RULE_WIDTH = 60


def configure_output(
    stdout: IO[str] | None = None,
    stderr: IO[str] | None = None,
    *,
    force_terminal: bool | None = None,
    width: int | None = None,
) -> None:
    """Rebind the helpers to other streams.

    Used by the entry point for non-tty output and by tests to capture writes.
    """
    global _stdout_console, _stderr_console
    _stdout_console = Console(
        file=stdout or sys.stdout, force_terminal=force_terminal, width=width, highlight=False
    )
    _stderr_console = Console(
        file=stderr or sys.stderr, force_terminal=force_terminal, width=width, highlight=False
    )


def _say(message: str, style: str | None = None) -> None:
    _stdout_console.print(message, style=style, markup=False)


# ---------------------------------------------------------------------------
# Markdown
# ---------------------------------------------------------------------------


_heading_patched = False


def _patch_heading_left() -> None:
    """Monkey-patch Rich's Heading to render left-aligned instead of centered."""
    global _heading_patched
    if _heading_patched:
        return
    from rich.markdown import Heading

    def _left_aligned(self, console, options):
        self.text.justify = "left"
        if self.tag == "h2":
            yield Text("")
        yield self.text

    Heading.__rich_console__ = _left_aligned
    _heading_patched = True


def _make_markdown(text: str) -> Markdown:
    _patch_heading_left()
    return Markdown(text)


def render_markdown(text: str) -> str:
    """Render markdown to a terminal string; the raw text comes back if rendering fails."""
    try:
        with _stdout_console.capture() as capture:
            _stdout_console.print(_make_markdown(text))
        return capture.get()
    except Exception:
        logger.debug("Markdown rendering failed, falling back to raw text", exc_info=True)
        return text


# ---------------------------------------------------------------------------
# Static screens
# ---------------------------------------------------------------------------


def display_usage(locale: str) -> None:
    _say(get_message("usage_header", locale))
    _say(get_message("usage_examples", locale))
    _say(get_message("usage_example_1", locale))
    _say(get_message("usage_note", locale))


def display_video_info(metadata: VideoMetadata, locale: str) -> None:
    _say(get_message("video_info_title", locale, {"title": metadata.title}))
    if metadata.author:
        _say(get_message("video_info_author", locale, {"author": metadata.author}))
    _say(get_message("video_info_duration", locale, {"duration": format_timestamp(metadata.duration)}))


def display_chat_header(ui_language: str, transcript_language: str, locale: str) -> None:
    rule = "=" * _RULE_WIDTH
    _say("\n" + rule, style=SLATE)
    _say(
        get_message(
            "chat_started_with_languages",
            locale,
            {
                "uiLanguage": get_language_name(ui_language),
                "transcriptLanguage": get_language_name(transcript_language),
            },
        )
    )
    _say(get_message("chat_exit_instruction", locale))
    _say(get_message("chat_export_instruction", locale))
    _say(get_message("chat_lang_instruction", locale))
    _say(rule + "\n", style=SLATE)


# ---------------------------------------------------------------------------
# Spinners
# ---------------------------------------------------------------------------


def start_spinner(text: str) -> Status:
    """Start a spinner on stdout.  The caller owns it and must call ``stop()``."""
    status = Status(Text(text), console=_stdout_console, spinner="dots")
    status.start()
    return status


def start_thinking_spinner(text: str) -> Status:
    """Start the spinner shown while the agent works.

    Drawn on the error console so it never lands inside captured stdout.
    The caller must call ``stop()`` on every path, errors included.
    """
    status = Status(Text(text, style=GOLD), console=_stderr_console, spinner="dots", spinner_style=GOLD)
    status.start()
    return status


# ---------------------------------------------------------------------------
# Turn output
# ---------------------------------------------------------------------------


def display_assistant_response(content: str) -> None:
    rendered = render_markdown(content.strip())
    out = _stdout_console.file
    out.write(rendered.rstrip() + "\n")
    out.flush()


def display_error(message_key: str, locale: str, params: dict[str, Any] | None = None) -> None:
    message = get_message(message_key, locale, params or {})
    _stderr_console.print(f"\n{message}\n", style=ERROR_RED, markup=False)


def display_info(message_key: str, locale: str, params: dict[str, Any] | None = None) -> None:
    _say(get_message(message_key, locale, params or {}), style=MUTED)


def display_success(message_key: str, locale: str, params: dict[str, Any] | None = None) -> None:
    _say(get_message(message_key, locale, params or {}), style=SUCCESS_GREEN)


def display_goodbye(locale: str) -> None:
    _say("\n" + get_message("chat_goodbye", locale))


def display_summary(content: str) -> None:
    out = _stdout_console.file
    out.write(render_markdown(content).rstrip() + "\n")
    out.flush()
    _say("\n" + "=" * _RULE_WIDTH, style=SLATE)
