"""Interactive chat loop with live border lines around the prompt."""

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import IO, Any, Callable, NoReturn

from ..formatting import terminal_separator
from ..localization import get_message
from ..models import HistoryEntry, LocaleContext, VideoMetadata
from ..services.agent import Agent, EmptyAgentResponseError, last_message, message_text
from . import display
from .commands import ChatCommand, handle_export_command, handle_lang_command, parse_command
from .input import LineReader, create_reader

logger = logging.getLogger(__name__)

PROMPT_MARKER = "> "
BORDER_CHAR = "─"
DEFAULT_REDRAW_INTERVAL = 0.05  # seconds

# Raw VT100 sequences; prompt_toolkit leaves the surrounding lines alone.
_SAVE_CURSOR = "\0337"
_RESTORE_CURSOR = "\0338"
_ERASE_LINE = "\033[2K"


def _cursor_up(n: int = 1) -> str:
    return f"\033[{n}A"


def _cursor_down(n: int = 1) -> str:
    return f"\033[{n}B"


def _cursor_to(column: int) -> str:
    return f"\033[{column + 1}G"


class BorderRedraw:
    """Repeatedly repaint the border below the prompt while a read is pending.

    Terminals give no event for scroll or resize, so the line under the
    prompt is rewritten on a timer.  Each tick saves and restores the cursor
    and never touches the line being typed.
    """

    def __init__(
        self,
        output: IO[str],
        interval: float = DEFAULT_REDRAW_INTERVAL,
        separator: Callable[[], str] | None = None,
    ) -> None:
        self._output = output
        self._interval = interval
        self._separator = separator or (lambda: terminal_separator(BORDER_CHAR))
        self._task: asyncio.Task[None] | None = None

    @property
    def active(self) -> bool:
        return self._task is not None

    def start(self) -> None:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            self._output.write(_SAVE_CURSOR + _cursor_down(1) + _cursor_to(0) + self._separator() + _RESTORE_CURSOR)
            self._output.flush()

    def cancel(self) -> None:
        """Stop repainting.  Safe to call more than once.

        The task only runs again at an await, so no tick can slip in between
        this call and the caller's next write.
        """
        if self._task is None:
            return
        self._task.cancel()
        self._task = None


class ChatSession:
    """One interactive session: prompt, dispatch, repeat until exit."""

    def __init__(
        self,
        agent: Agent,
        history: list[HistoryEntry],
        metadata: VideoMetadata,
        source_url: str,
        locale_ctx: LocaleContext,
        *,
        reader: LineReader | None = None,
        output: IO[str] | None = None,
        redraw_interval: float = DEFAULT_REDRAW_INTERVAL,
        export_dir: Path | None = None,
        on_locale_change: Callable[[LocaleContext], None] | None = None,
    ) -> None:
        self.agent = agent
        self.history = history
        self.metadata = metadata
        self.source_url = source_url
        self.locale_ctx = locale_ctx
        self.reader = reader or create_reader()
        self.output = output or sys.stdout
        self.redraw_interval = redraw_interval
        self.export_dir = export_dir
        self._on_locale_change = on_locale_change

    @property
    def locale(self) -> str:
        return self.locale_ctx.locale

    def _write(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()

    def _draw_prompt(self) -> None:
        border = terminal_separator(BORDER_CHAR)
        self._write(f"\n{border}\n{PROMPT_MARKER}")
        self._write("\n" + border)
        self._write(_cursor_up(1) + _cursor_to(len(PROMPT_MARKER)))

    def _erase_borders(self) -> None:
        # Cursor sits on the line after the submitted input.
        self._write(_cursor_down(1) + _ERASE_LINE)
        self._write(_cursor_up(1) + _cursor_to(0))
        self._write(_cursor_up(1) + _ERASE_LINE)
        self._write(_cursor_down(1) + _cursor_to(0))
        self._write("\n")

    async def read_input(self) -> str | None:
        """Draw the bordered prompt and wait for one line; ``None`` at end of input."""
        self._draw_prompt()
        redraw = BorderRedraw(self.output, self.redraw_interval)
        redraw.start()
        line: str | None
        try:
            line = await self.reader.readline()
        except (EOFError, KeyboardInterrupt):
            line = None
        finally:
            redraw.cancel()
        if line is None:
            self._write("\n")
            return None
        self._erase_borders()
        return line.strip()

    def _exit(self) -> NoReturn:
        display.display_goodbye(self.locale)
        self.reader.close()
        sys.exit(0)

    async def handle_message(self, text: str) -> None:
        self.history.append(HistoryEntry(timestamp=datetime.now(), role="user", content=text))
        spinner = display.start_thinking_spinner(get_message("chat_thinking", self.locale))
        try:
            try:
                response = await self.agent.invoke({"messages": [{"role": "user", "content": text}]})
                message = last_message(response)
            finally:
                spinner.stop()
        except EmptyAgentResponseError:
            logger.warning("Agent returned no messages")
            reason = get_message("error_empty_response", self.locale)
            display.display_error("error_general", self.locale, {"error": reason})
            return
        except Exception as e:
            logger.warning("Agent call failed: %s", e)
            display.display_error("error_general", self.locale, {"error": str(e)})
            return

        content = message_text(message)
        self.history.append(
            HistoryEntry(
                timestamp=datetime.now(),
                role="assistant",
                content=content,
                full_messages=list(response["messages"]),
            )
        )
        display.display_assistant_response(content)

    async def dispatch(self, text: str) -> None:
        command = parse_command(text)
        if command is ChatCommand.EMPTY:
            return
        if command is ChatCommand.EXIT:
            self._exit()
        if command is ChatCommand.MESSAGE:
            await self.handle_message(text)
            return
        try:
            await self._run_command(command)
        except (EOFError, KeyboardInterrupt):
            # Input ended at a command prompt; same as at the main prompt.
            self._exit()

    async def _run_command(self, command: ChatCommand) -> None:
        if command is ChatCommand.EXPORT:
            await handle_export_command(
                self.reader,
                self.history,
                self.metadata,
                self.source_url,
                self.locale_ctx,
                export_dir=self.export_dir,
            )
        elif command is ChatCommand.LANG:
            new_ctx = await handle_lang_command(self.reader, self.locale_ctx)
            if new_ctx != self.locale_ctx:
                self.locale_ctx = new_ctx
                if self._on_locale_change is not None:
                    self._on_locale_change(new_ctx)

    async def run(self) -> None:
        ctx = self.locale_ctx
        display.display_chat_header(ctx.ui_language, ctx.transcript_language, ctx.locale)
        while True:
            text = await self.read_input()
            if text is None:
                self._exit()
            await self.dispatch(text)


async def start_chat(
    agent: Agent,
    history: list[HistoryEntry],
    metadata: VideoMetadata,
    source_url: str,
    locale: str,
    ui_language: str,
    transcript_language: str,
    **kwargs: Any,
) -> None:
    """Run an interactive session until the user exits (raises ``SystemExit(0)``)."""
    locale_ctx = LocaleContext(locale=locale, ui_language=ui_language, transcript_language=transcript_language)
    session = ChatSession(agent, history, metadata, source_url, locale_ctx, **kwargs)
    await session.run()
