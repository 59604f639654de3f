"""Line readers the chat loop and the commands read from.

Both readers raise ``EOFError`` once input is exhausted, matching
prompt_toolkit's behaviour on Ctrl-D.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import IO, Protocol

logger = logging.getLogger(__name__)


class LineReader(Protocol):
    async def readline(self, prompt: str = "") -> str: ...

    def close(self) -> None: ...


class PromptToolkitReader:
    """Interactive terminal input backed by a prompt_toolkit ``PromptSession``."""

    def __init__(self, history_path: Path | None = None) -> None:
        from prompt_toolkit import PromptSession
        from prompt_toolkit.history import FileHistory, InMemoryHistory

        if history_path is not None:
            history_path.parent.mkdir(parents=True, exist_ok=True)
            history = FileHistory(str(history_path))
        else:
            history = InMemoryHistory()
        self._session: PromptSession[str] = PromptSession(history=history, erase_when_done=False)
        self._closed = False

    async def readline(self, prompt: str = "") -> str:
        if self._closed:
            raise EOFError
        return await self._session.prompt_async(prompt)

    def close(self) -> None:
        self._closed = True


class StreamLineReader:
    """Reads lines from a text stream (piped stdin, scripted tests).

    The blocking ``readline`` runs in a worker thread so the event loop keeps
    servicing the border redraw while a read is pending.
    """

    def __init__(self, stream: IO[str] | None = None, echo: IO[str] | None = None) -> None:
        self._stream = stream or sys.stdin
        self._echo = echo
        self._closed = False

    async def readline(self, prompt: str = "") -> str:
        if self._closed:
            raise EOFError
        if prompt and self._echo is not None:
            self._echo.write(prompt)
            self._echo.flush()
        line = await asyncio.to_thread(self._stream.readline)
        if line == "":
            raise EOFError
        return line.rstrip("\r\n")

    def close(self) -> None:
        self._closed = True


def create_reader(history_path: Path | None = None) -> LineReader:
    """Pick prompt_toolkit for a real terminal, plain stdin otherwise."""
    if sys.stdin.isatty() and sys.stdout.isatty():
        return PromptToolkitReader(history_path)
    logger.debug("stdin is not a tty, using StreamLineReader")
    return StreamLineReader(sys.stdin)
