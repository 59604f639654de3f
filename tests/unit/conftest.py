"""Shared fixtures for unit tests."""

from __future__ import annotations

import io
from collections.abc import Iterable, Iterator

import pytest

from vidchat.cli import display


class ScriptedReader:
    """LineReader that replays canned lines, then reports end of input."""

    def __init__(self, lines: Iterable[str] = ()) -> None:
        self.lines = list(lines)
        self.prompts: list[str] = []
        self.closed = False

    async def readline(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def captured() -> Iterator[tuple[io.StringIO, io.StringIO]]:
    """Point the display helpers at in-memory streams; yields (stdout, stderr)."""
    out, err = io.StringIO(), io.StringIO()
    display.configure_output(out, err, force_terminal=False, width=100)
    yield out, err
    display.configure_output()


@pytest.fixture
def make_reader() -> type[ScriptedReader]:
    return ScriptedReader
