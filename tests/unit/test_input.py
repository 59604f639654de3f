"""Tests for the line readers."""

from __future__ import annotations

import io
from unittest.mock import patch

import pytest

from vidchat.cli.input import StreamLineReader, create_reader


class TestStreamLineReader:
    @pytest.mark.asyncio
    async def test_reads_lines_without_newline(self) -> None:
        reader = StreamLineReader(io.StringIO("first\r\nsecond\n"))
        assert await reader.readline() == "first"
        assert await reader.readline() == "second"

    @pytest.mark.asyncio
    async def test_eof_raises(self) -> None:
        reader = StreamLineReader(io.StringIO(""))
        with pytest.raises(EOFError):
            await reader.readline()

    @pytest.mark.asyncio
    async def test_closed_reader_raises(self) -> None:
        reader = StreamLineReader(io.StringIO("unused\n"))
        reader.close()
        with pytest.raises(EOFError):
            await reader.readline()

    @pytest.mark.asyncio
    async def test_prompt_echoed(self) -> None:
        echo = io.StringIO()
        reader = StreamLineReader(io.StringIO("md\n"), echo=echo)
        assert await reader.readline("Format: ") == "md"
        assert echo.getvalue() == "Format: "


class TestCreateReader:
    def test_pipe_gets_stream_reader(self) -> None:
        with patch("vidchat.cli.input.sys.stdin", io.StringIO("")):
            assert isinstance(create_reader(), StreamLineReader)
