"""Tests for the transcript agent."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from vidchat.config import AIConfig
from vidchat.models import Transcript, VideoMetadata
from vidchat.services.agent import (
    EmptyAgentResponseError,
    TranscriptAgent,
    build_system_prompt,
    last_message,
    message_text,
)


def _config(**overrides) -> AIConfig:
    defaults = {"api_key": "sk-test", "base_url": "http://localhost:11434/v1", "model": "test-model"}
    defaults.update(overrides)
    return AIConfig(**defaults)


def _transcript(text: str = "[0:00] Welcome to the talk.\n[0:05] Today: lifetimes.") -> Transcript:
    meta = VideoMetadata(title="Lifetimes", author="Ferris", duration=95, transcript_language="en")
    return Transcript(metadata=meta, text=text, source_url="https://youtu.be/abcdefghijk")


def _completion(content: str | None) -> SimpleNamespace:
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _client(*responses) -> MagicMock:
    client = MagicMock()
    client.chat.completions.create = AsyncMock(side_effect=list(responses))
    client.close = AsyncMock()
    return client


class TestLastMessage:
    def test_returns_final_element(self) -> None:
        assert last_message({"messages": [{"content": "a"}, {"content": "b"}]}) == {"content": "b"}

    @pytest.mark.parametrize("response", [{"messages": []}, {}, {"messages": None}])
    def test_empty_is_error(self, response) -> None:
        with pytest.raises(EmptyAgentResponseError):
            last_message(response)


class TestMessageText:
    def test_dict_message(self) -> None:
        assert message_text({"role": "assistant", "content": "hello"}) == "hello"

    def test_object_with_content_parts(self) -> None:
        message = SimpleNamespace(content=[{"type": "text", "text": "a "}, {"type": "text", "text": "b"}])
        assert message_text(message) == "a b"

    def test_missing_content_is_empty(self) -> None:
        assert message_text({"role": "assistant", "content": None}) == ""


class TestSystemPrompt:
    def test_contains_metadata_and_transcript(self) -> None:
        prompt = build_system_prompt(_config(), _transcript(), "es")
        assert "Answer in Español" in prompt
        assert "Title: Lifetimes" in prompt
        assert "Author: Ferris" in prompt
        assert "Duration: 1:35" in prompt
        assert "URL: https://youtu.be/abcdefghijk" in prompt
        assert "<transcript>\n[0:00] Welcome to the talk." in prompt

    def test_truncates_long_transcripts(self) -> None:
        prompt = build_system_prompt(_config(max_transcript_chars=1000), _transcript("x" * 5000), "en")
        assert "x" * 1000 + "\n</transcript>" in prompt
        assert "x" * 1001 not in prompt

    def test_custom_prompt_with_braces(self) -> None:
        prompt = build_system_prompt(_config(system_prompt="Use {json} output."), _transcript(), "en")
        assert prompt.startswith("Use {json} output.")


class TestTranscriptAgent:
    @pytest.mark.asyncio
    async def test_invoke_returns_conversation_with_reply_last(self) -> None:
        client = _client(_completion("About lifetimes."))
        agent = TranscriptAgent(_config(), _transcript(), client=client)
        result = await agent.invoke({"messages": [{"role": "user", "content": "Topic?"}]})
        assert result["messages"] == [
            {"role": "user", "content": "Topic?"},
            {"role": "assistant", "content": "About lifetimes."},
        ]
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["messages"][0]["role"] == "system"
        assert kwargs["messages"][-1] == {"role": "user", "content": "Topic?"}

    @pytest.mark.asyncio
    async def test_second_turn_sends_earlier_messages(self) -> None:
        client = _client(_completion("one"), _completion("two"))
        agent = TranscriptAgent(_config(), _transcript(), client=client)
        await agent.invoke({"messages": [{"role": "user", "content": "first"}]})
        result = await agent.invoke({"messages": [{"role": "user", "content": "second"}]})
        sent = client.chat.completions.create.call_args.kwargs["messages"]
        assert [m["content"] for m in sent[1:]] == ["first", "one", "second"]
        assert result["messages"][-1]["content"] == "two"

    @pytest.mark.asyncio
    async def test_failed_call_does_not_commit_turn(self) -> None:
        client = _client(RuntimeError("network down"), _completion("ok"))
        agent = TranscriptAgent(_config(), _transcript(), client=client)
        with pytest.raises(RuntimeError, match="network down"):
            await agent.invoke({"messages": [{"role": "user", "content": "lost"}]})
        assert agent.messages == []
        await agent.invoke({"messages": [{"role": "user", "content": "again"}]})
        assert [m["content"] for m in agent.messages] == ["again", "ok"]

    @pytest.mark.asyncio
    async def test_no_choices_raises(self) -> None:
        client = _client(SimpleNamespace(choices=[]))
        agent = TranscriptAgent(_config(), _transcript(), client=client)
        with pytest.raises(EmptyAgentResponseError):
            await agent.invoke({"messages": [{"role": "user", "content": "hi"}]})

    @pytest.mark.asyncio
    async def test_none_content_becomes_empty_string(self) -> None:
        agent = TranscriptAgent(_config(), _transcript(), client=_client(_completion(None)))
        result = await agent.invoke({"messages": [{"role": "user", "content": "hi"}]})
        assert result["messages"][-1]["content"] == ""

    @pytest.mark.asyncio
    async def test_requires_a_message(self) -> None:
        agent = TranscriptAgent(_config(), _transcript(), client=_client())
        with pytest.raises(ValueError):
            await agent.invoke({"messages": []})

    @pytest.mark.asyncio
    async def test_ui_language_change_updates_prompt(self) -> None:
        client = _client(_completion("hola"))
        agent = TranscriptAgent(_config(), _transcript(), client=client)
        agent.set_ui_language("es")
        await agent.invoke({"messages": [{"role": "user", "content": "hi"}]})
        system = client.chat.completions.create.call_args.kwargs["messages"][0]["content"]
        assert "Answer in Español" in system

    @pytest.mark.asyncio
    async def test_close_closes_client(self) -> None:
        client = _client()
        agent = TranscriptAgent(_config(), _transcript(), client=client)
        await agent.close()
        client.close.assert_awaited_once()


class TestClientConfiguration:
    def test_timeout_and_ssl_applied(self) -> None:
        with patch("vidchat.services.agent.AsyncOpenAI") as mock_openai:
            TranscriptAgent(_config(request_timeout=60, verify_ssl=False), _transcript())
            kwargs = mock_openai.call_args.kwargs
            assert kwargs["base_url"] == "http://localhost:11434/v1"
            assert kwargs["api_key"] == "sk-test"
            http_client = kwargs["http_client"]
            assert isinstance(http_client, httpx.AsyncClient)
            assert http_client.timeout.read == 60.0
            assert http_client.timeout.connect == 10.0
