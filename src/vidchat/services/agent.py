"""Conversational agent answering questions about one transcript."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx
from openai import AsyncOpenAI

from ..config import AIConfig
from ..formatting import format_timestamp
from ..localization import get_language_name
from ..models import Transcript

logger = logging.getLogger(__name__)


class EmptyAgentResponseError(Exception):
    """Raised when an agent returns no messages for a turn."""


class Agent(Protocol):
    async def invoke(self, request: dict[str, Any]) -> dict[str, Any]: ...


def last_message(response: dict[str, Any]) -> Any:
    """Final element of an agent response; an empty sequence is an error."""
    messages = response.get("messages") or []
    if not messages:
        raise EmptyAgentResponseError("The assistant returned no messages.")
    return messages[-1]


def message_text(message: Any) -> str:
    """Plain text of an agent message: a dict, an object with ``content``, or content parts."""
    content = message.get("content") if isinstance(message, dict) else getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, dict):
                parts.append(str(part.get("text", "")))
            else:
                parts.append(str(part))
        return "".join(parts)
    return "" if content is None else str(content)


def build_system_prompt(config: AIConfig, transcript: Transcript, ui_language: str) -> str:
    meta = transcript.metadata
    prompt = config.system_prompt.replace("{ui_language_name}", get_language_name(ui_language) or ui_language)
    text = transcript.text
    if len(text) > config.max_transcript_chars:
        logger.warning(
            "Transcript is %d chars, truncating to %d", len(text), config.max_transcript_chars
        )
        text = text[: config.max_transcript_chars]

    lines = [
        prompt,
        "",
        "<video>",
        f"Title: {meta.title}",
    ]
    if meta.author:
        lines.append(f"Author: {meta.author}")
    if meta.duration:
        lines.append(f"Duration: {format_timestamp(meta.duration)}")
    if transcript.source_url:
        lines.append(f"URL: {transcript.source_url}")
    lines.append(f"Transcript language: {get_language_name(meta.transcript_language)}")
    lines.append("</video>")
    lines.append("")
    lines.append("<transcript>")
    lines.append(text)
    lines.append("</transcript>")
    return "\n".join(lines)


class TranscriptAgent:
    """Stateful agent over an OpenAI-compatible chat completions endpoint.

    Each ``invoke`` call carries only the new user message; the agent keeps
    the running conversation and returns all of it, newest message last.
    """

    def __init__(
        self,
        config: AIConfig,
        transcript: Transcript,
        ui_language: str = "en",
        client: AsyncOpenAI | None = None,
    ) -> None:
        self.config = config
        self.transcript = transcript
        self._system_prompt = build_system_prompt(config, transcript, ui_language)
        self._messages: list[dict[str, Any]] = []
        self.client = client or self._build_client()

    def _build_client(self) -> AsyncOpenAI:
        # SECURITY-REVIEW: verify=False only when the user sets verify_ssl: false in config
        http_client = httpx.AsyncClient(
            verify=self.config.verify_ssl,
            timeout=httpx.Timeout(float(self.config.request_timeout), connect=10.0),
        )
        return AsyncOpenAI(
            base_url=self.config.base_url,
            api_key=self.config.api_key,
            http_client=http_client,
        )

    @property
    def messages(self) -> list[dict[str, Any]]:
        return list(self._messages)

    def set_ui_language(self, ui_language: str) -> None:
        self._system_prompt = build_system_prompt(self.config, self.transcript, ui_language)

    async def invoke(self, request: dict[str, Any]) -> dict[str, Any]:
        incoming = [
            {"role": m["role"], "content": m["content"]} for m in request.get("messages", []) if m.get("content")
        ]
        if not incoming:
            raise ValueError("invoke() needs at least one message")

        api_messages = [{"role": "system", "content": self._system_prompt}, *self._messages, *incoming]
        logger.debug("Sending %d messages to %s", len(api_messages), self.config.model)
        response = await self.client.chat.completions.create(
            model=self.config.model,
            messages=api_messages,
        )
        if not response.choices:
            raise EmptyAgentResponseError("The model returned no choices.")
        reply = response.choices[0].message.content or ""

        # Only commit the turn once the request succeeded.
        self._messages.extend(incoming)
        self._messages.append({"role": "assistant", "content": reply})
        return {"messages": self.messages}

    async def close(self) -> None:
        await self.client.close()
