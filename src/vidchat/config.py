"""Configuration loader: YAML file with environment variable fallbacks."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .localization import DEFAULT_LOCALE, normalize_locale

_DEFAULT_BASE_URL = "https://api.openai.com/v1"

_DEFAULT_SYSTEM_PROMPT = """\
You are a helpful assistant answering questions about a single video. \
Base every answer on the transcript below. When the transcript does not cover \
something, say so instead of guessing. Quote timestamps when they help the \
user find the moment in the video. Answer in {ui_language_name} unless the \
user writes in another language."""


@dataclass
class AIConfig:
    api_key: str
    base_url: str = _DEFAULT_BASE_URL
    model: str = "gpt-4o-mini"
    system_prompt: str = _DEFAULT_SYSTEM_PROMPT
    verify_ssl: bool = True
    request_timeout: int = 120  # seconds
    max_transcript_chars: int = 120_000


@dataclass
class ChatConfig:
    locale: str = DEFAULT_LOCALE
    ui_language: str = DEFAULT_LOCALE
    redraw_interval: float = 0.05  # seconds between bottom-border redraws
    export_dir: Path = field(default_factory=Path.cwd)


@dataclass
class AppConfig:
    ai: AIConfig
    chat: ChatConfig = field(default_factory=ChatConfig)
    data_dir: Path = field(default_factory=lambda: Path.home() / ".vidchat")


def _resolve_data_dir() -> Path:
    env_dir = os.environ.get("VIDCHAT_HOME")
    if env_dir:
        return Path(os.path.expanduser(env_dir))
    return Path.home() / ".vidchat"


def _get_config_path(data_dir: Path | None = None) -> Path:
    if data_dir:
        return data_dir / "config.yaml"
    return _resolve_data_dir() / "config.yaml"


def _as_bool(value: Any) -> bool:
    return str(value).lower() not in ("false", "0", "no")


def load_config(config_path: Path | None = None) -> AppConfig:
    raw: dict[str, Any] = {}
    path = config_path or _get_config_path()

    if path.exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    ai_raw = raw.get("ai", {}) or {}
    api_key = ai_raw.get("api_key") or os.environ.get("VIDCHAT_API_KEY") or os.environ.get("OPENAI_API_KEY", "")
    base_url = ai_raw.get("base_url") or os.environ.get("VIDCHAT_BASE_URL", _DEFAULT_BASE_URL)
    model = ai_raw.get("model") or os.environ.get("VIDCHAT_MODEL", "gpt-4o-mini")
    system_prompt = ai_raw.get("system_prompt") or _DEFAULT_SYSTEM_PROMPT

    if not api_key:
        raise ValueError(
            f"AI api_key is required. Set 'ai.api_key' in config.yaml ({path}) "
            "or the VIDCHAT_API_KEY / OPENAI_API_KEY environment variable."
        )

    verify_ssl = _as_bool(ai_raw.get("verify_ssl", os.environ.get("VIDCHAT_VERIFY_SSL", "true")))
    try:
        _raw_timeout = ai_raw.get("request_timeout", os.environ.get("VIDCHAT_REQUEST_TIMEOUT", 120))
        request_timeout = max(10, min(600, int(_raw_timeout)))
    except (ValueError, TypeError):
        request_timeout = 120

    try:
        max_transcript_chars = max(1_000, int(ai_raw.get("max_transcript_chars", 120_000)))
    except (ValueError, TypeError):
        max_transcript_chars = 120_000

    ai = AIConfig(
        api_key=api_key,
        base_url=base_url,
        model=model,
        system_prompt=system_prompt,
        verify_ssl=verify_ssl,
        request_timeout=request_timeout,
        max_transcript_chars=max_transcript_chars,
    )

    chat_raw = raw.get("chat", {}) or {}
    locale = normalize_locale(chat_raw.get("locale") or os.environ.get("VIDCHAT_LOCALE") or DEFAULT_LOCALE)
    ui_language = normalize_locale(chat_raw.get("ui_language") or locale)

    try:
        redraw_interval = float(chat_raw.get("redraw_interval", 0.05))
        redraw_interval = max(0.01, min(1.0, redraw_interval))
    except (ValueError, TypeError):
        redraw_interval = 0.05

    export_dir_raw = chat_raw.get("export_dir") or os.environ.get("VIDCHAT_EXPORT_DIR")
    export_dir = Path(os.path.expanduser(export_dir_raw)) if export_dir_raw else Path.cwd()

    chat = ChatConfig(
        locale=locale,
        ui_language=ui_language,
        redraw_interval=redraw_interval,
        export_dir=export_dir,
    )

    data_dir_raw = raw.get("data_dir")
    data_dir = Path(os.path.expanduser(data_dir_raw)) if data_dir_raw else _resolve_data_dir()

    return AppConfig(ai=ai, chat=chat, data_dir=data_dir)
