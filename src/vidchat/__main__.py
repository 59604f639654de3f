"""CLI entry point for vidchat."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from . import __version__
from .cli import display
from .config import AppConfig, _get_config_path, load_config
from .localization import get_message, normalize_locale
from .models import HistoryEntry, LocaleContext, Transcript

logger = logging.getLogger(__name__)


def _setup_logging(data_dir: Path, debug: bool = False) -> None:
    """Send log records to a file so they never land on the chat screen."""
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(data_dir / "vidchat.log", encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if debug else logging.WARNING)
    # Keep HTTP client chatter out of debug logs unless asked for.
    for noisy in ("httpx", "httpcore", "openai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _load_config_or_exit(config_path: Path | None, locale: str) -> AppConfig:
    try:
        return load_config(config_path)
    except ValueError as e:
        display.display_error("error_config", locale, {"error": str(e)})
        sys.exit(1)


def _load_transcript_or_exit(args: argparse.Namespace, locale: str) -> Transcript:
    from .services.transcript import load_transcript

    spinner = display.start_spinner(get_message("loading_transcript", locale))
    try:
        transcript = load_transcript(
            Path(args.transcript).expanduser(),
            args.url,
            title=args.title,
            author=args.author,
            duration=args.duration,
            language=args.language,
        )
    except (OSError, ValueError) as e:
        spinner.stop()
        display.display_error("error_transcript", locale, {"error": str(e)})
        sys.exit(1)
    spinner.stop()
    return transcript


async def _summarize(agent, locale: str) -> None:
    from .services.agent import last_message, message_text

    spinner = display.start_spinner(get_message("summary_generating", locale))
    try:
        try:
            request = {"messages": [{"role": "user", "content": get_message("summary_request", locale)}]}
            response = await agent.invoke(request)
            summary = message_text(last_message(response))
        finally:
            spinner.stop()
    except Exception as e:
        logger.warning("Summary failed: %s", e)
        display.display_error("error_general", locale, {"error": str(e)})
        return
    display.display_summary(summary)


async def _run_chat(config: AppConfig, transcript: Transcript, locale_ctx: LocaleContext, summarize: bool) -> None:
    from .cli.chat import ChatSession
    from .cli.input import create_reader
    from .services.agent import TranscriptAgent

    agent = TranscriptAgent(config.ai, transcript, ui_language=locale_ctx.ui_language)
    history: list[HistoryEntry] = []
    try:
        if summarize:
            await _summarize(agent, locale_ctx.locale)
        session = ChatSession(
            agent,
            history,
            transcript.metadata,
            transcript.source_url,
            locale_ctx,
            reader=create_reader(config.data_dir / "history"),
            redraw_interval=config.chat.redraw_interval,
            export_dir=config.chat.export_dir,
            on_locale_change=lambda ctx: agent.set_ui_language(ctx.ui_language),
        )
        await session.run()
    finally:
        await agent.close()


def main() -> None:
    parser = argparse.ArgumentParser(prog="vidchat", description="Chat with a video transcript from your terminal")
    parser.add_argument("url", nargs="?", default=None, help="Video URL (used for metadata and exports)")
    parser.add_argument("-t", "--transcript", default=None, help="Transcript file (.txt, .json, .yaml)")
    parser.add_argument("--title", default=None, help="Video title (overrides the transcript file)")
    parser.add_argument("--author", default=None, help="Video author")
    parser.add_argument("--duration", type=float, default=None, help="Video duration in seconds")
    parser.add_argument("-l", "--language", default=None, help="Transcript language code")
    parser.add_argument("-u", "--ui-language", dest="ui_language", default=None, help="Interface language code")
    parser.add_argument("-m", "--model", default=None, help="Override AI model")
    parser.add_argument("-c", "--config", dest="config_path", default=None, help="Path to config.yaml")
    parser.add_argument("-s", "--summarize", action="store_true", help="Summarize the video before chatting")
    parser.add_argument("--debug", action="store_true", help="Write debug logs to ~/.vidchat/vidchat.log")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args()

    early_locale = normalize_locale(args.ui_language or os.environ.get("VIDCHAT_LOCALE"))
    if not args.url or not args.transcript:
        display.display_usage(early_locale)
        sys.exit(1)

    config_path = Path(args.config_path).expanduser() if args.config_path else _get_config_path()
    config = _load_config_or_exit(config_path, early_locale)
    _setup_logging(config.data_dir, debug=args.debug)

    if args.model:
        config.ai.model = args.model
    ui_language = normalize_locale(args.ui_language) if args.ui_language else config.chat.ui_language
    locale = ui_language if args.ui_language else config.chat.locale

    transcript = _load_transcript_or_exit(args, locale)
    locale_ctx = LocaleContext(
        locale=locale,
        ui_language=ui_language,
        transcript_language=transcript.metadata.transcript_language,
    )
    display.display_video_info(transcript.metadata, locale)

    try:
        asyncio.run(_run_chat(config, transcript, locale_ctx, args.summarize))
    except KeyboardInterrupt:
        display.display_goodbye(locale)
        sys.exit(130)


if __name__ == "__main__":
    main()
