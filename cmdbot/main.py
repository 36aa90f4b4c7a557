"""CLI entry point."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import json
import logging
import os
import signal
import sys
from typing import Sequence

from .chat_adapters.console_adapter import ConsoleAdapter
from .core import Config, ConfigError, Router, load_config
from .core.models import ChatMessage

LOGGER = logging.getLogger(__name__)


def cli(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        prog="cmdbot",
        description="cmdbot - chat command bot with prefix, parameter and mention parsing",
    )
    parser.add_argument(
        "--config-dir",
        help="Directory holding bot.yaml and .env (default: ~/.cmdbot)",
    )
    parser.add_argument(
        "--user-id",
        default="0",
        help="Author id used for console messages",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse a message and print the resulting command request",
    )
    parse_parser.add_argument("text", help="Message text to parse")

    subparsers.add_parser(
        "commands",
        help="List registered commands",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _load(args.config_dir)
    except ConfigError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 1

    if args.command == "parse":
        router = Router(config)
        request = router.dispatcher.parse(ChatMessage(content=args.text, author_id=args.user_id))
        print(json.dumps(request.log(), indent=2, ensure_ascii=False))
        return 0
    elif args.command == "commands":
        router = Router(config)
        print("\n".join(router.dispatcher.build_help_lines()))
        return 0

    # Default behavior: run the console bot
    try:
        asyncio.run(_run_async(config, args.user_id))
    except KeyboardInterrupt:
        LOGGER.info("Interrupted by user")
        return 130
    return 0


def run() -> None:
    """Entry point for console scripts."""
    sys.exit(cli())


def _load(config_dir: str | None) -> Config:
    config = load_config(config_dir)

    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_name, logging.INFO)
    logging.getLogger().setLevel(log_level)

    LOGGER.info("Using config directory: %s", config.config_dir)
    return config


async def _run_async(config: Config, user_id: str) -> None:
    router = Router(config)
    adapter = ConsoleAdapter(router=router, user_id=user_id)
    router.bind_adapter(adapter)

    LOGGER.info(
        "Loaded %s command(s); prefix %r, activity %r",
        len(router.dispatcher.registry),
        config.prefix,
        config.activity,
    )

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def _request_shutdown() -> None:
        LOGGER.info("Shutdown requested")
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _request_shutdown)
        except NotImplementedError:
            # Windows event loops do not support signal handlers.
            pass

    adapter_task = asyncio.create_task(adapter.start())
    stop_task = asyncio.create_task(stop_event.wait())
    LOGGER.info("cmdbot started")

    await asyncio.wait({adapter_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
    await adapter.stop()
    for task in (adapter_task, stop_task):
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
    LOGGER.info("Shutdown complete")


if __name__ == "__main__":
    raise SystemExit(cli())
