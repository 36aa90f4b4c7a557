"""Routes chat events to command handlers."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..chat_adapters.i_chat_adapter import IChatAdapter
from .commands.builtin import register_builtin_commands
from .commands.context import CommandContext
from .commands.dispatcher import CommandDispatcher
from .commands.registry import CommandRegistry
from .config import Config
from .errors import CommandNotFound, MentionNotFound
from .models import ChatMessage

LOGGER = logging.getLogger(__name__)


class Router:
    """Central orchestrator translating chat messages into command invocations."""

    def __init__(self, config: Config, registry: Optional[CommandRegistry] = None) -> None:
        self._config = config
        self._registry = registry or CommandRegistry(
            prefix=config.prefix, separator=config.separator
        )
        self._chat_adapter: Optional[IChatAdapter] = None
        self._dispatcher = CommandDispatcher(self._registry)
        register_builtin_commands(
            self._dispatcher,
            send_message=self._send_message,
            no_prefix_commands=config.no_prefix_commands,
        )

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    def bind_adapter(self, adapter: IChatAdapter) -> None:
        """Attach the chat adapter so the router can send replies."""

        self._chat_adapter = adapter

    async def handle_message(self, event: Dict[str, Any]) -> None:
        channel_id = event.get("channel") or ""
        author_id = event.get("user") or ""
        text = event.get("text") or ""

        if not self._config.is_user_allowed(author_id):
            LOGGER.debug("Ignoring message from unauthorized user %s", author_id)
            return

        message = ChatMessage(
            content=text,
            channel=channel_id,
            author_id=author_id,
            message_id=event.get("ts"),
        )
        request = self._dispatcher.parse(message)
        if not request.is_command:
            LOGGER.debug("Ignoring non-command message in %s", channel_id)
            return

        context = CommandContext(
            channel=channel_id,
            author_id=author_id,
            message_id=message.message_id,
        )
        try:
            await self._dispatcher.dispatch(request, context)
        except CommandNotFound:
            LOGGER.info("Unknown command %s from %s", request.command, author_id)
            await self._send_message(
                channel_id,
                f"Unknown command `{request.command}`. Use `{self._registry.prefix}help` "
                "to see supported commands.",
            )
        except MentionNotFound as exc:
            LOGGER.info("Command %s missing mention: %s", request.command, exc)
            spec = self._dispatcher.get_spec(request.command)
            usage = spec.usage if spec and spec.usage else request.command
            await self._send_message(
                channel_id,
                f"Usage: `{self._registry.prefix}{usage}`",
            )

    async def _send_message(self, channel: str, text: str) -> None:
        if not self._chat_adapter:
            LOGGER.warning("No chat adapter bound; dropping reply to %s", channel)
            return
        await self._chat_adapter.send_message(channel, text)
