"""Handlers for diagnostic commands (ping, debug, whois)."""

from __future__ import annotations

import json
import logging

from .base import BaseCommandHandler
from .context import CommandContext
from .request import CommandRequest

LOGGER = logging.getLogger(__name__)


class DiagnosticsCommandHandler(BaseCommandHandler):
    """Commands that echo back what the bot understood."""

    async def handle_ping(self, request: CommandRequest, context: CommandContext) -> None:
        await self._reply(context, "pong")

    async def handle_debug(self, request: CommandRequest, context: CommandContext) -> None:
        snapshot = request.log(True, context.channel, context.author_id)
        rendered = json.dumps(snapshot, indent=2, ensure_ascii=False)
        await self._reply(context, f"```\n{rendered}\n```")

    async def handle_whois(self, request: CommandRequest, context: CommandContext) -> None:
        # MentionNotFound propagates so the router can send the usage hint.
        user = request.user_at(0)
        LOGGER.debug("Resolved whois target %s", user.id)
        await self._reply(context, f"{user.raw_token} has user id `{user.id}`")
