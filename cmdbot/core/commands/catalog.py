"""Handlers for catalog-style commands (help)."""

from __future__ import annotations

from .base import BaseCommandHandler
from .context import CommandContext
from .dispatcher import CommandDispatcher
from .request import CommandRequest


class CatalogCommandHandler(BaseCommandHandler):
    """Operations that list the available commands."""

    def __init__(self, dispatcher: CommandDispatcher, send_message) -> None:
        super().__init__(send_message)
        self._dispatcher = dispatcher

    async def handle_help(self, request: CommandRequest, context: CommandContext) -> None:
        topic = request.residual_text.split()[0] if request.residual_text else ""
        if topic:
            spec = self._dispatcher.get_spec(topic)
            if spec is None:
                await self._reply(context, f"Unknown command `{topic}`")
                return
            prefix = self._dispatcher.registry.prefix
            await self._reply(context, f"`{prefix}{spec.usage or spec.name}` – {spec.description}")
            return
        lines = self._dispatcher.build_help_lines()
        await self._reply(context, "\n".join(lines))
