"""Command dispatch helpers that leverage the central registry."""

from __future__ import annotations

import logging
from typing import Optional

from ..errors import CommandNotFound
from ..models import ChatMessage
from .context import CommandContext
from .parser import parse_request
from .registry import CommandRegistry, CommandSpec
from .request import CommandRequest

LOGGER = logging.getLogger(__name__)


class CommandDispatcher:
    """Parses messages and hands command requests to their registered handler."""

    def __init__(self, registry: CommandRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    def get_spec(self, name: str) -> Optional[CommandSpec]:
        return self._registry.get_spec(name)

    def parse(self, message: ChatMessage) -> CommandRequest:
        return parse_request(message, self._registry)

    async def dispatch(self, request: CommandRequest, context: CommandContext) -> CommandSpec:
        """Invoke the handler registered for ``request.command``.

        Raises:
            CommandNotFound: the request is not a command or names no
                registered command.
        """
        if request.command is None:
            raise CommandNotFound("Message is not a command")
        spec = self.get_spec(request.command)
        if spec is None:
            raise CommandNotFound(request.command)

        LOGGER.info(
            "Dispatching %s for %s in channel %s",
            spec.name,
            context.author_id,
            context.channel,
        )
        await spec.handler(request, context)
        return spec

    def build_help_lines(self) -> list[str]:
        """Render help text for all commands."""

        view = self._registry.snapshot()
        lines = ["Available commands:"]
        for spec in view.specs:
            usage = spec.usage or spec.name
            alias_hint = spec.alias_display(view.prefix)
            no_prefix_hint = "" if spec.requires_prefix else " (prefix optional)"
            lines.append(
                f"- `{view.prefix}{usage}` – {spec.description}{alias_hint}{no_prefix_hint}"
            )
        lines.append("")
        lines.append("Parameters use `--key value` or `--key=value`.")
        return lines
