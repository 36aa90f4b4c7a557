"""Registration of the commands that ship with the bot."""

from __future__ import annotations

from typing import Iterable

from .base import SendMessageFn
from .catalog import CatalogCommandHandler
from .diagnostics import DiagnosticsCommandHandler
from .dispatcher import CommandDispatcher


def register_builtin_commands(
    dispatcher: CommandDispatcher,
    send_message: SendMessageFn,
    no_prefix_commands: Iterable[str] = (),
) -> None:
    """Add help, ping, debug and whois to the dispatcher's registry."""

    registry = dispatcher.registry
    catalog = CatalogCommandHandler(dispatcher=dispatcher, send_message=send_message)
    diagnostics = DiagnosticsCommandHandler(send_message=send_message)

    registry.add(
        "help",
        catalog.handle_help,
        usage="help [command]",
        description="Show this command list or details for one command.",
        aliases=("commands",),
    )
    registry.add(
        "ping",
        diagnostics.handle_ping,
        usage="ping",
        description="Check that the bot is responding.",
    )
    registry.add(
        "debug",
        diagnostics.handle_debug,
        usage="debug [--key value ...] [@mentions] [text]",
        description="Show how the bot parsed your message.",
    )
    registry.add(
        "whois",
        diagnostics.handle_whois,
        usage="whois @user",
        description="Show the id of the mentioned user.",
    )
    registry.allow_without_prefix(no_prefix_commands)
