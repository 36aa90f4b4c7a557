"""Core domain logic for cmdbot."""

from .config import Config, load_config
from .errors import (
    CmdBotError,
    CommandNotFound,
    ConfigError,
    DuplicateCommand,
    MentionNotFound,
)
from .models import ChatMessage, CommandIdentity, Mention, MentionKind
from .commands.parser import parse_request
from .commands.registry import CommandRegistry, CommandSpec
from .commands.request import CommandRequest
from .router import Router

__all__ = [
    "Config",
    "load_config",
    "ChatMessage",
    "CommandIdentity",
    "Mention",
    "MentionKind",
    "CmdBotError",
    "CommandNotFound",
    "ConfigError",
    "DuplicateCommand",
    "MentionNotFound",
    "parse_request",
    "CommandRegistry",
    "CommandSpec",
    "CommandRequest",
    "Router",
]
