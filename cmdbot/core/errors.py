"""Custom exception hierarchy for cmdbot."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import MentionKind


class CmdBotError(Exception):
    """Base error type."""


class ConfigError(CmdBotError):
    pass


class CommandNotFound(CmdBotError):
    pass


class DuplicateCommand(CmdBotError):
    """Raised when a command name or alias is registered twice."""
    pass


class MentionNotFound(CmdBotError):
    """Raised when no mention of the requested kind sits at a position."""

    def __init__(self, position: int, kind: Optional[MentionKind] = None) -> None:
        super().__init__(position, kind)
        self.position = position
        self.kind = kind

    def __str__(self) -> str:
        label = self.kind.value.lower() if self.kind is not None else "any"
        return f"No {label} mention at position {self.position}"
