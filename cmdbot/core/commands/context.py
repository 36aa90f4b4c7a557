"""Shared data passed to command handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CommandContext:
    channel: str
    author_id: str
    message_id: Optional[str] = None
