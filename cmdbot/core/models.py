"""Domain models for cmdbot."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class MentionKind(str, Enum):
    USER = "USER"
    ROLE = "ROLE"


@dataclass(frozen=True)
class Mention:
    id: str
    raw_token: str
    kind: MentionKind
    span: Tuple[int, int] = field(default=(0, 0), compare=False, repr=False)


@dataclass(frozen=True)
class CommandIdentity:
    """Outcome of command identification; ``name`` is None for plain chat."""

    name: Optional[str] = None
    has_prefix: bool = False
    span: Optional[Tuple[int, int]] = field(default=None, compare=False)


@dataclass(frozen=True)
class ChatMessage:
    """Raw message as delivered by a chat adapter."""

    content: str
    channel: str = ""
    author_id: str = ""
    message_id: Optional[str] = None
