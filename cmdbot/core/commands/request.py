"""Structured command invocation produced by the parser."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from ..errors import MentionNotFound
from ..models import ChatMessage, Mention, MentionKind

LOGGER = logging.getLogger(__name__)


class CommandRequest:
    """One parsed message: command name, parameters, mentions and leftover text.

    A request whose ``command`` is None represents a message that is not a
    command; all other fields then hold their empty defaults.

    Mentions are reached by position through :meth:`mention_at`,
    :meth:`user_at` and :meth:`role_at`, which also check the mention kind.
    :meth:`iter_mentions` exists for iteration and debugging only; per-position
    logic built on it silently loses the kind check.
    """

    def __init__(
        self,
        message: Optional[ChatMessage],
        command: Optional[str] = None,
        has_prefix: bool = False,
        parameters: Optional[Mapping[str, str]] = None,
        mentions: Iterable[Mention] = (),
        residual_text: str = "",
    ) -> None:
        self._message = message
        self._command = command
        if command is None:
            has_prefix, parameters, mentions, residual_text = False, None, (), ""
        self._has_prefix = has_prefix
        self._parameters: Mapping[str, str] = MappingProxyType(dict(parameters or {}))
        self._mentions: Tuple[Mention, ...] = tuple(mentions)
        self._residual_text = residual_text

    @property
    def message(self) -> Optional[ChatMessage]:
        return self._message

    @property
    def command(self) -> Optional[str]:
        return self._command

    @property
    def is_command(self) -> bool:
        return self._command is not None

    @property
    def has_prefix(self) -> bool:
        return self._has_prefix

    @property
    def parameters(self) -> Mapping[str, str]:
        return self._parameters

    @property
    def residual_text(self) -> str:
        return self._residual_text

    @property
    def mention_count(self) -> int:
        return len(self._mentions)

    def mention_at(self, position: int, kind: MentionKind) -> Mention:
        """Return the mention at ``position`` if it is of ``kind``.

        Raises:
            MentionNotFound: nothing sits at ``position``, or the mention
                there is of the other kind.
        """
        if 0 <= position < len(self._mentions):
            mention = self._mentions[position]
            if mention.kind == kind:
                return mention
        raise MentionNotFound(position, kind)

    def user_at(self, position: int) -> Mention:
        return self.mention_at(position, MentionKind.USER)

    def role_at(self, position: int) -> Mention:
        return self.mention_at(position, MentionKind.ROLE)

    def iter_mentions(self) -> Iterator[Mention]:
        return iter(self._mentions)

    def log(self, emit: bool = False, *extra: Any) -> Dict[str, Any]:
        """Return a plain snapshot of the request, optionally logging it."""
        snapshot: Dict[str, Any] = {
            "command": self._command,
            "has_prefix": self._has_prefix,
            "parameters": dict(self._parameters),
            "mentions": [
                {"id": mention.id, "raw_token": mention.raw_token, "kind": mention.kind.value}
                for mention in self._mentions
            ],
            "residual_text": self._residual_text,
        }
        if emit:
            LOGGER.info("Command request: %s%s", snapshot, "".join(f" {item!r}" for item in extra))
        return snapshot

    def _key(self) -> Tuple[Any, ...]:
        return (
            self._command,
            self._has_prefix,
            tuple(self._parameters.items()),
            self._mentions,
            self._residual_text,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandRequest):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return (
            f"CommandRequest(command={self._command!r}, has_prefix={self._has_prefix!r}, "
            f"parameters={dict(self._parameters)!r}, mentions={list(self._mentions)!r}, "
            f"residual_text={self._residual_text!r})"
        )
