"""Parser turning a raw chat message into a structured command request.

Every extractor scans the original message text independently; the residual
text is produced afterwards by removing all matched spans in one pass.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Tuple

from ..models import ChatMessage, CommandIdentity, Mention, MentionKind
from .registry import CommandRegistry, RegistrySnapshot
from .request import CommandRequest

LOGGER = logging.getLogger(__name__)

# <@123>, <@!123> (nickname), <@&123> (role), <@&!123>
MENTION_PATTERN = re.compile(r"<@(?P<role>&)?!?(?P<id>\d+)>", re.ASCII)
PARAMETER_PATTERN = re.compile(r"--(?P<key>[^\s=]+)(?:\s|=)(?P<value>\S+)")

Span = Tuple[int, int]


def parse_request(message: ChatMessage, registry: CommandRegistry) -> CommandRequest:
    """Parse ``message`` against a consistent view of ``registry``."""

    view = registry.snapshot()
    text = message.content
    identity = identify_command(text, view)
    if identity.name is None:
        LOGGER.debug("Message is not a command: %r", text)
        return CommandRequest(message)

    mentions = extract_mentions(text)
    parameters, parameter_spans = _scan_parameters(text)

    spans: List[Span] = [mention.span for mention in mentions]
    spans.extend(parameter_spans)
    if identity.span is not None:
        spans.append(identity.span)

    return CommandRequest(
        message,
        command=identity.name,
        has_prefix=identity.has_prefix,
        parameters=parameters,
        mentions=mentions,
        residual_text=compute_residual_text(text, spans),
    )


def identify_command(text: str, registry: RegistrySnapshot) -> CommandIdentity:
    """Resolve the command name via the prefix or a no-prefix registered command."""

    prefixed = re.match(rf"{re.escape(registry.prefix)}(\w+)", text, re.ASCII)
    if prefixed:
        return CommandIdentity(name=prefixed.group(1), has_prefix=True, span=prefixed.span())

    found = registry.includes_command(text)
    if found is None:
        return CommandIdentity()
    if found.requires_prefix:
        LOGGER.debug("Command %s mentioned without prefix; ignoring", found.name)
        return CommandIdentity()
    return CommandIdentity(name=found.name, has_prefix=False, span=found.span)


def extract_mentions(text: str) -> List[Mention]:
    mentions = []
    for match in MENTION_PATTERN.finditer(text):
        kind = MentionKind.ROLE if match.group("role") else MentionKind.USER
        mentions.append(
            Mention(id=match.group("id"), raw_token=match.group(0), kind=kind, span=match.span())
        )
    return mentions


def extract_parameters(text: str) -> Dict[str, str]:
    """Return ``--key value`` / ``--key=value`` pairs; later duplicates overwrite."""
    parameters, _ = _scan_parameters(text)
    return parameters


def compute_residual_text(text: str, spans: Iterable[Span]) -> str:
    """Remove every span from ``text`` and strip the ends.

    Spans index into ``text`` itself and may overlap; interior whitespace
    left behind is kept as-is.
    """

    pieces = []
    cursor = 0
    for start, end in sorted(spans):
        if start > cursor:
            pieces.append(text[cursor:start])
        cursor = max(cursor, end)
    pieces.append(text[cursor:])
    return "".join(pieces).strip()


def _scan_parameters(text: str) -> Tuple[Dict[str, str], List[Span]]:
    parameters: Dict[str, str] = {}
    spans: List[Span] = []
    for match in PARAMETER_PATTERN.finditer(text):
        parameters[match.group("key")] = match.group("value")
        spans.append(match.span())
    return parameters, spans
