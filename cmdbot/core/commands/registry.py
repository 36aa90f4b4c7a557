"""Central registry of supported chat commands."""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional, Sequence, Tuple

from ..errors import DuplicateCommand

LOGGER = logging.getLogger(__name__)

DEFAULT_PREFIX = "s-"
DEFAULT_SEPARATOR = "="

CommandHandler = Callable[..., Awaitable[None]]


@dataclass(frozen=True)
class CommandSpec:
    """Metadata describing a single registered command."""

    name: str
    handler: CommandHandler
    usage: str = ""
    description: str = ""
    requires_prefix: bool = True
    aliases: Tuple[str, ...] = ()

    @property
    def all_names(self) -> Tuple[str, ...]:
        return (self.name, *self.aliases)

    def alias_display(self, prefix: str) -> str:
        """Return formatted alias hint for help output."""
        if not self.aliases:
            return ""
        rendered = ", ".join(f"{prefix}{alias}" for alias in self.aliases)
        return f" (aliases: {rendered})"


@dataclass(frozen=True)
class CommandMatch:
    """A registered command found inside free text."""

    spec: CommandSpec
    span: Tuple[int, int]

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def requires_prefix(self) -> bool:
        return self.spec.requires_prefix


@dataclass(frozen=True)
class RegistrySnapshot:
    """Consistent read-only view of the registry at one instant."""

    prefix: str
    separator: str
    specs: Tuple[CommandSpec, ...]

    def includes_command(self, text: str) -> Optional[CommandMatch]:
        """Return a registered command named in ``text``.

        Commands usable without the prefix win over prefix-only ones; within
        each group registration order decides.
        """
        relaxed = [spec for spec in self.specs if not spec.requires_prefix]
        strict = [spec for spec in self.specs if spec.requires_prefix]
        for group in (relaxed, strict):
            found = _search_specs(group, text)
            if found is not None:
                return found
        return None


class CommandRegistry:
    """Thread-safe table of commands plus the active prefix configuration."""

    def __init__(
        self,
        prefix: str = DEFAULT_PREFIX,
        separator: str = DEFAULT_SEPARATOR,
        specs: Optional[Iterable[CommandSpec]] = None,
    ) -> None:
        if not prefix:
            raise ValueError("prefix must not be empty")
        self._lock = threading.RLock()
        self._prefix = prefix
        self._separator = separator
        self._specs: Dict[str, CommandSpec] = {}
        self._names: Dict[str, str] = {}
        for spec in specs or ():
            self.register(spec)

    @property
    def prefix(self) -> str:
        with self._lock:
            return self._prefix

    @prefix.setter
    def prefix(self, value: str) -> None:
        if not value:
            raise ValueError("prefix must not be empty")
        with self._lock:
            self._prefix = value

    @property
    def separator(self) -> str:
        with self._lock:
            return self._separator

    def add(
        self,
        name: str,
        handler: CommandHandler,
        *,
        usage: str = "",
        description: str = "",
        requires_prefix: bool = True,
        aliases: Sequence[str] = (),
    ) -> CommandSpec:
        spec = CommandSpec(
            name=name,
            handler=handler,
            usage=usage,
            description=description,
            requires_prefix=requires_prefix,
            aliases=tuple(aliases),
        )
        self.register(spec)
        return spec

    def register(self, spec: CommandSpec) -> None:
        with self._lock:
            for candidate in spec.all_names:
                owner = self._names.get(candidate.lower())
                if owner is not None:
                    raise DuplicateCommand(
                        f"Command name `{candidate}` already registered by `{owner}`"
                    )
            self._specs[spec.name] = spec
            for candidate in spec.all_names:
                self._names[candidate.lower()] = spec.name
        LOGGER.debug("Registered command %s (requires prefix: %s)", spec.name, spec.requires_prefix)

    def allow_without_prefix(self, names: Iterable[str]) -> None:
        """Mark the named commands as invocable without the prefix."""
        with self._lock:
            for name in names:
                canonical = self._names.get(name.lower())
                if canonical is None:
                    LOGGER.warning("Cannot relax prefix for unknown command %s", name)
                    continue
                spec = self._specs[canonical]
                self._specs[canonical] = CommandSpec(
                    name=spec.name,
                    handler=spec.handler,
                    usage=spec.usage,
                    description=spec.description,
                    requires_prefix=False,
                    aliases=spec.aliases,
                )

    def snapshot(self) -> RegistrySnapshot:
        with self._lock:
            return RegistrySnapshot(
                prefix=self._prefix,
                separator=self._separator,
                specs=tuple(self._specs.values()),
            )

    def get_spec(self, name: str) -> Optional[CommandSpec]:
        """Return the command spec for a given name or alias."""
        with self._lock:
            canonical = self._names.get(name.lower())
            return self._specs.get(canonical) if canonical else None

    def includes_command(self, text: str) -> Optional[CommandMatch]:
        return self.snapshot().includes_command(text)

    def iter_specs(self) -> Sequence[CommandSpec]:
        """Return the registered specs in registration order."""
        return self.snapshot().specs

    def __contains__(self, name: Any) -> bool:
        return isinstance(name, str) and self.get_spec(name) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._specs)


def _keyword_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf"(?<!\w){re.escape(name)}(?!\w)", re.IGNORECASE)


def _search_specs(specs: Iterable[CommandSpec], text: str) -> Optional[CommandMatch]:
    for spec in specs:
        for candidate in spec.all_names:
            found = _keyword_pattern(candidate).search(text)
            if found:
                return CommandMatch(spec=spec, span=found.span())
    return None
