"""Shared fixtures for command handler tests."""

from __future__ import annotations

import pytest

from cmdbot.core.commands.context import CommandContext
from cmdbot.core.commands.dispatcher import CommandDispatcher
from cmdbot.core.commands.registry import CommandRegistry
from cmdbot.core.models import ChatMessage


@pytest.fixture
def mock_send_message():
    """Async mock for send_message that prints to terminal."""

    messages: list[dict[str, str]] = []

    async def _send(channel: str, text: str):
        print(f"\n{'='*60}")
        print("CHAT OUTPUT")
        print(f"   Channel: {channel}")
        print(f"{'-'*60}")
        print(f"{text}")
        print(f"{'='*60}\n")
        messages.append({"channel": channel, "text": text})

    _send.messages = messages  # type: ignore[attr-defined]
    return _send


@pytest.fixture
def registry():
    return CommandRegistry(prefix="s-")


@pytest.fixture
def dispatcher(registry):
    return CommandDispatcher(registry)


@pytest.fixture
def command_context():
    return CommandContext(channel="C123456", author_id="111", message_id="1")


@pytest.fixture
def parse(dispatcher):
    """Parse text through the dispatcher's registry."""

    def _parse(text: str):
        return dispatcher.parse(ChatMessage(content=text, channel="C123456", author_id="111"))

    return _parse
