"""Integration tests for Router command handling."""

from __future__ import annotations

from typing import Dict

import pytest

from cmdbot.core.config import Config
from cmdbot.core.models import ChatMessage
from cmdbot.core.router import Router


class DummyChatAdapter:
    """Captures chat messages emitted by the router."""

    def __init__(self) -> None:
        self.messages: list[Dict[str, str]] = []

    async def send_message(self, channel: str, text: str) -> None:
        self.messages.append({"channel": channel, "text": text})


@pytest.fixture
def router_setup():
    config = Config(prefix="s-", no_prefix_commands=["ping"], allowed_user_ids=["111"])
    router = Router(config)
    adapter = DummyChatAdapter()
    router.bind_adapter(adapter)  # type: ignore[arg-type]
    return router, adapter


def _event(text: str, user: str = "111") -> Dict[str, str]:
    return {"channel": "C1", "user": user, "text": text, "ts": "1"}


@pytest.mark.asyncio
async def test_prefixed_command_dispatched(router_setup):
    router, adapter = router_setup
    await router.handle_message(_event("s-ping"))
    assert adapter.messages == [{"channel": "C1", "text": "pong"}]


@pytest.mark.asyncio
async def test_non_command_ignored(router_setup):
    router, adapter = router_setup
    await router.handle_message(_event("just chatting"))
    await router.handle_message(_event(""))
    assert adapter.messages == []


@pytest.mark.asyncio
async def test_unknown_command_replies_with_hint(router_setup):
    router, adapter = router_setup
    await router.handle_message(_event("s-frobnicate now"))
    assert adapter.messages[-1]["text"] == (
        "Unknown command `frobnicate`. Use `s-help` to see supported commands."
    )


@pytest.mark.asyncio
async def test_missing_mention_replies_with_usage(router_setup):
    router, adapter = router_setup
    await router.handle_message(_event("s-whois <@&5>"))
    assert adapter.messages[-1]["text"] == "Usage: `s-whois @user`"


@pytest.mark.asyncio
async def test_unauthorized_user_ignored(router_setup):
    router, adapter = router_setup
    await router.handle_message(_event("s-ping", user="999"))
    assert adapter.messages == []


@pytest.mark.asyncio
async def test_reply_without_adapter_is_dropped():
    router = Router(Config())
    await router.handle_message(_event("s-ping"))


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["ping me if you need help", "ping, list the commands"])
async def test_no_prefix_command_next_to_prefix_only_names(router_setup, text):
    router, adapter = router_setup
    request = router.dispatcher.parse(ChatMessage(content=text))
    assert request.command == "ping"
    assert request.has_prefix is False
    await router.handle_message(_event(text))
    assert adapter.messages == [{"channel": "C1", "text": "pong"}]


@pytest.mark.asyncio
async def test_prefix_only_command_still_gated(router_setup):
    router, adapter = router_setup
    await router.handle_message(_event("can you help me debug this"))
    assert adapter.messages == []
