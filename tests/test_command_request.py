"""Tests for CommandRequest accessors and logging."""

from __future__ import annotations

import logging
import pickle

import pytest

from cmdbot.core.commands.request import CommandRequest
from cmdbot.core.errors import MentionNotFound
from cmdbot.core.models import ChatMessage, Mention, MentionKind


ROLE = Mention(id="900", raw_token="<@&900>", kind=MentionKind.ROLE)
USER = Mention(id="100", raw_token="<@100>", kind=MentionKind.USER)


@pytest.fixture
def request_with_mentions():
    return CommandRequest(
        ChatMessage(content="s-debug <@&900> <@100> --a 1 hi"),
        command="debug",
        has_prefix=True,
        parameters={"a": "1"},
        mentions=[ROLE, USER],
        residual_text="hi",
    )


class TestMentionAccessors:
    """Indexed mention access checks the kind."""

    def test_role_at_matching_position(self, request_with_mentions):
        assert request_with_mentions.role_at(0) == ROLE

    def test_user_at_role_position_fails(self, request_with_mentions):
        """A role at the position is not returned as a user."""
        with pytest.raises(MentionNotFound) as exc_info:
            request_with_mentions.user_at(0)
        print(f"\n OUTPUT: {exc_info.value}")
        assert exc_info.value.position == 0
        assert exc_info.value.kind == MentionKind.USER

    def test_user_at_second_position(self, request_with_mentions):
        assert request_with_mentions.user_at(1) == USER
        assert request_with_mentions.mention_at(1, MentionKind.USER) == USER

    def test_role_at_user_position_fails(self, request_with_mentions):
        with pytest.raises(MentionNotFound):
            request_with_mentions.role_at(1)

    @pytest.mark.parametrize("position", [2, -1, -2])
    def test_out_of_range_fails(self, request_with_mentions, position):
        with pytest.raises(MentionNotFound):
            request_with_mentions.mention_at(position, MentionKind.USER)

    def test_iter_mentions_is_iterator(self, request_with_mentions):
        mentions = request_with_mentions.iter_mentions()
        assert next(mentions) == ROLE
        assert list(mentions) == [USER]
        assert request_with_mentions.mention_count == 2


class TestRequestState:
    """Construction and snapshot behaviour."""

    def test_not_a_command_clears_fields(self):
        request = CommandRequest(
            ChatMessage(content="hi"),
            command=None,
            has_prefix=True,
            parameters={"a": "1"},
            mentions=[USER],
            residual_text="hi",
        )
        assert request.is_command is False
        assert request.has_prefix is False
        assert dict(request.parameters) == {}
        assert request.mention_count == 0
        assert request.residual_text == ""

    def test_parameters_read_only(self, request_with_mentions):
        with pytest.raises(TypeError):
            request_with_mentions.parameters["b"] = "2"  # type: ignore[index]

    def test_equality_ignores_message(self, request_with_mentions):
        other = CommandRequest(
            ChatMessage(content="something else"),
            command="debug",
            has_prefix=True,
            parameters={"a": "1"},
            mentions=[ROLE, USER],
            residual_text="hi",
        )
        assert other == request_with_mentions

    def test_log_snapshot_excludes_message(self, request_with_mentions, caplog):
        snapshot = request_with_mentions.log()
        print(f"\n OUTPUT: {snapshot}")
        assert snapshot == {
            "command": "debug",
            "has_prefix": True,
            "parameters": {"a": "1"},
            "mentions": [
                {"id": "900", "raw_token": "<@&900>", "kind": "ROLE"},
                {"id": "100", "raw_token": "<@100>", "kind": "USER"},
            ],
            "residual_text": "hi",
        }
        assert "message" not in snapshot
        assert caplog.records == []

    def test_log_emit_writes_record(self, request_with_mentions, caplog):
        with caplog.at_level(logging.INFO, logger="cmdbot.core.commands.request"):
            request_with_mentions.log(True, "extra-context")
        assert "debug" in caplog.text
        assert "extra-context" in caplog.text

    def test_log_snapshot_is_a_copy(self, request_with_mentions):
        snapshot = request_with_mentions.log()
        snapshot["parameters"]["a"] = "changed"
        assert request_with_mentions.parameters["a"] == "1"


class TestMentionNotFound:
    """The accessor error keeps its details."""

    def test_survives_pickling(self):
        error = MentionNotFound(3, MentionKind.ROLE)
        restored = pickle.loads(pickle.dumps(error))
        assert restored.position == 3
        assert restored.kind == MentionKind.ROLE
        assert str(restored) == "No role mention at position 3"

    def test_kind_defaults_to_any(self):
        assert str(MentionNotFound(0)) == "No any mention at position 0"
