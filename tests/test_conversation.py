# tests/test_conversation.py
import pytest

from relay.core.errors import EmptyConversationError
from relay.schemas.chat import RelayRequest
from relay.services.conversation import resolve_conversation


def test_messages_win_over_free_text():
    # A non-empty messages list beats any free-text field.
    req = RelayRequest(
        message="ignored",
        messages=[{"role": "user", "content": "from list"}],
    )
    turns = resolve_conversation(req)
    assert [(t.role, t.content) for t in turns] == [("user", "from list")]


@pytest.mark.parametrize("field", ["message", "prompt", "query", "text"])
def test_each_free_text_alias(field):
    # Every free-text alias is accepted and trimmed.
    turns = resolve_conversation(RelayRequest(**{field: "  hi  "}))
    assert [(t.role, t.content) for t in turns] == [("user", "hi")]


def test_query_string_alias_when_body_missing():
    # Query-string aliases work when there is no body at all.
    turns = resolve_conversation(None, {"prompt": "from query"})
    assert turns[-1].content == "from query"


def test_history_then_message():
    # History turns come first, then the new free-text turn.
    req = RelayRequest(
        message="and now?",
        history=[
            {"role": "user", "content": "first"},
            {"role": "assistant", "content": "reply"},
        ],
    )
    turns = resolve_conversation(req)
    assert [t.role for t in turns] == ["user", "assistant", "user"]
    assert turns[-1].content == "and now?"


def test_unknown_roles_become_user_and_blank_turns_dropped():
    # Unknown roles become user turns and blank turns are dropped.
    req = RelayRequest(messages=[
        {"role": "Tool", "content": "x"},
        {"role": "assistant", "content": "   "},
    ])
    turns = resolve_conversation(req)
    assert [(t.role, t.content) for t in turns] == [("user", "x")]


def test_assistant_id_aliases():
    # assistantId and assistant_id are both accepted.
    assert RelayRequest(assistantId="asst_a").assistant_id == "asst_a"
    assert RelayRequest(assistant_id="asst_b").assistant_id == "asst_b"


def test_system_prompt_prepended_only_without_system_turn():
    # A route prompt never overrides the caller's own system turn.
    turns = resolve_conversation(RelayRequest(message="hi"), system_prompt="Be kind.")
    assert turns[0].role == "system" and turns[0].content == "Be kind."

    req = RelayRequest(messages=[{"role": "system", "content": "Own rules."}, {"role": "user", "content": "hi"}])
    turns = resolve_conversation(req, system_prompt="Be kind.")
    assert [t.content for t in turns] == ["Own rules.", "hi"]


def test_empty_input_raises():
    # Blank input in any shape raises the 400 error.
    with pytest.raises(EmptyConversationError):
        resolve_conversation(RelayRequest(message="   ", messages=[]))
    with pytest.raises(EmptyConversationError):
        resolve_conversation(None, {})
