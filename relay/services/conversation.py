from typing import List, Mapping, Optional

from relay.core.errors import EmptyConversationError
from relay.schemas.chat import ConversationTurn, RelayRequest

# checked in this order, body before query string
TEXT_ALIASES = ("message", "prompt", "query", "text")


def first_text(payload: Optional[RelayRequest], query_params: Optional[Mapping[str, str]] = None) -> str:
    if payload is not None:
        for name in TEXT_ALIASES:
            value = getattr(payload, name, None)
            if isinstance(value, str) and value.strip():
                return value.strip()
    for name in TEXT_ALIASES:
        value = (query_params or {}).get(name)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def _clean(turns: Optional[List[ConversationTurn]]) -> List[ConversationTurn]:
    return [t for t in (turns or []) if t.content.strip()]


def resolve_conversation(
    payload: Optional[RelayRequest],
    query_params: Optional[Mapping[str, str]] = None,
    *,
    system_prompt: Optional[str] = None,
) -> List[ConversationTurn]:
    """
    Turn whichever input shape the client used into one ordered turn list.
    A non-empty `messages` list wins; otherwise `history` plus the first free-text alias.
    """
    turns = _clean(payload.messages if payload is not None else None)
    if not turns:
        turns = _clean(payload.history if payload is not None else None)
        text = first_text(payload, query_params)
        if text:
            turns.append(ConversationTurn(role="user", content=text))

    if not turns:
        raise EmptyConversationError()

    if system_prompt and not any(t.role == "system" for t in turns):
        turns.insert(0, ConversationTurn(role="system", content=system_prompt))
    return turns


def to_messages(turns: List[ConversationTurn]) -> List[dict]:
    return [{"role": t.role, "content": t.content} for t in turns]
