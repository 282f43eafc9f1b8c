from typing import Any, Dict, List, Optional

from relay.providers.openai import OpenAIProvider
from relay.schemas.chat import ConversationTurn
from relay.services.conversation import to_messages

APOLOGY_TEXT = "Sorry, I couldn't come up with a reply right now. Please try again."


def first_choice_text(data: Dict[str, Any]) -> str:
    # upstream payloads are not trusted: any missing piece yields ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0] if isinstance(choices[0], dict) else {}
    message = first.get("message") if isinstance(first.get("message"), dict) else {}
    content = message.get("content")
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        parts = [p.get("text") for p in content if isinstance(p, dict) and isinstance(p.get("text"), str)]
        return "\n".join(parts).strip()
    return ""


async def complete(
    provider: OpenAIProvider,
    turns: List[ConversationTurn],
    *,
    model: str,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
) -> str:
    data = await provider.chat_completion(
        to_messages(turns), model=model, temperature=temperature, max_tokens=max_tokens
    )
    return first_choice_text(data) or APOLOGY_TEXT
