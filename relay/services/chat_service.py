import logging
from dataclasses import dataclass
from typing import List, Optional

from relay.core.config import RouteConfig, Settings
from relay.providers.base import ProviderError
from relay.providers.openai import OpenAIProvider
from relay.schemas.chat import ConversationTurn
from relay.services.assistant import is_placeholder_assistant_id, run_assistant
from relay.services.completion import APOLOGY_TEXT, complete

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Answer:
    text: str
    mode: str  # "assistant" or "completion"


def pick_assistant_id(requested: Optional[str], route: RouteConfig) -> Optional[str]:
    # a placeholder in the request does not hide a real configured assistant
    for candidate in (requested, route.assistant_id):
        if not is_placeholder_assistant_id(candidate):
            return candidate.strip()
    return None


async def generate_answer(
    provider: OpenAIProvider,
    turns: List[ConversationTurn],
    *,
    settings: Settings,
    route: RouteConfig,
    model: Optional[str] = None,
    assistant_id: Optional[str] = None,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
) -> Answer:
    """
    Assistant mode first when an assistant is configured, completion mode otherwise.
    A failed assistant run degrades to completion mode unless ASSISTANT_FALLBACK is off.
    """
    chosen = pick_assistant_id(assistant_id, route)
    if chosen:
        try:
            text = await run_assistant(
                provider,
                chosen,
                turns,
                include_system=settings.assistant_include_system,
                poll_interval=settings.run_poll_interval,
                max_polls=settings.run_max_polls,
                timeout=settings.run_timeout,
            )
            return Answer(text=text or APOLOGY_TEXT, mode="assistant")
        except ProviderError as e:
            if not settings.assistant_fallback:
                raise
            logger.warning(
                "assistant mode failed, falling back to completion: %s",
                e,
                exc_info=True,
                extra={"route": route.name, "assistant_id": chosen, "error_kind": type(e).__name__},
            )

    text = await complete(
        provider,
        turns,
        model=model or route.model,
        temperature=settings.temperature if temperature is None else temperature,
        max_tokens=settings.max_tokens if max_tokens is None else max_tokens,
    )
    return Answer(text=text, mode="completion")
