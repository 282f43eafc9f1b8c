"""
Assistant mode: a thread is created per request, the conversation is copied
into it, and a run of the assistant is polled until it reaches a terminal state.

Run lifecycle as reported upstream:
    queued -> in_progress -> completed
    queued / in_progress -> cancelling -> cancelled
    queued / in_progress -> failed | expired | incomplete
Only "completed" yields an answer.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

from relay.providers.base import ProviderError, RunNotCompleted, UpstreamTimeout
from relay.providers.openai import OpenAIProvider
from relay.schemas.chat import ConversationTurn

logger = logging.getLogger(__name__)

PENDING_STATUSES = {"queued", "in_progress", "cancelling"}
PLACEHOLDER_ASSISTANT_IDS = {
    "asst_xxx",
    "asst_...",
    "asst_your_id",
    "your_assistant_id",
    "assistant_id",
    "changeme",
    "none",
    "null",
}


def is_placeholder_assistant_id(value: Optional[str]) -> bool:
    v = (value or "").strip().lower()
    return not v or v in PLACEHOLDER_ASSISTANT_IDS or "xxxx" in v


def thread_turns(turns: List[ConversationTurn], *, include_system: bool) -> List[ConversationTurn]:
    # threads only accept user/assistant authors
    out: List[ConversationTurn] = []
    for t in turns:
        if t.role == "system" and not include_system:
            continue
        role = "assistant" if t.role == "assistant" else "user"
        out.append(ConversationTurn(role=role, content=t.content))
    return out


def latest_assistant_text(data: Dict[str, Any]) -> str:
    messages = data.get("data")
    if not isinstance(messages, list):
        return ""
    for msg in messages:
        if not isinstance(msg, dict) or msg.get("role") != "assistant":
            continue
        parts: List[str] = []
        for part in msg.get("content") or []:
            if not isinstance(part, dict) or part.get("type") != "text":
                continue
            text = part.get("text")
            value = text.get("value") if isinstance(text, dict) else text
            if isinstance(value, str):
                parts.append(value)
        return "\n".join(parts).strip()
    return ""


async def _wait_for_run(
    provider: OpenAIProvider,
    thread_id: str,
    run_id: str,
    run: Dict[str, Any],
    *,
    poll_interval: float,
    max_polls: int,
    timeout: float,
) -> Dict[str, Any]:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    polls = 0
    while run.get("status") in PENDING_STATUSES:
        if polls >= max_polls or loop.time() >= deadline:
            await _cancel_quietly(provider, thread_id, run_id)
            raise UpstreamTimeout(
                f"Assistant run {run_id} did not finish after {polls} polls"
            )
        await asyncio.sleep(poll_interval)
        run = await provider.get_run(thread_id, run_id)
        polls += 1
    return run


async def _cancel_quietly(provider: OpenAIProvider, thread_id: str, run_id: str) -> None:
    try:
        await provider.cancel_run(thread_id, run_id)
    except ProviderError as e:
        logger.info("could not cancel run %s: %s", run_id, e)


async def run_assistant(
    provider: OpenAIProvider,
    assistant_id: str,
    turns: List[ConversationTurn],
    *,
    include_system: bool = False,
    poll_interval: float = 1.0,
    max_polls: int = 60,
    timeout: float = 90.0,
) -> str:
    to_send = thread_turns(turns, include_system=include_system)
    if not to_send:
        raise ProviderError("No user or assistant turns to send to the assistant thread.")

    thread_id = await provider.create_thread()
    for t in to_send:
        await provider.add_message(thread_id, t.role, t.content)

    run = await provider.create_run(thread_id, assistant_id)
    # create_run guarantees the id; poll replies are not trusted to repeat it
    run_id = run["id"]
    run = await _wait_for_run(
        provider, thread_id, run_id, run, poll_interval=poll_interval, max_polls=max_polls, timeout=timeout
    )

    status = run.get("status")
    if status == "requires_action":
        # no tools are served here, so the run would otherwise sit until it expires
        await _cancel_quietly(provider, thread_id, run_id)
    if status != "completed":
        last_error = run.get("last_error")
        detail = last_error.get("message") if isinstance(last_error, dict) else None
        raise RunNotCompleted(str(status), detail)

    return latest_assistant_text(await provider.list_messages(thread_id))
