"""
Article generation for the /blog route.

Models are asked for a JSON object but sometimes answer in prose, sometimes in
JSON, and sometimes in JSON wrapped in a markdown fence. unwrap_article accepts
all three.
"""
import json
import re
from dataclasses import dataclass
from typing import List, Optional

from relay.schemas.chat import ConversationTurn

_FENCE = re.compile(r"^\s*```[\w-]*[ \t]*\n?(.*?)\n?```\s*$", re.DOTALL)

ARTICLE_SYSTEM_PROMPT = (
    "You are a professional blog writer. Reply with a single JSON object of the form "
    '{"title": "...", "content": "..."} where content is the full article in HTML '
    "paragraphs. Do not add any text outside the JSON object."
)


@dataclass(frozen=True)
class Article:
    title: str
    content: str


def build_article_prompt(
    topic: str,
    *,
    tone: Optional[str] = None,
    min_words: Optional[int] = None,
    extra: Optional[str] = None,
) -> str:
    lines = [f"Write a blog article about: {topic}."]
    if tone:
        lines.append(f"Tone: {tone}.")
    if min_words:
        lines.append(f"Length: at least {min_words} words.")
    if extra:
        lines.append(f"Additional instructions: {extra}")
    return "\n".join(lines)


def build_article_messages(
    topic: str,
    *,
    tone: Optional[str] = None,
    min_words: Optional[int] = None,
    extra: Optional[str] = None,
) -> List[ConversationTurn]:
    return [
        ConversationTurn(role="system", content=ARTICLE_SYSTEM_PROMPT),
        ConversationTurn(
            role="user",
            content=build_article_prompt(topic, tone=tone, min_words=min_words, extra=extra),
        ),
    ]


def strip_code_fence(text: str) -> str:
    m = _FENCE.match(text or "")
    return m.group(1).strip() if m else (text or "").strip()


def unwrap_article(text: str, *, default_title: str = "") -> Article:
    body = strip_code_fence(text)
    try:
        data = json.loads(body)
    except ValueError:
        return Article(title=default_title, content=text)
    if isinstance(data, dict) and isinstance(data.get("content"), str):
        title = data.get("title")
        return Article(title=title if isinstance(title, str) else default_title, content=data["content"])
    return Article(title=default_title, content=text)
