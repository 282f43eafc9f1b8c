import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request
from relay.api.deps import get_settings
from relay.api.routers.chat import ERROR_RESPONSES
from relay.core.config import Settings
from relay.providers.factory import get_provider
from relay.schemas.chat import ArticleRequest, ArticleResponse
from relay.services.article import ARTICLE_SYSTEM_PROMPT, build_article_messages, unwrap_article
from relay.services.chat_service import generate_answer
from relay.services.conversation import first_text, resolve_conversation

router = APIRouter(tags=["blog"])
logger = logging.getLogger(__name__)


@router.post("/blog", response_model=ArticleResponse, responses=ERROR_RESPONSES)
async def blog(request: Request, payload: Optional[ArticleRequest] = None, settings: Settings = Depends(get_settings)):
    req = payload or ArticleRequest()
    topic = (req.topic or request.query_params.get("topic") or "").strip()

    if topic and not req.messages:
        turns = build_article_messages(
            topic, tone=req.tone, min_words=req.min_words, extra=first_text(req, request.query_params) or None
        )
    else:
        turns = resolve_conversation(req, request.query_params, system_prompt=ARTICLE_SYSTEM_PROMPT)

    route = settings.route("blog")
    provider = get_provider(settings, "blog")
    answer = await generate_answer(
        provider,
        turns,
        settings=settings,
        route=route,
        model=req.model,
        assistant_id=req.assistant_id,
        temperature=req.temperature,
        max_tokens=req.max_tokens,
    )

    article = unwrap_article(answer.text, default_title=topic)
    logger.info("blog article generated via %s mode (%d chars)", answer.mode, len(article.content))
    return ArticleResponse(ok=True, title=article.title, content=article.content)
