import logging
from typing import Any, Dict
from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from relay.api.deps import get_settings
from relay.core.config import Settings
from relay.providers.factory import get_provider

router = APIRouter(tags=["passthrough"])
logger = logging.getLogger(__name__)


async def _forward(path: str, body: Dict[str, Any], settings: Settings) -> JSONResponse:
    provider = get_provider(settings, "chat")
    status, data = await provider.forward(path, body)
    if status >= 400:
        logger.warning("upstream %s returned %s", path, status)
    return JSONResponse(content=data, status_code=status)


# request bodies go upstream untouched; the caller speaks the upstream API directly
@router.post("/v1/chat/completions")
async def chat_completions(body: Dict[str, Any] = Body(...), settings: Settings = Depends(get_settings)):
    return await _forward("chat/completions", body, settings)


@router.post("/v1/responses")
async def responses(body: Dict[str, Any] = Body(...), settings: Settings = Depends(get_settings)):
    return await _forward("responses", body, settings)
