import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request
from relay.api.deps import get_settings
from relay.core.config import Settings
from relay.providers.factory import get_provider
from relay.schemas.chat import ChatResponse, ErrorResponse, RelayRequest
from relay.services.chat_service import generate_answer
from relay.services.conversation import resolve_conversation
from relay.services.prompt import load_system_prompt
from relay.services.speech import synthesize_speech

router = APIRouter(tags=["chat"])
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}, 504: {"model": ErrorResponse}}


async def relay_chat(
    route_name: str,
    payload: Optional[RelayRequest],
    request: Request,
    settings: Settings,
    *,
    voice_default: bool = False,
) -> ChatResponse:
    turns = resolve_conversation(
        payload, request.query_params, system_prompt=load_system_prompt(route_name)
    )
    req = payload or RelayRequest()
    route = settings.route(route_name)
    provider = get_provider(settings, route_name)

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
    logger.info("%s answered via %s mode (%d chars)", route_name, answer.mode, len(answer.text))

    voice = voice_default if req.voice is None else req.voice
    if not voice:
        return ChatResponse.build(answer.text)

    audio = await synthesize_speech(
        provider,
        answer.text,
        model=req.tts_model or settings.tts_model,
        voice=req.tts_voice or settings.tts_voice,
        fmt=settings.tts_format,
    )
    return ChatResponse.build(answer.text, voice=True, audio=audio)


@router.post("/chat", response_model=ChatResponse, response_model_exclude_unset=True, responses=ERROR_RESPONSES)
async def chat(request: Request, payload: Optional[RelayRequest] = None, settings: Settings = Depends(get_settings)):
    return await relay_chat("chat", payload, request, settings)


@router.post("/school", response_model=ChatResponse, response_model_exclude_unset=True, responses=ERROR_RESPONSES)
async def school(request: Request, payload: Optional[RelayRequest] = None, settings: Settings = Depends(get_settings)):
    return await relay_chat("school", payload, request, settings)


@router.post("/avatar", response_model=ChatResponse, response_model_exclude_unset=True, responses=ERROR_RESPONSES)
async def avatar(request: Request, payload: Optional[RelayRequest] = None, settings: Settings = Depends(get_settings)):
    return await relay_chat("avatar", payload, request, settings, voice_default=settings.avatar_voice)
