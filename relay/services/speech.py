import base64
import logging
from typing import Optional

from relay.providers.base import ProviderError
from relay.providers.openai import OpenAIProvider

logger = logging.getLogger(__name__)


async def synthesize_speech(
    provider: OpenAIProvider,
    text: str,
    *,
    model: str,
    voice: str,
    fmt: str = "mp3",
) -> Optional[str]:
    """Best-effort TTS; returns base64 audio or None, never raises on upstream failure."""
    if not text.strip():
        return None
    try:
        audio = await provider.speech(text, model=model, voice=voice, response_format=fmt)
    except ProviderError as e:
        logger.warning("speech synthesis failed (model=%s voice=%s): %s", model, voice, e)
        return None
    return base64.b64encode(audio).decode("ascii")
