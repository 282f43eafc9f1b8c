# tests/test_chat_service.py
import pytest
import respx
import httpx

from relay.core.config import RouteConfig
from relay.providers.openai import OpenAIProvider
from relay.services.chat_service import pick_assistant_id
from relay.services.speech import synthesize_speech

BASE = "https://api.openai.com/v1"


def _route(assistant_id=""):
    return RouteConfig(name="chat", api_key="sk-test", model="gpt-4o", assistant_id=assistant_id)


def test_request_assistant_wins():
    # The request's assistant beats the configured one.
    assert pick_assistant_id("asst_req", _route("asst_cfg")) == "asst_req"


def test_placeholder_request_falls_to_configured():
    # A placeholder in the request falls through to the configured assistant.
    assert pick_assistant_id("asst_xxx", _route("asst_cfg")) == "asst_cfg"


def test_no_real_assistant_means_completion():
    # Without a real assistant id, completion mode is chosen.
    assert pick_assistant_id(None, _route("your_assistant_id")) is None
    assert pick_assistant_id("  ", _route()) is None


@pytest.mark.asyncio
async def test_speech_skips_blank_text():
    # Blank answers are never sent for synthesis.
    provider = OpenAIProvider(api_key="sk-test", base_url=BASE)
    with respx.mock(assert_all_called=False) as upstream:
        route = upstream.post(f"{BASE}/audio/speech").mock(return_value=httpx.Response(200, content=b"x"))
        assert await synthesize_speech(provider, "  ", model="tts-1", voice="alloy") is None
    assert not route.called


@pytest.mark.asyncio
@respx.mock
async def test_speech_transport_failure_returns_none():
    # Connection failures during speech give None instead of raising.
    respx.post(f"{BASE}/audio/speech").mock(side_effect=httpx.ConnectError("refused"))
    provider = OpenAIProvider(api_key="sk-test", base_url=BASE)
    assert await synthesize_speech(provider, "hello", model="tts-1", voice="alloy") is None
