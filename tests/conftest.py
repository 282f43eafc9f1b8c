# tests/conftest.py
import os
import logging
import pytest
import pytest_asyncio
from dataclasses import replace
from httpx import AsyncClient, ASGITransport

# Ensure test-friendly env before the app module is imported
os.environ.setdefault("OPENAI_API_KEY", "sk-test")
os.environ.setdefault("RUN_POLL_INTERVAL", "0")
os.environ.setdefault("RUN_MAX_POLLS", "5")

# IMPORTANT: import the app after envs are set
from relay.core.config import Settings
from relay.main import create_app

BASE = "https://api.openai.com/v1"


@pytest.fixture
def settings() -> Settings:
    # explicit values so a developer's .env cannot leak into tests
    return Settings(
        openai_api_key="sk-test",
        openai_base_url=BASE,
        run_poll_interval=0.0,
        run_max_polls=5,
        run_timeout=5.0,
        max_tokens=None,
    )


@pytest.fixture
def make_client():
    # build a client around an app with custom settings: async with make_client(s) as c
    def _make(settings: Settings) -> AsyncClient:
        transport = ASGITransport(app=create_app(settings))
        return AsyncClient(transport=transport, base_url="http://test")
    return _make


@pytest_asyncio.fixture
async def client(settings, make_client):
    async with make_client(settings) as ac:
        yield ac


@pytest.fixture
def with_assistant(settings):
    return replace(settings, assistant_id="asst_live123")


@pytest.fixture
def caplog_info(caplog):
    caplog.set_level(logging.INFO)
    return caplog
