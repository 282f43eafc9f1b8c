# centralized configuration loader
# load_settings() reads .env once at startup; the resulting Settings is frozen
# and handed to handlers through app.state, never re-read mid-request

import os
from dataclasses import dataclass
from typing import Optional, Tuple
from dotenv import load_dotenv

ROUTES = ("chat", "blog", "school", "avatar")

DEFAULT_MODELS = {
    "chat": "gpt-4o",
    "blog": "gpt-4o-mini",
    "school": "gpt-4o-mini",
    "avatar": "gpt-4o-mini",
}


def _bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "y"}


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


@dataclass(frozen=True)
class RouteConfig:
    name: str
    api_key: str
    model: str
    assistant_id: str


@dataclass(frozen=True)
class Settings:
    # Provider
    provider: str = "openai"
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    upstream_timeout: float = 60.0

    # Per-route overrides, empty string means "use the global value"
    route_api_keys: Tuple[Tuple[str, str], ...] = ()
    route_models: Tuple[Tuple[str, str], ...] = ()
    route_assistant_ids: Tuple[Tuple[str, str], ...] = ()

    # Assistant mode
    assistant_id: str = ""
    assistant_fallback: bool = True
    assistant_include_system: bool = False
    run_poll_interval: float = 1.0
    run_max_polls: int = 60
    run_timeout: float = 90.0

    # Generation
    temperature: float = 0.7
    max_tokens: Optional[int] = None

    # Speech
    tts_model: str = "gpt-4o-mini-tts"
    tts_voice: str = "alloy"
    tts_format: str = "mp3"
    avatar_voice: bool = True

    # Server
    cors_origins: Tuple[str, ...] = ("*",)
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    def route(self, name: str) -> RouteConfig:
        keys = dict(self.route_api_keys)
        models = dict(self.route_models)
        assistants = dict(self.route_assistant_ids)
        return RouteConfig(
            name=name,
            api_key=keys.get(name) or self.openai_api_key,
            model=models.get(name) or DEFAULT_MODELS.get(name, DEFAULT_MODELS["chat"]),
            assistant_id=assistants.get(name) or self.assistant_id,
        )


def load_settings() -> Settings:
    load_dotenv()

    def per_route(suffix: str) -> Tuple[Tuple[str, str], ...]:
        pairs = []
        for r in ROUTES:
            value = os.getenv(f"{r.upper()}_{suffix}", "").strip()
            if value:
                pairs.append((r, value))
        return tuple(pairs)

    origins = tuple(o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip())

    return Settings(
        provider=os.getenv("PROVIDER", "openai").strip().lower(),
        openai_api_key=os.getenv("OPENAI_API_KEY", "").strip(),
        openai_base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/"),
        upstream_timeout=float(os.getenv("UPSTREAM_TIMEOUT", "60")),
        route_api_keys=per_route("OPENAI_API_KEY"),
        route_models=per_route("MODEL"),
        route_assistant_ids=per_route("ASSISTANT_ID"),
        assistant_id=os.getenv("ASSISTANT_ID", "").strip(),
        assistant_fallback=_bool("ASSISTANT_FALLBACK", "true"),
        assistant_include_system=_bool("ASSISTANT_INCLUDE_SYSTEM", "false"),
        run_poll_interval=float(os.getenv("RUN_POLL_INTERVAL", "1.0")),
        run_max_polls=int(os.getenv("RUN_MAX_POLLS", "60")),
        run_timeout=float(os.getenv("RUN_TIMEOUT", "90")),
        temperature=float(os.getenv("TEMPERATURE", "0.7")),
        max_tokens=_optional_int("MAX_TOKENS"),
        tts_model=os.getenv("TTS_MODEL", "gpt-4o-mini-tts"),
        tts_voice=os.getenv("TTS_VOICE", "alloy"),
        tts_format=os.getenv("TTS_FORMAT", "mp3"),
        avatar_voice=_bool("AVATAR_VOICE", "true"),
        cors_origins=origins or ("*",),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
    )
