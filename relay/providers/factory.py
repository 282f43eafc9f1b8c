from relay.core.config import Settings
from relay.core.errors import ConfigurationError
from relay.providers.openai import OpenAIProvider


def get_provider(settings: Settings, route: str) -> OpenAIProvider:
    if settings.provider != "openai":
        raise ConfigurationError(f"Unknown provider: {settings.provider}")
    rc = settings.route(route)
    if not rc.api_key:
        raise ConfigurationError(
            f"OPENAI_API_KEY is not configured (set OPENAI_API_KEY or {route.upper()}_OPENAI_API_KEY)"
        )
    return OpenAIProvider(
        api_key=rc.api_key,
        base_url=settings.openai_base_url,
        timeout=settings.upstream_timeout,
    )
