# tests/test_config.py
from relay.core.config import load_settings


def _clear(monkeypatch, *names):
    for n in names:
        monkeypatch.delenv(n, raising=False)


def test_defaults_present(monkeypatch):
    # Defaults apply when nothing beyond the credential is set.
    _clear(monkeypatch, "CHAT_MODEL", "BLOG_MODEL", "ASSISTANT_ID", "CHAT_ASSISTANT_ID",
           "RUN_POLL_INTERVAL", "RUN_MAX_POLLS", "PORT", "MAX_TOKENS")
    s = load_settings()
    assert s.run_poll_interval == 1.0
    assert s.run_max_polls == 60
    assert s.port == 3000
    assert s.max_tokens is None
    assert s.route("chat").model == "gpt-4o"
    assert s.route("blog").model == "gpt-4o-mini"
    assert s.route("chat").assistant_id == ""


def test_bool_parsing(monkeypatch):
    # ASSISTANT_FALLBACK accepts yes/no style values in any case.
    monkeypatch.setenv("ASSISTANT_FALLBACK", "No")
    assert load_settings().assistant_fallback is False
    monkeypatch.setenv("ASSISTANT_FALLBACK", "YES")
    assert load_settings().assistant_fallback is True


def test_per_route_overrides(monkeypatch):
    # Route-specific credentials, models and assistants win over the global ones;
    # other routes keep the global values.
    monkeypatch.setenv("OPENAI_API_KEY", "sk-global")
    monkeypatch.setenv("BLOG_OPENAI_API_KEY", "sk-blog")
    monkeypatch.setenv("BLOG_MODEL", "gpt-4.1-mini")
    monkeypatch.setenv("ASSISTANT_ID", "asst_global")
    monkeypatch.setenv("SCHOOL_ASSISTANT_ID", "asst_school")
    s = load_settings()
    assert s.route("blog").api_key == "sk-blog"
    assert s.route("blog").model == "gpt-4.1-mini"
    assert s.route("chat").api_key == "sk-global"
    assert s.route("school").assistant_id == "asst_school"
    assert s.route("avatar").assistant_id == "asst_global"


def test_cors_origins_split(monkeypatch):
    # CORS_ORIGINS is split on commas and trimmed.
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    assert load_settings().cors_origins == ("https://a.example", "https://b.example")
