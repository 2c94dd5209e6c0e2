"""Settings — environment overrides and URL normalization."""

from userchat.config import Settings


def test_defaults_target_local_ollama(monkeypatch):
    for var in ("LLM_BASE_URL", "LLM_API_KEY", "DATABASE_URL"):
        monkeypatch.delenv(var, raising=False)
    settings = Settings(_env_file=None)
    assert settings.llm_base_url == "http://localhost:11434"
    assert settings.llm_model == "llama3.2"
    assert settings.database_url == "sqlite+aiosqlite:///llama.db"
    assert settings.llm_native_tools is False


def test_plain_sqlite_url_gets_async_driver():
    settings = Settings(_env_file=None, database_url="sqlite:///users.db")
    assert settings.database_url == "sqlite+aiosqlite:///users.db"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LLM_MODEL", "qwen2.5")
    monkeypatch.setenv("LLM_NATIVE_TOOLS", "true")
    settings = Settings(_env_file=None)
    assert settings.llm_model == "qwen2.5"
    assert settings.llm_native_tools is True
