"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden by an environment variable or .env entry
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults target a stock local Ollama install: works out-of-the-box
    - Console defaults to text logs at WARNING: log lines would interleave with the chat
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///llama.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_sqlite_url(cls, v: str) -> str:
        """Plain sqlite:/// URLs need the async driver."""
        if isinstance(v, str) and v.startswith("sqlite:///"):
            return v.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        return v

    database_echo: bool = False

    # LLM (Anthropic-compatible endpoint of the local inference server)
    llm_base_url: str = "http://localhost:11434"
    llm_api_key: str = "ollama"
    llm_model: str = "llama3.2"
    llm_max_tokens: int = 1024
    llm_max_retries: int = 3
    llm_timeout_seconds: int = 300
    llm_base_delay_ms: int = 1000
    llm_max_delay_ms: int = 60_000

    # Chat
    llm_native_tools: bool = False

    # Observability
    log_level: str = "WARNING"
    log_format: str = "text"


@lru_cache
def get_settings() -> Settings:
    return Settings()
