"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real inference server or the user's llama.db
os.environ.setdefault("LLM_BASE_URL", "http://127.0.0.1:9")
os.environ.setdefault("LLM_API_KEY", "test-fake-key")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
