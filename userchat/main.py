"""userchat — console application entry point.

Invariants:
    - Logging configured before anything else logs
    - Schema ensured before the first prompt
    - Engine and HTTP client closed on every exit path (including Ctrl+C)

Design Decisions:
    - Explicit wiring in one place: settings -> db -> dispatch -> LLM -> runner -> console
"""

import asyncio
import logging

from userchat.config import Settings, get_settings
from userchat.console import ChatConsole
from userchat.infrastructure.database import DatabaseSessionManager
from userchat.infrastructure.llm_client import ResilientLLMClient
from userchat.infrastructure.observability import setup_logging
from userchat.services.chat_runner import ChatRunner
from userchat.services.operation_dispatch import OperationDispatch

logger = logging.getLogger(__name__)


def build_client(settings: Settings) -> ResilientLLMClient:
    return ResilientLLMClient(
        settings.llm_base_url,
        api_key=settings.llm_api_key,
        max_retries=settings.llm_max_retries,
        base_delay_ms=settings.llm_base_delay_ms,
        max_delay_ms=settings.llm_max_delay_ms,
        timeout_seconds=settings.llm_timeout_seconds,
    )


async def run_chat(settings: Settings) -> None:
    """Startup, chat loop, shutdown."""
    db_manager = DatabaseSessionManager(
        settings.database_url, echo=settings.database_echo,
    )
    client = build_client(settings)
    try:
        await db_manager.create_schema()
        logger.info("Database initialized")
        runner = ChatRunner(
            client,
            OperationDispatch(db_manager),
            settings.llm_model,
            max_tokens=settings.llm_max_tokens,
            native_tools=settings.llm_native_tools,
        )
        console = ChatConsole(runner, settings.llm_model, settings.llm_base_url)
        console.console.print("[Database initialized]\n", markup=False)
        await console.run()
    finally:
        await client.close()
        await db_manager.dispose()
        logger.info("userchat shutting down")


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    try:
        asyncio.run(run_chat(settings))
    except KeyboardInterrupt:
        print("\nGoodbye!")
