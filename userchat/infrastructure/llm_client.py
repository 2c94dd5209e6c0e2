"""Resilient LLM Client — wraps AsyncAnthropic with retry, backoff, and error mapping.

Invariants:
    - Talks to the local inference server through its Anthropic-compatible
      Messages endpoint (Ollama serves /v1/messages)
    - Rate limits (429): exponential backoff with jitter, respects Retry-After header
    - Transient errors (5xx, connection): max N retries with exponential backoff
    - Client errors (4xx except 429) and timeouts: immediate failure, no retry
    - All failures mapped to LLMAPIError (core/errors.py)

Design Decisions:
    - Wrapper over raw client: isolates retry logic from the chat runner
    - ±25% jitter on backoff: avoids lock-step retries against a busy server
    - Non-streaming: the console shows a spinner, not partial tokens
"""

import asyncio
import random
import logging

import anthropic
from anthropic import (
    APIError,
    APIConnectionError,
    RateLimitError,
    APITimeoutError,
    InternalServerError,
)

from userchat.core.errors import LLMAPIError, ErrorContext

logger = logging.getLogger(__name__)


def response_text(response) -> str:
    """Concatenate the text blocks of a Messages API response."""
    return "".join(
        block.text for block in response.content
        if getattr(block, "type", None) == "text"
    ).strip()


class ResilientLLMClient:
    """Wraps the Anthropic SDK client with retry logic, timeouts, and error mapping."""

    def __init__(
        self,
        base_url: str,
        api_key: str = "ollama",
        max_retries: int = 3,
        base_delay_ms: int = 1000,
        max_delay_ms: int = 60_000,
        timeout_seconds: int = 300,
    ):
        # SDK-level retries disabled: this wrapper owns the retry policy
        self.client = anthropic.AsyncAnthropic(
            base_url=base_url,
            api_key=api_key,
            timeout=timeout_seconds,
            max_retries=0,
        )
        self.base_url = base_url
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def create_message(
        self,
        *,
        model: str,
        max_tokens: int,
        system: str,
        messages: list,
        tools: list | None = None,
        context: ErrorContext | None = None,
    ):
        """Create message with automatic retry on transient failures."""
        for attempt in range(self.max_retries + 1):
            try:
                response = await self._call_api(
                    model=model,
                    max_tokens=max_tokens,
                    system=system,
                    messages=messages,
                    tools=tools,
                )
                self._log_success(response, attempt)
                return response

            except RateLimitError as e:
                await self._handle_rate_limit(e, attempt, context)

            except (APIConnectionError, InternalServerError) as e:
                if isinstance(e, APITimeoutError):
                    raise LLMAPIError(
                        "API timeout", "timeout", context=context,
                    )
                await self._handle_transient_error(e, attempt, context)

            except APIError as e:
                raise LLMAPIError(
                    str(e), "client_error", context=context,
                )

            except Exception as e:
                logger.error(
                    f"Unexpected LLM client error: {e}", exc_info=True,
                )
                raise LLMAPIError(
                    str(e), "unknown", context=context,
                )

    async def complete(
        self, *, model: str, max_tokens: int, system: str, messages: list,
        context: ErrorContext | None = None,
    ) -> str:
        """Role-tagged messages in, reply text out."""
        response = await self.create_message(
            model=model, max_tokens=max_tokens,
            system=system, messages=messages, context=context,
        )
        return response_text(response)

    async def close(self) -> None:
        await self.client.close()

    async def _call_api(self, *, tools: list | None, **kwargs):
        if tools:
            return await self.client.messages.create(**kwargs, tools=tools)
        return await self.client.messages.create(**kwargs)

    def _log_success(self, response, attempt: int) -> None:
        """Log successful API call with token usage."""
        usage = getattr(response, "usage", None)
        logger.info(
            "LLM API success",
            extra={
                "attempt": attempt + 1,
                "input_tokens": getattr(usage, "input_tokens", None),
                "output_tokens": getattr(usage, "output_tokens", None),
            },
        )

    async def _handle_rate_limit(
        self, e: RateLimitError, attempt: int, context: ErrorContext | None,
    ) -> None:
        """Handle rate limit error with retry or raise."""
        retry_after_ms = self._extract_retry_after(e)
        if attempt >= self.max_retries:
            raise LLMAPIError(
                "Rate limit exceeded after retries",
                "rate_limit",
                retry_after_ms=retry_after_ms,
                context=context,
            )
        delay = retry_after_ms or self._backoff(attempt)
        logger.warning(
            f"Rate limit hit, retry after {delay}ms (attempt {attempt + 1})",
        )
        await asyncio.sleep(delay / 1000)

    async def _handle_transient_error(
        self, e: Exception, attempt: int, context: ErrorContext | None,
    ) -> None:
        """Handle transient errors with retry or raise."""
        if attempt >= self.max_retries:
            raise LLMAPIError(
                f"Transient failure after {self.max_retries} retries: {e}",
                "connection_error",
                context=context,
            )
        delay = self._backoff(attempt)
        logger.warning(f"Transient error, retry after {delay}ms: {e}")
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311

    def _extract_retry_after(self, error: RateLimitError) -> int | None:
        """Extract Retry-After header (returns milliseconds)."""
        response = getattr(error, "response", None)
        if response is None:
            return None
        val = response.headers.get("retry-after")
        if not val:
            return None
        try:
            return int(float(val) * 1000)
        except ValueError:
            return None
