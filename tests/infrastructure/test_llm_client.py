"""Resilient LLM Client — retry policy and error mapping.

Tests cover:
    - connection errors and 5xx retried, then success
    - 4xx (non-429) fails immediately
    - retries exhausted -> LLMAPIError(connection_error / rate_limit)
    - Retry-After header parsed to milliseconds
    - tools forwarded only when given
"""

from unittest.mock import AsyncMock

import anthropic
import httpx
import pytest

from userchat.core.errors import LLMAPIError
from userchat.infrastructure.llm_client import ResilientLLMClient, response_text

from tests.services.mock_llm import text_response

_REQUEST = httpx.Request("POST", "http://127.0.0.1:9/v1/messages")


def _status_error(cls, status, headers=None):
    response = httpx.Response(status, request=_REQUEST, headers=headers or {})
    return cls(f"status {status}", response=response, body=None)


def _connection_error():
    return anthropic.APIConnectionError(request=_REQUEST)


@pytest.fixture
def llm(monkeypatch):
    client = ResilientLLMClient("http://127.0.0.1:9", max_retries=2)
    monkeypatch.setattr(ResilientLLMClient, "_backoff", lambda self, attempt: 0)
    return client


def _stub_create(monkeypatch, client, side_effect):
    create = AsyncMock(side_effect=side_effect)
    monkeypatch.setattr(client.client.messages, "create", create)
    return create


async def _ask(client, **kwargs):
    return await client.create_message(
        model="llama3.2", max_tokens=64, system="sys",
        messages=[{"role": "user", "content": "hi"}], **kwargs,
    )


async def test_connection_error_retried_then_succeeds(llm, monkeypatch):
    create = _stub_create(
        monkeypatch, llm, [_connection_error(), text_response("hello")],
    )
    response = await _ask(llm)
    assert response_text(response) == "hello"
    assert create.await_count == 2


async def test_server_error_retried(llm, monkeypatch):
    create = _stub_create(monkeypatch, llm, [
        _status_error(anthropic.InternalServerError, 500),
        text_response("ok"),
    ])
    await _ask(llm)
    assert create.await_count == 2


async def test_client_error_not_retried(llm, monkeypatch):
    create = _stub_create(
        monkeypatch, llm, [_status_error(anthropic.BadRequestError, 400)],
    )
    with pytest.raises(LLMAPIError) as exc:
        await _ask(llm)
    assert exc.value.api_error_type == "client_error"
    assert create.await_count == 1


async def test_unrecognised_status_not_retried(llm, monkeypatch):
    create = _stub_create(
        monkeypatch, llm, [_status_error(anthropic.APIStatusError, 529)],
    )
    with pytest.raises(LLMAPIError) as exc:
        await _ask(llm)
    assert exc.value.api_error_type == "client_error"
    assert create.await_count == 1


async def test_connection_retries_exhausted(llm, monkeypatch):
    create = _stub_create(monkeypatch, llm, [_connection_error()] * 3)
    with pytest.raises(LLMAPIError) as exc:
        await _ask(llm)
    assert exc.value.api_error_type == "connection_error"
    assert create.await_count == 3


async def test_rate_limit_exhausted_keeps_retry_after(llm, monkeypatch):
    limited = _status_error(
        anthropic.RateLimitError, 429, headers={"retry-after": "0"},
    )
    _stub_create(monkeypatch, llm, [limited] * 3)
    with pytest.raises(LLMAPIError) as exc:
        await _ask(llm)
    assert exc.value.api_error_type == "rate_limit"
    assert exc.value.context.retry_after_ms == 0


def test_retry_after_parsed_to_milliseconds(llm):
    error = _status_error(
        anthropic.RateLimitError, 429, headers={"retry-after": "1.5"},
    )
    assert llm._extract_retry_after(error) == 1500


def test_retry_after_garbage_ignored(llm):
    error = _status_error(
        anthropic.RateLimitError, 429, headers={"retry-after": "soon"},
    )
    assert llm._extract_retry_after(error) is None


async def test_tools_only_sent_when_given(llm, monkeypatch):
    create = _stub_create(
        monkeypatch, llm, [text_response("a"), text_response("b")],
    )
    await _ask(llm)
    assert "tools" not in create.await_args_list[0].kwargs

    tools = [{"name": "list_users", "input_schema": {"type": "object"}}]
    await _ask(llm, tools=tools)
    assert create.await_args_list[1].kwargs["tools"] == tools


async def test_complete_returns_text(llm, monkeypatch):
    _stub_create(monkeypatch, llm, [text_response("  spaced reply \n")])
    reply = await llm.complete(
        model="llama3.2", max_tokens=64, system="sys",
        messages=[{"role": "user", "content": "hi"}],
    )
    assert reply == "spaced reply"


def test_backoff_stays_within_jitter_bounds():
    client = ResilientLLMClient("http://127.0.0.1:9", base_delay_ms=1000)
    for attempt in range(4):
        nominal = min(client.max_delay_ms, (2 ** attempt) * 1000)
        assert nominal * 0.75 <= client._backoff(attempt) <= nominal * 1.25
