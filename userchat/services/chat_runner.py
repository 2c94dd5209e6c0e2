"""Chat Runner — one conversational turn: model call, optional operation, explanation.

Invariants:
    - History holds user/assistant turns only; the system prompt is sent separately
    - A reply containing a database command triggers exactly one dispatch and
      one follow-up "explain this result" call
    - Native tool use (when enabled) loops at most MAX_TOOL_ROUNDS times
    - An LLMAPIError rolls history back to its state before the turn, then propagates
    - Operation failures never raise: dispatch returns text, the model explains it

Design Decisions:
    - Two command protocols: JSON-in-text (works with any model) and native
      tools (needs a tool-capable model); selected once at construction
    - ChatTurn carries the raw operation result so the console can print it
      before the model's explanation
"""

import logging
import time
from dataclasses import dataclass

from userchat.core.domain_types import ChatRole
from userchat.core.errors import ErrorContext, LLMAPIError
from userchat.core.extract_command import extract_command
from userchat.infrastructure.llm_client import ResilientLLMClient, response_text
from userchat.services.define_user_tools import TOOLS_USERS
from userchat.services.operation_dispatch import OperationDispatch
from userchat.services.system_prompt import build_explain_request, build_system_prompt

logger = logging.getLogger(__name__)


@dataclass
class ChatTurn:
    """Outcome of one user message."""
    reply: str
    operation: str | None = None
    operation_result: str | None = None
    elapsed_seconds: float = 0.0


def _tool_uses(response) -> list:
    return [
        b for b in response.content
        if getattr(b, "type", None) == "tool_use"
    ]


def _serialize_content(response) -> list[dict]:
    """Assistant content blocks as plain dicts for the next request."""
    return [b.model_dump(exclude_none=True) for b in response.content]


class ChatRunner:
    """Keeps the conversation and turns model commands into store operations."""

    MAX_TOOL_ROUNDS = 5

    def __init__(
        self,
        client: ResilientLLMClient,
        dispatch: OperationDispatch,
        model: str,
        max_tokens: int = 1024,
        native_tools: bool = False,
    ):
        self.client = client
        self.dispatch = dispatch
        self.model = model
        self.max_tokens = max_tokens
        self.native_tools = native_tools
        self.system = build_system_prompt(native_tools)
        self.history: list[dict] = []

    async def respond(self, user_text: str) -> ChatTurn:
        """Process one user message. Raises LLMAPIError if the model is unreachable."""
        started = time.perf_counter()
        checkpoint = len(self.history)
        self._append(ChatRole.USER, user_text)
        try:
            turn = await self._run_turn()
        except LLMAPIError:
            del self.history[checkpoint:]
            raise
        turn.elapsed_seconds = time.perf_counter() - started
        return turn

    async def _run_turn(self) -> ChatTurn:
        response = await self._call_model()
        if self.native_tools and _tool_uses(response):
            return await self._run_tool_rounds(response)

        text = response_text(response)
        self._append(ChatRole.ASSISTANT, text)
        command = extract_command(text)
        if command is None:
            return ChatTurn(reply=text)

        logger.info(
            "Database command detected",
            extra={"operation": command.operation},
        )
        result = await self.dispatch.handle(command.operation, command.parameters)
        self._append(ChatRole.USER, build_explain_request(result))
        explanation = response_text(await self._call_model())
        self._append(ChatRole.ASSISTANT, explanation)
        return ChatTurn(
            reply=explanation,
            operation=command.operation,
            operation_result=result,
        )

    async def _run_tool_rounds(self, response) -> ChatTurn:
        operations: list[str] = []
        results: list[str] = []
        for _ in range(self.MAX_TOOL_ROUNDS):
            tool_blocks = _tool_uses(response)
            if not tool_blocks:
                break
            self.history.append({
                "role": ChatRole.ASSISTANT.value,
                "content": _serialize_content(response),
            })
            tool_results = []
            for block in tool_blocks:
                result = await self.dispatch.handle(block.name, block.input)
                operations.append(block.name)
                results.append(result)
                tool_results.append({
                    "type": "tool_result",
                    "tool_use_id": block.id,
                    "content": result,
                })
            self.history.append({
                "role": ChatRole.USER.value, "content": tool_results,
            })
            response = await self._call_model()

        if _tool_uses(response):
            logger.warning(
                f"Tool loop stopped after {self.MAX_TOOL_ROUNDS} rounds",
            )
        text = response_text(response)
        self._append(ChatRole.ASSISTANT, text)
        return ChatTurn(
            reply=text,
            operation=", ".join(operations),
            operation_result="\n".join(results),
        )

    async def _call_model(self):
        return await self.client.create_message(
            model=self.model,
            max_tokens=self.max_tokens,
            system=self.system,
            messages=list(self.history),
            tools=TOOLS_USERS if self.native_tools else None,
            context=ErrorContext(),
        )

    def _append(self, role: ChatRole, content: str) -> None:
        self.history.append({"role": role.value, "content": content})
