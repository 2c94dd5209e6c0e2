"""Chat Console — interactive REPL around the ChatRunner.

Invariants:
    - Blank input, "exit" or "quit" (any case) ends the session
    - A spinner runs while the model is working and is gone before output prints
    - LLMAPIError is reported and the loop continues; nothing else is caught here
      (dispatch already converts operation failures to text)

Design Decisions:
    - rich Console for output and console.status() for the spinner
    - Blocking input() pushed to a thread so the event loop stays free
"""

import asyncio
import logging

from rich.console import Console
from rich.markup import escape

from userchat.core.errors import LLMAPIError
from userchat.services.chat_runner import ChatRunner, ChatTurn

logger = logging.getLogger(__name__)

EXIT_COMMANDS = frozenset({"exit", "quit"})

_EXAMPLES = (
    "'add user named John with email john@example.com'",
    "'list all users'",
    "'find user with id 1'",
    "'delete user with id 2'",
)


def is_exit_command(text: str | None) -> bool:
    return text is None or not text.strip() or text.strip().lower() in EXIT_COMMANDS


class ChatConsole:
    """Reads user lines, runs turns, prints replies."""

    def __init__(
        self, runner: ChatRunner, assistant_label: str,
        llm_base_url: str, console: Console | None = None,
    ):
        self.runner = runner
        self.assistant_label = assistant_label
        self.llm_base_url = llm_base_url
        self.console = console or Console()

    def print_banner(self) -> None:
        title = f"{self.assistant_label} Interactive Chat with User Database"
        self.console.print(title, style="bold")
        self.console.print("=" * len(title))
        self.console.print("Type 'exit' or 'quit' to end the session")
        self.console.print("You can ask me to manage users, like:")
        for example in _EXAMPLES:
            self.console.print(f"  - {example}")
        self.console.print()

    async def run(self) -> None:
        self.print_banner()
        while True:
            try:
                prompt = await asyncio.to_thread(self.console.input, "You: ")
            except EOFError:
                prompt = None
            if is_exit_command(prompt):
                self.console.print("\nGoodbye!")
                return
            await self.run_turn(prompt)

    async def run_turn(self, prompt: str) -> ChatTurn | None:
        try:
            with self.console.status("Thinking...", spinner="dots"):
                turn = await self.runner.respond(prompt)
        except LLMAPIError as e:
            logger.error(f"Chat turn failed: {e.message}")
            self.console.print(
                f"Error: Could not get a reply from the model at {self.llm_base_url}",
                style="red",
            )
            self.console.print(
                f"Make sure the server is running and the model "
                f"{self.runner.model} is installed.",
            )
            self.console.print(f"Details: {escape(e.message)}\n")
            return None
        self.print_turn(turn)
        return turn

    def print_turn(self, turn: ChatTurn) -> None:
        if turn.operation_result is not None:
            self.console.print("[Database operation executed]\n", markup=False)
            self.console.print(f"Result: {turn.operation_result}\n", markup=False)
        self.console.print(
            f"{self.assistant_label}: {turn.reply}", markup=False,
        )
        self.console.print(
            f"[Generated in {turn.elapsed_seconds:.2f}s]\n", markup=False,
        )
