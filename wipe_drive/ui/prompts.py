"""Request/response abstraction over the operator's terminal.

Everything interactive goes through a Prompter so the confirmation and menu
logic can be driven by canned answers in tests.
"""

from __future__ import annotations

from typing import Optional, Protocol

from rich.console import Console

from wipe_drive.logging import LoggerFactory
from wipe_drive.storage.exceptions import ConfirmationError


log = LoggerFactory.for_ui()


class Prompter(Protocol):
    def ask(self, prompt: str) -> str:
        """Show ``prompt`` and block until a line of input is read."""

    def show(self, line: str = "", style: Optional[str] = None) -> None:
        """Write one line of operator-facing output."""


class ConsolePrompter:
    """Prompter backed by a rich Console on stdout.

    Answers are returned exactly as typed (no stripping) since confirmation
    literals are whitespace-sensitive.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def ask(self, prompt: str) -> str:
        try:
            answer = self.console.input(prompt, markup=False)
        except EOFError as error:
            raise ConfirmationError("No input received.") from error
        log.trace(f"Prompt {prompt!r} answered {answer!r}")
        return answer

    def show(self, line: str = "", style: Optional[str] = None) -> None:
        self.console.print(line, style=style, markup=False, highlight=False, soft_wrap=True)
