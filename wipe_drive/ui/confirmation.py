"""Confirmation checkpoints guarding destructive steps.

Each checkpoint reads one answer and aborts the run on any mismatch; there is
no re-prompt. Matching is exact: case and whitespace both count.
"""

from __future__ import annotations

from typing import Callable

from wipe_drive.config import settings
from wipe_drive.domain import Device, MediaClass
from wipe_drive.logging import LoggerFactory
from wipe_drive.storage.exceptions import ConfirmationError

from .prompts import Prompter


log = LoggerFactory.for_ui()

YES_ANSWERS = frozenset({"y", "Y"})


def require(
    prompter: Prompter,
    prompt: str,
    predicate: Callable[[str], bool],
    failure_message: str = "Aborted.",
) -> str:
    """Ask once and return the answer if ``predicate`` accepts it.

    Raises:
        ConfirmationError: If the predicate rejects the answer
    """
    answer = prompter.ask(prompt)
    if not predicate(answer):
        log.info(f"Confirmation refused at prompt {prompt!r}")
        raise ConfirmationError(failure_message)
    return answer


def confirm_literal(
    prompter: Prompter, prompt: str, expected: str, failure_message: str = "Aborted."
) -> None:
    require(prompter, prompt, lambda answer: answer == expected, failure_message)


def confirm_yes_no(prompter: Prompter, question: str) -> None:
    """[y/N] question; only a lone ``y`` or ``Y`` proceeds."""
    require(prompter, f"{question} [y/N]: ", lambda answer: answer in YES_ANSWERS)


def confirm_media_type(prompter: Prompter, media_class: MediaClass) -> None:
    confirm_yes_no(prompter, f"Proceed treating this device as {media_class.label}?")


def confirm_destruction(prompter: Prompter, device: Device) -> None:
    """Generic destructive-action acknowledgment naming the device and size."""
    prompter.show()
    prompter.show(
        f"FINAL WARNING: This will IRREVERSIBLY WIPE {device.path} "
        f"(size: {device.size_label} bytes).",
        style="bold red",
    )
    confirm_literal(
        prompter,
        f"Type EXACTLY '{settings.DESTRUCTION_PHRASE}' to proceed: ",
        settings.DESTRUCTION_PHRASE,
        failure_message="Confirmation failed.",
    )
