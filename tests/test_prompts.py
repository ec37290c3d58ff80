"""Tests for the terminal prompter."""

import io

import pytest
from rich.console import Console

from wipe_drive.storage.exceptions import ConfirmationError
from wipe_drive.ui.prompts import ConsolePrompter


@pytest.fixture
def console():
    return Console(file=io.StringIO(), highlight=False, color_system=None)


def test_ask_returns_answer_unmodified(console, monkeypatch):
    monkeypatch.setattr("builtins.input", lambda *args: " YES I UNDERSTAND ")
    prompter = ConsolePrompter(console)

    assert prompter.ask("Type: ") == " YES I UNDERSTAND "
    assert "Type: " in console.file.getvalue()


def test_ask_eof_is_confirmation_failure(console, monkeypatch):
    def raise_eof(*args):
        raise EOFError

    monkeypatch.setattr("builtins.input", raise_eof)

    with pytest.raises(ConfirmationError, match="No input received."):
        ConsolePrompter(console).ask("Select [1-4]: ")


def test_show_does_not_interpret_markup(console):
    ConsolePrompter(console).show("Proceed? [y/N]")

    assert console.file.getvalue() == "Proceed? [y/N]\n"
