"""Erase execution and the helpers it depends on."""

from .command_runners import CommandRunner, run_checked_command, run_streaming_command
from .executor import EraseExecutor, ensure_strategy_allowed
from .security import extract_security_section, parse_security_capabilities


__all__ = [
    "CommandRunner",
    "EraseExecutor",
    "ensure_strategy_allowed",
    "extract_security_section",
    "parse_security_capabilities",
    "run_checked_command",
    "run_streaming_command",
]
