"""Command execution for erase and query tools."""

import subprocess

from wipe_drive.logging import LoggerFactory, log_command
from wipe_drive.storage.exceptions import EraseOperationError


log = LoggerFactory.for_erase(job_id="-")


def _format(command):
    return " ".join(str(part) for part in command)


def _last_line(text):
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    return lines[-1] if lines else ""


def run_checked_command(command):
    """Run a command capturing its output; raise EraseOperationError on failure."""
    log.debug(f"Running command: {_format(command)}")
    try:
        result = subprocess.run(
            command,
            text=True,
            capture_output=True,
        )
    except OSError as error:
        raise EraseOperationError(
            f"Command failed ({_format(command)}): {error}", command=command
        ) from error
    log_command(log, command, result.returncode)
    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        stdout = (result.stdout or "").strip()
        # Full output goes to the log; the error message stays on one line
        message = _last_line(stderr) or _last_line(stdout) or "Command failed"
        log.debug(f"stderr: {stderr}")
        if stdout:
            log.debug(f"stdout: {stdout}")
        raise EraseOperationError(
            f"Command failed ({_format(command)}): {message}",
            command=command,
            returncode=result.returncode,
        )
    return result.stdout


def run_streaming_command(command):
    """Run a command attached to the terminal so its progress output is visible."""
    log.debug(f"Starting command: {_format(command)}")
    try:
        result = subprocess.run(command)
    except OSError as error:
        raise EraseOperationError(
            f"Command failed ({_format(command)}): {error}", command=command
        ) from error
    log_command(log, command, result.returncode)
    if result.returncode != 0:
        raise EraseOperationError(
            f"Command failed ({_format(command)}) with exit status {result.returncode}",
            command=command,
            returncode=result.returncode,
        )


class CommandRunner:
    """Runs external tools for the executor; swapped for a recorder in tests."""

    def capture(self, command):
        return run_checked_command(command)

    def stream(self, command):
        run_streaming_command(command)
