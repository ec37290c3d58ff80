from __future__ import annotations

import sys
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Sequence

if TYPE_CHECKING:
    from loguru import Logger

from loguru import logger

from wipe_drive.config import settings


FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
    "{level: <8} | "
    "{extra[source]: <10} | "
    "{extra[job_id]: <16} | "
    "{message}"
)


def setup_logging(
    *,
    debug: bool = False,
    trace: bool = False,
    log_dir: Path | None = None,
) -> Logger:
    """
    Configure loguru sinks for a wipe run.

    The terminal belongs to the operator: prompts, menus and the single fatal
    error line. Log records only reach stderr when debug or trace is enabled.

    Log Files:
    - operations.log: INFO+ events (30 day retention)
    - debug.log: DEBUG+ (or TRACE+) events when --debug/--trace is enabled

    Args:
        debug: Enable DEBUG level logging and a stderr sink
        trace: Enable TRACE level logging (implies debug)
        log_dir: Custom log directory (defaults to settings.LOG_DIR)
    """
    logger.remove()
    logger.configure(extra={"job_id": "-", "tags": [], "source": "APP"})

    if trace:
        console_level = "TRACE"
    elif debug:
        console_level = "DEBUG"
    else:
        console_level = None

    # SINK 1: Console (stderr), diagnostics only
    if console_level is not None:
        logger.add(
            sys.stderr,
            level=console_level,
            backtrace=False,
            diagnose=False,
            colorize=True,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{extra[source]: <10}</cyan> | "
                "{message}"
            ),
        )

    log_dir = log_dir or settings.LOG_DIR
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        logger.warning(f"File logging disabled, cannot create {log_dir}: {error}")
        return logger

    # SINK 2: Operations Log (INFO+), kept as an audit trail of wipes
    logger.add(
        log_dir / "operations.log",
        level="INFO",
        rotation="5 MB",
        retention="30 days",
        compression="zip",
        backtrace=False,
        diagnose=False,
        format=FILE_FORMAT,
    )

    # SINK 3: Debug Log (DEBUG+ when debug=True)
    if debug or trace:
        logger.add(
            log_dir / "debug.log",
            level="TRACE" if trace else "DEBUG",
            rotation="10 MB",
            retention="3 days",
            compression="zip",
            backtrace=True,
            diagnose=True,
            format=FILE_FORMAT,
        )

    return logger


def get_logger(
    *,
    job_id: str | None = None,
    tags: Iterable[str] | None = None,
    source: str | None = None,
) -> Logger:
    """
    Get a logger with bound context.

    Args:
        job_id: Job identifier for tracking operations
        tags: Tags for filtering (e.g., ["erase", "nvme"])
        source: Source component (e.g., "device", "erase", "ui")

    Returns:
        Logger with bound context
    """
    extras: dict[str, object] = {}
    if job_id is not None:
        extras["job_id"] = job_id
    if tags is not None:
        extras["tags"] = list(tags)
    if source is not None:
        extras["source"] = source
    return logger.bind(**extras)


@contextmanager
def operation_context(operation: str, **details):
    """
    Track a long-running operation with automatic timing.

    Logs operation start, completion and failure with duration.

    Example:
        with operation_context("erase", device="/dev/sda", method="shred") as log:
            log.debug("Running shred")
    """
    job_id = f"{operation}-{uuid.uuid4().hex[:8]}"

    with logger.contextualize(job_id=job_id, operation=operation, **details):
        start_time = time.time()
        log = logger.bind(source=operation, job_id=job_id, tags=[operation])

        log.info(f"{operation.capitalize()} started", **details)

        try:
            yield log
            duration = time.time() - start_time
            log.success(
                f"{operation.capitalize()} completed", duration_seconds=round(duration, 2)
            )
        except Exception as e:
            duration = time.time() - start_time
            log.error(
                f"{operation.capitalize()} failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_seconds=round(duration, 2),
            )
            raise


class LoggerFactory:
    """Factory for domain-specific loggers with preset source and tags."""

    @staticmethod
    def for_device() -> Logger:
        """Logger for device inspection and classification."""
        return get_logger(source="device", tags=["device", "storage"])

    @staticmethod
    def for_erase(job_id: str | None = None) -> Logger:
        """Logger for erase command execution."""
        if job_id is None:
            job_id = f"erase-{uuid.uuid4().hex[:8]}"
        return get_logger(job_id=job_id, source="erase", tags=["erase", "storage"])

    @staticmethod
    def for_ui() -> Logger:
        """Logger for prompts and menu answers."""
        return get_logger(source="ui", tags=["ui"])

    @staticmethod
    def for_system() -> Logger:
        """Logger for startup, privilege and tool checks."""
        return get_logger(source="system", tags=["system"])


def log_command(log: Logger, command: Sequence[str], returncode: int) -> None:
    """Record an external command and its exit status."""
    log.debug(
        f"Command completed with return code {returncode}: {' '.join(command)}",
        event_type="command",
        command=list(command),
        returncode=returncode,
    )
