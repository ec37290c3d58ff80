"""Linear wipe run: checks, confirmations, strategy choice, execution.

One run handles exactly one device:

    root + base tools -> listing -> target path -> block device check
    -> mount guard -> classification -> type confirmation
    -> destruction phrase -> strategy menu -> summary + final confirm
    -> erase

Components raise WipeError subclasses; ``run_wipe`` is the single place that
turns them into a RunOutcome.
"""

from __future__ import annotations

from typing import Callable, Optional

from wipe_drive.config import settings
from wipe_drive.domain import (
    DEFAULT_MEDIA_CLASS,
    Classification,
    Device,
    EraseStrategy,
    ErrorKind,
    MediaClass,
    RunOutcome,
)
from wipe_drive.logging import LoggerFactory
from wipe_drive.storage.classify import classify_device
from wipe_drive.storage.devices import list_disk_lines, resolve_device
from wipe_drive.storage.erase import EraseExecutor
from wipe_drive.storage.exceptions import WipeError
from wipe_drive.storage.validation import (
    require_root,
    require_tools,
    validate_device_unmounted,
)
from wipe_drive.ui.confirmation import (
    confirm_destruction,
    confirm_media_type,
    confirm_yes_no,
)
from wipe_drive.ui.menus import select_strategy
from wipe_drive.ui.prompts import Prompter


log = LoggerFactory.for_system()

BANNER = "=== Secure Disk Wiper (HDD & SSD) ==="
DEVICE_PROMPT = "Enter target device path (e.g., /dev/sda or /dev/nvme0n1): "
COMPLETION_MESSAGE = "All done."


def show_detection(prompter: Prompter, device: Device, classification: Classification) -> None:
    flag = classification.rotational_flag or "?"
    label = classification.media_class.label
    prompter.show()
    prompter.show(f"Detected: {device.path} likely a {label} (rotational={flag}).")
    if classification.is_assumed:
        prompter.show(
            f"Note: the rotational attribute could not be read; assuming "
            f"{DEFAULT_MEDIA_CLASS.label}. Answer 'N' below if this is a spinning disk.",
            style="yellow",
        )


def show_summary(prompter: Prompter, device: Device, media_class: MediaClass, strategy: EraseStrategy) -> None:
    prompter.show()
    prompter.show("Summary:")
    prompter.show(f"  Device : {device.path}")
    prompter.show(f"  Type   : {media_class.label}")
    if media_class is MediaClass.ROTATIONAL:
        prompter.show(f"  Passes : {strategy.describe()}")
    else:
        prompter.show(f"  Method : {strategy.describe()}")


def wipe(
    prompter: Prompter,
    executor: Optional[EraseExecutor] = None,
    check_privileges: Callable[[], None] = require_root,
) -> str:
    """Run every step and return the erase method's completion message.

    Raises:
        WipeError: On the first failed check, confirmation or command
    """
    executor = executor or EraseExecutor(prompter)

    check_privileges()
    require_tools(settings.REQUIRED_BASE_TOOLS)

    prompter.show()
    prompter.show(BANNER)
    prompter.show()
    for line in list_disk_lines():
        prompter.show(line)
    prompter.show()

    device = resolve_device(prompter.ask(DEVICE_PROMPT))
    validate_device_unmounted(device)

    classification = classify_device(device.name)
    media_class = classification.media_class
    show_detection(prompter, device, classification)
    confirm_media_type(prompter, media_class)

    confirm_destruction(prompter, device)

    strategy = select_strategy(prompter, media_class)
    show_summary(prompter, device, media_class, strategy)
    confirm_yes_no(prompter, "Final confirm?")

    return executor.execute(strategy, device, media_class)


def run_wipe(prompter: Prompter, **kwargs) -> RunOutcome:
    """Run one wipe and report it as a RunOutcome instead of raising."""
    try:
        message = wipe(prompter, **kwargs)
    except WipeError as error:
        log.error(f"Run aborted ({error.kind.value}): {error}")
        return RunOutcome.failed(error.kind, str(error))
    except KeyboardInterrupt:
        log.warning("Run interrupted by operator")
        return RunOutcome.failed(ErrorKind.INTERRUPTED, "Interrupted.")
    prompter.show(message)
    prompter.show()
    log.success(COMPLETION_MESSAGE)
    return RunOutcome.ok(COMPLETION_MESSAGE)
