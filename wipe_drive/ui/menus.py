"""Erase strategy menus.

Only the strategies belonging to the device's media class are ever listed, so
an HDD can only be shredded and an SSD can only be discarded or erased by its
controller.
"""

from __future__ import annotations

from wipe_drive.config import settings
from wipe_drive.domain import EraseMethod, EraseStrategy, MediaClass
from wipe_drive.logging import LoggerFactory
from wipe_drive.storage.exceptions import InvalidSelectionError

from .prompts import Prompter


log = LoggerFactory.for_ui()


def ssd_methods():
    """SSD menu entries as (method, label, hint); the NVMe label shows the configured --ses value."""
    nvme_label = f"NVMe secure erase (nvme format --ses={settings.NVME_SECURE_ERASE_SETTING})"
    return (
        (EraseMethod.DISCARD, "blkdiscard (fast TRIM whole device)", "[Recommended, broadly safe]"),
        (EraseMethod.NVME_SECURE_ERASE, nvme_label, "[Expert; NVMe only]"),
        (EraseMethod.SATA_SECURE_ERASE, "SATA secure erase (hdparm)", "[Expert; SATA only]"),
    )


def available_strategies(media_class: MediaClass) -> list[EraseStrategy]:
    """Strategies offered for ``media_class``, in menu order."""
    if media_class is MediaClass.ROTATIONAL:
        return [EraseStrategy.overwrite(passes) for passes, _ in settings.HDD_PASS_PROFILES]
    return [EraseStrategy(method) for method, _, _ in ssd_methods()]


def menu_lines(media_class: MediaClass) -> list[str]:
    if media_class is MediaClass.ROTATIONAL:
        lines = ["Choose HDD Security Level:"]
        for index, (passes, label) in enumerate(settings.HDD_PASS_PROFILES, start=1):
            unit = "pass" if passes == 1 else "passes"
            command = f"shred -vzn {passes}"
            lines.append(f"  {index}) {label:<34} -> {command:<13} ({passes} {unit})")
        return lines
    lines = ["Choose SSD Erase Method:"]
    for index, (_, label, hint) in enumerate(ssd_methods(), start=1):
        lines.append(f"  {index}) {label:<40} {hint}")
    return lines


def select_strategy(prompter: Prompter, media_class: MediaClass) -> EraseStrategy:
    """Show the menu for ``media_class`` and return the chosen strategy.

    Raises:
        InvalidSelectionError: If the answer is not one of the listed numbers
    """
    strategies = available_strategies(media_class)
    prompter.show()
    for line in menu_lines(media_class):
        prompter.show(line)
    choices = {str(index): strategy for index, strategy in enumerate(strategies, start=1)}
    answer = prompter.ask(f"Select [1-{len(strategies)}]: ").strip()
    if answer not in choices:
        raise InvalidSelectionError(answer)
    strategy = choices[answer]
    log.info(f"Selected {media_class.label} strategy {strategy.describe()}")
    return strategy
