"""Tunable constants for wipe-drive.

There is no settings file: every value is a module-level default that can be
overridden through the environment before the process starts.
"""

from __future__ import annotations

import os
from pathlib import Path


SYSFS_BLOCK_ROOT = Path(os.environ.get("WIPE_DRIVE_SYSFS_BLOCK", "/sys/block"))

LOG_DIR = Path(
    os.environ.get(
        "WIPE_DRIVE_LOG_DIR",
        Path.home() / ".local" / "state" / "wipe-drive" / "logs",
    )
)

# nvme format --ses value: 1 = user data erase, 2 = cryptographic erase
NVME_SECURE_ERASE_SETTING = int(os.environ.get("WIPE_DRIVE_NVME_SES", "1"))

SATA_TEMP_PASSWORD = os.environ.get("WIPE_DRIVE_SATA_PASSWORD", "NULL")

REQUIRED_BASE_TOOLS = ("lsblk", "blockdev")

# Overwrite passes per HDD profile, in menu order.
HDD_PASS_PROFILES = (
    (1, "Personal wipe before reinstall"),
    (3, "Business / resale"),
    (7, "Government-grade (DoD 5220.22-M)"),
    (35, "Paranoid / forensic (Gutmann)"),
)

DESTRUCTION_PHRASE = "YES I UNDERSTAND"
NVME_ERASE_TOKEN = "nvme-ERASE"
SATA_ERASE_TOKEN = "sata-ERASE"
