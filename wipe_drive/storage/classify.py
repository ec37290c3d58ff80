"""HDD/SSD classification from the kernel's queue/rotational attribute.

The attribute lives at ``/sys/block/<disk>/queue/rotational``. Partitions and
NVMe namespace partitions do not have their own queue directory, so the owning
disk is found by stripping the partition suffix:

    sda1       -> sda
    nvme0n1p2  -> nvme0n1
    mmcblk0p1  -> mmcblk0

A name matching none of the known patterns is a configuration error. An
attribute that exists by name but cannot be read falls back to
DEFAULT_MEDIA_CLASS.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from wipe_drive.config import settings
from wipe_drive.domain import DEFAULT_MEDIA_CLASS, Classification, MediaClass
from wipe_drive.logging import LoggerFactory
from wipe_drive.storage.exceptions import ClassificationError


log = LoggerFactory.for_device()

# Disks whose partitions are numbered with a "p" separator
_SEPARATED_NAME = re.compile(r"^(?P<disk>(?:nvme\d+n\d+|mmcblk\d+|loop\d+|nbd\d+|md\d+))(?:p\d+)?$")
# Disks whose partitions append digits directly
_APPENDED_NAME = re.compile(r"^(?P<disk>(?:sd|hd|vd|xvd)[a-z]+)\d*$")
# Device-mapper and similar names that are their own disk
_PLAIN_NAME = re.compile(r"^(?P<disk>(?:dm-\d+|zram\d+|sr\d+))$")

ROTATIONAL_VALUES = {
    "1": MediaClass.ROTATIONAL,
    "0": MediaClass.NON_ROTATIONAL,
}


def parent_disk_name(device_name: str) -> str:
    """Strip a partition suffix from a kernel block device name.

    Raises:
        ClassificationError: If the name matches no known naming scheme
    """
    for pattern in (_SEPARATED_NAME, _APPENDED_NAME, _PLAIN_NAME):
        match = pattern.match(device_name or "")
        if match:
            return match.group("disk")
    raise ClassificationError(device_name or "(empty)")


def rotational_attribute_path(device_name: str, sysfs_root: Optional[Path] = None) -> Path:
    """Locate the rotational attribute for ``device_name``.

    The device's own queue directory wins; otherwise the owning disk's is used.
    """
    sysfs_root = sysfs_root or settings.SYSFS_BLOCK_ROOT
    own = sysfs_root / device_name / "queue" / "rotational"
    if own.exists():
        return own
    return sysfs_root / parent_disk_name(device_name) / "queue" / "rotational"


def read_rotational_flag(path: Path) -> Optional[str]:
    """Return "0" or "1", or None when the attribute is missing or unexpected."""
    try:
        value = path.read_text(encoding="ascii").strip()
    except (OSError, UnicodeDecodeError) as error:
        log.warning(f"Cannot read {path}: {error}")
        return None
    if value not in ROTATIONAL_VALUES:
        log.warning(f"Unexpected rotational value {value!r} in {path}")
        return None
    return value


def classify_device(device_name: str, sysfs_root: Optional[Path] = None) -> Classification:
    """Classify a device as ROTATIONAL or NON_ROTATIONAL.

    Raises:
        ClassificationError: If the attribute path cannot be derived
    """
    path = rotational_attribute_path(device_name, sysfs_root)
    flag = read_rotational_flag(path)
    if flag is None:
        log.warning(
            f"Rotational attribute unreadable for {device_name}; "
            f"assuming {DEFAULT_MEDIA_CLASS.label}"
        )
        return Classification(DEFAULT_MEDIA_CLASS, None, path)
    media_class = ROTATIONAL_VALUES[flag]
    log.info(f"{device_name} classified as {media_class.label} (rotational={flag})")
    return Classification(media_class, flag, path)
