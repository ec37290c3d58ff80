"""Domain model for a single wipe run.

Every value here is transient: built once per run, never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


# ==============================================================================
# Device Domain
# ==============================================================================


class MediaClass(Enum):
    """Media type inferred from the kernel rotational attribute."""

    ROTATIONAL = "rotational"  # spinning platters (HDD)
    NON_ROTATIONAL = "non_rotational"  # flash (SSD / NVMe)

    @property
    def label(self) -> str:
        return "HDD" if self is MediaClass.ROTATIONAL else "SSD"


# Applied when the rotational attribute cannot be read. The operator confirms
# the assumed type before anything runs.
DEFAULT_MEDIA_CLASS = MediaClass.NON_ROTATIONAL


@dataclass(frozen=True)
class Classification:
    """Outcome of reading a device's rotational attribute."""

    media_class: MediaClass
    rotational_flag: Optional[str] = None  # raw "0"/"1", None when unreadable
    attribute_path: Optional[Path] = None

    @property
    def is_assumed(self) -> bool:
        """True when the documented default was applied instead of a reading."""
        return self.rotational_flag is None


@dataclass(frozen=True)
class Device:
    """The block device selected for this run."""

    path: str  # as entered by the operator, e.g. /dev/sda
    name: str  # kernel name after resolving symlinks, e.g. sda
    size_bytes: Optional[int] = None

    @property
    def size_label(self) -> str:
        return str(self.size_bytes) if self.size_bytes is not None else "?"

    @property
    def is_nvme(self) -> bool:
        return self.name.startswith("nvme")


# ==============================================================================
# Erase Strategy Domain
# ==============================================================================


class EraseMethod(Enum):
    """Erase methods; each belongs to exactly one media class."""

    OVERWRITE = "shred"
    DISCARD = "blkdiscard"
    NVME_SECURE_ERASE = "nvme"
    SATA_SECURE_ERASE = "sata"

    @property
    def media_class(self) -> MediaClass:
        if self is EraseMethod.OVERWRITE:
            return MediaClass.ROTATIONAL
        return MediaClass.NON_ROTATIONAL


@dataclass(frozen=True)
class EraseStrategy:
    """A chosen erase method plus its parameters."""

    method: EraseMethod
    passes: Optional[int] = None  # overwrite passes, OVERWRITE only

    def __post_init__(self) -> None:
        if self.method is EraseMethod.OVERWRITE:
            if not self.passes or self.passes < 1:
                raise ValueError("Overwrite strategy needs a positive pass count")
        elif self.passes is not None:
            raise ValueError(f"{self.method.value} does not take a pass count")

    @classmethod
    def overwrite(cls, passes: int) -> EraseStrategy:
        return cls(EraseMethod.OVERWRITE, passes)

    def is_allowed_for(self, media_class: MediaClass) -> bool:
        return self.method.media_class is media_class

    def describe(self) -> str:
        if self.method is EraseMethod.OVERWRITE:
            return f"{self.passes} (shred)"
        return self.method.value


@dataclass(frozen=True)
class SecurityCapabilities:
    """Security feature set parsed from an ``hdparm -I`` report."""

    supported: bool = False
    enabled: bool = False
    locked: bool = False
    frozen: bool = False
    supports_enhanced_erase: bool = False
    section: str = ""  # raw "Security:" block, for display


# ==============================================================================
# Run Outcome
# ==============================================================================


class ErrorKind(Enum):
    """Category of a failed run."""

    PRECONDITION = "precondition"
    CONFIGURATION = "configuration"
    CONFIRMATION = "confirmation"
    INVALID_SELECTION = "invalid_selection"
    DEVICE_CLASS = "device_class"
    TOOL_FAILURE = "tool_failure"
    INTERRUPTED = "interrupted"


@dataclass(frozen=True)
class RunOutcome:
    """Result of one run, translated into an exit status by ``main``."""

    success: bool
    message: str
    kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls, message: str) -> RunOutcome:
        return cls(success=True, message=message)

    @classmethod
    def failed(cls, kind: ErrorKind, message: str) -> RunOutcome:
        return cls(success=False, message=message, kind=kind)

    @property
    def exit_code(self) -> int:
        if self.success:
            return 0
        if self.kind is ErrorKind.INTERRUPTED:
            return 130
        return 1
