"""Domain types for a wipe run."""

from __future__ import annotations

from .models import (
    DEFAULT_MEDIA_CLASS,
    Classification,
    Device,
    EraseMethod,
    EraseStrategy,
    ErrorKind,
    MediaClass,
    RunOutcome,
    SecurityCapabilities,
)


__all__ = [
    "DEFAULT_MEDIA_CLASS",
    "Classification",
    "Device",
    "EraseMethod",
    "EraseStrategy",
    "ErrorKind",
    "MediaClass",
    "RunOutcome",
    "SecurityCapabilities",
]
