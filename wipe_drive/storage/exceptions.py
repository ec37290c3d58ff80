"""Exceptions raised while preparing and running a wipe.

Every exception carries an ``ErrorKind`` so the orchestrator can turn it into a
``RunOutcome`` without inspecting the concrete type.

Exception Hierarchy:
    WipeError (base)
        ├── PreconditionError
        │   ├── PrivilegeError
        │   ├── MissingToolError
        │   ├── DeviceNotFoundError
        │   └── DeviceBusyError
        ├── ClassificationError
        ├── ConfirmationError
        ├── InvalidSelectionError
        ├── StrategyNotAllowedError
        ├── WrongDeviceClassError
        └── EraseOperationError
            └── UnsupportedDeviceError

Usage:
    from wipe_drive.storage.exceptions import DeviceBusyError

    if mountpoints:
        raise DeviceBusyError(device_path, mountpoints)
"""

from __future__ import annotations

from typing import Optional, Sequence

from wipe_drive.domain import ErrorKind


class WipeError(Exception):
    """Base exception for all fatal wipe-run errors."""

    kind = ErrorKind.PRECONDITION


class PreconditionError(WipeError):
    """A requirement for starting the run is not met."""

    kind = ErrorKind.PRECONDITION


class PrivilegeError(PreconditionError):
    """Process is not running as root."""

    def __init__(self):
        super().__init__("Run as root (sudo).")


class MissingToolError(PreconditionError):
    """A required external command is not on PATH."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"Missing required command: {tool}")


class DeviceNotFoundError(PreconditionError):
    """Target path does not exist or is not a block device."""

    def __init__(self, device_path: str):
        self.device_path = device_path
        super().__init__(f"Not a block device: {device_path}")


class DeviceBusyError(PreconditionError):
    """Device or one of its partitions is mounted."""

    def __init__(self, device_path: str, mountpoints: Sequence[str]):
        self.device_path = device_path
        self.mountpoints = list(mountpoints)
        mounts_str = ", ".join(self.mountpoints)
        super().__init__(
            f"Device {device_path} or its partitions are mounted ({mounts_str}). "
            f"Unmount them first."
        )


class ClassificationError(WipeError):
    """The rotational attribute path cannot be derived from the device name."""

    kind = ErrorKind.CONFIGURATION

    def __init__(self, device_name: str):
        self.device_name = device_name
        super().__init__(f"Unrecognized block device name: {device_name}")


class ConfirmationError(WipeError):
    """Operator input did not match a confirmation checkpoint."""

    kind = ErrorKind.CONFIRMATION

    def __init__(self, message: str = "Aborted."):
        super().__init__(message)


class InvalidSelectionError(WipeError):
    """Menu answer is out of range."""

    kind = ErrorKind.INVALID_SELECTION

    def __init__(self, answer: str):
        self.answer = answer
        super().__init__("Invalid selection.")


class StrategyNotAllowedError(WipeError):
    """Strategy does not belong to the device's media class."""

    kind = ErrorKind.INVALID_SELECTION

    def __init__(self, method: str, media_label: str):
        self.method = method
        self.media_label = media_label
        super().__init__(f"Erase method {method} is not available for {media_label} devices.")


class WrongDeviceClassError(WipeError):
    """Controller-specific method chosen for a device of another class."""

    kind = ErrorKind.DEVICE_CLASS

    def __init__(self, device_path: str, expected: str = "NVMe"):
        self.device_path = device_path
        self.expected = expected
        super().__init__(f"Selected device is not {expected}: {device_path}")


class EraseOperationError(WipeError):
    """An external command exited with a non-zero status."""

    kind = ErrorKind.TOOL_FAILURE

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
    ):
        self.command = list(command) if command else None
        self.returncode = returncode
        super().__init__(message)


class UnsupportedDeviceError(EraseOperationError):
    """Device does not report the feature the chosen method needs."""

    def __init__(self, device_path: str, feature: str):
        self.device_path = device_path
        self.feature = feature
        super().__init__(f"{device_path} does not report {feature}")
