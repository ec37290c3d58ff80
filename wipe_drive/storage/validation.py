"""Safety checks that must pass before any confirmation prompt is shown.

All validation functions raise exceptions from the exceptions module rather
than returning booleans.

Example:
    from wipe_drive.storage.validation import validate_device_unmounted

    validate_device_unmounted(device)  # raises DeviceBusyError when mounted
"""

import os
import shutil
from typing import Iterable

from wipe_drive.domain import Device
from wipe_drive.logging import LoggerFactory

from .devices import collect_mountpoints, get_device_tree
from .exceptions import DeviceBusyError, MissingToolError, PrivilegeError


log = LoggerFactory.for_system()


def require_root() -> None:
    """Raises PrivilegeError unless the effective user is root."""
    if os.geteuid() != 0:
        raise PrivilegeError()


def require_tool(tool: str) -> str:
    """Return the absolute path of ``tool`` or raise MissingToolError."""
    tool_path = shutil.which(tool)
    if not tool_path:
        log.debug(f"{tool} not found on PATH")
        raise MissingToolError(tool)
    return tool_path


def require_tools(tools: Iterable[str]) -> None:
    for tool in tools:
        require_tool(tool)


def validate_device_unmounted(device: Device) -> None:
    """Validate that a device and every descendant partition is unmounted.

    Args:
        device: The target device

    Raises:
        DeviceBusyError: If any mountpoint is present
        PreconditionError: If lsblk cannot report the device
    """
    tree = get_device_tree(device.path)
    mountpoints = collect_mountpoints(tree)
    if mountpoints:
        log.warning(f"{device.path} is mounted at {', '.join(mountpoints)}")
        raise DeviceBusyError(device.path, mountpoints)
    log.debug(f"{device.path} has no mounted partitions")
