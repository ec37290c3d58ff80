"""Block device inspection using lsblk, blockdev and the device node itself.

Operations:
    - list_disk_lines(): human-readable table of whole disks for the operator
    - get_device_tree(): lsblk JSON for one device and all its descendants
    - collect_mountpoints(): every non-empty mountpoint in a device tree
    - get_device_size(): byte size via ``blockdev --getsize64`` (best effort)
    - is_block_device(): stat check on the device node
    - resolve_device(): build the Device for an operator-entered path

Symlinked paths such as /dev/disk/by-id/... are resolved to the kernel name
(sda, nvme0n1) so classification and the NVMe name check see the real device.
"""
import json
import os
import stat
import subprocess
from typing import Optional

from wipe_drive.domain import Device
from wipe_drive.logging import LoggerFactory
from wipe_drive.storage.exceptions import DeviceNotFoundError, PreconditionError


log = LoggerFactory.for_device()

LSBLK_TREE_COLUMNS = "NAME,PATH,TYPE,SIZE,ROTA,MOUNTPOINT"
LSBLK_LIST_COLUMNS = "NAME,SIZE,TYPE,ROTA,MODEL,TRAN"
LISTING_RULE = "-" * 59


def run_command(command, check=True, log_output=True):
    log.debug(f"Running command: {' '.join(command)}")
    try:
        result = subprocess.run(command, check=check, text=True, capture_output=True)
    except subprocess.CalledProcessError as error:
        log.debug(f"Command failed: {' '.join(command)}")
        if error.stderr:
            log.debug(f"stderr: {error.stderr.strip()}")
        raise
    if result.stdout and log_output:
        log.trace(f"stdout: {result.stdout.strip()}")
    if result.stderr:
        log.debug(f"stderr: {result.stderr.strip()}")
    return result


def is_block_device(path: str) -> bool:
    try:
        return stat.S_ISBLK(os.stat(path).st_mode)
    except OSError:
        return False


def kernel_name(path: str) -> str:
    return os.path.basename(os.path.realpath(path))


def get_device_size(path: str) -> Optional[int]:
    """Return the device size in bytes, or None when blockdev cannot tell."""
    try:
        result = run_command(["blockdev", "--getsize64", path])
        return int(result.stdout.strip())
    except (subprocess.CalledProcessError, OSError, ValueError) as error:
        log.debug(f"Size query failed for {path}: {error}")
        return None


def resolve_device(path: str) -> Device:
    """Validate the operator's answer and build the Device for this run.

    Raises:
        DeviceNotFoundError: If the path is empty or not a block device
    """
    path = (path or "").strip()
    if not path or not is_block_device(path):
        raise DeviceNotFoundError(path or "(empty)")
    device = Device(path=path, name=kernel_name(path), size_bytes=get_device_size(path))
    log.info(f"Target device {device.path} ({device.name}, {device.size_label} bytes)")
    return device


def get_children(device):
    return device.get("children", []) or []


def get_device_tree(path: str) -> dict:
    """Return the lsblk record for ``path`` including nested children.

    Raises:
        PreconditionError: If lsblk fails or reports nothing, since the mount
            state cannot be established
    """
    try:
        result = run_command(
            ["lsblk", "-J", "-b", "-o", LSBLK_TREE_COLUMNS, path],
            log_output=False,
        )
        devices = json.loads(result.stdout).get("blockdevices", [])
    except (subprocess.CalledProcessError, OSError, json.JSONDecodeError) as error:
        log.debug(f"lsblk failed: {error}")
        raise PreconditionError(f"Cannot determine mount state of {path}") from error
    if not devices:
        raise PreconditionError(f"Cannot determine mount state of {path}")
    return devices[0]


def collect_mountpoints(device: dict) -> list[str]:
    """Every non-empty mountpoint on the device and all of its descendants."""
    mountpoints: list[str] = []
    for key in ("mountpoint", "mountpoints"):
        value = device.get(key)
        if isinstance(value, list):
            mountpoints.extend(mp for mp in value if mp)
        elif value:
            mountpoints.append(value)
    for child in get_children(device):
        mountpoints.extend(collect_mountpoints(child))
    return list(dict.fromkeys(mountpoints))


def _flag(value) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return "" if value is None else str(value)


def list_disk_lines() -> list[str]:
    """Format whole disks for display; listing problems are reported, not raised."""
    lines = ["Detected block devices (non-removable disks):", LISTING_RULE]
    try:
        result = run_command(
            ["lsblk", "-J", "-d", "-o", LSBLK_LIST_COLUMNS], log_output=False
        )
        disks = json.loads(result.stdout).get("blockdevices", [])
    except (subprocess.CalledProcessError, OSError, json.JSONDecodeError) as error:
        log.warning(f"Device listing failed: {error}")
        lines.append("  (device listing unavailable)")
    else:
        for disk in disks:
            name = disk.get("name") or ""
            size = disk.get("size") or ""
            dev_type = disk.get("type") or ""
            model = (disk.get("model") or "").strip()
            tran = disk.get("tran") or ""
            rota = _flag(disk.get("rota"))
            lines.append(
                f"  {name:<10} {size:<8} {dev_type:<6} ROTA={rota}  {model:<20} {tran:<6}".rstrip()
            )
    lines.append(LISTING_RULE)
    lines.append("Tip: NVMe disks usually appear as nvme0n1; SATA/SAS as sda, sdb, etc.")
    return lines
