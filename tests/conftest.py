"""
Pytest configuration and shared fixtures for wipe-drive tests.

No test touches a real device: prompts come from a scripted prompter, erase
commands go to a recording runner, and lsblk/blockdev/sysfs are faked.
"""

import json
import os
from typing import Any, Dict, List, Optional
from unittest.mock import Mock, patch

import pytest

from wipe_drive.config import settings
from wipe_drive.domain import Device
from wipe_drive.storage.exceptions import EraseOperationError


# ==============================================================================
# Operator Fixtures
# ==============================================================================


class ScriptedPrompter:
    """Prompter that answers from a fixed script and records everything shown."""

    def __init__(self, answers: Optional[List[str]] = None):
        self.answers = list(answers or [])
        self.prompts: List[str] = []
        self.lines: List[str] = []

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {prompt!r}")
        return self.answers.pop(0)

    def show(self, line: str = "", style: Optional[str] = None) -> None:
        self.lines.append(line)

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


@pytest.fixture
def prompter():
    return ScriptedPrompter()


@pytest.fixture
def make_prompter():
    """Factory for a prompter pre-loaded with answers."""
    return ScriptedPrompter


# ==============================================================================
# Command Runner Fixtures
# ==============================================================================


class RecordingRunner:
    """Command runner that records calls instead of executing them.

    ``outputs`` maps a space-joined command to captured stdout; any command in
    ``failures`` raises EraseOperationError like a non-zero exit would.
    """

    def __init__(self, outputs: Optional[Dict[str, str]] = None, failures=()):
        self.outputs = dict(outputs or {})
        self.failures = set(failures)
        self.calls: List[tuple] = []

    def _run(self, mode, command):
        self.calls.append((mode, list(command)))
        key = " ".join(command)
        if key in self.failures:
            raise EraseOperationError(
                f"Command failed ({key}): mock failure", command=command, returncode=1
            )
        return self.outputs.get(key, "")

    def capture(self, command):
        return self._run("capture", command)

    def stream(self, command):
        self._run("stream", command)

    @property
    def commands(self) -> List[List[str]]:
        return [command for _, command in self.calls]


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def tool_lookup():
    """Tool lookup that skips PATH resolution."""
    return lambda tool: tool


# ==============================================================================
# Device Fixtures
# ==============================================================================


@pytest.fixture
def hdd_device() -> Device:
    return Device(path="/dev/sda", name="sda", size_bytes=500107862016)


@pytest.fixture
def nvme_device() -> Device:
    return Device(path="/dev/nvme0n1", name="nvme0n1", size_bytes=1000204886016)


@pytest.fixture
def sata_ssd_device() -> Device:
    return Device(path="/dev/sdb", name="sdb", size_bytes=256060514304)


class FakeSysfs:
    """Temporary /sys/block tree holding queue/rotational attributes."""

    def __init__(self, root):
        self.root = root

    def set_rotational(self, disk: str, value: str) -> None:
        queue = self.root / disk / "queue"
        queue.mkdir(parents=True, exist_ok=True)
        (queue / "rotational").write_text(f"{value}\n", encoding="ascii")


@pytest.fixture
def sysfs(tmp_path, monkeypatch):
    """Empty sysfs block root installed as settings.SYSFS_BLOCK_ROOT."""
    root = tmp_path / "sys" / "block"
    root.mkdir(parents=True)
    monkeypatch.setattr(settings, "SYSFS_BLOCK_ROOT", root)
    return FakeSysfs(root)


def lsblk_tree(name: str, children: Optional[List[Dict[str, Any]]] = None, mountpoint=None):
    return {
        "blockdevices": [
            {
                "name": name,
                "path": f"/dev/{name}",
                "type": "disk",
                "size": 500107862016,
                "rota": False,
                "mountpoint": mountpoint,
                "children": children or [],
            }
        ]
    }


SAMPLE_LISTING = {
    "blockdevices": [
        {"name": "sda", "size": "465.8G", "type": "disk", "rota": True,
         "model": "WDC WD5000AAKX", "tran": "sata"},
        {"name": "nvme0n1", "size": "931.5G", "type": "disk", "rota": False,
         "model": "Samsung SSD 970 EVO", "tran": "nvme"},
    ]
}


class FakeBlockLayer:
    """Stands in for lsblk and blockdev behind devices.run_command."""

    def __init__(self):
        self.trees: Dict[str, Dict[str, Any]] = {}
        self.sizes: Dict[str, int] = {}
        self.listing = SAMPLE_LISTING

    def add(self, path: str, size: Optional[int] = None, children=None, mountpoint=None):
        name = os.path.basename(path)
        self.trees[path] = lsblk_tree(name, children, mountpoint)
        if size is not None:
            self.sizes[path] = size

    def run_command(self, command, check=True, log_output=True):
        result = Mock(returncode=0, stderr="")
        if command[0] == "blockdev":
            path = command[-1]
            if path not in self.sizes:
                raise OSError(f"blockdev: cannot open {path}")
            result.stdout = f"{self.sizes[path]}\n"
        elif command[0] == "lsblk" and "-d" in command:
            result.stdout = json.dumps(self.listing)
        elif command[0] == "lsblk":
            result.stdout = json.dumps(self.trees.get(command[-1], {"blockdevices": []}))
        else:
            raise AssertionError(f"Unexpected command: {command}")
        return result


@pytest.fixture
def block_layer():
    """Fake lsblk/blockdev plus a stat check that accepts known paths only."""
    layer = FakeBlockLayer()
    with patch("wipe_drive.storage.devices.run_command", side_effect=layer.run_command), \
         patch("wipe_drive.storage.devices.is_block_device", side_effect=lambda p: p in layer.trees), \
         patch("wipe_drive.storage.devices.kernel_name", side_effect=os.path.basename):
        yield layer


# ==============================================================================
# hdparm Fixtures
# ==============================================================================


HDPARM_HEADER = """
/dev/sdb:

ATA device, with non-removable media
\tModel Number:       Samsung SSD 860 EVO 250GB
\tSerial Number:      S3YHNX0K123456A
Commands/features:
\tEnabled\tSupported:
\t   *\tSMART feature set
"""

HDPARM_SECURITY = """Security: 
\tMaster password revision code = 65534
\t\tsupported
\tnot\tenabled
\tnot\tlocked
\tnot\tfrozen
\tnot\texpired: security count
\t\tsupported: enhanced erase
\t2min for SECURITY ERASE UNIT. 2min for ENHANCED SECURITY ERASE UNIT.
"""

HDPARM_FOOTER = """Logical Unit WWN Device Identifier: 5002538e40a1b2c3
\tNAA\t\t: 5
Checksum: correct
"""


def hdparm_report(security: str = HDPARM_SECURITY) -> str:
    return HDPARM_HEADER + security + HDPARM_FOOTER


@pytest.fixture
def hdparm_output() -> str:
    return hdparm_report()


@pytest.fixture
def make_hdparm_report():
    """Factory building a full hdparm -I report around a Security section."""
    return hdparm_report
