"""Tests for erase command execution."""

from unittest.mock import Mock, patch

import pytest

from wipe_drive.storage.erase.command_runners import (
    CommandRunner,
    run_checked_command,
    run_streaming_command,
)
from wipe_drive.storage.exceptions import EraseOperationError


RUN = "wipe_drive.storage.erase.command_runners.subprocess.run"


class TestRunCheckedCommand:
    def test_returns_stdout(self):
        with patch(RUN, return_value=Mock(returncode=0, stdout="NVME Identify\n", stderr="")) as mock_run:
            output = run_checked_command(["nvme", "id-ctrl", "/dev/nvme0n1"])

        assert output == "NVME Identify\n"
        mock_run.assert_called_once_with(
            ["nvme", "id-ctrl", "/dev/nvme0n1"], text=True, capture_output=True
        )

    def test_non_zero_exit_raises_with_stderr(self):
        with patch(RUN, return_value=Mock(returncode=5, stdout="", stderr="SG_IO: bad/missing sense data")):
            with pytest.raises(EraseOperationError) as exc_info:
                run_checked_command(["hdparm", "-I", "/dev/sdb"])

        error = exc_info.value
        assert error.returncode == 5
        assert error.command == ["hdparm", "-I", "/dev/sdb"]
        assert "SG_IO: bad/missing sense data" in str(error)

    def test_multi_line_stderr_gives_single_line_error(self):
        stderr = "SG_IO: bad/missing sense data, sb[]:  70 00 05 00\nsecurity_password: \"NULL\"\n\nSecurity erase failed\n"
        with patch(RUN, return_value=Mock(returncode=5, stdout="", stderr=stderr)):
            with pytest.raises(EraseOperationError) as exc_info:
                run_checked_command(["hdparm", "--security-erase", "NULL", "/dev/sdb"])

        message = str(exc_info.value)
        assert "\n" not in message
        assert message.endswith("Security erase failed")

    def test_multi_line_stdout_used_when_stderr_empty(self):
        with patch(RUN, return_value=Mock(returncode=1, stdout="first\nlast line\n", stderr="")):
            with pytest.raises(EraseOperationError) as exc_info:
                run_checked_command(["nvme", "format", "/dev/nvme0n1"])

        assert "\n" not in str(exc_info.value)
        assert "last line" in str(exc_info.value)

    def test_non_zero_exit_without_output(self):
        with patch(RUN, return_value=Mock(returncode=1, stdout="", stderr="")):
            with pytest.raises(EraseOperationError, match="Command failed"):
                run_checked_command(["sync"])

    def test_os_error_raises(self):
        with patch(RUN, side_effect=FileNotFoundError("nvme")):
            with pytest.raises(EraseOperationError):
                run_checked_command(["nvme", "id-ctrl", "/dev/nvme0n1"])


class TestRunStreamingCommand:
    def test_success(self):
        with patch(RUN, return_value=Mock(returncode=0)) as mock_run:
            run_streaming_command(["shred", "-vzn", "1", "/dev/sda"])

        mock_run.assert_called_once_with(["shred", "-vzn", "1", "/dev/sda"])

    def test_failure_raises(self):
        with patch(RUN, return_value=Mock(returncode=1)):
            with pytest.raises(EraseOperationError, match="exit status 1") as exc_info:
                run_streaming_command(["blkdiscard", "/dev/sdb"])

        assert exc_info.value.returncode == 1


class TestCommandRunner:
    def test_delegates(self):
        runner = CommandRunner()
        with patch(RUN, return_value=Mock(returncode=0, stdout="out", stderr="")) as mock_run:
            assert runner.capture(["sync"]) == "out"
            runner.stream(["blkdiscard", "/dev/sdb"])

        assert mock_run.call_count == 2
