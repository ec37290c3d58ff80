"""Erase execution: one dispatch entry per erase method.

Each handler checks its own tool, runs its external commands in order and
flushes buffers with ``sync``. Any non-zero exit aborts the run; nothing is
retried or rolled back.

Methods:
    shred: ``shred -vzn <passes>`` random passes plus a final zero pass
    blkdiscard: TRIM/discard the whole device
    nvme: ``nvme id-ctrl`` reachability check, then ``nvme format --ses``
    sata: ``hdparm`` security report, temporary password, SECURITY ERASE UNIT
"""

from wipe_drive.config import settings
from wipe_drive.domain import EraseMethod, MediaClass
from wipe_drive.logging import operation_context
from wipe_drive.storage.exceptions import (
    EraseOperationError,
    StrategyNotAllowedError,
    UnsupportedDeviceError,
    WrongDeviceClassError,
)
from wipe_drive.storage.validation import require_tool
from wipe_drive.ui.confirmation import confirm_literal

from .command_runners import CommandRunner
from .security import parse_security_capabilities


def ensure_strategy_allowed(strategy, media_class: MediaClass) -> None:
    """Raises StrategyNotAllowedError when the strategy targets the other media class."""
    if not strategy.is_allowed_for(media_class):
        raise StrategyNotAllowedError(strategy.method.value, media_class.label)


class EraseExecutor:
    def __init__(self, prompter, runner=None, tool_lookup=None):
        self.prompter = prompter
        self.runner = runner or CommandRunner()
        self.tool_lookup = tool_lookup or require_tool
        self._handlers = {
            EraseMethod.OVERWRITE: self._overwrite,
            EraseMethod.DISCARD: self._discard,
            EraseMethod.NVME_SECURE_ERASE: self._nvme_secure_erase,
            EraseMethod.SATA_SECURE_ERASE: self._sata_secure_erase,
        }

    def execute(self, strategy, device, media_class: MediaClass) -> str:
        """Run ``strategy`` against ``device`` and return the completion message.

        Raises:
            StrategyNotAllowedError: If the strategy does not fit ``media_class``
            WrongDeviceClassError: If NVMe erase is requested for a non-NVMe device
            MissingToolError: If the method's tool is not installed
            EraseOperationError: If any external command fails
        """
        ensure_strategy_allowed(strategy, media_class)
        handler = self._handlers[strategy.method]
        with operation_context(
            "erase", device=device.path, method=strategy.method.value
        ) as log:
            message = handler(strategy, device)
            log.info(message)
        return message

    def _flush(self):
        self.runner.capture(["sync"])

    def _overwrite(self, strategy, device):
        shred = self.tool_lookup("shred")
        self.prompter.show(f"Running: shred -vzn {strategy.passes} {device.path}")
        self.runner.stream([shred, "-vzn", str(strategy.passes), device.path])
        self._flush()
        return f"HDD wipe complete (shred passes: {strategy.passes})."

    def _discard(self, strategy, device):
        blkdiscard = self.tool_lookup("blkdiscard")
        self.prompter.show(f"Running: blkdiscard {device.path}")
        self.runner.stream([blkdiscard, device.path])
        self._flush()
        return "SSD discard complete."

    def _nvme_secure_erase(self, strategy, device):
        if not device.is_nvme:
            raise WrongDeviceClassError(device.path, "NVMe")
        nvme = self.tool_lookup("nvme")
        self.prompter.show(f"Querying NVMe info for {device.path} ...")
        try:
            self.runner.capture([nvme, "id-ctrl", device.path])
        except EraseOperationError as error:
            raise EraseOperationError(
                f"nvme id-ctrl failed on {device.path}",
                command=error.command,
                returncode=error.returncode,
            ) from error

        ses = settings.NVME_SECURE_ERASE_SETTING
        self.prompter.show()
        self.prompter.show(f"About to run: nvme format {device.path} --ses={ses}")
        self.prompter.show("This issues a controller-managed secure erase (may take time).")
        confirm_literal(
            self.prompter,
            f"Proceed? (type '{settings.NVME_ERASE_TOKEN}' to continue): ",
            settings.NVME_ERASE_TOKEN,
        )
        self.runner.stream([nvme, "format", device.path, f"--ses={ses}"])
        self._flush()
        return "NVMe secure erase requested."

    def _sata_secure_erase(self, strategy, device):
        hdparm = self.tool_lookup("hdparm")
        password = settings.SATA_TEMP_PASSWORD
        self.prompter.show(f"Checking hdparm security state for {device.path} ...")
        report = self.runner.capture([hdparm, "-I", device.path])
        capabilities = parse_security_capabilities(report or "")
        if not capabilities.supported:
            raise UnsupportedDeviceError(device.path, "the ATA security feature set")

        for line in capabilities.section.splitlines():
            self.prompter.show(line)
        self.prompter.show()
        self.prompter.show("Notes:")
        self.prompter.show(
            " - Drive must not be 'frozen'. If frozen, power-cycle the drive "
            "(a soft reboot is not enough) or use the suspend/resume trick."
        )
        self.prompter.show(" - This sets a temporary password and performs SECURITY ERASE UNIT.")
        self.prompter.show(
            " - Some drives support --security-erase-enhanced (faster or more thorough by vendor)."
        )
        if capabilities.frozen:
            self.prompter.show(
                "WARNING: security state is FROZEN; the erase will fail until the "
                "drive is power-cycled.",
                style="bold yellow",
            )
        self.prompter.show()
        confirm_literal(
            self.prompter,
            f"Set temporary password '{password}' and proceed with SECURITY ERASE? "
            f"(type '{settings.SATA_ERASE_TOKEN}'): ",
            settings.SATA_ERASE_TOKEN,
        )

        self.runner.capture(
            [hdparm, "--user-master", "u", "--security-set-pass", password, device.path]
        )
        if capabilities.supports_enhanced_erase:
            self.prompter.show("Running enhanced erase...")
            erase_flag = "--security-erase-enhanced"
        else:
            self.prompter.show("Running standard erase...")
            erase_flag = "--security-erase"
        self.runner.stream([hdparm, "--user-master", "u", erase_flag, password, device.path])
        self._flush()
        return "SATA secure erase complete."
