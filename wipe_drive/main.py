import argparse
import sys

from rich.console import Console

from wipe_drive.__version__ import __version__
from wipe_drive.app.orchestrator import run_wipe
from wipe_drive.logging import LoggerFactory, setup_logging
from wipe_drive.ui.prompts import ConsolePrompter


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Interactive secure wipe for HDDs and SSDs (run as root)"
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable verbose debug output")
    parser.add_argument("--trace", action="store_true", help="Enable trace-level output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    setup_logging(debug=args.debug, trace=args.trace)
    LoggerFactory.for_system().info(f"wipe-drive {__version__} starting")

    prompter = ConsolePrompter()
    outcome = run_wipe(prompter)
    if outcome.success:
        prompter.show(outcome.message, style="bold green")
    else:
        Console(stderr=True, highlight=False).print(
            f"ERROR: {' '.join(outcome.message.split())}", markup=False, style="red", soft_wrap=True
        )
    return outcome.exit_code


if __name__ == "__main__":
    sys.exit(main())
