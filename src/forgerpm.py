"""forgerpm - RPM spec generator for Puppet Forge modules

    Returns:
        int: Exit code
"""
import logging
import sys

from args import Command, parse_args
from cli_config import Settings
from cli_create import create_packages
from cli_search import run_search
from common.logging_utils import configure_logging
from constants import ExitCodes
from errors import ForgeRpmError

logger = logging.getLogger(__name__)


def run(args, settings: Settings) -> ExitCodes:
    """Dispatch a parsed command and return its exit code."""
    command = Command(args.action)
    if command is Command.SEARCH:
        run_search(settings, args.TERM)
        return ExitCodes.SUCCESS
    elif command is Command.CREATE:
        report = create_packages(settings, args.MODULE, args.VERSION)
        if report.build_failures:
            logger.error(
                "%d of %d package build(s) failed.",
                len(report.build_failures),
                len(report.specs),
            )
            return ExitCodes.BUILD_ERROR
        return ExitCodes.SUCCESS
    raise ValueError(f"Unsupported command: {command}")


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)

    try:
        configure_logging(getattr(args, "LOG_LEVEL", None), getattr(args, "LOG_FILE", None))
        settings = Settings.from_args(args)
        # config file and environment may change level or log file
        configure_logging(settings.log_level, settings.log_file)
        logger.debug("Arguments parsed: %s", vars(args))
        code = run(args, settings)
    except ForgeRpmError as exc:
        logger.error("%s", exc)
        sys.exit(exc.exit_code.value)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(130)

    sys.exit(code.value)


if __name__ == "__main__":
    main()
