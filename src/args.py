"""Argument parsing functionality for forgerpm."""

import argparse
import sys
from enum import Enum

from constants import Constants, ExitCodes


class Command(Enum):
    """Subcommands understood by the CLI."""

    SEARCH = "search"
    CREATE = "create"


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that exits with ExitCodes.USAGE_ERROR on bad input."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(ExitCodes.USAGE_ERROR.value, f"{self.prog}: error: {message}\n")


def build_parser():
    """Build the top-level parser with its subcommands."""
    parser = _Parser(
        prog="forgerpm",
        description=(
            "forgerpm - Build RPM spec files for Puppet Forge modules and their dependencies"
        ),
        add_help=True,
    )

    parser.add_argument("--forge-url",
                        dest="FORGE_URL",
                        help=f"Forge base URL (default: {Constants.FORGE_URL})",
                        action="store", type=str)
    parser.add_argument("-w", "--workspace",
                        dest="WORKSPACE",
                        help=f"rpmbuild top directory (default: {Constants.DEFAULT_WORKSPACE})",
                        action="store", type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store", type=str)
    parser.add_argument("--timeout",
                        dest="TIMEOUT",
                        help="HTTP request timeout in seconds",
                        action="store", type=float)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store", type=str.upper,
                        choices=Constants.LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store", type=str)

    subparsers = parser.add_subparsers(dest="action", metavar="command")
    subparsers.required = True

    search = subparsers.add_parser(Command.SEARCH.value,
                                   help="Search the Forge for modules")
    search.add_argument("TERM", help="Free-text search term")

    create = subparsers.add_parser(Command.CREATE.value,
                                   help="Resolve a module and write spec files for it and its dependencies")
    create.add_argument("MODULE", help="Module identifier, e.g. puppetlabs/apache")
    create.add_argument("VERSION", nargs="?", default=None,
                        help="Version to pin the root module to")
    create.add_argument("-b", "--build",
                        dest="BUILD_MODE",
                        help="Run rpmbuild after generating specs (default: none)",
                        action="store", type=str,
                        choices=Constants.BUILD_MODES)

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
