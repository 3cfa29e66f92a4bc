"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    RESOLUTION_ERROR = 3
    METADATA_ERROR = 4
    BUILD_ERROR = 5
    USAGE_ERROR = 64


class BuildMode(Enum):
    """Native package builds that can follow spec generation.

    Args:
        Enum (string): Build mode names accepted on the command line.
    """

    NONE = "none"
    RPM = "rpm"
    SRPM = "srpm"
    BOTH = "rpm+srpm"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    FORGE_URL = "https://forge.puppetlabs.com"
    SEARCH_ENDPOINT = "modules.json"
    RELEASES_ENDPOINT = "api/v1/releases.json"
    DEFAULT_WORKSPACE = "~/rpmbuild"
    SOURCES_DIR = "SOURCES"
    SPECS_DIR = "SPECS"
    PACKAGE_PREFIX = "puppet"
    METADATA_FILE = "metadata.json"
    MODULE_INSTALL_DIR = "%{_datadir}/puppet/modules"
    SPEC_TEMPLATE = "module.spec.tmpl"
    RPMBUILD = "rpmbuild"
    BUILD_MODES = [mode.value for mode in BuildMode]
    BUILD_FLAGS = {
        BuildMode.RPM: "-bb",
        BuildMode.SRPM: "-bs",
        BuildMode.BOTH: "-ba",
    }
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    USER_AGENT = "forgerpm/0.3"
    ENV_LOG_LEVEL = "FORGERPM_LOG_LEVEL"
    ENV_CONFIG = "FORGERPM_CONFIG"
    ENV_FORGE_URL = "FORGERPM_FORGE_URL"
    ENV_WORKSPACE = "FORGERPM_WORKSPACE"
    CONFIG_SECTION = "forgerpm"
