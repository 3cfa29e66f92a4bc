"""Runtime settings resolved from CLI flags, environment and a YAML file.

Precedence, highest first: command-line flag, ``FORGERPM_*`` environment
variable, config file (``-c``/``--config`` or ``FORGERPM_CONFIG``), then
the defaults in ``constants.Constants``. The resulting ``Settings`` value
is passed explicitly to every component.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import yaml

from constants import BuildMode, Constants
from errors import FilesystemError

logger = logging.getLogger(__name__)


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Load settings from a YAML (or JSON, which YAML accepts) file.

    Args:
        config_path: Path to the config file.

    Returns:
        Settings mapping; the ``forgerpm:`` section when present.

    Raises:
        FilesystemError: If the file exists but cannot be read or parsed.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise FilesystemError(config_path, f"cannot read config: {exc.strerror or exc}") from exc
    except yaml.YAMLError as exc:
        raise FilesystemError(config_path, f"invalid config: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FilesystemError(config_path, "config must be a mapping")
    section = data.get(Constants.CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise FilesystemError(config_path, f"'{Constants.CONFIG_SECTION}' must be a mapping")
    return section


@dataclass
class Settings:
    """Configuration for one CLI run."""

    forge_url: str = Constants.FORGE_URL
    workspace: str = Constants.DEFAULT_WORKSPACE
    build_mode: BuildMode = BuildMode.NONE
    timeout: float = Constants.REQUEST_TIMEOUT
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @property
    def sources_dir(self) -> str:
        return os.path.join(self.workspace, Constants.SOURCES_DIR)

    @property
    def specs_dir(self) -> str:
        return os.path.join(self.workspace, Constants.SPECS_DIR)

    @classmethod
    def from_args(cls, args: Any, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Create settings from parsed CLI arguments.

        Args:
            args: Parsed CLI arguments namespace.
            environ: Environment mapping (defaults to os.environ).

        Returns:
            Settings instance.
        """
        env = os.environ if environ is None else environ
        config_path = getattr(args, "CONFIG", None) or env.get(Constants.ENV_CONFIG)
        file_values = load_config_file(config_path)

        def pick(arg_name: str, env_name: Optional[str], key: str, default: Any) -> Any:
            value = getattr(args, arg_name, None)
            if value is not None:
                return value
            if env_name and env.get(env_name):
                return env[env_name]
            if file_values.get(key) is not None:
                return file_values[key]
            return default

        timeout = pick("TIMEOUT", None, "timeout", Constants.REQUEST_TIMEOUT)
        try:
            timeout = float(timeout)
        except (TypeError, ValueError) as exc:
            raise FilesystemError(str(config_path or "--timeout"), f"invalid timeout '{timeout}'") from exc
        if timeout <= 0:
            raise FilesystemError(str(config_path or "--timeout"), f"timeout must be positive, got {timeout}")

        settings = cls(
            forge_url=str(pick("FORGE_URL", Constants.ENV_FORGE_URL, "forge_url", Constants.FORGE_URL)),
            workspace=str(pick("WORKSPACE", Constants.ENV_WORKSPACE, "workspace", Constants.DEFAULT_WORKSPACE)),
            timeout=timeout,
            log_level=str(pick("LOG_LEVEL", Constants.ENV_LOG_LEVEL, "log_level", "INFO")).upper(),
            log_file=pick("LOG_FILE", None, "log_file", None),
        )
        mode = pick("BUILD_MODE", None, "build", BuildMode.NONE.value)
        try:
            settings.build_mode = BuildMode(mode)
        except ValueError as exc:
            raise FilesystemError(str(config_path), f"unknown build mode '{mode}'") from exc
        settings.workspace = os.path.expanduser(settings.workspace)
        return settings
