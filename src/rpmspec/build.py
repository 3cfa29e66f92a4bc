"""Optional rpmbuild invocation for generated spec files."""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Callable, List

from constants import BuildMode, Constants
from errors import BuildToolError

logger = logging.getLogger(__name__)


def build_command(spec_path: str, mode: BuildMode, topdir: str) -> List[str]:
    """Return the rpmbuild argv for a spec.

    Args:
        spec_path: Path to the spec file.
        mode: Which packages to build; must not be BuildMode.NONE.
        topdir: rpmbuild top directory, made absolute.
    """
    flag = Constants.BUILD_FLAGS[mode]
    return [
        Constants.RPMBUILD,
        "--define", f"_topdir {os.path.abspath(topdir)}",
        flag,
        spec_path,
    ]


def invoke(
    spec_path: str,
    mode: BuildMode,
    topdir: str,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> None:
    """Run rpmbuild for one spec unless mode is NONE.

    Raises:
        BuildToolError: If rpmbuild cannot be started or exits non-zero.
    """
    if mode is BuildMode.NONE:
        return

    cmd = build_command(spec_path, mode, topdir)
    logger.info("Running: %s", " ".join(cmd))
    try:
        result = runner(cmd, check=False)  # noqa: S603
    except OSError as exc:
        raise BuildToolError(spec_path, f"cannot run {Constants.RPMBUILD}: {exc}") from exc

    if result.returncode != 0:
        raise BuildToolError(
            spec_path,
            f"{Constants.RPMBUILD} exited with status {result.returncode}",
            returncode=result.returncode,
        )
    logger.info("Built %s (%s)", os.path.basename(spec_path), mode.value)
