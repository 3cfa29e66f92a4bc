"""CLI create command: resolve a module, fetch tarballs, write specs, build.

Packages are processed one at a time in resolution order. Any registry,
metadata or filesystem error aborts the run; files already written stay on
disk. rpmbuild failures are collected and reported after every package has
been handled.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from archive.metadata import extract_file
from cli_config import Settings
from common.logging_utils import extra_context, is_debug_enabled
from errors import BuildToolError, FilesystemError
from registry.forge import ForgeClient
from rpmspec import build as build_invoker
from rpmspec.render import descriptor_filename, render, write_spec
from versioning.models import ResolvedRelease
from versioning.resolver import resolve

logger = logging.getLogger(__name__)


@dataclass
class CreateReport:
    """Outcome of a create run."""

    specs: List[str] = field(default_factory=list)
    downloaded: List[str] = field(default_factory=list)
    build_failures: List[BuildToolError] = field(default_factory=list)


def ensure_workspace(settings: Settings) -> None:
    """Create the SOURCES and SPECS directories under the workspace."""
    for path in (settings.sources_dir, settings.specs_dir):
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(path, f"cannot create directory: {exc.strerror or exc}") from exc


def ensure_tarball(client: ForgeClient, resolved: ResolvedRelease, sources_dir: str) -> Optional[str]:
    """Download a release tarball unless a file of that name already exists.

    Existing files are trusted as-is; nothing is verified.

    Returns:
        str: Path written, or None when the download was skipped.
    """
    target = os.path.join(sources_dir, resolved.local_filename)
    if os.path.exists(target):
        logger.info("Using existing %s", target)
        return None

    logger.info("Downloading %s", resolved.download_url)
    content = client.fetch_bytes(resolved.download_url)
    try:
        with open(target, "wb") as fh:
            fh.write(content)
    except OSError as exc:
        raise FilesystemError(target, f"cannot write tarball: {exc.strerror or exc}") from exc
    return target


def create_packages(
    settings: Settings,
    module: str,
    version: Optional[str] = None,
    client: Optional[ForgeClient] = None,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> CreateReport:
    """Run the full create pipeline for one root module.

    Args:
        settings: Run configuration.
        module: Root module identifier.
        version: Optional version pin for the root module.
        client: Registry client (built from settings when omitted).
        runner: Subprocess runner used for rpmbuild.

    Returns:
        CreateReport: Specs written, tarballs downloaded and build failures.
    """
    client = client or ForgeClient(settings.forge_url, timeout=settings.timeout)
    ensure_workspace(settings)

    resolved_set = resolve(client, module, version)
    report = CreateReport()

    for name, resolved in resolved_set.items():
        if is_debug_enabled(logger):
            logger.debug(
                "Processing package",
                extra=extra_context(
                    event="function_entry",
                    component="create",
                    target=name,
                    version=resolved.version,
                )
            )
        downloaded = ensure_tarball(client, resolved, settings.sources_dir)
        if downloaded:
            report.downloaded.append(downloaded)

        metadata = extract_file(os.path.join(settings.sources_dir, resolved.local_filename))
        spec_path = os.path.join(settings.specs_dir, descriptor_filename(resolved))
        write_spec(spec_path, render(resolved, metadata))
        report.specs.append(spec_path)

        try:
            build_invoker.invoke(spec_path, settings.build_mode, settings.workspace, runner=runner)
        except BuildToolError as exc:
            logger.error("%s", exc)
            report.build_failures.append(exc)

    logger.info("Wrote %d spec file(s) to %s", len(report.specs), settings.specs_dir)
    return report
