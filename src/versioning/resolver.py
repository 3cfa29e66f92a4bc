"""Single-query dependency resolution against the Forge releases API.

The registry answers one ``releases.json`` request with the release lists
of the root module and every module it transitively depends on, so the
resolver never issues follow-up queries. Each key of that response gets
exactly one ``ResolvedRelease``.
"""
from __future__ import annotations

import logging
import posixpath
from typing import Optional

from constants import Constants
from errors import MissingVersionError
from common.logging_utils import extra_context, is_debug_enabled
from .compare import pick_latest, split_release
from .models import RawRelease, ResolvedRelease, ResolvedSet

logger = logging.getLogger(__name__)


def download_url(package_name: str, version: str) -> str:
    """Registry-relative tarball path for a release."""
    return f"{package_name}/{version}.tar.gz"


def local_filename(release_file: str) -> str:
    """Name the tarball is stored under in the sources directory."""
    return f"{Constants.PACKAGE_PREFIX}-{posixpath.basename(release_file)}"


def project(package_name: str, selected: RawRelease) -> ResolvedRelease:
    """Turn the chosen raw release of a module into its resolved form."""
    version, release = split_release(selected.version)
    return ResolvedRelease(
        package_name=package_name,
        version=version,
        release=release if release else "1",
        explicit_release=bool(release),
        download_url=download_url(package_name, selected.version),
        local_filename=local_filename(selected.file),
        dependencies=selected.dependencies,
    )


def resolve(client, module: str, version: Optional[str] = None) -> ResolvedSet:
    """Resolve ``module`` and its dependencies to one release each.

    Args:
        client: Registry client exposing ``releases(module, version)``.
        module: Root module identifier, e.g. ``puppetlabs/apache``.
        version: Optional version pin forwarded to the registry.

    Returns:
        dict: Module name -> ResolvedRelease, in registry response order.

    Raises:
        MissingVersionError: If the response is empty or a module lists no releases.
        TransportError: Propagated from the client.
    """
    logger.info("Resolving %s%s", module, f" {version}" if version else "")
    response = client.releases(module, version)
    if not response:
        raise MissingVersionError(f"{module} {version}" if version else module)

    resolved: ResolvedSet = {}
    for name, releases in response.items():
        selected = pick_latest(releases, package=name)
        resolved[name] = project(name, selected)
        if is_debug_enabled(logger):
            logger.debug(
                "Selected release",
                extra=extra_context(
                    event="resolve",
                    component="resolver",
                    target=name,
                    candidate_count=len(releases),
                    selected=selected.version,
                )
            )
        logger.info("Resolved %s to %s", name, selected.version)
    return resolved
