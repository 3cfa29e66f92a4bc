"""Exception types raised by the resolution and spec generation pipeline.

Every error names the thing that failed (URL, archive filename, package or
path) so the top-level CLI can print a single useful line and exit with the
matching code from ``constants.ExitCodes``.
"""

from __future__ import annotations

from typing import Optional

from constants import ExitCodes


class ForgeRpmError(Exception):
    """Base class for all pipeline errors."""

    exit_code = ExitCodes.FILE_ERROR


class TransportError(ForgeRpmError):
    """Raised when a registry request fails or returns a non-2xx status."""

    exit_code = ExitCodes.CONNECTION_ERROR

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"request to {url} failed: {reason}")


class MissingVersionError(ForgeRpmError):
    """Raised when the registry has no releases to choose from."""

    exit_code = ExitCodes.RESOLUTION_ERROR

    def __init__(self, package: str):
        self.package = package
        super().__init__(f"no releases found for {package}")


class MissingMetadataError(ForgeRpmError):
    """Raised when an archive carries no metadata.json entry."""

    exit_code = ExitCodes.METADATA_ERROR

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"no metadata.json found in {filename}")


class MalformedMetadataError(ForgeRpmError):
    """Raised when an archive or its metadata.json cannot be parsed."""

    exit_code = ExitCodes.METADATA_ERROR

    def __init__(self, filename: str, detail: str):
        self.filename = filename
        self.detail = detail
        super().__init__(f"invalid metadata in {filename}: {detail}")


class FilesystemError(ForgeRpmError):
    """Raised when a workspace path cannot be created, read or written."""

    exit_code = ExitCodes.FILE_ERROR

    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"{path}: {detail}")


class BuildToolError(ForgeRpmError):
    """Raised when the native build tool cannot be spawned or exits non-zero."""

    exit_code = ExitCodes.BUILD_ERROR

    def __init__(self, spec_path: str, detail: str, returncode: Optional[int] = None):
        self.spec_path = spec_path
        self.detail = detail
        self.returncode = returncode
        super().__init__(f"build of {spec_path} failed: {detail}")
