"""Read module metadata out of a release tarball.

A Forge release tarball ships a ``metadata.json`` (usually at
``<author>-<name>-<version>/metadata.json``) describing the module and
listing a checksum for every file it contains. That file list becomes the
``%files`` section of the generated spec.
"""
from __future__ import annotations

import io
import json
import logging
import os
import tarfile
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Tuple

from jsonschema import Draft7Validator

from constants import Constants
from errors import FilesystemError, MalformedMetadataError, MissingMetadataError
from versioning.models import Dependency

logger = logging.getLogger(__name__)

METADATA_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["name", "version", "dependencies", "checksums"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "version": {"type": "string", "minLength": 1},
        "author": {"type": "string"},
        "license": {"type": "string"},
        "summary": {"type": "string"},
        "description": {"type": "string"},
        "dependencies": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name"],
                "properties": {
                    "name": {"type": "string"},
                    "version_requirement": {"type": "string"},
                },
            },
        },
        "checksums": {
            "type": "object",
            "additionalProperties": {"type": "string"},
        },
    },
}

_validator = Draft7Validator(METADATA_SCHEMA)


@dataclass(frozen=True)
class ModuleMetadata:
    """Module attributes declared in metadata.json."""
    name: str
    author: str
    version: str
    license: str = ""
    summary: str = ""
    description: str = ""
    dependencies: Tuple[Dependency, ...] = ()
    checksums: Dict[str, str] = field(default_factory=dict)
    source_filename: str = ""

    @property
    def short_name(self) -> str:
        """Module name without its ``<author>-`` prefix."""
        prefix = f"{self.author}-"
        if self.author and self.name.startswith(prefix):
            return self.name[len(prefix):]
        return self.name

    @property
    def file_paths(self) -> set:
        """Paths listed in the checksum manifest."""
        return set(self.checksums)


def iter_entries(archive_bytes: bytes, source_filename: str = "<archive>") -> Iterator[Tuple[str, bytes]]:
    """Yield ``(path, content)`` for each regular file in a (gzipped) tarball.

    Raises:
        MalformedMetadataError: If the bytes are not a readable tar archive.
    """
    try:
        with tarfile.open(fileobj=io.BytesIO(archive_bytes), mode="r:*") as tf:
            for member in tf:
                if not member.isfile():
                    continue
                handle = tf.extractfile(member)
                if handle is None:
                    continue
                yield member.name, handle.read()
    except (tarfile.TarError, EOFError, OSError) as exc:
        raise MalformedMetadataError(source_filename, f"unreadable archive: {exc}") from exc


def _validate(data: Any, source_filename: str) -> None:
    errs = sorted(_validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errs:
        first = errs[0]
        path = "/".join(str(p) for p in first.path)
        raise MalformedMetadataError(source_filename, f"at '{path}': {first.message}")


def parse(content: bytes, source_filename: str) -> ModuleMetadata:
    """Parse the raw text of a metadata.json file.

    Raises:
        MalformedMetadataError: If it is not JSON or misses required fields.
    """
    try:
        data = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedMetadataError(source_filename, f"not valid JSON: {exc}") from exc
    _validate(data, source_filename)

    name = data["name"]
    author = data.get("author") or name.replace("/", "-").split("-", 1)[0]
    return ModuleMetadata(
        name=name,
        author=author,
        version=data["version"],
        license=data.get("license") or "Unknown",
        summary=data.get("summary") or "",
        description=data.get("description") or "",
        dependencies=tuple(Dependency.from_dict(d) for d in data["dependencies"]),
        checksums=dict(data["checksums"]),
        source_filename=source_filename,
    )


def extract(archive_bytes: bytes, source_filename: str) -> ModuleMetadata:
    """Locate and parse the metadata.json inside a release tarball.

    Args:
        archive_bytes: Tarball content
        source_filename: Name used in error messages

    Raises:
        MissingMetadataError: If no entry path ends with metadata.json.
        MalformedMetadataError: If the archive or the metadata cannot be parsed.
    """
    for path, content in iter_entries(archive_bytes, source_filename):
        if path.endswith(Constants.METADATA_FILE):
            logger.debug("Found %s in %s", path, source_filename)
            return parse(content, source_filename)
    raise MissingMetadataError(source_filename)


def extract_file(path: str) -> ModuleMetadata:
    """Read a tarball from disk and extract its metadata."""
    try:
        with open(path, "rb") as fh:
            archive_bytes = fh.read()
    except OSError as exc:
        raise FilesystemError(path, f"cannot read archive: {exc.strerror or exc}") from exc
    return extract(archive_bytes, os.path.basename(path))
