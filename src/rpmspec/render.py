"""Render RPM spec files for resolved Forge modules.

The renderer only computes a fully determined set of template variables;
the layout of the spec lives in ``templates/module.spec.tmpl`` and the
substitution itself is delegated to a ``TemplateEngine``. Dependency and
file lists are sorted so identical inputs always give identical output.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple

from constants import Constants
from errors import FilesystemError
from archive.metadata import ModuleMetadata
from versioning.models import ResolvedRelease

logger = logging.getLogger(__name__)


class TemplateEngine(Protocol):
    """Anything able to turn a template and variables into text."""

    def render(self, template: str, variables: Mapping[str, Any]) -> str:
        ...


class FormatTemplateEngine:
    """``str.format`` based engine; literal braces are written doubled."""

    def render(self, template: str, variables: Mapping[str, Any]) -> str:
        return template.format_map(variables)


@dataclass(frozen=True)
class SpecVariables:
    """Everything the spec template needs for one module."""
    package_display_name: str
    module_short_name: str
    module_full_name: str
    version: str
    release: str
    source_filename: str
    build_directory_name: str
    license: str
    summary: str
    description: str
    requires: Tuple[str, ...]
    files: Tuple[str, ...]
    install_dir: str

    def as_template_dict(self) -> Dict[str, str]:
        """Flatten list fields into the text blocks the template expects."""
        return {
            "package_display_name": self.package_display_name,
            "module_short_name": self.module_short_name,
            "module_full_name": self.module_full_name,
            "version": self.version,
            "release": self.release,
            "source_filename": self.source_filename,
            "build_directory_name": self.build_directory_name,
            "license": self.license,
            "summary": self.summary,
            "description": self.description,
            "install_dir": self.install_dir,
            "requires": "\n".join(f"Requires:       {req}" for req in self.requires),
            "files": "\n".join(f"{self.install_dir}/{path}" for path in self.files),
        }


def package_name_for(module_name: str) -> str:
    """RPM package name for a Forge module, e.g. ``puppet-puppetlabs-stdlib``."""
    return f"{Constants.PACKAGE_PREFIX}-{module_name.replace('/', '-')}"


def descriptor_filename(resolved: ResolvedRelease) -> str:
    """File name of the spec generated for a resolved module."""
    return f"{package_name_for(resolved.package_name)}.spec"


def build_directory_name(resolved: ResolvedRelease, metadata: ModuleMetadata) -> str:
    """Top-level directory the tarball unpacks into."""
    name = f"{metadata.name}-{resolved.version}"
    if resolved.explicit_release:
        name = f"{name}-{resolved.release}"
    return name


def spec_variables(resolved: ResolvedRelease, metadata: ModuleMetadata) -> SpecVariables:
    """Project a resolved release and its metadata into template variables."""
    requires = sorted(
        f"{package_name_for(dep.name)} {dep.version_requirement}".rstrip()
        for dep in metadata.dependencies
    )
    files = sorted({Constants.METADATA_FILE} | metadata.file_paths)
    return SpecVariables(
        package_display_name=package_name_for(resolved.package_name),
        module_short_name=metadata.short_name,
        module_full_name=metadata.name,
        version=resolved.version,
        release=resolved.release,
        source_filename=resolved.local_filename,
        build_directory_name=build_directory_name(resolved, metadata),
        license=metadata.license,
        summary=metadata.summary,
        description=metadata.description,
        requires=tuple(requires),
        files=tuple(files),
        install_dir=f"{Constants.MODULE_INSTALL_DIR}/{metadata.short_name}",
    )


def load_template(name: str = Constants.SPEC_TEMPLATE) -> str:
    """Read a packaged template asset."""
    return resources.files("rpmspec").joinpath("templates", name).read_text(encoding="utf-8")


def render(
    resolved: ResolvedRelease,
    metadata: ModuleMetadata,
    template: Optional[str] = None,
    engine: Optional[TemplateEngine] = None,
) -> str:
    """Render the spec text for one module.

    Args:
        resolved: Release chosen by the resolver
        metadata: Metadata read from the release tarball
        template: Template text (defaults to the packaged module template)
        engine: Template engine (defaults to FormatTemplateEngine)

    Returns:
        str: Spec file content
    """
    variables = spec_variables(resolved, metadata)
    return (engine or FormatTemplateEngine()).render(
        template if template is not None else load_template(),
        variables.as_template_dict(),
    )


def write_spec(path: str, text: str) -> None:
    """Write rendered spec text to disk.

    Raises:
        FilesystemError: If the file cannot be written.
    """
    try:
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)
    except OSError as exc:
        raise FilesystemError(path, f"cannot write spec: {exc.strerror or exc}") from exc
    logger.info("Spec written: %s", path)
