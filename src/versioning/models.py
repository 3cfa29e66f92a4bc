"""Data models for releases and resolution results."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple


@dataclass(frozen=True)
class Dependency:
    """A named module requirement, e.g. ``puppetlabs/stdlib >= 4.0.0``."""
    name: str
    version_requirement: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Dependency":
        """Build from a registry or metadata.json dependency entry."""
        return cls(
            name=str(data["name"]),
            version_requirement=str(data.get("version_requirement") or ""),
        )


@dataclass(frozen=True)
class RawRelease:
    """One release of a module as listed by the registry."""
    version: str
    file: str
    dependencies: Tuple[Dependency, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RawRelease":
        """Build from one element of a releases.json list; unknown keys are ignored.

        Older registry responses encode dependencies as ``[name, requirement]``
        pairs instead of objects, so both shapes are accepted.
        """
        deps = []
        for entry in data.get("dependencies") or []:
            if isinstance(entry, Mapping):
                deps.append(Dependency.from_dict(entry))
            else:
                name, *rest = list(entry)
                deps.append(Dependency(name=str(name), version_requirement=str(rest[0]) if rest else ""))
        return cls(
            version=str(data.get("version") or ""),
            file=str(data.get("file") or ""),
            dependencies=tuple(deps),
        )


@dataclass(frozen=True)
class ResolvedRelease:
    """The single release chosen for a module in one resolution run."""
    package_name: str
    version: str
    download_url: str
    local_filename: str
    release: str = "1"
    explicit_release: bool = False
    dependencies: Tuple[Dependency, ...] = field(default_factory=tuple)


# Resolution output keyed by module name, in registry response order.
ResolvedSet = Dict[str, ResolvedRelease]

