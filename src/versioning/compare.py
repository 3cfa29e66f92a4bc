"""Lossy numeric ordering for registry version strings.

Registry versions are not reliably semantic: some carry hyphenated build
counters (``2.1.0-3``), some pre-release words (``2.0.0-beta``) and some
are free text. Ordering therefore works on a normalized key:

* every ASCII letter is removed,
* every ``-`` becomes ``.``,
* the string is split on ``.``; each fragment contributes its leading run
  of digits, or 0 when it has none,
* trailing zero components are dropped, so ``1.2 == 1.2.0`` and a missing
  trailing component compares as zero.

Pre-release qualifiers are discarded, which makes
``2.0.0-beta`` equal to ``2.0.0``. A string without digits normalizes to
the empty key and sorts below every numeric version.
"""
from __future__ import annotations

import re
from enum import IntEnum
from typing import Iterable, Optional, Tuple

from errors import MissingVersionError
from .models import RawRelease

_LETTERS = re.compile(r"[A-Za-z]")
_LEADING_DIGITS = re.compile(r"\d*")
# Longer digit runs all map to the same saturated component.
_MAX_DIGITS = 1000
_SATURATED = 10 ** _MAX_DIGITS

VersionKey = Tuple[int, ...]


class Ordering(IntEnum):
    """Result of comparing two version strings."""
    LESS = -1
    EQUAL = 0
    GREATER = 1


def _component(digits: str) -> int:
    digits = digits.lstrip("0")
    if not digits:
        return 0
    if len(digits) > _MAX_DIGITS:
        return _SATURATED
    return int(digits)


def normalize(raw: str) -> VersionKey:
    """Return the orderable key for a raw version string."""
    text = _LETTERS.sub("", raw or "").replace("-", ".")
    if not any(ch.isdigit() for ch in text):
        return ()
    parts = []
    for fragment in text.split("."):
        digits = _LEADING_DIGITS.match(fragment.strip()).group(0)
        parts.append(_component(digits))
    while parts and parts[-1] == 0:
        parts.pop()
    return tuple(parts)


def compare(a: str, b: str) -> Ordering:
    """Compare two raw version strings by their normalized keys."""
    key_a, key_b = normalize(a), normalize(b)
    if key_a < key_b:
        return Ordering.LESS
    if key_a > key_b:
        return Ordering.GREATER
    return Ordering.EQUAL


def pick_latest(releases: Iterable[RawRelease], package: str = "") -> RawRelease:
    """Return the release with the greatest normalized version.

    The scan is stable: on equal keys the first release seen is kept.

    Raises:
        MissingVersionError: If there is nothing to choose from.
    """
    best: Optional[RawRelease] = None
    best_key: VersionKey = ()
    for release in releases:
        key = normalize(release.version)
        if best is None or key > best_key:
            best, best_key = release, key
    if best is None:
        raise MissingVersionError(package)
    return best


def split_release(version: str) -> Tuple[str, Optional[str]]:
    """Split ``X.Y.Z-R`` on its first hyphen into ``(X.Y.Z, R)``.

    The release part is None when the string has no hyphen.
    """
    if "-" not in version:
        return version, None
    base, release = version.split("-", 1)
    return base, release
