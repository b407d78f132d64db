"""
Version parsing and reference classification for action specifiers.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from packaging import version as pkg_version


_VERSION_RE = re.compile(r"v?(\d+)(?:\.(\d+)(?:\.(\d+))?)?", re.ASCII)
_HASH_RE = re.compile(r"[0-9a-fA-F]{7,40}")


class Precision(enum.IntEnum):
    """How many version components a specifier pins."""

    MAJOR = 1
    MINOR = 2
    PATCH = 3


class ReferenceKind(enum.Enum):
    HASH_PIN = "hash"
    VERSION = "version"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ParsedVersion:
    """A ``v?MAJOR[.MINOR[.PATCH]]`` version with its declared precision.

    Missing components count as 0 for ordering, so ``v1`` and ``v1.0.0``
    have the same magnitude but a different ``precision``.
    """

    major: int
    minor: Optional[int]
    patch: Optional[int]
    raw: str
    precision: Precision

    @property
    def magnitude(self) -> pkg_version.Version:
        return pkg_version.Version(f"{self.major}.{self.minor or 0}.{self.patch or 0}")

    def components(self, precision: Optional[Precision] = None) -> Tuple[int, ...]:
        """Return (major, minor, patch) truncated to ``precision``."""
        full = (self.major, self.minor or 0, self.patch or 0)
        if precision is None:
            return full
        return full[: int(precision)]

    def compare(self, other: "ParsedVersion") -> int:
        if self.magnitude < other.magnitude:
            return -1
        if self.magnitude > other.magnitude:
            return 1
        return 0


def parse_version(value: str) -> Optional[ParsedVersion]:
    """Parse a version string, returning None when it does not match."""
    if not value:
        return None
    match = _VERSION_RE.fullmatch(value)
    if match is None:
        return None

    major, minor, patch = match.groups()
    if patch is not None:
        precision = Precision.PATCH
    elif minor is not None:
        precision = Precision.MINOR
    else:
        precision = Precision.MAJOR

    return ParsedVersion(
        major=int(major),
        minor=int(minor) if minor is not None else None,
        patch=int(patch) if patch is not None else None,
        raw=value,
        precision=precision,
    )


def is_hash_pin(value: str) -> bool:
    """True for 7 to 40 hexadecimal characters.

    Six characters or fewer are too easily confused with short numeric
    versions and are never treated as commit hashes.
    """
    return bool(_HASH_RE.fullmatch(value or ""))


def classify_reference(value: str) -> ReferenceKind:
    """Classify a specifier using the hash-first policy.

    Hash-first policy: the commit-hash rule is applied before the version
    grammar. A bare numeric string such as ``1234567`` satisfies both and is
    classified as a hash pin, since commit pins never carry a ``v`` prefix
    and real version tags almost always do.
    """
    if is_hash_pin(value):
        return ReferenceKind.HASH_PIN
    if parse_version(value) is not None:
        return ReferenceKind.VERSION
    return ReferenceKind.UNKNOWN
