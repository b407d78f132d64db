"""
Decide whether a newer tag exists for a version specifier.
"""

from __future__ import annotations

import enum
from typing import Iterable, List, Optional

from .versioning import ParsedVersion, Precision, parse_version


class Strictness(str, enum.Enum):
    """How a newer tag qualifies as an upgrade."""

    RESPECT_PRECISION = "respect-precision"
    MAJOR_ONLY = "major-only"


def rank_candidates(tags: Iterable[str]) -> List[ParsedVersion]:
    """Parse tags and order them newest first.

    Equal magnitudes prefer the more precise tag, so ``v2.0.0`` is reported
    ahead of ``v2``. Unparseable tags are dropped.
    """
    parsed = [candidate for candidate in map(parse_version, tags) if candidate is not None]
    parsed.sort(key=lambda v: (v.magnitude, v.precision), reverse=True)
    return parsed


def is_newer(
    candidate: ParsedVersion,
    current: ParsedVersion,
    strictness: Strictness = Strictness.RESPECT_PRECISION,
) -> bool:
    """Whether ``candidate`` is an upgrade over ``current``.

    With ``MAJOR_ONLY`` only bare major tags (``v7``) count and only a larger
    major qualifies. Otherwise the comparison is made at the precision of
    the current specifier: ``v6`` ignores ``v6.1.0``, ``v6.0`` does not.
    """
    if strictness is Strictness.MAJOR_ONLY:
        return candidate.precision is Precision.MAJOR and candidate.major > current.major
    return candidate.components(current.precision) > current.components(current.precision)


def latest_stale_candidate(
    tags: Iterable[str],
    current: str,
    strictness: Strictness = Strictness.RESPECT_PRECISION,
) -> Optional[str]:
    """Return the newest qualifying tag for ``current``, or None.

    An unparseable ``current`` is not comparable and never reported stale.
    """
    current_version = parse_version(current)
    if current_version is None:
        return None

    for candidate in rank_candidates(tags):
        if is_newer(candidate, current_version, strictness):
            return candidate.raw
    return None
