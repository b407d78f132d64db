"""
Core data models for action version checks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class ActionReference:
    """An action referenced by a workflow, e.g. ``actions/checkout@v4``."""

    name: str
    version: str
    file: str = ""

    @property
    def repository(self) -> str:
        return repository_identity(self.name)


@dataclass(frozen=True)
class OutdatedFinding:
    """A tag-pinned action with a newer qualifying tag."""

    file: str
    name: str
    current_version: str
    latest_version: str


@dataclass(frozen=True)
class BehindFinding:
    """A hash-pinned action trailing the head of its default branch."""

    file: str
    name: str
    current_hash: str
    latest_hash: str
    commits_behind: int


@dataclass(frozen=True)
class CommitDistance:
    """Head of the default branch and how far a pinned commit trails it."""

    latest_hash: str
    commits_behind: int


@dataclass
class CheckResult:
    """Aggregated findings of a single check run."""

    outdated: List[OutdatedFinding] = field(default_factory=list)
    behind: List[BehindFinding] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def up_to_date(self) -> bool:
        return not self.outdated and not self.behind


def repository_identity(name: str) -> str:
    """Return the owner/repo part of an action name.

    ``actions/cache/restore`` and ``actions/cache/save`` both live in
    ``actions/cache``.
    """
    parts = name.split("/")
    if len(parts) >= 2:
        return f"{parts[0]}/{parts[1]}"
    return name
