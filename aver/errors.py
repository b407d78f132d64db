"""
Exceptions raised while discovering and checking action references.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ActionReference


class AverError(Exception):
    """Base class for all errors raised by aver."""


class RepositoryInaccessible(AverError):
    """The remote reported the repository as not found or forbidden."""

    def __init__(self, repo: str, status_code: int) -> None:
        self.repo = repo
        self.status_code = status_code
        super().__init__(f"repository {repo} not accessible (status {status_code})")


class GitHubAPIError(AverError):
    """Unexpected status code or undecodable payload from the GitHub API."""


class CheckError(AverError):
    """A fatal failure while checking a single action reference."""

    def __init__(self, reference: "ActionReference", cause: Exception) -> None:
        self.reference = reference
        self.cause = cause
        super().__init__(f"failed to check {reference.name}: {cause}")


class ProjectRootNotFound(AverError):
    """No directory containing .git or .github above the start directory."""


class WorkflowParseError(AverError):
    """A workflow file could not be parsed as YAML."""
