"""
Interfaces for remote repository hosts.
"""

from __future__ import annotations

from typing import List, Protocol


class RepositoryHost(Protocol):
    """Read-only view of a version-control hosting provider.

    Every method raises ``RepositoryInaccessible`` when the repository is
    not found or forbidden, and ``GitHubAPIError`` for other failures.
    """

    def list_tags(self, repo: str) -> List[str]:
        ...

    def get_default_branch(self, repo: str) -> str:
        ...

    def get_branch_head(self, repo: str, branch: str) -> str:
        ...

    def compare(self, repo: str, base: str, head: str) -> int:
        ...
