"""
Cached tag and commit-distance resolution against a repository host.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

from .interfaces import RepositoryHost
from .models import CommitDistance


logger = logging.getLogger(__name__)


@dataclass
class ResolverCache:
    """Run-scoped caches shared by the resolvers of one check."""

    tags: Dict[str, List[str]] = field(default_factory=dict)
    default_branches: Dict[str, str] = field(default_factory=dict)
    branch_heads: Dict[str, str] = field(default_factory=dict)
    comparisons: Dict[Tuple[str, str, str], int] = field(default_factory=dict)
    inaccessible: Set[str] = field(default_factory=set)


class TagResolver:
    """Resolve the tag directory of a repository, once per run."""

    def __init__(self, host: RepositoryHost, cache: ResolverCache) -> None:
        self.host = host
        self.cache = cache

    def get_tags(self, repo: str) -> List[str]:
        if repo in self.cache.tags:
            logger.debug("Cache hit: tags %s", repo)
            return self.cache.tags[repo]

        tags = list(self.host.list_tags(repo))
        self.cache.tags[repo] = tags
        return tags


class CommitDistanceResolver:
    """Resolve how many commits a pinned hash trails its default branch."""

    def __init__(self, host: RepositoryHost, cache: ResolverCache) -> None:
        self.host = host
        self.cache = cache

    def resolve(self, repo: str, pinned: str) -> CommitDistance:
        head = self.get_branch_head(repo)
        if _same_commit(pinned, head):
            return CommitDistance(latest_hash=head, commits_behind=0)

        key = (repo, pinned.lower(), head)
        if key in self.cache.comparisons:
            logger.debug("Cache hit: compare %s %s...%s", repo, pinned, head)
        else:
            self.cache.comparisons[key] = self.host.compare(repo, pinned, head)
        return CommitDistance(latest_hash=head, commits_behind=self.cache.comparisons[key])

    def get_default_branch(self, repo: str) -> str:
        if repo not in self.cache.default_branches:
            self.cache.default_branches[repo] = self.host.get_default_branch(repo)
        return self.cache.default_branches[repo]

    def get_branch_head(self, repo: str) -> str:
        if repo in self.cache.branch_heads:
            logger.debug("Cache hit: branch head %s", repo)
            return self.cache.branch_heads[repo]

        head = self.host.get_branch_head(repo, self.get_default_branch(repo))
        self.cache.branch_heads[repo] = head
        return head


def _same_commit(pinned: str, head: str) -> bool:
    # Short and full forms of the same hash.
    pinned, head = pinned.lower(), head.lower()
    return head.startswith(pinned) or pinned.startswith(head)
