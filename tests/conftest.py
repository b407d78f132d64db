from typing import Dict, List, Optional, Tuple

import pytest

from aver.errors import RepositoryInaccessible


class FakeHost:
    """In-memory repository host that records every call."""

    def __init__(
        self,
        tags: Optional[Dict[str, List[str]]] = None,
        heads: Optional[Dict[str, str]] = None,
        ahead: Optional[Dict[Tuple[str, str], int]] = None,
        inaccessible: Optional[Dict[str, int]] = None,
        failures: Optional[Dict[str, Exception]] = None,
    ) -> None:
        self.tags = tags or {}
        self.heads = heads or {}
        self.ahead = ahead or {}
        self.inaccessible = inaccessible or {}
        self.failures = failures or {}
        self.calls = []

    def _enter(self, method, repo, *args):
        self.calls.append((method, repo, *args))
        if repo in self.inaccessible:
            raise RepositoryInaccessible(repo, self.inaccessible[repo])
        if repo in self.failures:
            raise self.failures[repo]

    def list_tags(self, repo):
        self._enter("list_tags", repo)
        return list(self.tags.get(repo, []))

    def get_default_branch(self, repo):
        self._enter("get_default_branch", repo)
        return "main"

    def get_branch_head(self, repo, branch):
        self._enter("get_branch_head", repo, branch)
        return self.heads[repo]

    def compare(self, repo, base, head):
        self._enter("compare", repo, base, head)
        return self.ahead[(repo, base)]

    def calls_for(self, method):
        return [call for call in self.calls if call[0] == method]


@pytest.fixture
def make_host():
    return FakeHost
