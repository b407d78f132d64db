"""
GitHub REST API client for tags, branches and commit comparisons.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from .config import Settings
from .errors import GitHubAPIError, RepositoryInaccessible
from .interfaces import RepositoryHost


logger = logging.getLogger(__name__)

_INACCESSIBLE_STATUSES = (404, 403)


class GitHubClient(RepositoryHost):
    """Minimal client for the four read-only calls aver needs."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/vnd.github.v3+json"})
        if self.settings.token:
            self.session.headers["Authorization"] = f"token {self.settings.token}"

    def list_tags(self, repo: str) -> List[str]:
        logger.info("Fetching tags for %s", repo)
        payload = self._get(repo, "tags", params={"per_page": self.settings.tags_per_page})
        if not isinstance(payload, list):
            raise GitHubAPIError(f"Unexpected tags payload for {repo}")
        try:
            return [tag["name"] for tag in payload]
        except (KeyError, TypeError) as e:
            raise GitHubAPIError(f"Malformed tag entry for {repo}: {e}") from e

    def get_default_branch(self, repo: str) -> str:
        logger.info("Fetching default branch for %s", repo)
        payload = self._get(repo)
        return self._field(payload, repo, "default_branch")

    def get_branch_head(self, repo: str, branch: str) -> str:
        logger.info("Fetching head of %s:%s", repo, branch)
        payload = self._get(repo, f"branches/{quote(branch, safe='')}")
        commit = self._field(payload, repo, "commit")
        return self._field(commit, repo, "sha")

    def compare(self, repo: str, base: str, head: str) -> int:
        logger.info("Comparing %s...%s in %s", base, head, repo)
        payload = self._get(repo, f"compare/{base}...{head}")
        ahead_by = self._field(payload, repo, "ahead_by")
        if not isinstance(ahead_by, int):
            raise GitHubAPIError(f"Unexpected ahead_by value for {repo}: {ahead_by!r}")
        return ahead_by

    def _get(self, repo: str, path: str = "", params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.settings.api_url}/repos/{repo}"
        if path:
            url = f"{url}/{path}"

        with self.session.get(url, params=params, timeout=self.settings.timeout) as response:
            if response.status_code in _INACCESSIBLE_STATUSES:
                raise RepositoryInaccessible(repo, response.status_code)
            if response.status_code != 200:
                raise GitHubAPIError(f"GitHub API returned status {response.status_code} for {url}")
            try:
                return response.json()
            except ValueError as e:
                raise GitHubAPIError(f"Invalid JSON from {url}: {e}") from e

    @staticmethod
    def _field(payload: Any, repo: str, key: str) -> Any:
        if not isinstance(payload, dict) or key not in payload:
            raise GitHubAPIError(f"Missing '{key}' in response for {repo}")
        return payload[key]
