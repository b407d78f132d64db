"""
Runtime settings for talking to the GitHub API.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional


DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0
TAGS_PER_PAGE = 100


@dataclass(frozen=True)
class Settings:
    """Connection settings for the hosting provider."""

    api_url: str = DEFAULT_API_URL
    token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    tags_per_page: int = TAGS_PER_PAGE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from GITHUB_TOKEN, GITHUB_API_URL and AVER_TIMEOUT."""
        env = os.environ if environ is None else environ
        timeout_value = env.get("AVER_TIMEOUT")
        try:
            timeout = float(timeout_value) if timeout_value else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ValueError(f"Invalid AVER_TIMEOUT value: {timeout_value!r}") from e
        if timeout <= 0:
            raise ValueError(f"AVER_TIMEOUT must be positive, got {timeout_value!r}")

        return cls(
            api_url=(env.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/"),
            token=env.get("GITHUB_TOKEN") or None,
            timeout=timeout,
        )

    def with_overrides(self, api_url: Optional[str] = None, token: Optional[str] = None) -> "Settings":
        changes = {}
        if api_url:
            changes["api_url"] = api_url.rstrip("/")
        if token:
            changes["token"] = token
        return replace(self, **changes)
