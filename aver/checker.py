"""
Check a batch of action references for newer tags and newer commits.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

import requests
from tqdm import tqdm

from .errors import CheckError, GitHubAPIError, RepositoryInaccessible
from .interfaces import RepositoryHost
from .models import ActionReference, BehindFinding, CheckResult, OutdatedFinding
from .resolvers import CommitDistanceResolver, ResolverCache, TagResolver
from .staleness import Strictness, latest_stale_candidate
from .versioning import ReferenceKind, classify_reference, parse_version


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckOptions:
    """Options for a check run."""

    ignore_hash_pins: bool = False
    strictness: Strictness = Strictness.RESPECT_PRECISION
    show_progress: bool = False


class ActionChecker:
    """Resolve staleness for action references, one repository call at a time.

    A repository that reports not found or forbidden produces a single
    warning and is skipped for the rest of the run. Any other failure
    aborts the run with a ``CheckError``.
    """

    def __init__(
        self,
        host: RepositoryHost,
        options: Optional[CheckOptions] = None,
        cache: Optional[ResolverCache] = None,
    ) -> None:
        self.options = options or CheckOptions()
        self.cache = cache if cache is not None else ResolverCache()
        self.tag_resolver = TagResolver(host, self.cache)
        self.commit_resolver = CommitDistanceResolver(host, self.cache)

    def check(self, references: Iterable[ActionReference]) -> CheckResult:
        result = CheckResult()
        references = list(references)

        for reference in tqdm(
            references,
            desc="Checking actions",
            unit="action",
            disable=not self.options.show_progress,
        ):
            repo = reference.repository
            if repo in self.cache.inaccessible:
                logger.debug("Skipping %s: %s is inaccessible", reference.name, repo)
                continue

            try:
                self._check_reference(reference, repo, result)
            except RepositoryInaccessible as e:
                logger.warning("Skipping %s: %s", reference.name, e)
                result.warnings.append(f"skipping {reference.name}: repository not accessible")
                self.cache.inaccessible.add(repo)
            except (GitHubAPIError, requests.RequestException) as e:
                raise CheckError(reference, e) from e

        return result

    def _check_reference(self, reference: ActionReference, repo: str, result: CheckResult) -> None:
        kind = classify_reference(reference.version)
        if kind is ReferenceKind.HASH_PIN and not self.options.ignore_hash_pins:
            self._check_hash_pin(reference, repo, result)
        else:
            self._check_tag(reference, repo, result)

    def _check_tag(self, reference: ActionReference, repo: str, result: CheckResult) -> None:
        if parse_version(reference.version) is None:
            logger.debug("Not comparable: %s@%s", reference.name, reference.version)
            return

        tags = self.tag_resolver.get_tags(repo)
        latest = latest_stale_candidate(tags, reference.version, self.options.strictness)
        if latest is not None:
            result.outdated.append(OutdatedFinding(
                file=reference.file,
                name=reference.name,
                current_version=reference.version,
                latest_version=latest,
            ))

    def _check_hash_pin(self, reference: ActionReference, repo: str, result: CheckResult) -> None:
        distance = self.commit_resolver.resolve(repo, reference.version)
        if distance.commits_behind > 0:
            result.behind.append(BehindFinding(
                file=reference.file,
                name=reference.name,
                current_hash=reference.version,
                latest_hash=distance.latest_hash,
                commits_behind=distance.commits_behind,
            ))


def check_action_versions(
    references: Iterable[ActionReference],
    host: RepositoryHost,
    options: Optional[CheckOptions] = None,
) -> CheckResult:
    """Check references with a fresh run-scoped cache."""
    return ActionChecker(host, options).check(references)
