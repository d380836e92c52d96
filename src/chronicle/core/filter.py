"""Commit filtering.

Decides which parsed commits belong in the changelog. Rules are evaluated
in a fixed order and the first one that matches determines the exclusion
reason:

1. merge commits
2. noise patterns in the description or body
3. excluded scopes
4. commit types that are excluded unless opted in
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from chronicle.core.commits import CommitType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from chronicle.config.models import FilterConfig
    from chronicle.core.commits import Commit

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    "wip",
    "fixup",
    "squash",
    "typo",
    "[skip changelog]",
    "[skip ci]",
)

MERGE_PREFIXES = ("Merge ", "Merge:")


class ExclusionReason(StrEnum):
    """Why a commit was left out of the changelog."""

    NONE = "none"
    MERGE_COMMIT = "merge_commit"
    EXCLUDED_PATTERN = "excluded_pattern"
    EXCLUDED_SCOPE = "excluded_scope"
    EXCLUDED_TYPE = "excluded_type"


@dataclass
class FilterStats:
    """Counters accumulated over one filtering pass."""

    total: int = 0
    included: int = 0
    excluded_by_type: int = 0
    excluded_by_scope: int = 0
    excluded_by_pattern: int = 0
    excluded_merge_commits: int = 0
    type_counts: dict[str, int] = field(default_factory=dict)

    @property
    def total_excluded(self) -> int:
        return (
            self.excluded_by_type
            + self.excluded_by_scope
            + self.excluded_by_pattern
            + self.excluded_merge_commits
        )

    def record_inclusion(self) -> None:
        self.included += 1

    def record_exclusion(self, reason: ExclusionReason, commit_type: CommitType) -> None:
        """Count an exclusion under its reason.

        Type exclusions are also broken down by section name.
        """
        if reason == ExclusionReason.EXCLUDED_TYPE:
            self.excluded_by_type += 1
            section = commit_type.section_name
            self.type_counts[section] = self.type_counts.get(section, 0) + 1
        elif reason == ExclusionReason.EXCLUDED_SCOPE:
            self.excluded_by_scope += 1
        elif reason == ExclusionReason.EXCLUDED_PATTERN:
            self.excluded_by_pattern += 1
        elif reason == ExclusionReason.MERGE_COMMIT:
            self.excluded_merge_commits += 1


def is_merge_commit(subject: str) -> bool:
    """Check if a subject line is a merge commit message."""
    return subject.startswith(MERGE_PREFIXES)


def contains_any_pattern(text: str | None, patterns: Iterable[str]) -> bool:
    """Case-insensitive substring check against any of the patterns."""
    if not text:
        return False
    lowered = text.lower()
    return any(pattern.lower() in lowered for pattern in patterns)


def matches_exclusion_pattern(config: FilterConfig, commit: Commit) -> bool:
    """Check description and body against the default and custom patterns."""
    patterns = (*DEFAULT_EXCLUDE_PATTERNS, *config.exclude_patterns)
    return contains_any_pattern(commit.description, patterns) or contains_any_pattern(
        commit.body, patterns
    )


def is_excluded_scope(config: FilterConfig, scope: str | None) -> bool:
    if not scope:
        return False
    scope_lower = scope.lower()
    return any(excluded.lower() == scope_lower for excluded in config.exclude_scopes)


def is_excluded_type(config: FilterConfig, commit_type: CommitType) -> bool:
    """Check if a commit type is excluded under the given configuration."""
    opt_ins = {
        CommitType.CHORE: config.include_chore,
        CommitType.TEST: config.include_test,
        CommitType.CI: config.include_ci,
        CommitType.BUILD: config.include_build,
        CommitType.REFACTOR: config.include_refactor,
        CommitType.DOCS: config.include_docs,
    }
    if commit_type not in opt_ins:
        return False
    return not opt_ins[commit_type]


def should_include(config: FilterConfig, commit: Commit) -> ExclusionReason:
    """Decide whether a commit belongs in the changelog.

    Args:
        config: Filter configuration
        commit: Parsed commit

    Returns:
        ExclusionReason.NONE if the commit is included, otherwise the
        first matching exclusion reason
    """
    if not config.include_merge_commits and is_merge_commit(commit.first_line):
        return ExclusionReason.MERGE_COMMIT

    if matches_exclusion_pattern(config, commit):
        return ExclusionReason.EXCLUDED_PATTERN

    if is_excluded_scope(config, commit.scope):
        return ExclusionReason.EXCLUDED_SCOPE

    if is_excluded_type(config, commit.commit_type):
        return ExclusionReason.EXCLUDED_TYPE

    return ExclusionReason.NONE


def partition_commits(
    commits: Iterable[Commit],
    config: FilterConfig,
    stats: FilterStats | None = None,
) -> tuple[list[Commit], list[Commit]]:
    """Split commits into included and excluded lists.

    Args:
        commits: Parsed commits
        config: Filter configuration
        stats: Optional accumulator updated for every commit

    Returns:
        Tuple of (included, excluded), each in input order
    """
    included: list[Commit] = []
    excluded: list[Commit] = []

    for commit in commits:
        reason = should_include(config, commit)
        if stats is not None:
            stats.total += 1
        if reason == ExclusionReason.NONE:
            included.append(commit)
            if stats is not None:
                stats.record_inclusion()
        else:
            logger.debug("Excluding %s (%s): %s", commit.short_hash, reason, commit.description)
            excluded.append(commit)
            if stats is not None:
                stats.record_exclusion(reason, commit.commit_type)

    return included, excluded


def filter_commits(
    commits: Iterable[Commit],
    config: FilterConfig,
    stats: FilterStats | None = None,
) -> list[Commit]:
    """Return only the commits that belong in the changelog."""
    included, _ = partition_commits(commits, config, stats)
    return included
