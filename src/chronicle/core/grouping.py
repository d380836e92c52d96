"""Commit grouping within a changelog section.

Commits sharing a scope (or matching the same keyword pattern) can be
clustered into named groups so renderers can show them together. Commits
that do not end up in a named group are collected under the ungrouped
name ``""``.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from chronicle.exceptions import UnsupportedGroupingError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from chronicle.config.models import GroupingConfig, KeywordPattern
    from chronicle.core.commits import Commit

logger = logging.getLogger(__name__)

UNGROUPED = ""


class GroupingStrategy(StrEnum):
    """How commits are clustered within a section."""

    NONE = "none"
    BY_SCOPE = "by_scope"
    BY_KEYWORD = "by_keyword"
    BY_PATH = "by_path"


@dataclass
class CommitGroup:
    """A named cluster of commits.

    Attributes:
        name: Scope or keyword-pattern group name; ``""`` for ungrouped
        label: Optional display label
        commits: Member commits in input order
    """

    name: str
    label: str | None = None
    commits: list[Commit] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.label or self.name

    def add_commit(self, commit: Commit) -> None:
        self.commits.append(commit)

    def __len__(self) -> int:
        return len(self.commits)


def _add_to_group(
    groups: dict[str, CommitGroup],
    name: str,
    commit: Commit,
    label: str | None = None,
) -> None:
    group = groups.get(name)
    if group is None:
        group = groups[name] = CommitGroup(name=name, label=label)
    group.add_commit(commit)


def group_by_scope(
    commits: Sequence[Commit],
    min_group_size: int = 2,
    scope_labels: Mapping[str, str] | None = None,
) -> dict[str, CommitGroup]:
    """Group commits by scope.

    Scopes used by at least ``min_group_size`` commits get their own group.
    Unscoped commits and commits whose scope falls below the threshold go
    into the ungrouped bucket.

    Args:
        commits: Commits to group
        min_group_size: Minimum number of commits sharing a scope
        scope_labels: Optional display labels keyed by scope

    Returns:
        Mapping of group name to CommitGroup, in first-seen order
    """
    labels = scope_labels or {}
    scope_counts = Counter(c.scope for c in commits if c.scope)

    groups: dict[str, CommitGroup] = {}
    for commit in commits:
        if commit.scope and scope_counts[commit.scope] >= min_group_size:
            _add_to_group(groups, commit.scope, commit, labels.get(commit.scope))
        else:
            _add_to_group(groups, UNGROUPED, commit)

    return groups


def find_keyword_group(description: str, patterns: Iterable[KeywordPattern]) -> KeywordPattern | None:
    """Return the first pattern with a keyword found in the description."""
    lowered = description.lower()
    for pattern in patterns:
        if any(keyword.lower() in lowered for keyword in pattern.keywords):
            return pattern
    return None


def group_by_keyword(
    commits: Sequence[Commit],
    patterns: Sequence[KeywordPattern],
) -> dict[str, CommitGroup]:
    """Group commits by the first keyword pattern matching their description.

    Patterns are tried in order. There is no minimum group size.

    Args:
        commits: Commits to group
        patterns: Ordered keyword patterns

    Returns:
        Mapping of group name to CommitGroup, in first-seen order
    """
    groups: dict[str, CommitGroup] = {}
    for commit in commits:
        pattern = find_keyword_group(commit.description, patterns)
        if pattern is None:
            _add_to_group(groups, UNGROUPED, commit)
        else:
            _add_to_group(groups, pattern.group_name, commit, pattern.label)
    return groups


def group_commits(config: GroupingConfig, commits: Sequence[Commit]) -> dict[str, CommitGroup]:
    """Group commits according to the configured strategy.

    Args:
        config: Grouping configuration
        commits: Commits of a single section

    Returns:
        Mapping of group name to CommitGroup. Empty for ``none``.

    Raises:
        UnsupportedGroupingError: For ``by_path``, which needs file data
            commits do not carry
    """
    if config.strategy == GroupingStrategy.NONE:
        return {}
    if config.strategy == GroupingStrategy.BY_SCOPE:
        return group_by_scope(commits, config.min_group_size, config.scope_labels)
    if config.strategy == GroupingStrategy.BY_KEYWORD:
        return group_by_keyword(commits, config.keyword_patterns)

    raise UnsupportedGroupingError(f"Grouping strategy '{config.strategy}' is not supported")
