"""Highlight detection.

Singles out commits worth mentioning at the top of a release: breaking
changes, security fixes, deprecations, performance work, and changes to
scopes or features the project considers major. A commit produces at
most one highlight; checks run in priority order and stop at the first
match.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from chronicle.core.commits import CommitType

if TYPE_CHECKING:
    from chronicle.config.models import HighlightCriteria
    from chronicle.core.changelog import ChangelogEntry
    from chronicle.core.commits import Commit

logger = logging.getLogger(__name__)


class HighlightReason(StrEnum):
    """Why a commit was highlighted."""

    BREAKING_CHANGE = "breaking_change"
    SECURITY_FIX = "security_fix"
    DEPRECATION = "deprecation"
    PERFORMANCE_IMPROVEMENT = "performance_improvement"
    MAJOR_FEATURE = "major_feature"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def short_label(self) -> str:
        return _SHORT_LABELS[self]

    @property
    def summary_tag(self) -> str:
        """Bold prefix used in generated summaries."""
        return _SUMMARY_TAGS[self]


_DISPLAY_NAMES = {
    HighlightReason.BREAKING_CHANGE: "Breaking Change",
    HighlightReason.SECURITY_FIX: "Security Fix",
    HighlightReason.DEPRECATION: "Deprecation",
    HighlightReason.PERFORMANCE_IMPROVEMENT: "Performance Improvement",
    HighlightReason.MAJOR_FEATURE: "Major Feature",
}

_SHORT_LABELS = {
    HighlightReason.BREAKING_CHANGE: "BREAKING",
    HighlightReason.SECURITY_FIX: "SECURITY",
    HighlightReason.DEPRECATION: "DEPRECATED",
    HighlightReason.PERFORMANCE_IMPROVEMENT: "PERF",
    HighlightReason.MAJOR_FEATURE: "NEW",
}

_SUMMARY_TAGS = {
    HighlightReason.BREAKING_CHANGE: "**BREAKING** ",
    HighlightReason.SECURITY_FIX: "**SECURITY** ",
    HighlightReason.DEPRECATION: "**DEPRECATED** ",
    HighlightReason.PERFORMANCE_IMPROVEMENT: "**PERFORMANCE** ",
    HighlightReason.MAJOR_FEATURE: "",
}


@dataclass(frozen=True, slots=True)
class Highlight:
    """A noteworthy commit and its one-line summary."""

    reason: HighlightReason
    summary: str
    commit: Commit | None = None


def generate_summary(commit: Commit, reason: HighlightReason) -> str:
    """Build the summary line for a highlighted commit.

    Example:
        ``**BREAKING** api: change response format``
    """
    scope = f"{commit.scope}: " if commit.scope else ""
    return f"{reason.summary_tag}{scope}{commit.description}"


def _has_major_feature_keyword(criteria: HighlightCriteria, description: str) -> bool:
    lowered = description.lower()
    return any(keyword.lower() in lowered for keyword in criteria.major_feature_keywords)


def detect_reason(criteria: HighlightCriteria, commit: Commit) -> HighlightReason | None:
    """Return the highest-priority highlight reason for a commit, if any."""
    if criteria.include_breaking and commit.breaking:
        return HighlightReason.BREAKING_CHANGE

    if criteria.include_security and commit.commit_type == CommitType.SECURITY:
        return HighlightReason.SECURITY_FIX

    if criteria.include_deprecations and commit.commit_type == CommitType.DEPRECATE:
        return HighlightReason.DEPRECATION

    if criteria.include_performance and commit.commit_type == CommitType.PERF:
        return HighlightReason.PERFORMANCE_IMPROVEMENT

    if commit.scope is not None and commit.scope in criteria.highlighted_scopes:
        return HighlightReason.MAJOR_FEATURE

    if _has_major_feature_keyword(criteria, commit.description):
        return HighlightReason.MAJOR_FEATURE

    return None


def detect_highlight(criteria: HighlightCriteria, commit: Commit) -> Highlight | None:
    """Detect whether a commit should be highlighted.

    Args:
        criteria: Highlight criteria
        commit: Commit already placed in the changelog

    Returns:
        Highlight, or None if no criterion matches
    """
    reason = detect_reason(criteria, commit)
    if reason is None:
        return None
    return Highlight(reason=reason, summary=generate_summary(commit, reason), commit=commit)


def generate_highlights(entry: ChangelogEntry, criteria: HighlightCriteria) -> list[Highlight]:
    """Collect highlights for every commit in a changelog entry.

    Sections are visited in presentation order; grouped commits are
    included.
    """
    highlights = [
        highlight
        for commit in entry.iter_commits()
        if (highlight := detect_highlight(criteria, commit)) is not None
    ]
    logger.debug("Detected %d highlights", len(highlights))
    return highlights
