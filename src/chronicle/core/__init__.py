"""Core business logic for chronicle.

This module contains the fundamental building blocks:
- Conventional commit parsing
- Commit filtering
- Scope and keyword grouping
- Highlight detection
- The changelog document model and the pipeline that builds it
"""

from __future__ import annotations

from chronicle.core.changelog import SECTION_ORDER, ChangelogEntry, PRInfo, Section, Stats
from chronicle.core.commits import (
    COMMIT_TYPE_TABLE,
    Commit,
    CommitType,
    RawCommit,
    extract_issues,
    has_breaking_footer,
    parse_commit,
    parse_raw_commit,
    parse_raw_commits,
    parse_subject,
)
from chronicle.core.filter import (
    DEFAULT_EXCLUDE_PATTERNS,
    ExclusionReason,
    FilterStats,
    filter_commits,
    partition_commits,
    should_include,
)
from chronicle.core.grouping import CommitGroup, GroupingStrategy, group_commits
from chronicle.core.highlights import (
    Highlight,
    HighlightReason,
    detect_highlight,
    generate_highlights,
)
from chronicle.core.lint import LintReport, LintResult, lint_commits, validate_commit_message
from chronicle.core.pipeline import build_changelog

__all__ = [
    # Commits
    "COMMIT_TYPE_TABLE",
    # Filter
    "DEFAULT_EXCLUDE_PATTERNS",
    # Changelog
    "SECTION_ORDER",
    "ChangelogEntry",
    "Commit",
    # Grouping
    "CommitGroup",
    "CommitType",
    "ExclusionReason",
    "FilterStats",
    "GroupingStrategy",
    # Highlights
    "Highlight",
    "HighlightReason",
    # Lint
    "LintReport",
    "LintResult",
    "PRInfo",
    "RawCommit",
    "Section",
    "Stats",
    # Pipeline
    "build_changelog",
    "detect_highlight",
    "extract_issues",
    "filter_commits",
    "generate_highlights",
    "group_commits",
    "has_breaking_footer",
    "lint_commits",
    "parse_commit",
    "parse_raw_commit",
    "parse_raw_commits",
    "parse_subject",
    "partition_commits",
    "should_include",
    "validate_commit_message",
]
