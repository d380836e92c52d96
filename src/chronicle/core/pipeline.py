"""Changelog assembly pipeline.

Runs raw commits through parsing, package scoping, filtering, grouping,
and highlight detection, and returns the finished ChangelogEntry.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from chronicle.core.changelog import ChangelogEntry
from chronicle.core.commits import parse_raw_commits
from chronicle.core.filter import FilterStats, partition_commits
from chronicle.core.highlights import generate_highlights
from chronicle.core.monorepo import filter_by_package

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from chronicle.config.models import ChronicleConfig
    from chronicle.core.changelog import PRInfo
    from chronicle.core.commits import RawCommit


logger = logging.getLogger(__name__)


def today() -> str:
    """Today's date in UTC as ``YYYY-MM-DD``."""
    return datetime.now(UTC).strftime("%Y-%m-%d")


def build_changelog(
    raw_commits: Iterable[RawCommit],
    config: ChronicleConfig,
    *,
    version: str,
    date: str | None = None,
    package: str | None = None,
    pr_metadata: Mapping[str, PRInfo] | None = None,
    stats: FilterStats | None = None,
) -> ChangelogEntry:
    """Build the changelog document for one release.

    Args:
        raw_commits: Commits in the release range, newest first
        config: Validated configuration
        version: Version being released
        date: Release date, defaults to today (UTC)
        package: Restrict the changelog to one monorepo package
        pr_metadata: Pull request info keyed by commit hash
        stats: Optional accumulator receiving the filter statistics

    Returns:
        Fully populated ChangelogEntry

    Raises:
        UnsupportedGroupingError: If the grouping strategy is not implemented
    """
    entry = ChangelogEntry(
        version,
        date or today(),
        section_names=config.section_names.as_mapping(),
    )

    commits = parse_raw_commits(raw_commits)

    if package is not None:
        commits = filter_by_package(config.monorepo, commits, package)
        entry.set_package_filter(package)
        logger.debug("Scoped to package %s: %d commits", package, len(commits))

    filter_stats = stats if stats is not None else FilterStats()
    included, excluded = partition_commits(commits, config.filter, filter_stats)

    for commit in excluded:
        entry.record_exclusion(commit.commit_type)
    for commit in included:
        entry.add_commit(commit)

    entry.group_sections(config.grouping)

    for highlight in generate_highlights(entry, config.highlights):
        entry.add_highlight(highlight)

    if pr_metadata:
        included_hashes = {commit.hash for commit in included}
        for commit_hash, info in pr_metadata.items():
            if commit_hash in included_hashes:
                entry.add_pr_metadata(commit_hash, info)

    logger.info(
        "Changelog %s: included %d commits, excluded %d, %d highlights",
        version,
        filter_stats.included,
        filter_stats.total_excluded,
        len(entry.highlights),
    )
    return entry
