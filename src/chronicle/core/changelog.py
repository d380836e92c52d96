"""Changelog document model.

A :class:`ChangelogEntry` collects everything known about one release:
commits sorted into sections, optional groups within those sections,
highlights, pull request metadata, and inclusion statistics. Renderers
read the entry; they never need to look at raw commit data again.

Sections follow Keep a Changelog ordering, see :data:`SECTION_ORDER`.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from chronicle.core.grouping import UNGROUPED, CommitGroup, group_by_scope, group_commits

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from chronicle.config.models import GroupingConfig
    from chronicle.core.commits import Commit, CommitType
    from chronicle.core.highlights import Highlight

logger = logging.getLogger(__name__)

SECTION_ORDER: tuple[str, ...] = (
    "Added",
    "Changed",
    "Deprecated",
    "Removed",
    "Fixed",
    "Security",
    "Performance",
    "Documentation",
    "Other",
)


@dataclass(frozen=True, slots=True)
class PRInfo:
    """Pull request metadata attached to a commit."""

    number: int
    title: str
    body: str | None = None
    labels: tuple[str, ...] = ()


@dataclass
class Stats:
    """Included/excluded totals for a changelog entry."""

    included: int = 0
    excluded: int = 0
    excluded_by_type: dict[str, int] = field(default_factory=dict)

    def record_inclusion(self) -> None:
        self.included += 1

    def record_exclusion(self, section_name: str) -> None:
        self.excluded += 1
        self.excluded_by_type[section_name] = self.excluded_by_type.get(section_name, 0) + 1


@dataclass
class Section:
    """A changelog section such as "Added" or "Fixed".

    Once grouped, ``grouped`` stays True; commits that did not qualify for
    a named group remain in ``commits``.
    """

    name: str
    commits: list[Commit] = field(default_factory=list)
    groups: dict[str, CommitGroup] = field(default_factory=dict)
    grouped: bool = False

    def add_commit(self, commit: Commit) -> None:
        self.commits.append(commit)

    def apply_groups(self, groups: Mapping[str, CommitGroup]) -> None:
        """Move grouped commits out of the flat list.

        Args:
            groups: Grouping result for this section's commits. The
                ungrouped bucket, if present, becomes the new flat list.
        """
        if self.grouped:
            return
        named = {name: group for name, group in groups.items() if name != UNGROUPED}
        ungrouped = groups.get(UNGROUPED)
        self.commits = list(ungrouped.commits) if ungrouped is not None else []
        self.groups = named
        self.grouped = True

    def all_commits(self) -> Iterator[Commit]:
        """Flat commits first, then commits of each group."""
        yield from self.commits
        for group in self.groups.values():
            yield from group.commits

    @property
    def is_empty(self) -> bool:
        return not self.commits and not any(group.commits for group in self.groups.values())

    def __len__(self) -> int:
        return len(self.commits) + sum(len(group) for group in self.groups.values())


class ChangelogEntry:
    """The changelog document for a single release.

    Args:
        version: Version being released
        date: Release date (``YYYY-MM-DD``)
        section_names: Optional section name per commit type, overriding
            the defaults
    """

    def __init__(
        self,
        version: str,
        date: str,
        *,
        section_names: Mapping[CommitType, str] | None = None,
    ) -> None:
        self.version = version
        self.date = date
        self.sections: dict[str, Section] = {}
        self.stats = Stats()
        self.highlights: list[Highlight] = []
        self.package_filter: str | None = None
        self.pr_metadata: dict[str, PRInfo] = {}
        self._section_names = dict(section_names) if section_names else {}

    def __repr__(self) -> str:
        return (
            f"ChangelogEntry(version={self.version!r}, date={self.date!r}, "
            f"sections={list(self.sections)!r}, included={self.stats.included})"
        )

    def section_name_for(self, commit_type: CommitType) -> str:
        return self._section_names.get(commit_type, commit_type.section_name)

    def add_commit(self, commit: Commit) -> None:
        """Add a commit to the section for its type.

        The entry stores its own copy; the caller's commit is untouched.
        """
        name = self.section_name_for(commit.commit_type)
        section = self.sections.get(name)
        if section is None:
            section = self.sections[name] = Section(name=name)
        section.add_commit(dataclasses.replace(commit))
        self.stats.record_inclusion()

    def record_exclusion(self, commit_type: CommitType) -> None:
        """Count an excluded commit without storing it."""
        self.stats.record_exclusion(self.section_name_for(commit_type))

    def group_all_sections(
        self,
        min_group_size: int = 2,
        scope_labels: Mapping[str, str] | None = None,
    ) -> None:
        """Group every section by scope, in place.

        Sections that were grouped before are left alone, so calling this
        twice has no further effect.
        """
        for section in self.sections.values():
            if section.grouped:
                continue
            section.apply_groups(group_by_scope(section.commits, min_group_size, scope_labels))

    def group_sections(self, config: GroupingConfig) -> None:
        """Group every section using the configured strategy, in place.

        Raises:
            UnsupportedGroupingError: If the strategy is not implemented
        """
        for section in self.sections.values():
            if section.grouped:
                continue
            groups = group_commits(config, section.commits)
            if not groups:
                continue
            section.apply_groups(groups)
            logger.debug(
                "Section %s: %d groups, %d ungrouped commits",
                section.name,
                len(section.groups),
                len(section.commits),
            )

    def add_highlight(self, highlight: Highlight) -> None:
        self.highlights.append(dataclasses.replace(highlight))

    def add_pr_metadata(self, commit_hash: str, info: PRInfo) -> None:
        self.pr_metadata[commit_hash] = dataclasses.replace(info)

    def set_package_filter(self, name: str | None) -> None:
        self.package_filter = name

    def get_section(self, name: str) -> Section | None:
        return self.sections.get(name)

    def ordered_sections(self) -> list[Section]:
        """Sections in presentation order.

        Known sections come first in :data:`SECTION_ORDER`; any other
        (custom) section follows in the order it was first created.
        """
        known = [self.sections[name] for name in SECTION_ORDER if name in self.sections]
        custom = [section for name, section in self.sections.items() if name not in SECTION_ORDER]
        return known + custom

    def iter_commits(self) -> Iterator[Commit]:
        """All commits in presentation order."""
        for section in self.ordered_sections():
            yield from section.all_commits()

    @property
    def is_empty(self) -> bool:
        return all(section.is_empty for section in self.sections.values())

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view of the entry, as consumed by JSON tooling."""
        return {
            "version": self.version,
            "date": self.date,
            "package": self.package_filter,
            "highlights": [
                {
                    "type": highlight.reason.value,
                    "commit_hash": highlight.commit.hash if highlight.commit else None,
                    "summary": highlight.summary,
                }
                for highlight in self.highlights
            ],
            "sections": [
                {
                    "name": section.name,
                    "grouped": section.grouped,
                    "groups": [
                        {
                            "name": group.name,
                            "label": group.label,
                            "commits": [_commit_to_dict(c) for c in group.commits],
                        }
                        for group in section.groups.values()
                    ],
                    "commits": [_commit_to_dict(c) for c in section.commits],
                }
                for section in self.ordered_sections()
                if not section.is_empty
            ],
            "pr_metadata": {
                commit_hash: {
                    "number": info.number,
                    "title": info.title,
                    "body": info.body,
                    "labels": list(info.labels),
                }
                for commit_hash, info in self.pr_metadata.items()
            },
            "stats": {
                "included": self.stats.included,
                "excluded": self.stats.excluded,
            },
        }


def _commit_to_dict(commit: Commit) -> dict[str, Any]:
    return {
        "hash": commit.hash,
        "short_hash": commit.short_hash,
        "type": commit.commit_type.value,
        "scope": commit.scope,
        "description": commit.description,
        "author": commit.author,
        "date": commit.date,
        "breaking": commit.breaking,
        "issues": list(commit.issues),
    }
