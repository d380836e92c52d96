"""Configuration models for chronicle.

All models are pydantic v2 models with defaults matching the behavior
of a plain ``chronicle`` run, so an empty ``[tool.chronicle]`` table is
a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chronicle.core.commits import CommitType
from chronicle.core.grouping import GroupingStrategy


class _Model(BaseModel):
    model_config = ConfigDict(extra="forbid")


class FilterConfig(_Model):
    """Which commits make it into the changelog."""

    include_refactor: bool = False
    include_docs: bool = False
    include_chore: bool = False
    include_test: bool = False
    include_ci: bool = False
    include_build: bool = False
    include_merge_commits: bool = False
    exclude_scopes: list[str] = Field(default_factory=list)
    exclude_patterns: list[str] = Field(default_factory=list)


class KeywordPattern(_Model):
    """Keywords that route a commit into a named group."""

    keywords: list[str]
    group_name: str
    label: str | None = None

    @field_validator("group_name")
    @classmethod
    def _group_name_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("group_name must not be empty (reserved for ungrouped commits)")
        return value


class GroupingConfig(_Model):
    """How commits are clustered within a section."""

    strategy: GroupingStrategy = GroupingStrategy.NONE
    min_group_size: int = Field(default=2, ge=1)
    keyword_patterns: list[KeywordPattern] = Field(default_factory=list)
    scope_labels: dict[str, str] = Field(default_factory=dict)

    @field_validator("strategy")
    @classmethod
    def _strategy_implemented(cls, value: GroupingStrategy) -> GroupingStrategy:
        if value == GroupingStrategy.BY_PATH:
            raise ValueError(
                "grouping strategy 'by_path' is not supported; use 'by_scope' or 'by_keyword'"
            )
        return value


class HighlightCriteria(_Model):
    """Which commits are called out as highlights."""

    include_breaking: bool = True
    include_security: bool = True
    include_deprecations: bool = True
    include_performance: bool = False
    highlighted_scopes: list[str] = Field(default_factory=list)
    major_feature_keywords: list[str] = Field(default_factory=list)


class MonorepoConfig(_Model):
    """Package detection for repositories hosting several packages."""

    enabled: bool = False
    package_prefixes: list[str] = Field(default_factory=list)
    per_package_changelogs: bool = False
    strip_prefix: bool = True


class SectionNamesConfig(_Model):
    """Section title per commit type."""

    feat: str = CommitType.FEAT.section_name
    fix: str = CommitType.FIX.section_name
    perf: str = CommitType.PERF.section_name
    refactor: str = CommitType.REFACTOR.section_name
    docs: str = CommitType.DOCS.section_name
    deprecate: str = CommitType.DEPRECATE.section_name
    remove: str = CommitType.REMOVE.section_name
    security: str = CommitType.SECURITY.section_name
    chore: str = CommitType.CHORE.section_name
    test: str = CommitType.TEST.section_name
    ci: str = CommitType.CI.section_name
    build: str = CommitType.BUILD.section_name
    other: str = CommitType.UNKNOWN.section_name

    def for_type(self, commit_type: CommitType) -> str:
        """Section name configured for a commit type."""
        if commit_type is CommitType.UNKNOWN:
            return self.other
        return getattr(self, commit_type.value)

    def as_mapping(self) -> dict[CommitType, str]:
        return {commit_type: self.for_type(commit_type) for commit_type in CommitType}


class ChronicleConfig(_Model):
    """Root configuration (``[tool.chronicle]``)."""

    filter: FilterConfig = Field(default_factory=FilterConfig)
    grouping: GroupingConfig = Field(default_factory=GroupingConfig)
    highlights: HighlightCriteria = Field(default_factory=HighlightCriteria)
    monorepo: MonorepoConfig = Field(default_factory=MonorepoConfig)
    section_names: SectionNamesConfig = Field(default_factory=SectionNamesConfig)

    @property
    def is_monorepo(self) -> bool:
        """Check if monorepo package scoping is active."""
        return self.monorepo.enabled
