"""Tests for commit filtering."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from chronicle.config.models import FilterConfig
from chronicle.core.commits import CommitType, parse_commit
from chronicle.core.filter import (
    DEFAULT_EXCLUDE_PATTERNS,
    ExclusionReason,
    FilterStats,
    contains_any_pattern,
    filter_commits,
    is_merge_commit,
    partition_commits,
    should_include,
)

if TYPE_CHECKING:
    from tests.conftest import CommitFactory


class TestIsMergeCommit:
    """Tests for is_merge_commit()."""

    def test_merge_branch(self):
        """Merge branch messages are merge commits."""
        assert is_merge_commit("Merge branch 'feature' into main")

    def test_merge_pull_request(self):
        """Merge pull request messages are merge commits."""
        assert is_merge_commit("Merge pull request #123 from user/branch")

    def test_merge_colon(self):
        """Merge: prefix is a merge commit."""
        assert is_merge_commit("Merge: abc123 def456")

    def test_not_merge(self):
        """Merging mentioned in a conventional commit is not a merge commit."""
        assert not is_merge_commit("feat: merge two lists")
        assert not is_merge_commit("Merged something")


class TestContainsAnyPattern:
    """Tests for contains_any_pattern()."""

    def test_case_insensitive(self):
        """Matching ignores case on both sides."""
        assert contains_any_pattern("WIP: working on feature", ["wip"])
        assert contains_any_pattern("work in progress", ["PROGRESS"])

    def test_no_match(self):
        """No pattern, no match."""
        assert not contains_any_pattern("add new feature", DEFAULT_EXCLUDE_PATTERNS)

    def test_long_text_not_truncated(self):
        """Patterns deep inside long text are still found."""
        text = "x" * 2000 + " [skip changelog]"
        assert contains_any_pattern(text, DEFAULT_EXCLUDE_PATTERNS)

    def test_empty_text(self):
        """Empty or missing text never matches."""
        assert not contains_any_pattern(None, ["wip"])
        assert not contains_any_pattern("", ["wip"])


class TestShouldInclude:
    """Tests for should_include()."""

    def test_feat_included_by_default(self, make_commit: CommitFactory):
        """feat commits are included."""
        commit = make_commit(CommitType.FEAT, "add new feature")
        assert should_include(FilterConfig(), commit) == ExclusionReason.NONE

    @pytest.mark.parametrize(
        "commit_type",
        [CommitType.CHORE, CommitType.TEST, CommitType.CI, CommitType.BUILD],
    )
    def test_excluded_by_default(self, make_commit: CommitFactory, commit_type: CommitType):
        """Housekeeping types are excluded by default."""
        commit = make_commit(commit_type, "update things")
        assert should_include(FilterConfig(), commit) == ExclusionReason.EXCLUDED_TYPE

    @pytest.mark.parametrize("commit_type", [CommitType.REFACTOR, CommitType.DOCS])
    def test_refactor_docs_excluded_without_opt_in(
        self, make_commit: CommitFactory, commit_type: CommitType
    ):
        """refactor and docs need an explicit opt-in."""
        commit = make_commit(commit_type, "rework module")
        assert should_include(FilterConfig(), commit) == ExclusionReason.EXCLUDED_TYPE

    @pytest.mark.parametrize(
        ("commit_type", "flag"),
        [
            (CommitType.CHORE, "include_chore"),
            (CommitType.TEST, "include_test"),
            (CommitType.CI, "include_ci"),
            (CommitType.BUILD, "include_build"),
            (CommitType.REFACTOR, "include_refactor"),
            (CommitType.DOCS, "include_docs"),
        ],
    )
    def test_opt_in_flags(self, make_commit: CommitFactory, commit_type: CommitType, flag: str):
        """Each include_* flag lets its type through."""
        commit = make_commit(commit_type, "update things")
        config = FilterConfig(**{flag: True})
        assert should_include(config, commit) == ExclusionReason.NONE

    @pytest.mark.parametrize(
        "commit_type",
        [
            CommitType.FIX,
            CommitType.PERF,
            CommitType.DEPRECATE,
            CommitType.REMOVE,
            CommitType.SECURITY,
            CommitType.UNKNOWN,
        ],
    )
    def test_other_types_never_excluded_by_type(
        self, make_commit: CommitFactory, commit_type: CommitType
    ):
        """Only the opt-in types are filtered by type."""
        commit = make_commit(commit_type, "meaningful change")
        assert should_include(FilterConfig(), commit) == ExclusionReason.NONE

    def test_excluded_scope(self, make_commit: CommitFactory):
        """Commits in an excluded scope are dropped."""
        config = FilterConfig(exclude_scopes=["deps", "internal"])
        commit = make_commit(CommitType.FEAT, "bump requests", scope="deps")
        assert should_include(config, commit) == ExclusionReason.EXCLUDED_SCOPE

    def test_excluded_scope_case_insensitive(self, make_commit: CommitFactory):
        """Scope exclusion ignores case."""
        config = FilterConfig(exclude_scopes=["deps"])
        commit = make_commit(CommitType.FIX, "pin version", scope="DEPS")
        assert should_include(config, commit) == ExclusionReason.EXCLUDED_SCOPE

    def test_default_pattern(self, make_commit: CommitFactory):
        """Default noise patterns exclude the commit."""
        commit = make_commit(CommitType.FEAT, "WIP: work in progress")
        assert should_include(FilterConfig(), commit) == ExclusionReason.EXCLUDED_PATTERN

    def test_pattern_in_body(self, make_commit: CommitFactory):
        """Patterns in the body count too."""
        commit = make_commit(CommitType.FIX, "fix crash", body="Details\n[skip changelog]")
        assert should_include(FilterConfig(), commit) == ExclusionReason.EXCLUDED_PATTERN

    def test_custom_pattern(self, make_commit: CommitFactory):
        """Custom patterns are matched case-insensitively."""
        config = FilterConfig(exclude_patterns=["Experimental"])
        commit = make_commit(CommitType.FEAT, "add experimental feature")
        assert should_include(config, commit) == ExclusionReason.EXCLUDED_PATTERN

    def test_merge_commit_excluded(self):
        """Merge commits are excluded by default."""
        commit = parse_commit("Merge branch 'feature' into main")
        assert should_include(FilterConfig(), commit) == ExclusionReason.MERGE_COMMIT

    def test_merge_colon_subject(self):
        """Merge: subjects are detected from the subject line, not the description."""
        commit = parse_commit("Merge: abc123 def456")
        assert commit.description == "abc123 def456"
        assert should_include(FilterConfig(), commit) == ExclusionReason.MERGE_COMMIT

    def test_merge_commit_included_with_config(self):
        """include_merge_commits lets merge commits through."""
        commit = parse_commit("Merge branch 'feature' into main")
        config = FilterConfig(include_merge_commits=True)
        assert should_include(config, commit) == ExclusionReason.NONE


class TestExclusionPrecedence:
    """The first matching rule decides the reason."""

    def test_merge_beats_pattern(self):
        """A merge commit mentioning wip counts as merge."""
        commit = parse_commit("Merge branch 'wip-login' into main")
        assert should_include(FilterConfig(), commit) == ExclusionReason.MERGE_COMMIT

    def test_pattern_beats_scope(self, make_commit: CommitFactory):
        """Pattern is checked before scope."""
        config = FilterConfig(exclude_scopes=["deps"])
        commit = make_commit(CommitType.FEAT, "fixup deps", scope="deps")
        assert should_include(config, commit) == ExclusionReason.EXCLUDED_PATTERN

    def test_scope_beats_type(self, make_commit: CommitFactory):
        """Scope is checked before type."""
        config = FilterConfig(exclude_scopes=["deps"])
        commit = make_commit(CommitType.CHORE, "bump requests", scope="deps")
        assert should_include(config, commit) == ExclusionReason.EXCLUDED_SCOPE

    def test_pattern_beats_type(self, make_commit: CommitFactory):
        """Pattern is checked before type."""
        commit = make_commit(CommitType.CHORE, "squash history")
        assert should_include(FilterConfig(), commit) == ExclusionReason.EXCLUDED_PATTERN


class TestFilterStats:
    """Tests for FilterStats."""

    def test_tracks_exclusions(self):
        """Reasons are counted separately, types broken down by section."""
        stats = FilterStats()
        stats.record_exclusion(ExclusionReason.EXCLUDED_TYPE, CommitType.CHORE)
        stats.record_exclusion(ExclusionReason.EXCLUDED_TYPE, CommitType.CHORE)
        stats.record_exclusion(ExclusionReason.EXCLUDED_SCOPE, CommitType.FEAT)
        stats.record_inclusion()

        assert stats.excluded_by_type == 2
        assert stats.excluded_by_scope == 1
        assert stats.included == 1
        assert stats.total_excluded == 3
        assert stats.type_counts == {"Chore": 2}

    def test_none_reason_is_not_counted(self):
        """Recording NONE as an exclusion changes nothing."""
        stats = FilterStats()
        stats.record_exclusion(ExclusionReason.NONE, CommitType.FEAT)

        assert stats.total_excluded == 0


class TestFilterCommits:
    """Tests for filter_commits() and partition_commits()."""

    def test_returns_included_in_order(self, make_commit: CommitFactory):
        """Only included commits are returned, in input order."""
        commits = [
            make_commit(CommitType.FEAT, "feature"),
            make_commit(CommitType.CHORE, "chore"),
            make_commit(CommitType.FIX, "fix"),
        ]
        filtered = filter_commits(commits, FilterConfig())

        assert [c.commit_type for c in filtered] == [CommitType.FEAT, CommitType.FIX]

    def test_tracks_statistics(self, make_commit: CommitFactory):
        """Statistics cover every commit."""
        commits = [
            make_commit(CommitType.FEAT, "feature"),
            make_commit(CommitType.CHORE, "chore"),
            make_commit(CommitType.FEAT, "WIP: incomplete"),
        ]
        stats = FilterStats()
        filtered = filter_commits(commits, FilterConfig(), stats)

        assert len(filtered) == 1
        assert stats.total == 3
        assert stats.included == 1
        assert stats.excluded_by_type == 1
        assert stats.excluded_by_pattern == 1

    def test_partition(self, make_commit: CommitFactory):
        """partition_commits returns both sides."""
        feat = make_commit(CommitType.FEAT, "feature")
        chore = make_commit(CommitType.CHORE, "chore")

        included, excluded = partition_commits([feat, chore], FilterConfig())

        assert included == [feat]
        assert excluded == [chore]

    def test_decision_independent_of_order(self, make_commit: CommitFactory):
        """Reordering input does not change any commit's outcome."""
        commits = [
            make_commit(CommitType.FEAT, "feature"),
            make_commit(CommitType.CHORE, "chore"),
            make_commit(CommitType.FIX, "fix typo"),
        ]
        forward = filter_commits(commits, FilterConfig())
        backward = filter_commits(list(reversed(commits)), FilterConfig())

        assert {c.hash for c in forward} == {c.hash for c in backward}
