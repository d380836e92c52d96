"""Commit message linting.

Checks that commit subject lines follow the conventional commit format
before a changelog is generated from them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chronicle.core.commits import CommitType, parse_subject

if TYPE_CHECKING:
    from collections.abc import Iterable

    from chronicle.core.commits import RawCommit

EXPECTED_FORMAT = "<type>[(scope)][!]: <description>"

DEFAULT_ALLOWED_TYPES = frozenset(t.value for t in CommitType if t is not CommitType.UNKNOWN)


@dataclass(frozen=True)
class LintResult:
    """Outcome of validating a single commit subject."""

    is_valid: bool
    error: str | None = None
    commit_type: str | None = None
    scope: str | None = None
    description: str | None = None
    is_breaking: bool = False


def validate_commit_message(
    subject: str,
    *,
    allowed_types: frozenset[str] | None = None,
    max_length: int | None = None,
    require_scope: bool = False,
) -> LintResult:
    """Validate a commit subject against the conventional commit format.

    Args:
        subject: Commit subject line
        allowed_types: Accepted type keywords. None accepts any keyword, so
            only the shape of the line is checked.
        max_length: Maximum subject length
        require_scope: Whether a scope is mandatory

    Returns:
        LintResult describing the outcome
    """
    if not subject.strip():
        return LintResult(is_valid=False, error="Commit subject cannot be empty")

    if max_length is not None and len(subject) > max_length:
        return LintResult(
            is_valid=False,
            error=f"Commit subject exceeds {max_length} characters ({len(subject)})",
        )

    parsed = parse_subject(subject)
    if parsed is None:
        return LintResult(
            is_valid=False,
            error=f"Commit subject does not follow conventional commit format: {EXPECTED_FORMAT}",
        )

    keyword = parsed.keyword

    if allowed_types is not None and keyword not in allowed_types:
        allowed = ", ".join(sorted(allowed_types))
        return LintResult(
            is_valid=False,
            error=f"Invalid commit type '{keyword}'. Allowed types: {allowed}",
            commit_type=keyword,
        )

    if require_scope and parsed.scope is None:
        return LintResult(
            is_valid=False,
            error="Commit subject must include a scope, e.g. feat(api): ...",
            commit_type=keyword,
        )

    return LintResult(
        is_valid=True,
        commit_type=keyword,
        scope=parsed.scope,
        description=parsed.description,
        is_breaking=parsed.breaking,
    )


@dataclass
class LintReport:
    """Results of linting a range of commits."""

    results: list[tuple[RawCommit, LintResult]] = field(default_factory=list)

    @property
    def valid_count(self) -> int:
        return sum(1 for _, result in self.results if result.is_valid)

    @property
    def invalid_count(self) -> int:
        return len(self.results) - self.valid_count

    @property
    def invalid(self) -> list[tuple[RawCommit, LintResult]]:
        return [(raw, result) for raw, result in self.results if not result.is_valid]


def lint_commits(
    raw_commits: Iterable[RawCommit],
    *,
    allowed_types: frozenset[str] | None = None,
    max_length: int | None = None,
    require_scope: bool = False,
) -> LintReport:
    """Validate the subject of every commit."""
    report = LintReport()
    for raw in raw_commits:
        result = validate_commit_message(
            raw.subject,
            allowed_types=allowed_types,
            max_length=max_length,
            require_scope=require_scope,
        )
        report.results.append((raw, result))
    return report
