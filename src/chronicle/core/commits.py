"""Conventional commit parsing.

Parses commit subject lines following the Conventional Commits grammar::

    <type>[(scope)][!]: <description>

Examples:
    feat: add new feature
    fix(ui): resolve button alignment
    feat!: drop support for Python 3.10
    refactor(core)!: rework plugin loading

Parsing never fails: a subject that does not match the grammar becomes an
``unknown`` commit whose description is the whole subject line.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

# Footer prefixes that mark a breaking change in the commit body
BREAKING_FOOTERS = ("BREAKING CHANGE:", "BREAKING-CHANGE:")

ISSUE_PATTERN = re.compile(r"#[0-9]+")


class CommitType(StrEnum):
    """Recognized conventional commit types."""

    FEAT = "feat"
    FIX = "fix"
    PERF = "perf"
    REFACTOR = "refactor"
    DOCS = "docs"
    DEPRECATE = "deprecate"
    REMOVE = "remove"
    SECURITY = "security"
    CHORE = "chore"
    TEST = "test"
    CI = "ci"
    BUILD = "build"
    UNKNOWN = "unknown"

    @classmethod
    def from_keyword(cls, keyword: str) -> CommitType:
        """Look up a type keyword (exact, case-sensitive), falling back to UNKNOWN."""
        try:
            return cls(keyword)
        except ValueError:
            return cls.UNKNOWN

    @property
    def section_name(self) -> str:
        """Default changelog section for this type."""
        return COMMIT_TYPE_TABLE[self].section_name

    @property
    def excluded_by_default(self) -> bool:
        """Whether this type is left out of changelogs unless opted in."""
        return COMMIT_TYPE_TABLE[self].excluded_by_default


class CommitTypeInfo(NamedTuple):
    section_name: str
    excluded_by_default: bool


COMMIT_TYPE_TABLE: MappingProxyType[CommitType, CommitTypeInfo] = MappingProxyType(
    {
        CommitType.FEAT: CommitTypeInfo("Added", False),
        CommitType.FIX: CommitTypeInfo("Fixed", False),
        CommitType.PERF: CommitTypeInfo("Performance", False),
        CommitType.REFACTOR: CommitTypeInfo("Changed", False),
        CommitType.DOCS: CommitTypeInfo("Documentation", False),
        CommitType.DEPRECATE: CommitTypeInfo("Deprecated", False),
        CommitType.REMOVE: CommitTypeInfo("Removed", False),
        CommitType.SECURITY: CommitTypeInfo("Security", False),
        CommitType.CHORE: CommitTypeInfo("Chore", True),
        CommitType.TEST: CommitTypeInfo("Tests", True),
        CommitType.CI: CommitTypeInfo("CI", True),
        CommitType.BUILD: CommitTypeInfo("Build", True),
        CommitType.UNKNOWN: CommitTypeInfo("Other", False),
    }
)


@dataclass(frozen=True, slots=True)
class RawCommit:
    """A commit record as delivered by the version-control backend."""

    hash: str
    short_hash: str
    author: str
    date: str
    subject: str
    body: str | None = None


@dataclass(frozen=True, slots=True)
class Commit:
    """A parsed commit.

    Commits are immutable; every stage of the pipeline shares or copies
    them but never changes them in place.
    """

    hash: str
    short_hash: str
    commit_type: CommitType
    description: str
    scope: str | None = None
    body: str | None = None
    author: str = ""
    date: str = ""
    breaking: bool = False
    issues: tuple[str, ...] = field(default_factory=tuple)
    subject: str | None = None

    @property
    def section_name(self) -> str:
        return self.commit_type.section_name

    @property
    def first_line(self) -> str:
        """The raw subject line, or the description when unknown."""
        return self.subject if self.subject is not None else self.description


class ParsedSubject(NamedTuple):
    """Result of matching a subject line against the grammar."""

    commit_type: CommitType
    scope: str | None
    description: str
    breaking: bool
    keyword: str


def parse_subject(subject: str) -> ParsedSubject | None:
    """Parse a conventional commit subject line.

    Args:
        subject: First line of the commit message

    Returns:
        ParsedSubject, or None if the line does not follow the grammar.
        An unrecognized type keyword still parses (as UNKNOWN); only the
        shape of the line is checked.
    """
    trimmed = subject.strip(" \t")
    colon_pos = trimmed.find(":")
    if colon_pos <= 0:
        return None

    prefix = trimmed[:colon_pos]
    description = trimmed[colon_pos + 1 :].strip(" \t")
    if not description:
        return None

    breaking = False
    scope: str | None = None
    type_end = len(prefix)

    if prefix.endswith("!"):
        breaking = True
        type_end -= 1

    if type_end > 0 and prefix[type_end - 1] == ")":
        paren_pos = prefix.rfind("(", 0, type_end)
        if paren_pos != -1:
            scope = prefix[paren_pos + 1 : type_end - 1] or None
            type_end = paren_pos
            # "feat!(api): ..." marks breaking before the scope
            if type_end > 0 and prefix[type_end - 1] == "!":
                breaking = True
                type_end -= 1

    if type_end == 0:
        return None

    keyword = prefix[:type_end]
    return ParsedSubject(
        commit_type=CommitType.from_keyword(keyword),
        scope=scope,
        description=description,
        breaking=breaking,
        keyword=keyword,
    )


def has_breaking_footer(body: str | None) -> bool:
    """Check whether a commit body carries a BREAKING CHANGE footer."""
    if not body:
        return False
    return any(line.strip().startswith(BREAKING_FOOTERS) for line in body.splitlines())


def extract_issues(text: str | None) -> list[str]:
    """Extract issue references such as ``#123`` from text.

    Args:
        text: Text to scan

    Returns:
        References in order of appearance (duplicates kept)
    """
    if not text:
        return []
    return ISSUE_PATTERN.findall(text)


def parse_commit(
    subject: str,
    body: str | None = None,
    *,
    hash: str = "",  # noqa: A002
    short_hash: str = "",
    author: str = "",
    date: str = "",
) -> Commit:
    """Parse a subject/body pair into a Commit.

    Args:
        subject: First line of the commit message
        body: Remaining message text, if any
        hash: Full commit hash
        short_hash: Abbreviated commit hash
        author: Commit author
        date: ISO-8601 commit date

    Returns:
        Parsed Commit. Non-conventional subjects yield an UNKNOWN commit
        with no scope and the subject as description.
    """
    parsed = parse_subject(subject)

    if parsed is None:
        commit_type, scope, description, breaking = CommitType.UNKNOWN, None, subject, False
    else:
        commit_type, scope = parsed.commit_type, parsed.scope
        description, breaking = parsed.description, parsed.breaking

    if not breaking:
        breaking = has_breaking_footer(body)

    issues = tuple(dict.fromkeys([*extract_issues(subject), *extract_issues(body)]))

    return Commit(
        hash=hash,
        short_hash=short_hash,
        commit_type=commit_type,
        description=description,
        scope=scope,
        body=body,
        author=author,
        date=date,
        breaking=breaking,
        issues=issues,
        subject=subject,
    )


def parse_raw_commit(raw: RawCommit) -> Commit:
    """Parse a RawCommit record."""
    return parse_commit(
        raw.subject,
        raw.body,
        hash=raw.hash,
        short_hash=raw.short_hash,
        author=raw.author,
        date=raw.date,
    )


def parse_raw_commits(raw_commits: Iterable[RawCommit]) -> list[Commit]:
    """Parse a sequence of RawCommit records, preserving order."""
    commits = [parse_raw_commit(raw) for raw in raw_commits]
    logger.debug(
        "Parsed %d commits (%d non-conventional)",
        len(commits),
        sum(1 for c in commits if c.commit_type is CommitType.UNKNOWN),
    )
    return commits
