"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chronicle.core.commits import Commit, CommitType, RawCommit

CommitFactory = Callable[..., Commit]


@pytest.fixture
def make_commit() -> CommitFactory:
    """Factory for parsed commits with sensible defaults."""
    counter = 0

    def _make(
        commit_type: CommitType = CommitType.FEAT,
        description: str = "add feature",
        *,
        scope: str | None = None,
        body: str | None = None,
        breaking: bool = False,
        subject: str | None = None,
        hash: str | None = None,  # noqa: A002
        issues: tuple[str, ...] = (),
    ) -> Commit:
        nonlocal counter
        counter += 1
        commit_hash = hash or f"{counter:040x}"
        return Commit(
            hash=commit_hash,
            short_hash=commit_hash[:7],
            commit_type=commit_type,
            description=description,
            scope=scope,
            body=body,
            author="Test",
            date="2026-01-19",
            breaking=breaking,
            issues=issues,
            subject=subject,
        )

    return _make


@pytest.fixture
def feat_raw() -> RawCommit:
    return RawCommit(
        hash="feat1234567890",
        short_hash="feat123",
        author="Test",
        date="2026-01-19T10:00:00+00:00",
        subject="feat: add user authentication",
    )


@pytest.fixture
def sample_raw_commits() -> list[RawCommit]:
    """A realistic release range, newest first."""
    subjects = [
        ("feat(auth): add login endpoint", None),
        ("feat(auth): add logout endpoint (#12)", None),
        ("feat(ui): add dark mode toggle", None),
        ("fix(api): handle null response", "Fixes #34"),
        ("fix!: change config file location", "BREAKING CHANGE: moved to XDG dir"),
        ("security: sanitize HTML in comments", None),
        ("perf(db): add index on users.email", None),
        ("docs: update readme", None),
        ("chore: bump dependencies", None),
        ("ci: cache pip downloads", None),
        ("Merge branch 'feature/x' into main", None),
        ("feat: WIP search", None),
        ("Updated the readme file", None),
    ]
    return [
        RawCommit(
            hash=f"{i:040x}",
            short_hash=f"{i:07x}",
            author="Test",
            date="2026-01-19T10:00:00+00:00",
            subject=subject,
            body=body,
        )
        for i, (subject, body) in enumerate(subjects, start=1)
    ]
