"""Implementation of the 'lint' command.

The lint command reports commits whose subject line does not follow the
conventional commit format.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from chronicle.core.lint import DEFAULT_ALLOWED_TYPES, EXPECTED_FORMAT, lint_commits

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rich.console import Console

    from chronicle.core.commits import RawCommit
    from chronicle.core.lint import LintReport


def run_lint(
    raw_commits: Sequence[RawCommit],
    console: Console,
    err_console: Console,
    *,
    strict_types: bool = False,
    max_length: int | None = None,
    require_scope: bool = False,
    quiet: bool = False,
) -> LintReport | None:
    """Run the lint command.

    Args:
        raw_commits: Commits to check
        console: Console for standard output
        err_console: Console for error output
        strict_types: Only accept the known commit type keywords
        max_length: Maximum subject length
        require_scope: Require a scope on every commit
        quiet: Only print the summary

    Returns:
        The lint report, or None if there was nothing to lint

    Raises:
        SystemExit: With status 1 if any commit is invalid
    """
    if not raw_commits:
        console.print("No commits to lint.")
        return None

    report = lint_commits(
        raw_commits,
        allowed_types=DEFAULT_ALLOWED_TYPES if strict_types else None,
        max_length=max_length,
        require_scope=require_scope,
    )

    if not quiet:
        for raw, result in report.results:
            subject = escape(raw.subject)
            if result.is_valid:
                console.print(f"[green]OK:[/]      {raw.short_hash} ({subject})")
            else:
                err_console.print(f"[red]INVALID:[/] {raw.short_hash} ({subject})")
                err_console.print(f"         [dim]{escape(result.error or '')}[/]")

    console.print(
        f"\nLinted {len(report.results)} commits: "
        f"[green]{report.valid_count} valid[/], [red]{report.invalid_count} invalid[/]"
    )

    if report.invalid_count:
        err_console.print(
            "\nSome commits do not follow conventional commit format.\n"
            f"Expected format: [cyan]{escape(EXPECTED_FORMAT)}[/]\n"
            f"Types: {', '.join(sorted(DEFAULT_ALLOWED_TYPES))}"
        )
        raise SystemExit(1)

    return report
