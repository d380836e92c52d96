"""Implementation of the 'generate' command.

The generate command builds the changelog document for a release from
commits supplied by the version-control layer and reports the result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table

from chronicle.core.filter import FilterStats
from chronicle.core.pipeline import build_changelog
from chronicle.exceptions import ChronicleError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from rich.console import Console

    from chronicle.config.models import ChronicleConfig
    from chronicle.core.changelog import ChangelogEntry, PRInfo
    from chronicle.core.commits import RawCommit


def run_generate(
    raw_commits: Sequence[RawCommit],
    config: ChronicleConfig,
    version: str,
    console: Console,
    err_console: Console,
    *,
    date: str | None = None,
    package: str | None = None,
    pr_metadata: Mapping[str, PRInfo] | None = None,
    as_json: bool = False,
    quiet: bool = False,
) -> ChangelogEntry | None:
    """Run the generate command.

    Args:
        raw_commits: Commits in the release range
        config: Loaded configuration
        version: Version being released
        console: Console for standard output
        err_console: Console for error and progress output
        date: Release date override
        package: Monorepo package to scope the changelog to
        pr_metadata: Pull request info keyed by commit hash
        as_json: Print the changelog document as JSON
        quiet: Suppress progress output

    Returns:
        The changelog entry, or None when there was nothing to do
    """
    if not raw_commits:
        console.print("[yellow]No commits found in range. Nothing to do.[/]")
        return None

    if package is not None and not config.is_monorepo:
        err_console.print(
            "[yellow]Warning:[/] package filter given but monorepo mode is disabled in config"
        )

    if not quiet:
        err_console.print(f"Generating changelog for [cyan]{version}[/]")
        err_console.print(f"Found {len(raw_commits)} commits")

    stats = FilterStats()
    try:
        entry = build_changelog(
            raw_commits,
            config,
            version=version,
            date=date,
            package=package,
            pr_metadata=pr_metadata,
            stats=stats,
        )
    except ChronicleError as e:
        err_console.print(f"[red]Error generating changelog:[/] {e}")
        raise SystemExit(1) from e

    if not quiet:
        err_console.print(f"Included {stats.included} commits, excluded {stats.total_excluded}")

    if as_json:
        console.print_json(data=entry.to_dict())
        return entry

    if entry.is_empty:
        console.print(
            "[yellow]No releasable changes found (all commits were excluded).[/]\n"
            "[dim]Adjust [cyan]\\[tool.chronicle.filter][/] to include more commit types.[/]"
        )
        return entry

    console.print(_summary_table(entry, stats))

    if entry.highlights:
        console.print(
            Panel(
                "\n".join(f"  • {highlight.summary}" for highlight in entry.highlights),
                title="[green]Highlights[/]",
                border_style="green",
            )
        )

    return entry


def _summary_table(entry: ChangelogEntry, stats: FilterStats) -> Table:
    title = f"{entry.version} ({entry.date})"
    if entry.package_filter:
        title = f"{entry.package_filter} {title}"

    table = Table(title=title)
    table.add_column("Section", style="cyan")
    table.add_column("Commits", justify="right")
    table.add_column("Groups")

    for section in entry.ordered_sections():
        if section.is_empty:
            continue
        groups = ", ".join(
            f"{group.display_name} ({len(group)})" for group in section.groups.values()
        )
        table.add_row(section.name, str(len(section)), groups or "-")

    excluded = [
        f"{reason} {count}"
        for reason, count in (
            ("type", stats.excluded_by_type),
            ("scope", stats.excluded_by_scope),
            ("pattern", stats.excluded_by_pattern),
            ("merge", stats.excluded_merge_commits),
        )
        if count
    ]
    table.caption = f"Excluded: {', '.join(excluded)}" if excluded else None
    return table
