"""Monorepo package scoping.

In a monorepo the commit scope names the package a change belongs to,
e.g. ``feat(packages/cli): add command``. These helpers map scopes to
package names and narrow a commit list down to one package.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from chronicle.config.models import MonorepoConfig
    from chronicle.core.commits import Commit


def extract_package(config: MonorepoConfig, scope: str | None) -> str | None:
    """Extract the package name from a commit scope.

    Args:
        config: Monorepo configuration
        scope: Commit scope, e.g. ``packages/core/utils``

    Returns:
        Package name (``core`` for the example above, or ``packages/core``
        when ``strip_prefix`` is off), or None if the scope does not name a
        package. With no prefixes configured every scope is a package.
    """
    if not scope:
        return None

    for prefix in config.package_prefixes:
        if not scope.startswith(prefix):
            continue
        rest = scope[len(prefix) :]
        name = rest.split("/", 1)[0]
        return name if config.strip_prefix else prefix + name

    if not config.package_prefixes:
        return scope

    return None


def get_packages(config: MonorepoConfig, commits: Iterable[Commit]) -> list[str]:
    """Unique package names touched by the commits, in first-seen order."""
    packages = (extract_package(config, commit.scope) for commit in commits)
    return list(dict.fromkeys(pkg for pkg in packages if pkg is not None))


def scope_belongs_to_package(config: MonorepoConfig, scope: str | None, package: str) -> bool:
    return extract_package(config, scope) == package


def filter_by_package(
    config: MonorepoConfig,
    commits: Iterable[Commit],
    package: str,
) -> list[Commit]:
    """Commits whose scope belongs to the given package."""
    return [c for c in commits if scope_belongs_to_package(config, c.scope, package)]


def filter_shared_commits(config: MonorepoConfig, commits: Iterable[Commit]) -> list[Commit]:
    """Commits that do not belong to any package."""
    return [c for c in commits if extract_package(config, c.scope) is None]
