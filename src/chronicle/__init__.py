"""chronicle - categorized, deduplicated release notes from conventional commits."""

from __future__ import annotations

__version__ = "0.1.0"
