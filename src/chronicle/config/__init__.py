"""Configuration management for chronicle."""

from __future__ import annotations

from chronicle.config.loader import config_from_mapping, load_config
from chronicle.config.models import (
    ChronicleConfig,
    FilterConfig,
    GroupingConfig,
    HighlightCriteria,
    KeywordPattern,
    MonorepoConfig,
    SectionNamesConfig,
)

__all__ = [
    "ChronicleConfig",
    "FilterConfig",
    "GroupingConfig",
    "HighlightCriteria",
    "KeywordPattern",
    "MonorepoConfig",
    "SectionNamesConfig",
    "config_from_mapping",
    "load_config",
]
