"""Configuration loading.

chronicle reads its settings from the ``[tool.chronicle]`` table of
``pyproject.toml``. A missing table means defaults.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from chronicle.config.models import ChronicleConfig
from chronicle.exceptions import ConfigNotFoundError, ConfigValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

PYPROJECT = "pyproject.toml"
TOOL_KEY = "chronicle"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or any parent directory.

    Args:
        start: Directory to search from, defaults to the current directory

    Returns:
        Path to pyproject.toml

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / PYPROJECT
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No {PYPROJECT} found in {current} or any parent directory")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Read and parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_chronicle_config(pyproject: Mapping[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.chronicle]`` table, or an empty dict."""
    return dict(pyproject.get("tool", {}).get(TOOL_KEY, {}))


def config_from_mapping(data: Mapping[str, Any]) -> ChronicleConfig:
    """Validate a configuration mapping.

    Raises:
        ConfigValidationError: If any value is invalid or a key is unknown
    """
    try:
        return ChronicleConfig.model_validate(dict(data))
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
        raise ConfigValidationError("Invalid chronicle configuration", errors) from e


def load_config(path: Path | None = None) -> ChronicleConfig:
    """Load configuration from pyproject.toml.

    Args:
        path: pyproject.toml file, or a directory to search from

    Returns:
        Validated configuration (defaults when no table is present)
    """
    if path is not None and path.is_file():
        pyproject_path = path
    else:
        pyproject_path = find_pyproject_toml(path)

    return config_from_mapping(extract_chronicle_config(load_pyproject_toml(pyproject_path)))
