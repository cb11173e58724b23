"""Project YAML configuration loading.

This module locates, loads and deep-merges the optional project configuration
file (``.testmatrix.yaml``) over the built-in defaults used by the matrix
generator.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from testmatrix_common.io import safe_read_yaml
from testmatrix_common.io.files import FileOperationError
from testmatrix_common.logging import get_cli_logger

logger = get_cli_logger(__name__)

PROJECT_CONFIG_NAME = ".testmatrix.yaml"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge two dictionaries in place and return ``base``.

    Values from ``override`` take precedence. Nested dicts are merged
    recursively; other values are replaced.
    """
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def default_config() -> dict[str, Any]:
    """Return the default configuration structure."""
    return {
        "matrix": {
            "descriptor_glob": "*.testenumeration.json",
            "os": "all",
        },
        "metadata": {
            "defaults": {},
        },
        "naming": {
            "convention": "project",
        },
    }


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file with tolerant fallback.

    Returns an empty dict when the file is missing, unreadable, or not a
    mapping at the top level.
    """
    try:
        if not path.exists():
            return {}
        data = safe_read_yaml(path) or {}
        return data if isinstance(data, dict) else {}
    except FileOperationError as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}


def get_project_config_path(root: Path) -> Path:
    """Get path to the project-level configuration file."""
    return root / PROJECT_CONFIG_NAME


def load_merged_config(root: Path, config_path: Path | None = None) -> dict[str, Any]:
    """Load default + project YAML config into a single dict.

    Parameters
    ----------
    root : Path
        Directory searched for ``.testmatrix.yaml`` when no explicit path is given
    config_path : Path | None
        Explicit configuration file, overriding the conventional location
    """
    cfg = default_config()

    project_cfg = load_yaml(config_path or get_project_config_path(root))
    if project_cfg:
        deep_merge(cfg, project_cfg)

    return cfg
