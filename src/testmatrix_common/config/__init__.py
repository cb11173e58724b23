"""Configuration loading for the matrix tooling."""

from testmatrix_common.config.project import (
    PROJECT_CONFIG_NAME,
    deep_merge,
    default_config,
    get_project_config_path,
    load_merged_config,
    load_yaml,
)

__all__ = [
    "PROJECT_CONFIG_NAME",
    "deep_merge",
    "default_config",
    "get_project_config_path",
    "load_merged_config",
    "load_yaml",
]
