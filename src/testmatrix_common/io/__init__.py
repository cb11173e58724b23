"""File IO helpers."""

from testmatrix_common.io.files import (
    FileOperationError,
    atomic_write,
    ensure_dir,
    read_lines,
    safe_read_json,
    safe_read_yaml,
    safe_write_json,
)

__all__ = [
    "FileOperationError",
    "atomic_write",
    "ensure_dir",
    "read_lines",
    "safe_read_json",
    "safe_read_yaml",
    "safe_write_json",
]
