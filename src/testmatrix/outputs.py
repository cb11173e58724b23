"""Writers for the matrix artifact and its companion files."""

from __future__ import annotations

import json
import os
from pathlib import Path

from testmatrix.assembler import MatrixBuildResult
from testmatrix.errors import MatrixWriteError
from testmatrix_common.io import FileOperationError, atomic_write, safe_write_json
from testmatrix_common.logging import get_cli_logger

logger = get_cli_logger(__name__)

GITHUB_OUTPUT_ENV = "GITHUB_OUTPUT"


def write_matrix(result: MatrixBuildResult, path: Path) -> None:
    """Write the ``{"include": [...]}`` document to ``path``.

    Raises
    ------
    MatrixWriteError
        If the file or its directory cannot be written
    """
    try:
        safe_write_json(path, result.to_matrix(), sort_keys=False)
    except FileOperationError as e:
        raise MatrixWriteError(str(e)) from e
    logger.info("Wrote %d matrix entries to %s", len(result.entries), path)


def write_regular_list(result: MatrixBuildResult, path: Path) -> None:
    """Write the short names of regular projects, one per line."""
    names = result.regular_short_names()
    content = "\n".join(names) + "\n" if names else ""
    try:
        atomic_write(path, content)
    except FileOperationError as e:
        raise MatrixWriteError(str(e)) from e
    logger.info("Wrote %d regular project names to %s", len(names), path)


def write_legacy_records(result: MatrixBuildResult, path: Path) -> None:
    """Write the full records of regular projects as a JSON array."""
    try:
        safe_write_json(path, result.regular_records, sort_keys=False)
    except FileOperationError as e:
        raise MatrixWriteError(str(e)) from e
    logger.info(
        "Wrote %d regular project records to %s",
        len(result.regular_records),
        path,
    )


def format_github_output(result: MatrixBuildResult) -> str:
    """Format the matrix as ``GITHUB_OUTPUT`` key/value lines."""
    matrix_json = json.dumps(result.to_matrix(), separators=(",", ":"))
    return f"matrix={matrix_json}\nmatrix_count={len(result.entries)}\n"


def write_github_output(
    result: MatrixBuildResult,
    env: dict[str, str] | None = None,
) -> Path | None:
    """Append the matrix to the file named by ``$GITHUB_OUTPUT``.

    Returns
    -------
    Path | None
        The output file, or ``None`` when the variable is not set
    """
    env = os.environ if env is None else env
    gh_out = env.get(GITHUB_OUTPUT_ENV)
    if not gh_out:
        logger.warning("%s environment variable not set", GITHUB_OUTPUT_ENV)
        return None

    path = Path(gh_out)
    try:
        with path.open("a", encoding="utf-8") as f:
            f.write(format_github_output(result))
    except OSError as e:
        msg = f"Cannot append to {path}: {e}"
        raise MatrixWriteError(msg) from e
    return path
