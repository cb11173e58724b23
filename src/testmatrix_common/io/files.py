"""Safe file operations for the matrix tooling."""

import contextlib
import json
import tempfile
from pathlib import Path
from typing import Any

import yaml


class FileOperationError(Exception):
    """Raised when file operations fail."""


def safe_read_yaml(path: Path) -> dict[str, Any]:
    """Safely read YAML file with error handling.

    Parameters
    ----------
    path : Path
        Path to YAML file

    Returns
    -------
    dict[str, Any]
        Parsed YAML data

    Raises
    ------
    FileOperationError
        If file cannot be read or parsed
    """
    try:
        if not path.exists():
            msg = f"YAML file does not exist: {path}"
            raise FileOperationError(msg)

        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
            return data if data is not None else {}

    except yaml.YAMLError as e:
        msg = f"Invalid YAML in {path}: {e}"
        raise FileOperationError(msg) from e
    except OSError as e:
        msg = f"Cannot read YAML file {path}: {e}"
        raise FileOperationError(msg) from e


def safe_read_json(path: Path) -> Any:
    """Safely read JSON file with error handling.

    Unlike a config loader this returns whatever top-level value the document
    holds; callers decide which shapes they accept.

    Parameters
    ----------
    path : Path
        Path to JSON file

    Returns
    -------
    Any
        Parsed JSON data

    Raises
    ------
    FileOperationError
        If file cannot be read or parsed
    """
    try:
        if not path.exists():
            msg = f"JSON file does not exist: {path}"
            raise FileOperationError(msg)

        with path.open(encoding="utf-8-sig") as f:
            return json.load(f)

    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        msg = f"Invalid JSON in {path}: {e}"
        raise FileOperationError(msg) from e
    except OSError as e:
        msg = f"Cannot read JSON file {path}: {e}"
        raise FileOperationError(msg) from e


def safe_write_json(path: Path, data: Any, sort_keys: bool = True) -> None:
    """Safely write JSON file with atomic operation.

    Parameters
    ----------
    path : Path
        Path to JSON file
    data : Any
        JSON-serializable data to write
    sort_keys : bool
        Whether object keys are sorted in the output

    Raises
    ------
    FileOperationError
        If file cannot be written
    """
    try:
        content = json.dumps(data, indent=2, sort_keys=sort_keys)
    except (TypeError, ValueError) as e:
        msg = f"Cannot serialize JSON for {path}: {e}"
        raise FileOperationError(msg) from e

    atomic_write(path, content + "\n")


def atomic_write(path: Path, content: str) -> None:
    """Atomically write content to a file.

    Parameters
    ----------
    path : Path
        Path to write to
    content : str
        Content to write

    Raises
    ------
    FileOperationError
        If file cannot be written
    """
    temp_path = None
    try:
        ensure_dir(path.parent)

        # Write to temporary file first
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="\n",
            suffix=path.suffix,
            dir=path.parent,
            delete=False,
        ) as temp_file:
            temp_path = Path(temp_file.name)
            temp_file.write(content)

        # Atomic move
        temp_path.replace(path)

    except OSError as e:
        if temp_path is not None:
            with contextlib.suppress(OSError):
                temp_path.unlink(missing_ok=True)
        msg = f"Cannot write file {path}: {e}"
        raise FileOperationError(msg) from e


def ensure_dir(path: Path) -> Path:
    """Ensure directory exists, creating it if necessary.

    Parameters
    ----------
    path : Path
        Directory path to ensure

    Returns
    -------
    Path
        The directory path

    Raises
    ------
    FileOperationError
        If directory cannot be created
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
        return path
    except OSError as e:
        msg = f"Cannot create directory {path}: {e}"
        raise FileOperationError(msg) from e


def read_lines(path: Path) -> list[str]:
    """Read a text file as a list of lines without line terminators.

    Parameters
    ----------
    path : Path
        Path to the text file

    Returns
    -------
    list[str]
        Lines of the file

    Raises
    ------
    FileOperationError
        If the file is missing or cannot be decoded
    """
    try:
        if not path.exists():
            msg = f"File does not exist: {path}"
            raise FileOperationError(msg)
        return path.read_text(encoding="utf-8-sig").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read file {path}: {e}"
        raise FileOperationError(msg) from e
