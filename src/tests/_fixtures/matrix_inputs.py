"""Fixtures that lay out enumeration descriptors, metadata and test lists on disk."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

ALL_OSES = ["windows", "linux", "macos"]


@pytest.fixture
def descriptors_dir(tmp_path: Path) -> Path:
    """Return an empty directory for ``*.testenumeration.json`` files."""
    path = tmp_path / "enumerations"
    path.mkdir()
    return path


@pytest.fixture
def helix_dir(tmp_path: Path) -> Path:
    """Return an empty directory for split metadata and test lists."""
    path = tmp_path / "helix"
    path.mkdir()
    return path


@pytest.fixture
def write_descriptor(descriptors_dir: Path) -> Callable[..., Path]:
    """Return a helper writing one enumeration descriptor.

    Keyword arguments use the JSON field names and override the defaults of
    an eligible, non-split project supported everywhere.
    """

    def _write(project: str, short_name: str | None = None, **fields: Any) -> Path:
        data: dict[str, Any] = {
            "project": project,
            "shortName": short_name or project,
            "fullPath": f"artifacts/bin/{project}/{project}.dll",
            "runOnGithubActions": "true",
            "splitTests": "false",
            "hasTestMetadata": "false",
            "supportedOSes": list(ALL_OSES),
        }
        data.update(fields)
        path = descriptors_dir / f"{project}.testenumeration.json"
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_metadata(helix_dir: Path) -> Callable[..., Path]:
    """Return a helper writing ``{project}.tests.metadata.json``."""

    def _write(project: str, **fields: Any) -> Path:
        path = helix_dir / f"{project}.tests.metadata.json"
        path.write_text(json.dumps(fields, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_test_list(helix_dir: Path) -> Callable[[str, list[str]], Path]:
    """Return a helper writing ``{project}.tests.list``."""

    def _write(project: str, lines: list[str]) -> Path:
        path = helix_dir / f"{project}.tests.list"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def split_project(write_descriptor, write_metadata, write_test_list):
    """Return a helper creating a split project with metadata and a test list."""

    def _create(
        project: str,
        short_name: str,
        lines: list[str],
        **metadata: Any,
    ) -> None:
        write_descriptor(
            project,
            short_name,
            splitTests="true",
            hasTestMetadata="true",
        )
        write_metadata(project, projectName=project, **metadata)
        write_test_list(project, lines)

    return _create
