"""Enumeration descriptor loading.

Each test project writes one ``*.testenumeration.json`` file during the build
stating whether and how its tests should be scheduled. This module reads a
directory of those files into :class:`EnumerationDescriptor` records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from testmatrix.booleans import as_bool, as_os_list
from testmatrix.constants import (
    DEFAULT_DESCRIPTOR_GLOB,
    METADATA_FILE_SUFFIX,
    TEST_LIST_FILE_SUFFIX,
)
from testmatrix.errors import DescriptorError
from testmatrix_common.io import FileOperationError, safe_read_json
from testmatrix_common.logging import get_cli_logger

logger = get_cli_logger(__name__)


@dataclass
class EnumerationDescriptor:
    """Per-project enumeration record produced by the build.

    Attributes
    ----------
    project : str
        Unique project identifier
    short_name : str
        Human display name
    full_path : str
        Path to the project's test unit, opaque to the matrix
    run_on_github_actions : bool
        Eligibility flag computed by the build
    split_tests : bool
        Whether the project is split into several matrix entries
    has_test_metadata : bool
        Whether metadata and test-list files must exist for the project
    supported_oses : list[str] | None
        Lower-cased OS identifiers the tests may run on; ``None`` when the
        descriptor does not declare any
    build_os : str | None
        OS the descriptor was generated under
    metadata_file : str | None
        Explicit metadata path, overriding the conventional location
    test_list_file : str | None
        Explicit test-list path, overriding the conventional location
    source : Path | None
        File the descriptor was read from
    """

    project: str
    short_name: str
    full_path: str = ""
    run_on_github_actions: bool = False
    split_tests: bool = False
    has_test_metadata: bool = False
    supported_oses: list[str] | None = None
    build_os: str | None = None
    metadata_file: str | None = None
    test_list_file: str | None = None
    source: Path | None = None

    @classmethod
    def from_mapping(
        cls,
        data: dict[str, Any],
        source: Path | None = None,
    ) -> EnumerationDescriptor:
        """Build a descriptor from its parsed JSON object.

        Raises
        ------
        DescriptorError
            If required fields are missing or file overrides are not strings
        """
        project = str(data.get("project") or "").strip()
        if not project:
            raise DescriptorError(source, "missing 'project'")

        short_name = str(data.get("shortName") or "").strip()
        if not short_name:
            raise DescriptorError(source, "missing 'shortName'")

        for key in ("metadataFile", "testListFile"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise DescriptorError(source, f"'{key}' must be a string")

        supported = as_os_list(data.get("supportedOSes"))
        build_os = str(data.get("buildOs") or "").strip().lower() or None

        return cls(
            project=project,
            short_name=short_name,
            full_path=str(data.get("fullPath") or ""),
            run_on_github_actions=as_bool(data.get("runOnGithubActions")),
            split_tests=as_bool(data.get("splitTests")),
            has_test_metadata=as_bool(data.get("hasTestMetadata")),
            supported_oses=supported,
            build_os=build_os,
            metadata_file=data.get("metadataFile") or None,
            test_list_file=data.get("testListFile") or None,
            source=source,
        )

    def metadata_path(self, helix_dir: Path) -> Path:
        """Return the metadata file for this project."""
        if self.metadata_file:
            return Path(self.metadata_file)
        return helix_dir / f"{self.project}{METADATA_FILE_SUFFIX}"

    def test_list_path(self, helix_dir: Path) -> Path:
        """Return the split test-list file for this project."""
        if self.test_list_file:
            return Path(self.test_list_file)
        return helix_dir / f"{self.project}{TEST_LIST_FILE_SUFFIX}"

    def exclusion_reason(self) -> str | None:
        """Return why the project must not appear in the matrix, or ``None``."""
        if not self.run_on_github_actions:
            return "not enabled for GitHub Actions"
        if self.supported_oses is not None and not self.supported_oses:
            return "no supported OSes"
        return None


@dataclass
class DescriptorReadResult:
    """Descriptors found in a directory together with the files that were skipped."""

    descriptors: list[EnumerationDescriptor] = field(default_factory=list)
    skipped: list[DescriptorError] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.descriptors


def find_descriptor_files(
    directory: Path,
    pattern: str = DEFAULT_DESCRIPTOR_GLOB,
) -> list[Path]:
    """List descriptor files in ``directory`` sorted by file name."""
    if not directory.is_dir():
        return []
    return sorted(
        (path for path in directory.glob(pattern) if path.is_file()),
        key=lambda path: path.name,
    )


def load_descriptor(path: Path) -> EnumerationDescriptor:
    """Load a single descriptor file.

    Raises
    ------
    DescriptorError
        If the file is unreadable, not a JSON object, or misses required fields
    """
    try:
        data = safe_read_json(path)
    except FileOperationError as e:
        raise DescriptorError(path, str(e)) from e

    if not isinstance(data, dict):
        raise DescriptorError(path, "expected a JSON object")

    return EnumerationDescriptor.from_mapping(data, source=path)


def read_descriptors(
    directory: Path,
    pattern: str = DEFAULT_DESCRIPTOR_GLOB,
) -> DescriptorReadResult:
    """Read every enumeration descriptor in ``directory``.

    Malformed files are skipped with a warning; an empty directory yields an
    empty result rather than an error.

    Parameters
    ----------
    directory : Path
        Directory holding the descriptor files
    pattern : str
        Glob matching descriptor file names

    Returns
    -------
    DescriptorReadResult
        Parsed descriptors in file-name order plus skipped files
    """
    result = DescriptorReadResult()
    files = find_descriptor_files(directory, pattern)

    if not files:
        logger.warning(
            "No enumeration descriptors matching '%s' found in %s",
            pattern,
            directory,
        )
        return result

    for path in files:
        try:
            descriptor = load_descriptor(path)
        except DescriptorError as e:
            logger.warning("Skipping descriptor: %s", e)
            result.skipped.append(e)
            continue
        result.descriptors.append(descriptor)

    logger.debug("Loaded %d descriptor(s) from %s", len(result.descriptors), directory)
    return result
