"""Matrix assembly.

Turns a directory of enumeration descriptors into the ordered list of matrix
entries: regular projects first, then split-derived entries, each group in
descriptor order.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from testmatrix.constants import DEFAULT_DESCRIPTOR_GLOB, OS_ALL, EntryType
from testmatrix.descriptors import (
    DescriptorReadResult,
    EnumerationDescriptor,
    read_descriptors,
)
from testmatrix.entries import MatrixEntry, build_regular_entry, build_split_entries
from testmatrix.errors import DescriptorError, ProjectConfigurationError
from testmatrix.filters import filter_entries, matches_build_os, normalize_os
from testmatrix.metadata import MetadataResolver, TestMetadata
from testmatrix.naming import LEGACY_CONVENTION, get_convention
from testmatrix.splits import read_split_list
from testmatrix_common.io import FileOperationError, read_lines
from testmatrix_common.logging import get_cli_logger

logger = get_cli_logger(__name__)


@dataclass
class ExcludedProject:
    """A project that contributes no entries, with the reason why."""

    project: str
    reason: str


@dataclass
class MatrixBuildResult:
    """Outcome of one matrix generation run."""

    requested_os: str = OS_ALL
    regular_entries: list[MatrixEntry] = field(default_factory=list)
    split_entries: list[MatrixEntry] = field(default_factory=list)
    regular_records: list[dict[str, Any]] = field(default_factory=list)
    excluded: list[ExcludedProject] = field(default_factory=list)
    failures: list[ProjectConfigurationError] = field(default_factory=list)
    skipped_descriptors: list[DescriptorError] = field(default_factory=list)
    descriptor_count: int = 0

    @property
    def entries(self) -> list[MatrixEntry]:
        return self.regular_entries + self.split_entries

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    def exclude(self, project: str, reason: str) -> None:
        logger.info("Project %s excluded: %s", project, reason)
        self.excluded.append(ExcludedProject(project, reason))

    def to_matrix(self) -> dict[str, list[dict[str, Any]]]:
        """Return the ``{"include": [...]}`` document consumed by CI."""
        return {"include": [entry.to_dict() for entry in self.entries]}

    def regular_short_names(self) -> list[str]:
        return [entry.shortname for entry in self.regular_entries]

    def counts_by_type(self) -> dict[str, int]:
        counts = Counter(entry.type.value for entry in self.entries)
        return {
            member.value: counts.get(member.value, 0) for member in EntryType
        }


class MatrixAssembler:
    """Builds the test matrix from enumeration descriptors."""

    def __init__(
        self,
        helix_dir: Path,
        requested_os: str | None = OS_ALL,
        resolver: MetadataResolver | None = None,
        descriptor_glob: str = DEFAULT_DESCRIPTOR_GLOB,
    ) -> None:
        """Initialize the assembler.

        Parameters
        ----------
        helix_dir : Path
            Directory holding split metadata and test-list files
        requested_os : str | None
            OS to build the matrix for, or ``"all"``
        resolver : MetadataResolver | None
            Metadata resolver; a default-configured one when omitted
        descriptor_glob : str
            Glob matching descriptor file names
        """
        self.helix_dir = helix_dir
        self.requested_os = normalize_os(requested_os)
        self.resolver = resolver or MetadataResolver()
        self.descriptor_glob = descriptor_glob

    def build(self, descriptor_dir: Path) -> MatrixBuildResult:
        """Read ``descriptor_dir`` and build the matrix."""
        read: DescriptorReadResult = read_descriptors(
            descriptor_dir,
            self.descriptor_glob,
        )
        result = self.build_from_descriptors(read.descriptors)
        result.skipped_descriptors = list(read.skipped)
        return result

    def build_from_descriptors(
        self,
        descriptors: Iterable[EnumerationDescriptor],
    ) -> MatrixBuildResult:
        """Build the matrix from already loaded descriptors.

        A project whose metadata or test list is unusable is recorded as a
        failure and skipped; the other projects are still processed.
        """
        result = MatrixBuildResult(requested_os=self.requested_os)
        seen: set[str] = set()

        for descriptor in descriptors:
            result.descriptor_count += 1

            if not matches_build_os(descriptor, self.requested_os):
                logger.debug(
                    "Skipping %s descriptor built for %s",
                    descriptor.project,
                    descriptor.build_os,
                )
                continue

            if descriptor.project in seen:
                logger.debug("Ignoring duplicate descriptor for %s", descriptor.project)
                continue
            seen.add(descriptor.project)

            reason = descriptor.exclusion_reason()
            if reason:
                result.exclude(descriptor.project, reason)
                continue

            try:
                self._add_project(result, descriptor)
            except ProjectConfigurationError as e:
                logger.warning("Skipping project %s: %s", descriptor.project, e.reason)
                result.failures.append(e)

        return result

    def add_legacy_short_names(
        self,
        result: MatrixBuildResult,
        short_names: Sequence[str],
    ) -> None:
        """Add regular entries for projects known only by short name.

        Project name and path are reconstructed with the legacy naming
        convention. Names already present as regular entries are skipped.
        """
        legacy = MetadataResolver(
            naming=get_convention(LEGACY_CONVENTION),
            default_overrides=self.resolver.default_overrides,
        )
        known = set(result.regular_short_names())

        for short_name in short_names:
            if short_name in known:
                continue
            known.add(short_name)

            metadata = legacy.defaults(short_name, short_name)
            entry = build_regular_entry(short_name, metadata, metadata.supported_oses)
            self._add_regular(result, metadata.project_name, entry, full_path="")

    def _add_project(
        self,
        result: MatrixBuildResult,
        descriptor: EnumerationDescriptor,
    ) -> None:
        # Regular projects only read metadata when they declare it
        if descriptor.split_tests or descriptor.has_test_metadata:
            metadata = self.resolver.resolve(
                descriptor.metadata_path(self.helix_dir),
                descriptor.project,
                descriptor.short_name,
                required=descriptor.has_test_metadata,
            )
        else:
            metadata = self.resolver.defaults(descriptor.project, descriptor.short_name)

        supported = (
            descriptor.supported_oses
            if descriptor.supported_oses is not None
            else metadata.supported_oses
        )
        if not supported:
            result.exclude(descriptor.project, "no supported OSes")
            return

        if not descriptor.split_tests:
            entry = build_regular_entry(descriptor.short_name, metadata, supported)
            self._add_regular(result, descriptor.project, entry, descriptor.full_path)
            return

        entries = self._split_entries(descriptor, metadata, supported)
        if not entries:
            result.exclude(descriptor.project, "test list has no usable entries")
            return

        kept = filter_entries(entries, self.requested_os)
        if not kept:
            result.exclude(descriptor.project, f"not supported on {self.requested_os}")
            return

        logger.debug("Project %s split into %d entries", descriptor.project, len(kept))
        result.split_entries.extend(kept)

    def _split_entries(
        self,
        descriptor: EnumerationDescriptor,
        metadata: TestMetadata,
        supported: Sequence[str],
    ) -> list[MatrixEntry]:
        list_path = descriptor.test_list_path(self.helix_dir)
        if not list_path.exists():
            raise ProjectConfigurationError(
                descriptor.project,
                f"test list file not found: {list_path}",
            )

        try:
            split_list = read_split_list(list_path)
        except FileOperationError as e:
            raise ProjectConfigurationError(descriptor.project, str(e)) from e

        if split_list.is_empty:
            logger.warning(
                "Test list for %s has no collection or class directives: %s",
                descriptor.project,
                list_path,
            )
            return []

        return build_split_entries(
            descriptor.short_name,
            split_list,
            metadata,
            supported,
        )

    def _add_regular(
        self,
        result: MatrixBuildResult,
        project: str,
        entry: MatrixEntry,
        full_path: str,
    ) -> None:
        if not filter_entries([entry], self.requested_os):
            result.exclude(project, f"not supported on {self.requested_os}")
            return

        result.regular_entries.append(entry)
        result.regular_records.append(
            {
                "project": project,
                "shortName": entry.shortname,
                "fullPath": full_path,
                "projectName": entry.project_name,
                "testProjectPath": entry.test_project_path,
                "supportedOSes": list(entry.supported_oses),
            },
        )


def read_short_names(path: Path) -> list[str]:
    """Read a flat list of short names, one per line.

    Raises
    ------
    FileOperationError
        If the file is missing or unreadable
    """
    return [line.strip() for line in read_lines(path) if line.strip()]


def generate_matrix(
    descriptor_dir: Path,
    helix_dir: Path | None = None,
    requested_os: str | None = OS_ALL,
    resolver: MetadataResolver | None = None,
    descriptor_glob: str = DEFAULT_DESCRIPTOR_GLOB,
    legacy_short_names: Sequence[str] | None = None,
) -> MatrixBuildResult:
    """Generate the test matrix for ``descriptor_dir``.

    Parameters
    ----------
    descriptor_dir : Path
        Directory of ``*.testenumeration.json`` files
    helix_dir : Path | None
        Directory of split metadata and list files; defaults to ``descriptor_dir``
    requested_os : str | None
        OS selector, ``"all"`` for no filtering
    resolver : MetadataResolver | None
        Metadata resolver to use
    descriptor_glob : str
        Glob matching descriptor file names
    legacy_short_names : Sequence[str] | None
        Short names of regular projects known only from a legacy list

    Returns
    -------
    MatrixBuildResult
        Entries plus exclusions and failures
    """
    assembler = MatrixAssembler(
        helix_dir or descriptor_dir,
        requested_os=requested_os,
        resolver=resolver,
        descriptor_glob=descriptor_glob,
    )
    result = assembler.build(descriptor_dir)
    if legacy_short_names:
        assembler.add_legacy_short_names(result, legacy_short_names)
    return result
