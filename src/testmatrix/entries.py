"""Matrix entry construction.

Every entry is a self-contained unit of CI work: its ``extraTestArgs`` alone
selects the tests it runs. Collection entries select one partition trait,
the uncollected entry excludes every partition declared in the same list,
and class entries select a single class.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from testmatrix.constants import (
    CLASS_NAME_SEPARATOR,
    PARTITION_TRAIT,
    SHORTNAME_SEPARATOR,
    UNCOLLECTED_NAME,
    UNCOLLECTED_SUFFIX,
    EntryType,
    SplitMode,
)
from testmatrix.metadata import TestMetadata
from testmatrix.splits import SplitList

UNCOLLECTED_COLLECTION = "*"


@dataclass
class MatrixEntry:
    """One schedulable CI work item."""

    type: EntryType
    project_name: str
    name: str
    shortname: str
    test_project_path: str
    extra_test_args: str = ""
    requires_nugets: bool = False
    requires_test_sdk: bool = False
    enable_playwright_install: bool = False
    test_session_timeout: str = ""
    test_hang_timeout: str = ""
    supported_oses: list[str] = field(default_factory=list)
    collection: str | None = None
    classname: str | None = None
    full_class_name: str | None = None

    def supports(self, os_name: str) -> bool:
        """Check whether the entry may run on ``os_name`` (case-insensitive)."""
        wanted = os_name.strip().lower()
        return any(candidate.lower() == wanted for candidate in self.supported_oses)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the field names CI workflows expect."""
        data: dict[str, Any] = {
            "type": self.type.value,
            "projectName": self.project_name,
            "name": self.name,
            "shortname": self.shortname,
            "testProjectPath": self.test_project_path,
            "extraTestArgs": self.extra_test_args,
            "requiresNugets": self.requires_nugets,
            "requiresTestSdk": self.requires_test_sdk,
            "enablePlaywrightInstall": self.enable_playwright_install,
            "testSessionTimeout": self.test_session_timeout,
            "testHangTimeout": self.test_hang_timeout,
            "supportedOSes": list(self.supported_oses),
        }
        if self.type in (EntryType.COLLECTION, EntryType.UNCOLLECTED):
            data["collection"] = self.collection
        if self.type is EntryType.CLASS:
            data["classname"] = self.classname
            data["fullClassName"] = self.full_class_name
        return data


def partition_filter(collection: str) -> str:
    return f'--filter-trait "{PARTITION_TRAIT}={collection}"'


def uncollected_filter(collections: Sequence[str]) -> str:
    """Return the complement of all ``collections`` as one filter string."""
    return " ".join(
        f'--filter-not-trait "{PARTITION_TRAIT}={collection}"'
        for collection in collections
    )


def class_filter(full_class_name: str) -> str:
    return f'--filter-class "{full_class_name}"'


def short_class_name(full_class_name: str, prefix: str | None) -> str:
    """Strip ``prefix`` and its trailing separator from a class name.

    The full name is returned unchanged when it does not start with
    ``prefix`` followed by the separator.
    """
    if prefix:
        lead = prefix.rstrip(CLASS_NAME_SEPARATOR) + CLASS_NAME_SEPARATOR
        if full_class_name.startswith(lead) and len(full_class_name) > len(lead):
            return full_class_name[len(lead):]
    return full_class_name


def split_shortname(base_short_name: str, suffix: str) -> str:
    return f"{base_short_name}{SHORTNAME_SEPARATOR}{suffix}"


def _common_fields(
    metadata: TestMetadata,
    supported_oses: Sequence[str],
) -> dict[str, Any]:
    return {
        "project_name": metadata.project_name,
        "test_project_path": metadata.test_project_path,
        "requires_nugets": metadata.requires_nugets,
        "requires_test_sdk": metadata.requires_test_sdk,
        "enable_playwright_install": metadata.enable_playwright_install,
        "supported_oses": list(supported_oses),
    }


def build_regular_entry(
    short_name: str,
    metadata: TestMetadata,
    supported_oses: Sequence[str],
) -> MatrixEntry:
    """Build the single entry of a project that runs as one unit."""
    return MatrixEntry(
        type=EntryType.REGULAR,
        name=short_name,
        shortname=short_name,
        extra_test_args="",
        test_session_timeout=metadata.test_session_timeout,
        test_hang_timeout=metadata.test_hang_timeout,
        **_common_fields(metadata, supported_oses),
    )


def build_collection_entry(
    base_short_name: str,
    collection: str,
    metadata: TestMetadata,
    supported_oses: Sequence[str],
) -> MatrixEntry:
    """Build the entry running one trait partition of a project."""
    return MatrixEntry(
        type=EntryType.COLLECTION,
        name=collection,
        shortname=split_shortname(base_short_name, collection),
        extra_test_args=partition_filter(collection),
        test_session_timeout=metadata.test_session_timeout,
        test_hang_timeout=metadata.test_hang_timeout,
        collection=collection,
        **_common_fields(metadata, supported_oses),
    )


def build_uncollected_entry(
    base_short_name: str,
    collections: Sequence[str],
    metadata: TestMetadata,
    supported_oses: Sequence[str],
) -> MatrixEntry:
    """Build the entry running every test outside the declared partitions."""
    return MatrixEntry(
        type=EntryType.UNCOLLECTED,
        name=UNCOLLECTED_NAME,
        shortname=split_shortname(base_short_name, UNCOLLECTED_SUFFIX),
        extra_test_args=uncollected_filter(collections),
        test_session_timeout=metadata.effective_uncollected_session_timeout,
        test_hang_timeout=metadata.effective_uncollected_hang_timeout,
        collection=UNCOLLECTED_COLLECTION,
        **_common_fields(metadata, supported_oses),
    )


def build_class_entry(
    full_class_name: str,
    metadata: TestMetadata,
    supported_oses: Sequence[str],
) -> MatrixEntry:
    """Build the entry running a single test class."""
    short_name = short_class_name(full_class_name, metadata.test_class_names_prefix)
    return MatrixEntry(
        type=EntryType.CLASS,
        name=short_name,
        shortname=short_name,
        extra_test_args=class_filter(full_class_name),
        test_session_timeout=metadata.test_session_timeout,
        test_hang_timeout=metadata.test_hang_timeout,
        classname=short_name,
        full_class_name=full_class_name,
        **_common_fields(metadata, supported_oses),
    )


def build_split_entries(
    base_short_name: str,
    split_list: SplitList,
    metadata: TestMetadata,
    supported_oses: Sequence[str],
) -> list[MatrixEntry]:
    """Build all entries of a split project.

    Collection mode yields the sorted collections followed by the uncollected
    entry (when declared); class mode yields one entry per class in file order.
    """
    entries: list[MatrixEntry] = []

    if split_list.mode is SplitMode.COLLECTION:
        for collection in split_list.collections:
            entries.append(
                build_collection_entry(
                    base_short_name, collection, metadata, supported_oses,
                ),
            )
        if split_list.has_uncollected:
            entries.append(
                build_uncollected_entry(
                    base_short_name,
                    split_list.collections,
                    metadata,
                    supported_oses,
                ),
            )
    elif split_list.mode is SplitMode.CLASS:
        for full_class_name in split_list.classes:
            entries.append(build_class_entry(full_class_name, metadata, supported_oses))

    return entries
