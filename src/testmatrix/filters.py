"""OS filtering of matrix entries."""

from __future__ import annotations

from collections.abc import Iterable

from testmatrix.constants import OS_ALL
from testmatrix.descriptors import EnumerationDescriptor
from testmatrix.entries import MatrixEntry


def normalize_os(requested_os: str | None) -> str:
    """Normalize an OS selector; empty selects every OS."""
    value = (requested_os or "").strip().lower()
    return value or OS_ALL


def include(entry: MatrixEntry, requested_os: str | None) -> bool:
    """Decide whether ``entry`` belongs in the matrix for ``requested_os``."""
    requested = normalize_os(requested_os)
    if requested == OS_ALL:
        return True
    return entry.supports(requested)


def filter_entries(
    entries: Iterable[MatrixEntry],
    requested_os: str | None,
) -> list[MatrixEntry]:
    return [entry for entry in entries if include(entry, requested_os)]


def matches_build_os(
    descriptor: EnumerationDescriptor,
    requested_os: str | None,
) -> bool:
    """Check whether a descriptor was produced for the requested OS.

    Descriptors without ``buildOs`` match every selector.
    """
    requested = normalize_os(requested_os)
    if requested == OS_ALL or descriptor.build_os is None:
        return True
    return descriptor.build_os == requested
