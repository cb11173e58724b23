"""Split test-list parsing.

A split project's ``{project}.tests.list`` file holds one directive per line:

- ``collection:<name>`` declares a partition selected by trait,
- ``uncollected:*`` declares the remainder outside every partition,
- ``class:<FullyQualifiedName>`` declares a single test class.

The first non-blank line fixes the mode of the whole file. Lines that do not
belong to that mode are ignored.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from testmatrix.constants import ListPrefix, SplitMode
from testmatrix_common.io import read_lines


@dataclass
class SplitList:
    """Parsed content of a split test-list file."""

    mode: SplitMode = SplitMode.NONE
    collections: list[str] = field(default_factory=list)
    has_uncollected: bool = False
    classes: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.collections or self.has_uncollected or self.classes)

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "collections": list(self.collections),
            "hasUncollected": self.has_uncollected,
            "classes": list(self.classes),
        }


def detect_mode(lines: Iterable[str]) -> SplitMode:
    """Return the split mode decided by the first non-blank line."""
    for raw in lines:
        line = raw.strip()
        if not line:
            continue
        if line.startswith((ListPrefix.COLLECTION, ListPrefix.UNCOLLECTED)):
            return SplitMode.COLLECTION
        if line.startswith(ListPrefix.CLASS):
            return SplitMode.CLASS
        return SplitMode.NONE
    return SplitMode.NONE


def parse_split_list(lines: Iterable[str]) -> SplitList:
    """Parse test-list lines.

    Collection names are de-duplicated and sorted; class names keep file
    order with duplicates dropped.

    Parameters
    ----------
    lines : Iterable[str]
        Lines of the list file

    Returns
    -------
    SplitList
        Parsed directives; empty when the file has no recognizable mode
    """
    lines = list(lines)
    mode = detect_mode(lines)
    result = SplitList(mode=mode)

    if mode is SplitMode.NONE:
        return result

    collections: set[str] = set()
    for raw in lines:
        line = raw.strip()
        if not line:
            continue

        if mode is SplitMode.COLLECTION:
            if line.startswith(ListPrefix.COLLECTION):
                name = line[len(ListPrefix.COLLECTION):].strip()
                if name:
                    collections.add(name)
            elif line.startswith(ListPrefix.UNCOLLECTED):
                result.has_uncollected = True
        elif line.startswith(ListPrefix.CLASS):
            name = line[len(ListPrefix.CLASS):].strip()
            if name and name not in result.classes:
                result.classes.append(name)

    result.collections = sorted(collections)
    return result


def read_split_list(path: Path) -> SplitList:
    """Read and parse a test-list file.

    Raises
    ------
    FileOperationError
        If the file is missing or unreadable
    """
    return parse_split_list(read_lines(path))
