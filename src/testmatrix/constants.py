"""Constants shared across matrix generation."""

from enum import Enum

ALL_OSES = ("windows", "linux", "macos")

# Sentinel OS selector meaning "do not filter"
OS_ALL = "all"

DEFAULT_DESCRIPTOR_GLOB = "*.testenumeration.json"

METADATA_FILE_SUFFIX = ".tests.metadata.json"
TEST_LIST_FILE_SUFFIX = ".tests.list"

PARTITION_TRAIT = "Partition"
SHORTNAME_SEPARATOR = "_"
UNCOLLECTED_NAME = "UncollectedTests"
UNCOLLECTED_SUFFIX = "Uncollected"
CLASS_NAME_SEPARATOR = "."


class EntryType(str, Enum):
    """Kinds of matrix entries."""

    REGULAR = "regular"
    COLLECTION = "collection"
    UNCOLLECTED = "uncollected"
    CLASS = "class"


class SplitMode(str, Enum):
    """How a split test list partitions a project."""

    NONE = "none"
    COLLECTION = "collection"
    CLASS = "class"


class ListPrefix:
    """Directive prefixes recognized in split test lists."""

    COLLECTION = "collection:"
    UNCOLLECTED = "uncollected:"
    CLASS = "class:"


class DefaultTimeouts:
    """Timeouts applied when a project's metadata does not set them."""

    TEST_SESSION = "20m"
    TEST_HANG = "10m"
    UNCOLLECTED_TEST_SESSION = "15m"
    UNCOLLECTED_TEST_HANG = "10m"
