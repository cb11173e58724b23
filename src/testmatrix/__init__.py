"""Aggregate per-project test enumeration descriptors into a CI test matrix."""

from testmatrix.assembler import (
    ExcludedProject,
    MatrixAssembler,
    MatrixBuildResult,
    generate_matrix,
    read_short_names,
)
from testmatrix.descriptors import EnumerationDescriptor, read_descriptors
from testmatrix.entries import MatrixEntry
from testmatrix.errors import (
    DescriptorError,
    MatrixError,
    MatrixWriteError,
    ProjectConfigurationError,
)
from testmatrix.metadata import MetadataResolver, TestMetadata
from testmatrix.splits import SplitList, parse_split_list

__version__ = "0.1.0"

__all__ = [
    "DescriptorError",
    "EnumerationDescriptor",
    "ExcludedProject",
    "MatrixAssembler",
    "MatrixBuildResult",
    "MatrixEntry",
    "MatrixError",
    "MatrixWriteError",
    "MetadataResolver",
    "ProjectConfigurationError",
    "SplitList",
    "TestMetadata",
    "generate_matrix",
    "parse_split_list",
    "read_descriptors",
    "read_short_names",
]
