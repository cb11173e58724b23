"""Exception types raised while building a test matrix."""


class MatrixError(Exception):
    """Base class for matrix generation errors."""


class DescriptorError(MatrixError):
    """Raised when an enumeration descriptor file cannot be used."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid enumeration descriptor {path}: {reason}")


class ProjectConfigurationError(MatrixError):
    """Raised when a project's split metadata or test list is unusable.

    The error only affects the named project; the rest of the matrix is still
    produced.
    """

    def __init__(self, project: str, reason: str):
        self.project = project
        self.reason = reason
        super().__init__(f"Project '{project}': {reason}")


class MatrixWriteError(MatrixError):
    """Raised when the matrix or one of its companion artifacts cannot be written."""
