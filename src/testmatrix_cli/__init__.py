"""Command line interface for the test matrix generator."""

from testmatrix import __version__

__all__ = ["__version__"]
