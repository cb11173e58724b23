"""Verbosity level enum for CLI output."""

from enum import IntEnum


class Verbosity(IntEnum):
    """Verbosity levels for CLI output, least verbose first."""

    NORMAL = 0
    VERBOSE = 1
    DEBUG = 2

    @classmethod
    def from_flags(
        cls,
        verbose: bool = False,
        verbose_debug: bool = False,
    ) -> "Verbosity":
        """Create Verbosity from the ``-v`` / ``-vvv`` flags."""
        if verbose_debug:
            return cls.DEBUG
        if verbose:
            return cls.VERBOSE
        return cls.NORMAL
