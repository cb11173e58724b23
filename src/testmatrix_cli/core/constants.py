"""Constants for the testmatrix CLI."""

from enum import Enum


class ExitCode:
    """Exit codes for CLI operations."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    NOT_FOUND = 2
    CONFIG_ERROR = 3


class LogLevel(Enum):
    """Log levels accepted by ``--log-level``."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


ALL_LOG_LEVELS = list(LogLevel)


class Icons:
    """Unicode icons for section headers and error lines."""

    SUCCESS = "✅"
    ERROR = "❌"
    WARNING = "⚠️"
    INFO = "📄"
    MATRIX = "🧮"


class EnvVars:
    """Environment variables read by the CLI."""

    PREFIX = "TESTMATRIX"

    DESCRIPTORS_DIR = "TESTMATRIX_DESCRIPTORS_DIR"
    HELIX_DIR = "TESTMATRIX_HELIX_DIR"
    OUTPUT = "TESTMATRIX_OUTPUT"
    OS = "TESTMATRIX_OS"
    CONFIG = "TESTMATRIX_CONFIG"

    # Any of these being set means we run inside CI
    CI_ENVIRONMENT_VARS = ("CI", "GITHUB_ACTIONS", "TF_BUILD")
