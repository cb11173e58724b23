"""Split-test metadata resolution.

A split project may ship a ``{project}.tests.metadata.json`` file. Its keys are
laid over a fixed default record (shallow merge: a key present in the file
replaces the default, absent keys keep it) and the result is exposed as a
typed :class:`TestMetadata`. Keys the generator does not know are preserved in
:attr:`TestMetadata.extra`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from testmatrix.booleans import as_bool, as_os_list
from testmatrix.constants import ALL_OSES, DefaultTimeouts
from testmatrix.errors import ProjectConfigurationError
from testmatrix.naming import DEFAULT_CONVENTION, NamingConvention, get_convention
from testmatrix_common.io import FileOperationError, safe_read_json
from testmatrix_common.logging import get_cli_logger

logger = get_cli_logger(__name__)

# JSON key -> TestMetadata attribute
FIELD_KEYS = {
    "projectName": "project_name",
    "testClassNamesPrefix": "test_class_names_prefix",
    "testProjectPath": "test_project_path",
    "requiresNugets": "requires_nugets",
    "requiresTestSdk": "requires_test_sdk",
    "enablePlaywrightInstall": "enable_playwright_install",
    "testSessionTimeout": "test_session_timeout",
    "testHangTimeout": "test_hang_timeout",
    "uncollectedTestsSessionTimeout": "uncollected_tests_session_timeout",
    "uncollectedTestsHangTimeout": "uncollected_tests_hang_timeout",
    "supportedOSes": "supported_oses",
}

BOOLEAN_KEYS = ("requiresNugets", "requiresTestSdk", "enablePlaywrightInstall")


@dataclass
class TestMetadata:
    """Resolved execution parameters of one project."""

    __test__ = False

    project_name: str
    test_project_path: str
    test_class_names_prefix: str | None = None
    requires_nugets: bool = False
    requires_test_sdk: bool = False
    enable_playwright_install: bool = False
    test_session_timeout: str = DefaultTimeouts.TEST_SESSION
    test_hang_timeout: str = DefaultTimeouts.TEST_HANG
    uncollected_tests_session_timeout: str | None = (
        DefaultTimeouts.UNCOLLECTED_TEST_SESSION
    )
    uncollected_tests_hang_timeout: str | None = DefaultTimeouts.UNCOLLECTED_TEST_HANG
    supported_oses: list[str] = field(default_factory=lambda: list(ALL_OSES))
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def effective_uncollected_session_timeout(self) -> str:
        return self.uncollected_tests_session_timeout or self.test_session_timeout

    @property
    def effective_uncollected_hang_timeout(self) -> str:
        return self.uncollected_tests_hang_timeout or self.test_hang_timeout

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> TestMetadata:
        """Build metadata from a merged key/value record.

        ``projectName`` and ``testProjectPath`` must be present; the defaults
        record always provides them.
        """
        values: dict[str, Any] = {}
        extra: dict[str, Any] = {}

        for key, value in data.items():
            attr = FIELD_KEYS.get(key)
            if attr is None:
                extra[key] = value
            elif key in BOOLEAN_KEYS:
                values[attr] = as_bool(value)
            elif key == "supportedOSes":
                oses = as_os_list(value)
                values[attr] = list(ALL_OSES) if oses is None else oses
            elif value is None or value == "":
                values[attr] = None
            else:
                values[attr] = str(value)

        # Regular timeouts always need a value; a null in the file falls back
        # to the built-in default.
        values["test_session_timeout"] = (
            values.get("test_session_timeout") or DefaultTimeouts.TEST_SESSION
        )
        values["test_hang_timeout"] = (
            values.get("test_hang_timeout") or DefaultTimeouts.TEST_HANG
        )

        return cls(**values, extra=extra)

    def to_dict(self) -> dict[str, Any]:
        """Return the record using the JSON key names, unknown keys included."""
        data = {key: getattr(self, attr) for key, attr in FIELD_KEYS.items()}
        data.update(self.extra)
        return data


def default_metadata_record(
    project_name: str,
    test_project_path: str,
    overrides: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Return the default metadata record for a project.

    Parameters
    ----------
    project_name : str
        Project identifier
    test_project_path : str
        Conventional path of the test project
    overrides : dict[str, Any] | None
        Configured replacements for individual defaults

    Returns
    -------
    dict[str, Any]
        Defaults keyed by JSON field name
    """
    record: dict[str, Any] = {
        "projectName": project_name,
        "testClassNamesPrefix": project_name,
        "testProjectPath": test_project_path,
        "requiresNugets": "false",
        "requiresTestSdk": "false",
        "enablePlaywrightInstall": "false",
        "testSessionTimeout": DefaultTimeouts.TEST_SESSION,
        "testHangTimeout": DefaultTimeouts.TEST_HANG,
        "uncollectedTestsSessionTimeout": DefaultTimeouts.UNCOLLECTED_TEST_SESSION,
        "uncollectedTestsHangTimeout": DefaultTimeouts.UNCOLLECTED_TEST_HANG,
        "supportedOSes": list(ALL_OSES),
    }
    if overrides:
        record.update(overrides)
    return record


class MetadataResolver:
    """Resolves the metadata of split projects."""

    def __init__(
        self,
        naming: NamingConvention | None = None,
        default_overrides: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the resolver.

        Parameters
        ----------
        naming : NamingConvention | None
            Convention used to fill in ``testProjectPath`` defaults
        default_overrides : dict[str, Any] | None
            Configured replacements for the built-in defaults
        """
        self.naming = naming or get_convention(DEFAULT_CONVENTION)
        self.default_overrides = dict(default_overrides or {})

    def defaults(
        self,
        project_name: str,
        short_name: str | None = None,
    ) -> TestMetadata:
        """Return the default metadata for a project without reading any file."""
        return TestMetadata.from_mapping(self._default_record(project_name, short_name))

    def resolve(
        self,
        metadata_path: Path,
        project_name: str,
        short_name: str | None = None,
        required: bool = False,
    ) -> TestMetadata:
        """Resolve metadata for ``project_name``.

        Parameters
        ----------
        metadata_path : Path
            Location of the metadata file
        project_name : str
            Project identifier
        short_name : str | None
            Display name, used by short-name based naming conventions
        required : bool
            Whether a missing file is an error rather than a reason to use
            the defaults

        Returns
        -------
        TestMetadata
            Defaults merged with the file content

        Raises
        ------
        ProjectConfigurationError
            If the file is required but missing, or exists but is malformed
        """
        record = self._default_record(project_name, short_name)

        if not metadata_path.exists():
            if required:
                raise ProjectConfigurationError(
                    project_name,
                    f"metadata file not found: {metadata_path}",
                )
            logger.debug(
                "No metadata file for %s at %s, using defaults",
                project_name,
                metadata_path,
            )
            return TestMetadata.from_mapping(record)

        try:
            data = safe_read_json(metadata_path)
        except FileOperationError as e:
            raise ProjectConfigurationError(project_name, str(e)) from e

        if not isinstance(data, dict):
            raise ProjectConfigurationError(
                project_name,
                f"metadata file {metadata_path} must contain a JSON object",
            )

        record.update(data)
        return TestMetadata.from_mapping(record)

    def _default_record(
        self,
        project_name: str,
        short_name: str | None,
    ) -> dict[str, Any]:
        paths = self.naming(project_name, short_name or project_name)
        return default_metadata_record(
            paths.project_name,
            paths.test_project_path,
            self.default_overrides,
        )
