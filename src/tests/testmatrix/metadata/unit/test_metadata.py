"""Tests for testmatrix.metadata."""

from pathlib import Path

import pytest

from testmatrix.errors import ProjectConfigurationError
from testmatrix.metadata import MetadataResolver, TestMetadata, default_metadata_record
from testmatrix.naming import get_convention

PROJECT = "Aspire.Hosting.Tests"


@pytest.fixture
def resolver() -> MetadataResolver:
    return MetadataResolver()


class TestDefaults:
    """Tests for the default metadata record."""

    def test_missing_file_returns_defaults(self, resolver, helix_dir: Path):
        """Verify an absent optional metadata file resolves to defaults."""
        metadata = resolver.resolve(helix_dir / "missing.json", PROJECT)

        assert metadata.project_name == PROJECT
        assert metadata.test_project_path == f"tests/{PROJECT}/{PROJECT}.csproj"
        assert metadata.test_class_names_prefix == PROJECT
        assert metadata.requires_nugets is False
        assert metadata.requires_test_sdk is False
        assert metadata.enable_playwright_install is False
        assert metadata.test_session_timeout == "20m"
        assert metadata.test_hang_timeout == "10m"
        assert metadata.uncollected_tests_session_timeout == "15m"
        assert metadata.uncollected_tests_hang_timeout == "10m"
        assert metadata.supported_oses == ["windows", "linux", "macos"]

    def test_configured_overrides_replace_defaults(self, helix_dir: Path):
        """Verify configured default overrides are applied."""
        resolver = MetadataResolver(default_overrides={"testSessionTimeout": "45m"})

        metadata = resolver.resolve(helix_dir / "missing.json", PROJECT)

        assert metadata.test_session_timeout == "45m"
        assert metadata.test_hang_timeout == "10m"

    def test_legacy_convention_paths(self):
        """Verify the legacy convention derives paths from the short name."""
        resolver = MetadataResolver(naming=get_convention("aspire-legacy"))

        metadata = resolver.defaults("Hosting", "Hosting")

        assert metadata.project_name == "Aspire.Hosting.Tests"
        assert metadata.test_project_path == (
            "tests/Aspire.Hosting.Tests/Aspire.Hosting.Tests.csproj"
        )

    def test_default_record_uses_json_keys(self):
        """Verify the default record is keyed like the metadata file."""
        record = default_metadata_record("P", "tests/P/P.csproj")

        assert record["projectName"] == "P"
        assert record["requiresNugets"] == "false"
        assert record["uncollectedTestsSessionTimeout"] == "15m"


class TestResolve:
    """Tests for merging a metadata file over the defaults."""

    def test_file_keys_override_defaults(self, resolver, write_metadata):
        """Verify present keys win and absent keys keep their default."""
        path = write_metadata(
            PROJECT,
            requiresNugets="true",
            testSessionTimeout="30m",
            supportedOSes=["linux"],
        )

        metadata = resolver.resolve(path, PROJECT)

        assert metadata.requires_nugets is True
        assert metadata.requires_test_sdk is False
        assert metadata.test_session_timeout == "30m"
        assert metadata.test_hang_timeout == "10m"
        assert metadata.supported_oses == ["linux"]

    def test_unknown_keys_are_preserved(self, resolver, write_metadata):
        """Verify unknown keys survive the merge."""
        path = write_metadata(PROJECT, futureSetting={"a": 1})

        metadata = resolver.resolve(path, PROJECT)

        assert metadata.extra == {"futureSetting": {"a": 1}}
        assert metadata.to_dict()["futureSetting"] == {"a": 1}

    def test_null_uncollected_timeouts_fall_back(self, resolver, write_metadata):
        """Verify uncollected timeouts fall back to the regular ones."""
        path = write_metadata(
            PROJECT,
            testSessionTimeout="25m",
            testHangTimeout="12m",
            uncollectedTestsSessionTimeout=None,
            uncollectedTestsHangTimeout="",
        )

        metadata = resolver.resolve(path, PROJECT)

        assert metadata.effective_uncollected_session_timeout == "25m"
        assert metadata.effective_uncollected_hang_timeout == "12m"

    def test_required_missing_file_raises(self, resolver, helix_dir: Path):
        """Verify a required but missing file is a project error."""
        with pytest.raises(ProjectConfigurationError) as exc_info:
            resolver.resolve(helix_dir / "missing.json", PROJECT, required=True)

        assert exc_info.value.project == PROJECT
        assert PROJECT in str(exc_info.value)

    def test_malformed_file_raises(self, resolver, helix_dir: Path):
        """Verify malformed JSON names the project in the error."""
        path = helix_dir / f"{PROJECT}.tests.metadata.json"
        path.write_text("{broken", encoding="utf-8")

        with pytest.raises(ProjectConfigurationError, match=PROJECT):
            resolver.resolve(path, PROJECT)

    def test_non_object_file_raises(self, resolver, helix_dir: Path):
        """Verify a metadata file must hold a JSON object."""
        path = helix_dir / f"{PROJECT}.tests.metadata.json"
        path.write_text('["a"]', encoding="utf-8")

        with pytest.raises(ProjectConfigurationError, match="JSON object"):
            resolver.resolve(path, PROJECT)


class TestTestMetadataFromMapping:
    """Tests for TestMetadata.from_mapping."""

    def test_boolean_values_accept_real_booleans(self):
        """Verify JSON booleans are accepted as well as strings."""
        metadata = TestMetadata.from_mapping(
            {
                "projectName": "P",
                "testProjectPath": "tests/P/P.csproj",
                "requiresTestSdk": True,
                "enablePlaywrightInstall": "TRUE",
            },
        )

        assert metadata.requires_test_sdk is True
        assert metadata.enable_playwright_install is True
