"""Tests for testmatrix.naming."""

import pytest

from testmatrix.naming import (
    ProjectPaths,
    aspire_legacy_convention,
    get_convention,
    list_conventions,
    project_convention,
)


class TestConventions:
    """Tests for the naming conventions."""

    def test_project_convention(self):
        """Verify paths are derived from the project identifier."""
        assert project_convention("Foo.Tests", "Foo") == ProjectPaths(
            project_name="Foo.Tests",
            test_project_path="tests/Foo.Tests/Foo.Tests.csproj",
        )

    def test_aspire_legacy_convention(self):
        """Verify the legacy convention reconstructs names from the short name."""
        paths = aspire_legacy_convention("ignored", "Redis")

        assert paths.project_name == "Aspire.Redis.Tests"
        assert paths.test_project_path == "tests/Aspire.Redis.Tests/Aspire.Redis.Tests.csproj"

    def test_get_convention(self):
        """Verify registered conventions are returned by name."""
        assert get_convention("project") is project_convention
        assert get_convention("aspire-legacy") is aspire_legacy_convention
        assert set(list_conventions()) == {"project", "aspire-legacy"}

    def test_unknown_convention_raises(self):
        """Verify an unknown name lists the available conventions."""
        with pytest.raises(ValueError, match="Available: project, aspire-legacy"):
            get_convention("nope")
