"""Naming conventions mapping a project to its test project paths.

A convention is a pure function ``(project_name, short_name) -> ProjectPaths``.
Conventions are looked up by name so the configuration can pick one without
entry construction knowing any path template.
"""

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class ProjectPaths:
    """Identity of a test project as seen by the test runner."""

    project_name: str
    test_project_path: str


NamingConvention = Callable[[str, str], ProjectPaths]


def project_convention(project_name: str, short_name: str) -> ProjectPaths:
    """Derive paths from the project id: ``tests/{project}/{project}.csproj``."""
    return ProjectPaths(
        project_name=project_name,
        test_project_path=f"tests/{project_name}/{project_name}.csproj",
    )


def aspire_legacy_convention(project_name: str, short_name: str) -> ProjectPaths:
    """Reconstruct paths from a short name alone.

    Only projects named ``Aspire.{shortName}.Tests`` follow this scheme; any
    other project has to ship metadata instead.
    """
    name = f"Aspire.{short_name}.Tests"
    return ProjectPaths(
        project_name=name,
        test_project_path=f"tests/{name}/{name}.csproj",
    )


# Registry of available conventions
NAMING_CONVENTIONS: dict[str, NamingConvention] = {
    "project": project_convention,
    "aspire-legacy": aspire_legacy_convention,
}

DEFAULT_CONVENTION = "project"
LEGACY_CONVENTION = "aspire-legacy"


def get_convention(name: str) -> NamingConvention:
    """Look up a naming convention by name.

    Raises
    ------
    ValueError
        If ``name`` is not registered
    """
    if name not in NAMING_CONVENTIONS:
        available = ", ".join(NAMING_CONVENTIONS.keys())
        msg = f"Unknown naming convention: {name}. Available: {available}"
        raise ValueError(msg)
    return NAMING_CONVENTIONS[name]


def list_conventions() -> list[str]:
    """List registered convention names."""
    return list(NAMING_CONVENTIONS.keys())
