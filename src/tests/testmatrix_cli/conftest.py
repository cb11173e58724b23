"""Fixtures for the testmatrix CLI test suite."""

import pytest
from click.testing import CliRunner

from testmatrix_cli.core.constants import EnvVars


@pytest.fixture
def cli_runner():
    """Provide Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_cli_env(tmp_path, monkeypatch):
    """Run commands from an empty directory without CI variables leaking in."""
    workdir = tmp_path / "workdir"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    for name in (
        EnvVars.DESCRIPTORS_DIR,
        EnvVars.HELIX_DIR,
        EnvVars.OUTPUT,
        EnvVars.OS,
        EnvVars.CONFIG,
        "GITHUB_OUTPUT",
    ):
        monkeypatch.delenv(name, raising=False)
    return workdir
