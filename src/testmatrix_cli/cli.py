"""Main CLI entry point for the test matrix generator.

This module provides the main Click command group and the shared context
object handed to every subcommand.
"""

from pathlib import Path
from typing import Any

import click

from testmatrix import __version__
from testmatrix_cli.commands import matrix
from testmatrix_cli.core.constants import ALL_LOG_LEVELS, EnvVars, LogLevel
from testmatrix_cli.core.output import OutputStrategy, Verbosity
from testmatrix_common.config import load_merged_config
from testmatrix_common.logging import configure_package_loggers, get_cli_logger

logger = get_cli_logger(__name__)


def _effective_log_level(
    verbose: bool,
    verbose_debug: bool,
    log_level: str | None,
) -> str:
    """Pick the log level implied by the CLI flags.

    Parameters
    ----------
    verbose : bool
        Whether -v verbose mode is enabled
    verbose_debug : bool
        Whether -vvv verbose debug mode is enabled
    log_level : str | None
        Explicit log level if provided

    Returns
    -------
    str
        The log level for the package loggers
    """
    if log_level:
        return log_level
    if verbose_debug:
        return LogLevel.DEBUG.value
    if verbose:
        return LogLevel.INFO.value
    return LogLevel.WARNING.value


class Context:
    """CLI context object for sharing state between commands."""

    def __init__(self, root: Path | None = None) -> None:
        """Initialize CLI context.

        Parameters
        ----------
        root : Path, optional
            Directory searched for ``.testmatrix.yaml``; the working directory
            when omitted
        """
        self.verbose: bool = False
        self.verbose_debug: bool = False
        self.root: Path = root or Path.cwd()
        self.config_path: Path | None = None
        self._config: dict[str, Any] | None = None
        self._output: OutputStrategy | None = None

    @property
    def config(self) -> dict[str, Any]:
        """Get the merged configuration, loading it on first use."""
        if self._config is None:
            self._config = load_merged_config(self.root, self.config_path)
        return self._config

    @property
    def output(self) -> OutputStrategy:
        """Get output strategy configured with the current verbosity."""
        if self._output is None:
            verbosity = Verbosity.from_flags(self.verbose, self.verbose_debug)
            self._output = OutputStrategy(verbosity=verbosity)
        return self._output


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show per-project decisions",
)
@click.option(
    "--verbose-debug",
    "-vvv",
    is_flag=True,
    help="Enable debug logging",
)
@click.option(
    "--log-level",
    type=click.Choice([level.value for level in ALL_LOG_LEVELS]),
    help="Set logging level",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar=EnvVars.CONFIG,
    help="Path to a .testmatrix.yaml configuration file",
)
@click.version_option(version=__version__, prog_name="testmatrix")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    verbose_debug: bool,
    log_level: str | None,
    config_path: Path | None,
) -> None:
    """Build CI test matrices from test enumeration descriptors."""
    ctx.ensure_object(Context)
    cli_ctx: Context = ctx.obj
    cli_ctx.verbose = verbose
    cli_ctx.verbose_debug = verbose_debug
    cli_ctx.config_path = config_path

    configure_package_loggers(
        _effective_log_level(verbose, verbose_debug, log_level),
        verbose_debug=verbose_debug,
    )
    logger.debug("testmatrix starting in %s", cli_ctx.root)


cli.add_command(matrix.group)


def main() -> None:
    """Serve as the main entry point for the CLI."""
    cli(prog_name="testmatrix", auto_envvar_prefix=EnvVars.PREFIX)


if __name__ == "__main__":
    main()
