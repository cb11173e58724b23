"""Default output strategy implementation."""

from __future__ import annotations

import os
import shutil

import click

from testmatrix_cli.core.constants import EnvVars, Icons
from testmatrix_cli.core.output.verbosity import Verbosity


class OutputStrategy:
    """Verbosity-aware output used by every command.

    Errors, warnings and results are always shown; ``info``/``detail`` need
    ``-v`` and ``debug`` needs ``-vvv``.

    Parameters
    ----------
    verbosity : Verbosity
        Current verbosity level
    is_ci : bool | None
        Whether running in CI environment (auto-detected if None)
    """

    def __init__(
        self,
        verbosity: Verbosity = Verbosity.NORMAL,
        is_ci: bool | None = None,
    ) -> None:
        self._verbosity = verbosity
        self._is_ci = is_ci if is_ci is not None else self._detect_ci()

    @property
    def verbosity(self) -> Verbosity:
        return self._verbosity

    @property
    def is_ci(self) -> bool:
        return self._is_ci

    def _emit(
        self,
        message: str,
        *,
        err: bool = False,
        style: dict | None = None,
    ) -> None:
        rendered = click.style(message, **style) if style and message else message
        click.echo(rendered, err=err)

    def error(self, message: str, to_stderr: bool = True) -> None:
        """Display error message (red). Always visible."""
        self._emit(f"{Icons.ERROR} {message}", err=to_stderr, style={"fg": "red"})

    def warning(self, message: str) -> None:
        """Display warning message (yellow). Always visible."""
        self._emit(message, style={"fg": "yellow"})

    def success(self, message: str) -> None:
        """Display success message (green). Always visible."""
        self._emit(message, style={"fg": "green"})

    def result(self, message: str) -> None:
        """Display result/output. Always visible."""
        self._emit(message)

    def plain(self, message: str, err: bool = False) -> None:
        self._emit(message, err=err)

    def section(self, title: str, icon: str | None = None) -> None:
        """Display section heading between separator lines."""
        width = self._get_separator_width()
        icon_prefix = f"{icon} " if icon else ""
        click.echo("-" * width)
        click.echo(f"{icon_prefix}{title}:")
        click.echo("-" * width)

    def subsection(self, title: str) -> None:
        click.echo(f"\n{title}:")

    def info(self, message: str) -> None:
        """Display info message. Visible at VERBOSE+."""
        if self._verbosity >= Verbosity.VERBOSE:
            self._emit(message)

    def detail(self, message: str) -> None:
        """Display operational detail (dimmed). Visible at VERBOSE+."""
        if self._verbosity >= Verbosity.VERBOSE:
            self._emit(f"  {message}", style={"dim": True})

    def debug(self, message: str) -> None:
        """Display debug message (cyan). Visible at DEBUG only."""
        if self._verbosity >= Verbosity.DEBUG:
            self._emit(f"[DEBUG] {message}", style={"fg": "cyan"})

    def _get_separator_width(self) -> int:
        # Fixed width in CI logs; terminal width minus margins otherwise
        if self._is_ci:
            return 60
        try:
            return max(40, min(100, shutil.get_terminal_size().columns - 2))
        except (OSError, ValueError):
            return 60

    @staticmethod
    def _detect_ci() -> bool:
        return any(os.environ.get(v) for v in EnvVars.CI_ENVIRONMENT_VARS)

    @classmethod
    def from_click_context(cls, ctx: click.Context) -> OutputStrategy:
        """Create OutputStrategy from the flags stored on the Click context."""
        cli_ctx = ctx.obj
        verbose = getattr(cli_ctx, "verbose", False) if cli_ctx else False
        verbose_debug = getattr(cli_ctx, "verbose_debug", False) if cli_ctx else False
        return cls(verbosity=Verbosity.from_flags(verbose, verbose_debug))
