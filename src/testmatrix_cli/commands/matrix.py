"""Test matrix commands."""

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from testmatrix.assembler import MatrixBuildResult, generate_matrix, read_short_names
from testmatrix.constants import DEFAULT_DESCRIPTOR_GLOB
from testmatrix.metadata import MetadataResolver
from testmatrix.naming import get_convention
from testmatrix.outputs import (
    write_github_output,
    write_legacy_records,
    write_matrix,
    write_regular_list,
)
from testmatrix.splits import read_split_list
from testmatrix_cli.core.constants import EnvVars, ExitCode, Icons
from testmatrix_cli.core.decorators import handle_exceptions
from testmatrix_common.logging import get_cli_logger

if TYPE_CHECKING:
    from testmatrix_cli.core.output import OutputStrategy

logger = get_cli_logger(__name__)


def _build_resolver(config: dict[str, Any]) -> MetadataResolver:
    """Create the metadata resolver described by the configuration.

    Raises
    ------
    click.UsageError
        If the configured naming convention is unknown
    """
    naming_name = config.get("naming", {}).get("convention", "project")
    try:
        naming = get_convention(naming_name)
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    defaults = config.get("metadata", {}).get("defaults") or {}
    return MetadataResolver(naming=naming, default_overrides=defaults)


def _display_summary(output: "OutputStrategy", result: MatrixBuildResult) -> None:
    """Print entry counts per type and the projects left out."""
    output.subsection("Matrix summary")
    for entry_type, count in result.counts_by_type().items():
        output.result(f"  {entry_type:<12} {count}")
    output.result(f"  {'total':<12} {len(result.entries)}")

    if result.excluded:
        output.info(f"{Icons.INFO} Excluded projects ({len(result.excluded)}):")
        for excluded in result.excluded:
            output.detail(f"{excluded.project}: {excluded.reason}")

    for skipped in result.skipped_descriptors:
        output.warning(f"Skipped descriptor {skipped.path}: {skipped.reason}")

    for failure in result.failures:
        output.warning(f"{Icons.WARNING} {failure}")


@click.group(name="matrix")
@click.pass_context
def group(ctx: click.Context) -> None:
    """Generate and inspect CI test matrices."""


@group.command(name="generate")
@click.option(
    "--descriptors-dir",
    type=click.Path(file_okay=False, path_type=Path),
    required=True,
    envvar=EnvVars.DESCRIPTORS_DIR,
    help="Directory of *.testenumeration.json descriptor files",
)
@click.option(
    "--helix-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=EnvVars.HELIX_DIR,
    help="Directory of split metadata and test-list files (default: descriptors dir)",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    envvar=EnvVars.OUTPUT,
    help="Path of the matrix JSON file to write",
)
@click.option(
    "--os",
    "requested_os",
    envvar=EnvVars.OS,
    help="Only include entries supported on this OS ('all' disables filtering)",
)
@click.option(
    "--regular-tests-list",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Legacy list of regular project short names to add to the matrix",
)
@click.option(
    "--regular-list-output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write regular project short names, one per line",
)
@click.option(
    "--legacy-output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write the full regular project records as JSON",
)
@click.option(
    "--github-output",
    is_flag=True,
    help="Append the matrix to the $GITHUB_OUTPUT file",
)
@click.option(
    "--strict/--no-strict",
    default=True,
    show_default=True,
    help="Exit non-zero when a project's split configuration is broken",
)
@click.pass_context
@handle_exceptions
def generate(
    ctx: click.Context,
    descriptors_dir: Path,
    helix_dir: Path | None,
    output_path: Path,
    requested_os: str | None,
    regular_tests_list: Path | None,
    regular_list_output: Path | None,
    legacy_output: Path | None,
    github_output: bool,
    strict: bool,
) -> None:
    """Generate the test matrix from enumeration descriptors.

    \b
    Examples:
      testmatrix matrix generate --descriptors-dir artifacts/enum -o matrix.json
      testmatrix matrix generate --descriptors-dir enum --os linux -o linux.json
    """  # noqa: W605
    output = ctx.obj.output
    config = ctx.obj.config
    matrix_config = config.get("matrix", {})

    requested_os = requested_os or matrix_config.get("os")
    resolver = _build_resolver(config)
    descriptor_glob = matrix_config.get("descriptor_glob") or DEFAULT_DESCRIPTOR_GLOB

    legacy_names = None
    if regular_tests_list is not None:
        legacy_names = read_short_names(regular_tests_list)

    output.section(f"Generating test matrix ({requested_os or 'all'})", Icons.MATRIX)
    output.info(f"Descriptors: {descriptors_dir}")
    output.info(f"Split metadata: {helix_dir or descriptors_dir}")
    output.debug(
        f"Naming convention: {config.get('naming', {}).get('convention')}, "
        f"descriptor glob: {descriptor_glob}",
    )

    result = generate_matrix(
        descriptors_dir,
        helix_dir=helix_dir,
        requested_os=requested_os,
        resolver=resolver,
        descriptor_glob=descriptor_glob,
        legacy_short_names=legacy_names,
    )

    if result.descriptor_count == 0 and not result.skipped_descriptors:
        output.warning(
            f"No enumeration descriptors found in {descriptors_dir}; "
            "writing an empty matrix",
        )

    write_matrix(result, output_path)
    if regular_list_output is not None:
        write_regular_list(result, regular_list_output)
    if legacy_output is not None:
        write_legacy_records(result, legacy_output)
    if github_output and write_github_output(result) is None:
        output.warning("GITHUB_OUTPUT is not set; skipped GitHub Actions output")

    _display_summary(output, result)
    output.success(
        f"{Icons.SUCCESS} Wrote {len(result.entries)} entries to {output_path}",
    )

    if result.has_failures and strict:
        output.error(
            f"{len(result.failures)} project(s) have broken split configuration",
        )
        ctx.exit(ExitCode.CONFIG_ERROR)


@group.command(name="parse-list")
@click.argument(
    "list_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.pass_context
@handle_exceptions
def parse_list(ctx: click.Context, list_file: Path) -> None:
    """Show how a split test-list file is interpreted."""
    split_list = read_split_list(list_file)
    ctx.obj.output.result(json.dumps(split_list.to_dict(), indent=2))
