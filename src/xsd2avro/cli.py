"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from xsd2avro.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    OutputNaming,
    load_configuration,
    write_placeholder_configuration,
)
from xsd2avro.conversion import (
    ConversionError,
    convert_batch,
    convert_file_to_directory,
    discover_schema_files,
)


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="xsd2avro")
def cli() -> None:
    """Generate Avro schemas (.avsc) from XML Schema documents."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML conversion configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="convert")
@click.option(
    "--in",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Input XSD file or directory",
)
@click.option(
    "--out",
    "output_dir",
    required=True,
    type=click.Path(path_type=str),
    help="Output directory for .avsc files",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional YAML/JSON conversion configuration file",
)
@click.option("--root-name", help="Root global element name")
@click.option("--namespace", help="Avro namespace; default derives from targetNamespace")
@click.option("--avro-name", "record_name", help="Override Avro record name")
@click.option("--pretty", is_flag=True, default=False, help="Pretty-print JSON")
@click.option(
    "--nullable-attrs",
    "nullable_attributes",
    is_flag=True,
    default=False,
    help="Make every attribute nullable, required ones included",
)
@click.option(
    "--flatten-top",
    "flatten_top_level",
    is_flag=True,
    default=False,
    help="Flatten one level of top-level child records into the root",
)
@click.option(
    "--force-string",
    help="Comma-separated field names to coerce to string (case-insensitive)",
)
@click.option("--glob", "pattern", help="Glob in --in directory (default: *.xsd)")
@click.option(
    "--out-naming",
    "output_naming",
    type=click.Choice([mode.value for mode in OutputNaming]),
    help="Output name: root | file | file+root (default)",
)
@click.option("--workers", type=int, help="Parallel conversions in directory mode")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def convert(  # pylint: disable=too-many-arguments
    input_path: str,
    output_dir: str,
    config_path: str | None,
    root_name: str | None,
    namespace: str | None,
    record_name: str | None,
    pretty: bool,
    nullable_attributes: bool,
    flatten_top_level: bool,
    force_string: str | None,
    pattern: str | None,
    output_naming: str | None,
    workers: int | None,
    verbose: bool,
) -> None:
    """Convert an XSD file, or every matching XSD file of a directory."""
    _configure_logging(verbose)
    try:
        configuration = load_configuration(
            config_path,
            overrides={
                "root_name": root_name,
                "namespace": namespace,
                "record_name": record_name,
                "pretty": True if pretty else None,
                "nullable_attributes": True if nullable_attributes else None,
                "flatten_top_level": True if flatten_top_level else None,
                "force_string": force_string,
                "glob": pattern,
                "output_naming": output_naming,
                "workers": workers,
            },
        )
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc

    source = Path(input_path)
    if source.is_dir():
        _convert_directory(source, Path(output_dir), configuration)
        return

    try:
        written = convert_file_to_directory(source, output_dir, configuration)
    except ConversionError as exc:
        raise CliError(str(exc)) from exc
    click.echo(f"Wrote: {written.resolve()}")


def _convert_directory(source: Path, output_dir: Path, configuration: Configuration) -> None:
    pattern = configuration.output.glob
    files = discover_schema_files(source, pattern)
    if not files:
        raise CliError(f"No XSDs matched glob '{pattern}' in {source}")

    batch = convert_batch(files, output_dir, configuration)
    for outcome in batch.outcomes:
        if outcome.output_path is not None:
            click.echo(f"✔ {outcome.source.name} -> {outcome.output_path.name}")
        else:
            click.echo(f"✘ {outcome.source.name} : {outcome.error}", err=True)
    click.echo(f"Done. Generated={batch.generated}, Failed={batch.failed}")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
