"""CLI smoke tests."""

from click.testing import CliRunner
from xsd2avro.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "convert" in result.output
    assert "generate-config" in result.output


def test_convert_help_lists_conversion_options() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["convert", "--help"])

    assert result.exit_code == 0
    for option in (
        "--in",
        "--out",
        "--root-name",
        "--namespace",
        "--avro-name",
        "--pretty",
        "--nullable-attrs",
        "--flatten-top",
        "--force-string",
        "--glob",
        "--out-naming",
        "--workers",
    ):
        assert option in result.output
