"""CLI smoke tests."""

from click.testing import CliRunner
from wsdl_flattener.cli import cli


def test_cli_displays_help() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "generate-config" in result.output
    assert "flatten" in result.output
    assert "run" in result.output
    assert "--log-level" in result.output


def test_flatten_help_lists_options() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["flatten", "--help"])

    assert result.exit_code == 0
    assert "--file" in result.output
    assert "--message" in result.output
    assert "--timeout-ms" in result.output
