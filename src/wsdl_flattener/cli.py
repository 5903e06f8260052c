"""Command line interface entry point."""

from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path

import click

from wsdl_flattener.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    LoaderSettings,
    SkipList,
    load_configuration,
    write_placeholder_configuration,
)
from wsdl_flattener.configuration.runtime_settings import (
    DEFAULT_EXTENSION,
    DEFAULT_PARSE_TIMEOUT_MS,
)
from wsdl_flattener.document_loading import (
    DocumentLoader,
    LoadFailure,
    ParserConfigurationError,
)
from wsdl_flattener.logging_setup import LOG_LEVELS, configure_logging
from wsdl_flattener.run_execution import PipelineExecutionError, ProcessingPipeline
from wsdl_flattener.schema_indexing import SchemaIndex, iter_by_kind
from wsdl_flattener.service_comparison import StructuralComparisonStrategy
from wsdl_flattener.type_flattening import MessageFieldBuilder, TypeFlattener


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="wsdl-flattener")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Verbosity of diagnostic output on stderr",
)
def cli(log_level: str) -> None:
    """Flatten and structurally compare WSDL service descriptors."""
    configure_logging(log_level)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML run configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML run configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="flatten")
@click.option(
    "--file",
    "file_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a single service descriptor document",
)
@click.option(
    "--message",
    "message_name",
    required=False,
    help="Only flatten the named message",
)
@click.option(
    "--timeout-ms",
    type=click.IntRange(min=1),
    default=DEFAULT_PARSE_TIMEOUT_MS,
    show_default=True,
    help="Parse timeout for the document",
)
def flatten(file_path: str, message_name: str | None, timeout_ms: int) -> None:
    """Print the primitive fields of every message in one document."""
    path = Path(file_path)
    if not path.is_file():
        raise CliError(f"Descriptor file not found: {path}")
    settings = LoaderSettings(
        extension=path.suffix or DEFAULT_EXTENSION,
        parse_timeout_ms=timeout_ms,
        skip_list=SkipList(),
    )
    try:
        with DocumentLoader(settings) as loader:
            outcome = loader.load_file(path)
    except ParserConfigurationError as exc:
        raise CliError(str(exc)) from exc
    if isinstance(outcome, LoadFailure):
        raise CliError(f"{outcome.kind.value}: {outcome.source_path}: {outcome.detail}")

    flattener = TypeFlattener(SchemaIndex(outcome))
    builder = MessageFieldBuilder()
    found = False
    for message in iter_by_kind(outcome.root, "message"):
        name = message.get("name")
        if not name or (message_name is not None and name != message_name):
            continue
        found = True
        for field in sorted(flattener.flatten_message(builder, message), key=lambda f: f.key):
            click.echo(f"{name}\t{field.name}\t{field.type_name}")
    if message_name is not None and not found:
        raise CliError(f"Message not found: {message_name}")


@cli.command(name="run")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON run configuration file",
)
@click.option(
    "--output-dir",
    "output_dir",
    required=False,
    type=click.Path(path_type=str),
    help="Override the configured output directory",
)
@click.option(
    "--max-files",
    type=click.IntRange(min=1),
    required=False,
    help="Stop after this many accepted documents",
)
def run_pipeline(config_path: str, output_dir: str | None, max_files: int | None) -> None:
    """Load, flatten and compare every descriptor in the configured directory."""
    try:
        configuration = load_configuration(config_path)
        settings = configuration.loader
        if max_files is not None:
            settings = replace(settings, max_files=max_files)
        loader = DocumentLoader(settings)
    except (ConfigurationError, ParserConfigurationError) as exc:
        raise CliError(str(exc)) from exc

    pipeline = ProcessingPipeline(
        loader,
        StructuralComparisonStrategy(),
        output_dir=output_dir or configuration.output_dir,
    )
    try:
        outcome = pipeline.run(configuration.source_dir)
    except PipelineExecutionError as exc:
        raise CliError(str(exc)) from exc

    click.echo(
        f"loaded {outcome.documents_loaded} document(s), skipped {len(outcome.failures)}",
        err=True,
    )
    for failure in outcome.failures:
        click.echo(f"  {failure.kind.value}: {failure.source_path.name}", err=True)
    click.echo(str(outcome.artifact_path))


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
