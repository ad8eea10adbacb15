"""Command-line interface for ecomap."""

import json
import logging
import sys

import click

from .config.errors import ConfigError
from .config.resolver import update_config
from .data.errors import DataLoadError, ImportDataError
from .data.importer import EcosystemDataImporter
from .data.sources import open_source
from .graph.builder import build_graph
from .graph.table import table_view_data
from .graph.view import graph_view_data
from .output.formatter import format_compatibility_result, format_validation_result
from .schema.compatibility import check_schema_files
from .schema.errors import SchemaLoadError
from .session import DataSession
from .validators.entity_schema import invalid_entity_count, too_many_invalid
from .validators.runner import validate_data_source, validate_relationships_file

DEFAULT_OUTPUT_DIR = "public/data"
DEFAULT_TEMP_DIR = "temp-ecosystem-data"

FORMAT_OPTION = click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)


def _configure_logging(verbose: bool) -> None:
    # Without --verbose, warnings reach stderr through the logging fallback handler
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _open_session(root: str) -> DataSession:
    return DataSession(open_source(root))


@click.group()
@click.version_option()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging")
def main(verbose: bool):
    """ecomap: load, validate and render an ecosystem map."""
    _configure_logging(verbose)


@main.command("validate-data")
@click.argument("root")
@click.option(
    "--schema",
    "schema_path",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Entity JSON Schema (YAML or JSON)",
)
@FORMAT_OPTION
def validate_data(root: str, schema_path: str, output_format: str):
    """Validate entity data files against the entity schema.

    ROOT is a directory or base URL holding the data/ files.

    Exit codes:
      0 - At most half of the entities are invalid
      1 - More than half are invalid, or no data could be loaded
      2 - Schema file error
    """
    try:
        result = validate_data_source(open_source(root), schema_path)
    except SchemaLoadError as e:
        click.echo(f"Error loading schema: {e}", err=True)
        sys.exit(2)
    except DataLoadError as e:
        click.echo(f"Error loading data: {e}", err=True)
        sys.exit(1)

    click.echo(format_validation_result(result, output_format))  # type: ignore

    invalid = invalid_entity_count(result)
    if too_many_invalid(result):
        click.echo(
            f"Too many invalid entities: {invalid} of {result.checked}", err=True
        )
        sys.exit(1)
    sys.exit(0)


@main.command("validate-relationships")
@click.argument("relationships_file", type=click.Path(exists=True, dir_okay=False))
@FORMAT_OPTION
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors",
)
def validate_relationships(relationships_file: str, output_format: str, strict: bool):
    """Lint a manual relationships file.

    Exit codes:
      0 - No errors
      1 - Errors found
      2 - File error
    """
    try:
        result = validate_relationships_file(relationships_file)
    except SchemaLoadError as e:
        click.echo(f"Error loading file: {e}", err=True)
        sys.exit(2)

    click.echo(format_validation_result(result, output_format))  # type: ignore

    if result.has_errors or (strict and result.has_warnings):
        sys.exit(1)
    sys.exit(0)


@main.command("check-schema")
@click.argument("old_schema", type=click.Path(exists=True, dir_okay=False))
@click.argument("new_schema", type=click.Path(exists=True, dir_okay=False))
def check_schema(old_schema: str, new_schema: str):
    """Compare two entity schemas for breaking changes.

    Exit codes:
      0 - Compatible
      1 - Breaking changes found
    """
    result = check_schema_files(old_schema, new_schema)
    click.echo(format_compatibility_result(result))
    sys.exit(0 if result.compatible else 1)


@main.command()
@click.argument("root")
@FORMAT_OPTION
def resolve(root: str, output_format: str):
    """Load entities and resolve their relationships.

    ROOT is a directory or base URL holding the data files.
    """
    session = _open_session(root)
    try:
        dataset = session.dataset
    except DataLoadError as e:
        click.echo(f"Error loading data: {e}", err=True)
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps(dataset.to_dict(), indent=2, default=str))
        return

    manual = sum(1 for r in dataset.relationships if r.is_manual)
    click.echo(f"Entities: {dataset.metadata.total_entities}")
    for entity_type, count in dataset.metadata.entity_type_counts.items():
        click.echo(f"  {entity_type}: {count}")
    click.echo(
        f"Relationships: {len(dataset.relationships)} "
        f"({len(dataset.relationships) - manual} from entities, {manual} manual)"
    )


@main.command()
@click.argument("root")
@click.option(
    "--view",
    "view_type",
    type=click.Choice(["table", "graph"]),
    default=None,
    help="View to export (defaults to the configured view)",
)
@click.option("--page", type=int, default=1, show_default=True, help="Table page")
@click.option("--query", default=None, help="Free-text entity filter")
def export(root: str, view_type: str | None, page: int, query: str | None):
    """Print the data behind a view as JSON.

    The render configuration is read from render.yaml under ROOT.

    Exit codes:
      0 - Success
      1 - Data could not be loaded
      2 - The configuration has no section for the requested view
    """
    session = _open_session(root)
    try:
        dataset = session.dataset
    except DataLoadError as e:
        click.echo(f"Error loading data: {e}", err=True)
        sys.exit(1)

    config = session.config
    if view_type and view_type != config.view_type:
        try:
            config = update_config(config, {"viewType": view_type})
        except ConfigError as e:
            click.echo(f"Configuration error: {e}", err=True)
            sys.exit(2)

    if config.view_type == "graph":
        payload = graph_view_data(build_graph(dataset, config), config)
    else:
        entities = dataset.filter_entities(config.entity_types, query)
        payload = table_view_data(entities, config.table, page)

    click.echo(json.dumps(payload, indent=2, default=str))


@main.group("import-data")
@click.option(
    "--output-dir",
    default=DEFAULT_OUTPUT_DIR,
    show_default=True,
    type=click.Path(file_okay=False),
    help="Directory the converted data files are deployed to",
)
@click.option(
    "--temp-dir",
    default=DEFAULT_TEMP_DIR,
    show_default=True,
    type=click.Path(file_okay=False),
    help="Working directory for downloaded files",
)
@click.pass_context
def import_data(ctx: click.Context, output_dir: str, temp_dir: str):
    """Import the upstream ecosystem catalog."""
    ctx.obj = EcosystemDataImporter(output_dir=output_dir, temp_dir=temp_dir)


def _run_import_step(step) -> None:
    try:
        step()
    except ImportDataError as e:
        click.echo(f"Import failed: {e}", err=True)
        sys.exit(1)


def _download(importer: EcosystemDataImporter) -> None:
    summary = importer.import_data()
    click.echo(f"Processed {summary.processed}/{summary.total_files} files")
    for group, count in summary.group_counts.items():
        click.echo(f"  {group}: {count}")
    if summary.failed:
        click.echo(f"Failed: {', '.join(summary.failed)}", err=True)


def _deploy(importer: EcosystemDataImporter) -> None:
    copied = importer.copy_to_production()
    click.echo(f"Deployed {len(copied)} file(s) to {importer.output_dir}")


@import_data.command()
@click.pass_obj
def download(importer: EcosystemDataImporter):
    """Download and convert the catalog into the temp directory."""
    _run_import_step(lambda: _download(importer))


@import_data.command()
@click.pass_obj
def deploy(importer: EcosystemDataImporter):
    """Copy converted files into the output directory."""
    _run_import_step(lambda: _deploy(importer))


@import_data.command()
@click.pass_obj
def cleanup(importer: EcosystemDataImporter):
    """Remove the temp directory."""
    importer.cleanup()
    click.echo("Temporary files cleaned up")


@import_data.command()
@click.pass_obj
def full(importer: EcosystemDataImporter):
    """Download, deploy and clean up in one go."""
    _run_import_step(lambda: _download(importer))
    _run_import_step(lambda: _deploy(importer))
    importer.cleanup()
    click.echo("Import complete")


if __name__ == "__main__":
    main()
