"""Command-line interface for gql-querygen."""

import click
import logging
import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path

from . import __version__
from .core.generator import QueryGenerator
from .core.hooks import AddHeaderHook, FilterFieldsHook, HookRunner
from .core.options import GeneratorOptions
from .core.parser import SchemaParseError, SchemaParser
from .core.writer import FileSystemSink, UnsafeOutputDirError

ARCHIVE_SUFFIXES = (".zip", ".tar.gz", ".tgz")


def extract_archive(archive_path: Path) -> str:
    """Extract archive to temp directory. Returns path to extracted content."""
    temp_dir = tempfile.mkdtemp()
    if archive_path.suffix == ".zip":
        with zipfile.ZipFile(archive_path, "r") as zip_ref:
            zip_ref.extractall(temp_dir)
    elif archive_path.name.endswith((".tar.gz", ".tgz")):
        with tarfile.open(archive_path, "r:gz") as tar_ref:
            tar_ref.extractall(temp_dir, filter="data")
    else:
        shutil.rmtree(temp_dir)
        raise ValueError(f"Unsupported archive format: {archive_path.suffix}")
    return temp_dir


@click.group()
@click.version_option(version=__version__)
def main():
    """GraphQL query document generator.

    Generate a query, mutation or subscription document for every root
    field of a GraphQL schema.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to GraphQL schema file, directory, introspection JSON or archive (.zip, .tar.gz, .tgz).",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(),
    help="Output directory for generated documents (replaced on each run).",
)
@click.option(
    "--depth-limit",
    default=100,
    show_default=True,
    type=click.IntRange(min=1),
    help="Maximum selection depth.",
)
@click.option(
    "--assume-valid",
    is_flag=True,
    help="Skip SDL validation when building the schema.",
)
@click.option(
    "--ext",
    "file_extension",
    default="gql",
    show_default=True,
    help="File extension for generated documents.",
)
@click.option(
    "--include-deprecated-fields",
    "-C",
    is_flag=True,
    help="Include deprecated fields (excluded by default).",
)
@click.option(
    "--include-cross-references",
    "-R",
    is_flag=True,
    help="Re-expand fields already expanded by a parent selection (excluded by default).",
)
@click.option(
    "--header",
    default=None,
    help="Comment line prepended to every document, e.g. '# Generated - do not edit'.",
)
@click.option(
    "--exclude-prefix",
    default=None,
    help="Skip root fields whose name starts with this prefix.",
)
@click.option(
    "--clean/--no-clean",
    default=True,
    show_default=True,
    help="Remove the output directory before generating.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str,
    output: str,
    depth_limit: int,
    assume_valid: bool,
    file_extension: str,
    include_deprecated_fields: bool,
    include_cross_references: bool,
    header: str | None,
    exclude_prefix: str | None,
    clean: bool,
    verbose: bool,
):
    """Generate GraphQL documents from a schema.

    Examples:

        gql-querygen generate --schema ./schema.graphql --output ./generated

        gql-querygen generate -s ./schema -o ./gql --depth-limit 5 -C

        gql-querygen generate -s ./schema.tgz -o ./generated --ext graphql
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[gql-querygen %(levelname)s]: %(message)s",
    )

    schema_path = Path(schema).resolve()
    output_path = Path(output).resolve()
    temp_dir = None

    try:
        options = GeneratorOptions(
            depth_limit=depth_limit,
            include_deprecated_fields=include_deprecated_fields,
            include_cross_references=include_cross_references,
            file_extension=file_extension,
            assume_valid=assume_valid,
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    try:
        # Handle archives
        actual_schema_path = schema_path
        if schema_path.is_file() and schema_path.name.lower().endswith(ARCHIVE_SUFFIXES):
            click.echo(f"Extracting archive {schema_path.name}...")
            temp_dir = extract_archive(schema_path)
            actual_schema_path = Path(temp_dir)
            if verbose:
                click.echo(f"  Extracted to: {temp_dir}")

        if verbose:
            click.echo(f"Schema: {actual_schema_path}")
            click.echo(f"Output: {output_path}")

        # Parse schema
        click.echo("Parsing schema...")
        parser = SchemaParser(str(actual_schema_path), assume_valid=options.assume_valid)
        try:
            gql_schema = parser.parse()
        except SchemaParseError as e:
            raise click.ClickException(f"Invalid schema: {e}")

        hooks = HookRunner()
        if exclude_prefix:
            hooks.add_filter_hook(FilterFieldsHook(exclude_prefix=exclude_prefix))
        if header:
            hooks.add_post_hook(AddHeaderHook(header))

        # Generate documents
        click.echo("Generating documents...")
        generator = QueryGenerator(
            gql_schema,
            FileSystemSink(str(output_path), clean=clean),
            options=options,
            hooks=hooks,
        )
        try:
            operations = generator.generate()
        except UnsafeOutputDirError as e:
            raise click.BadParameter(str(e), param_hint="'--output'")

        if verbose:
            for folder in sorted({op.folder for op in operations}):
                count = sum(1 for op in operations if op.folder == folder)
                click.echo(f"  {folder}: {count}")

        click.echo(f"Done! Generated {len(operations)} documents in {output_path}")
    finally:
        # Clean up temp directory
        if temp_dir:
            shutil.rmtree(temp_dir)


if __name__ == "__main__":
    main()
