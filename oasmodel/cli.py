"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of OASMODEL, licensed under the MIT License.
See LICENSE file for details.
"""

from enum import Enum
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from oasmodel import __version__
from oasmodel.core.config import get_app_config, init_app_config
from oasmodel.errors import DecodeError, DocumentLoadError
from oasmodel.loader import dump_document, load_paths
from oasmodel.paths import Paths
from oasmodel.reference import Reference
from oasmodel.validation import ValidationLevel, find_nonconforming_extensions

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(help="OASMODEL - typed paths for OpenAPI documents")


class OutputFormat(str, Enum):
    YAML = "yaml"
    JSON = "json"


def configure_app(debug: bool = False):
    """
    Configure the application with the specified settings.

    Args:
    ----
        debug: Whether to enable debug mode

    """
    config = init_app_config(debug=debug, app_version=__version__)
    config.configure_logging()
    return config


def _show_version(value: bool):
    if value:
        console.print(f"OASMODEL version: {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    debug: bool = typer.Option(False, "--debug", help="Enable debug mode with verbose logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_show_version,
        is_eager=True,
        help="Show the application version and exit",
    ),
):
    """
    OASMODEL - decode, inspect and re-encode the paths of an API description.

    Use --debug to enable verbose logging.
    """
    configure_app(debug=debug)


def _load_or_exit(spec_path: Path) -> Paths:
    try:
        return load_paths(spec_path)
    except (FileNotFoundError, DocumentLoadError) as e:
        err_console.print(f"Error: {e}", style="red", markup=False)
        raise typer.Exit(code=1)
    except DecodeError as e:
        err_console.print(f"Invalid document at {e}", style="red", markup=False)
        raise typer.Exit(code=1)


@app.command("validate")
def validate_spec(spec_path: Path = typer.Argument(..., help="Path to the OpenAPI spec file")):
    """
    Check that the paths of a document decode and extension keys are prefixed.
    """
    decoder_config = get_app_config().decoder
    paths = _load_or_exit(spec_path)

    level = ValidationLevel.ERROR if decoder_config.strict_extensions else ValidationLevel.WARNING
    issues = find_nonconforming_extensions(
        paths, prefix=decoder_config.extension_prefix, level=level
    )
    for issue in issues:
        style = "red" if issue.level == ValidationLevel.ERROR else "yellow"
        console.print(f"{issue.location}: {issue.message}", style=style, markup=False)

    if issues and decoder_config.strict_extensions:
        console.print(f"❌ {len(issues)} extension key(s) without prefix", style="red")
        raise typer.Exit(code=1)

    console.print(f"✅ Decoded {len(paths)} paths", style="green")


@app.command("list-operations")
def list_operations(spec_path: Path = typer.Argument(..., help="Path to the OpenAPI spec file")):
    """
    List the operations of every path, in document and canonical method order.
    """
    paths = _load_or_exit(spec_path)

    table = Table(title="API Operations")
    table.add_column("Method")
    table.add_column("Path")
    table.add_column("Operation ID")
    table.add_column("Summary")

    for template, node in paths:
        if isinstance(node, Reference):
            table.add_row("-", escape(template), "", escape(f"$ref: {node.target}"))
            continue
        for method, operation in node.value.operations():
            table.add_row(
                method.upper(),
                escape(template),
                escape(operation.operation_id or ""),
                escape(operation.summary or ""),
            )

    console.print(table)


@app.command("roundtrip")
def roundtrip(
    spec_path: Path = typer.Argument(..., help="Path to the OpenAPI spec file"),
    output_format: OutputFormat = typer.Option(
        OutputFormat.YAML, "--format", "-f", help="Output format"
    ),
):
    """
    Decode the paths of a document and print them re-encoded.
    """
    paths = _load_or_exit(spec_path)
    document = {"paths": paths.to_value()}
    typer.echo(dump_document(document, fmt=output_format.value), nl=False)


if __name__ == "__main__":
    app()
