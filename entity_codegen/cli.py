"""
Command-line interface for entity code generation.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import get_generator
from .codegen.core.config import (
    ConfigError,
    GeneratorConfig,
    get_config_manager,
    load_config,
)
from .codegen.core.generator import generate_code
from .codegen.core.schema import Document, SchemaError, load_document
from .logging_config import configure_logging, get_logger
from .utils import JSONLoaderError, load_json

logger = get_logger(__name__)

console = Console()
err_console = Console(stderr=True)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="entity-codegen",
        description="Generate typed entity classes from a GraphQL schema AST",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  entity-codegen schema.ast.json
  entity-codegen schema.ast.json -o generated/schema.ts
  entity-codegen --list-entities schema.ast.json
  entity-codegen - < schema.ast.json
        """.strip(),
    )

    parser.add_argument(
        "schema",
        nargs="?",
        default="-",
        help="Schema AST as JSON (graphql-js format); '-' reads standard input",
    )
    parser.add_argument(
        "--output", "-o", metavar="FILE", help="Output file (default: stdout)"
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--module-path",
        metavar="PATH",
        help="Module the runtime types are imported from",
    )
    parser.add_argument(
        "--base-class", metavar="NAME", help="Base class for generated entities"
    )
    parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add a header comment to generated code",
    )
    parser.add_argument(
        "--list-entities",
        action="store_true",
        help="List the entity types and their fields, then exit",
    )
    parser.add_argument(
        "--write-config",
        metavar="FILE",
        help="Write the merged configuration as JSON to FILE, then exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logging and generation metadata",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from CLI arguments."""
    overrides = {}

    if args.output:
        overrides["output_file"] = args.output
    if args.module_path:
        overrides["module_path"] = args.module_path
    if args.base_class:
        overrides["base_class"] = args.base_class
    if args.no_comments:
        overrides["add_comments"] = False

    try:
        config = load_config(custom_config=overrides, config_file=args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    for warning in get_config_manager().validate_config(config):
        err_console.print(f"[yellow]⚠️  Configuration: {escape(warning)}[/yellow]")

    return config


def _write_config(config: GeneratorConfig, path: str) -> int:
    try:
        get_config_manager().save_config(config, path)
    except ConfigError as e:
        raise CLIError(str(e)) from e
    console.print(
        f"[green]✓[/green] Wrote configuration to [cyan]{escape(path)}[/cyan]"
    )
    return 0


def _load_document(args: argparse.Namespace) -> Document:
    try:
        source, data = load_json(args.schema)
        logger.debug("Schema source: %s", source)
        return load_document(data)
    except (FileNotFoundError, JSONLoaderError) as e:
        raise CLIError(f"Failed to load input: {e}") from e
    except SchemaError as e:
        raise CLIError(f"Invalid schema AST: {e}") from e


def _list_entities(document: Document, config: GeneratorConfig) -> int:
    generator = get_generator(config)
    entities = generator.entity_definitions(document)

    if not entities:
        console.print(
            f"[yellow]⚠️  No types marked @{config.entity_directive}[/yellow]"
        )
        return 0

    table = Table(title="📋 Entity Types", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Entity", style="bold green", no_wrap=True)
    table.add_column("Field", style="cyan")
    table.add_column("GraphQL Type", style="blue")
    table.add_column("Value Type", style="dim")

    type_mapper = generator.schema_generator(document).type_mapper
    for definition in entities:
        for index, field_def in enumerate(definition.fields):
            table.add_row(
                escape(definition.name) if index == 0 else "",
                escape(field_def.name),
                escape(str(field_def.type)),
                escape(type_mapper.value_type_from_graphql(field_def.type)),
            )

    console.print(table)
    return 0


def _generate_and_output(
    document: Document, config: GeneratorConfig, verbose: bool
) -> int:
    generator = get_generator(config)
    result = generate_code(generator, document)

    if not result.success:
        err_console.print(
            f"[red]✗ Code generation failed:[/red] {escape(result.error_message)}"
        )
        return 1

    if config.output_file:
        output_path = Path(config.output_file)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(result.code, encoding="utf-8")
        except OSError as e:
            err_console.print(
                f"[red]✗ Failed to write to {escape(str(output_path))}:[/red] "
                f"{escape(str(e))}"
            )
            return 1
        console.print(
            f"[green]✓[/green] Generated {result.metadata['entity_count']} "
            f"entity classes in [cyan]{escape(str(output_path))}[/cyan]"
        )
    else:
        if console.is_terminal:
            console.print(Syntax(result.code, "typescript", theme="monokai"))
        else:
            sys.stdout.write(result.code)

    if verbose and result.metadata:
        metadata_table = Table(
            title="📊 Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")
        for key, value in result.metadata.items():
            metadata_table.add_row(key.replace("_", " ").title(), str(value))
        err_console.print(metadata_table)

    if result.warnings:
        err_console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            err_console.print(f"  [yellow]•[/yellow] {escape(warning)}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        configure_logging(logging.DEBUG)

    try:
        config = _build_config(args)

        if args.write_config:
            return _write_config(config, args.write_config)

        document = _load_document(args)

        if args.list_entities:
            return _list_entities(document, config)

        return _generate_and_output(document, config, args.verbose)

    except CLIError as e:
        logger.debug("Command failed", exc_info=True)
        err_console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return 1
