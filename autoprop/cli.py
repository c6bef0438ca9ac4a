"""
Command-line interface for autoprop.

Reads a declaration document, generates the partial types and either prints
them or writes them into an output directory.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import (
    DeclarationError,
    GenerationResult,
    GeneratorConfig,
    SourceGeneratorHost,
    get_generator,
    list_all_language_info,
    list_supported_languages,
    load_config,
    load_declarations,
)
from .codegen.core.config import ConfigError, get_config_manager
from .codegen.registry import RegistryError, is_language_supported
from .logging_config import configure_logging, get_logger
from .utils import JSONLoaderError, load_json

logger = get_logger(__name__)

console = Console()

SYNTAX_LEXERS = {"csharp": "csharp"}


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'") from e
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="autoprop",
        description="Generate constructors and accessors for partial types",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  autoprop declarations.json
  autoprop declarations.json -o Generated/
  autoprop --url https://example.com/types.json --namespace MyApp
  autoprop --stdin --no-attribute < declarations.json
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="JSON declaration file")
    input_group.add_argument("--url", help="URL to fetch declarations from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read declarations from standard input"
    )

    parser.add_argument(
        "--output",
        "-o",
        metavar="DIR",
        help="Directory receiving generated files (default: print to stdout)",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--save-config",
        metavar="FILE",
        help="Write the effective configuration to FILE",
    )
    parser.add_argument(
        "--language",
        "-l",
        default="csharp",
        help="Target language for code generation (default: csharp)",
    )
    parser.add_argument(
        "--namespace",
        metavar="NAME",
        help="Namespace for declarations that don't specify one",
    )
    parser.add_argument(
        "--kind",
        choices=["class", "struct"],
        help="Type kind for declarations that don't specify one",
    )
    parser.add_argument(
        "--spaces",
        type=_positive_int,
        metavar="N",
        help="Indent with N spaces instead of tabs",
    )
    parser.add_argument(
        "--no-attribute",
        action="store_true",
        help="Don't emit the marker attribute definition",
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--verbose", "-v", action="store_true", help="Show debug logs and metadata"
    )
    info_group.add_argument("--log-file", metavar="PATH", help="Write a debug log")
    info_group.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Arguments without the program name (defaults to sys.argv)

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, log_file=args.log_file)

    try:
        if args.list_languages:
            return _list_languages()

        if not (args.file or args.url or args.stdin):
            console.print(
                "[red]✗[/red] Input source required (file, --url, or --stdin)"
            )
            return 1

        data = _get_input_data(args)
        config = _build_config(args)

        if args.save_config:
            _save_config(config, args.save_config)

        return _generate_and_output(data, config, args)

    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        logger.error("%s", e)
        return 1


def _list_languages() -> int:
    """List supported languages."""
    table = Table(title="Supported Languages", box=box.ROUNDED, title_style="bold cyan")

    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for name, info in sorted(list_all_language_info().items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(name, info["file_extension"], info["class"], aliases)

    console.print(table)
    return 0


def _get_input_data(args: argparse.Namespace) -> Any:
    """Load the declaration document from the selected source."""
    try:
        if args.file:
            return load_json(file_path=args.file)[1]
        if args.url:
            return load_json(url=args.url)[1]
        return json.load(sys.stdin)
    except json.JSONDecodeError as e:
        raise CLIError(f"Invalid JSON input: {e}") from e
    except (JSONLoaderError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load input: {e}") from e


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Merge the config file with command-line overrides."""
    overrides: Dict[str, Any] = {}

    if args.namespace:
        overrides["default_namespace"] = args.namespace

    if args.kind:
        overrides["type_kind"] = args.kind

    if args.spaces is not None:
        overrides["use_tabs"] = False
        overrides["indent_size"] = args.spaces

    if args.no_attribute:
        overrides["emit_attribute"] = False

    try:
        config = load_config(custom_config=overrides, config_file=args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    for warning in get_config_manager().validate_config(config):
        console.print(f"[yellow]⚠️  Config:[/yellow] {warning}")
        logger.warning("Config: %s", warning)

    return config


def _save_config(config: GeneratorConfig, path: str) -> None:
    try:
        get_config_manager().save_config(config, path)
    except ConfigError as e:
        raise CLIError(str(e)) from e
    console.print(f"[green]✓[/green] Saved configuration to [cyan]{path}[/cyan]")


def _generate_and_output(
    data: Any, config: GeneratorConfig, args: argparse.Namespace
) -> int:
    """Generate code and handle output with rich formatting."""
    language = args.language.lower()
    if not is_language_supported(language):
        raise CLIError(
            f"Unsupported language '{args.language}'. "
            f"Supported: {', '.join(list_supported_languages())}"
        )

    try:
        declarations = load_declarations(data, config.type_kind)
    except DeclarationError as e:
        raise CLIError(f"Invalid declarations: {e}") from e

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("[green]Generating sources...", total=None)
        try:
            generator = get_generator(language, config)
        except RegistryError as e:
            raise CLIError(str(e)) from e
        result = SourceGeneratorHost(generator).build(declarations)
        progress.remove_task(task)

    if not result.success:
        console.print(f"[red]✗ Code generation failed:[/red] {result.error_message}")
        return 1

    if args.output:
        _write_files(result, Path(args.output))
    else:
        _display_files(result, generator.language_name)

    if args.verbose and result.metadata:
        _show_metadata(result)

    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")

    return 0


def _write_files(result: GenerationResult, output_dir: Path) -> None:
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        for name, code in result.files.items():
            path = output_dir / name
            # newline="" keeps the configured line endings untouched
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(code)
            console.print(f"[green]✓[/green] Wrote [cyan]{path}[/cyan]")
    except OSError as e:
        raise CLIError(f"Failed to write to {output_dir}: {e}") from e


def _display_files(result: GenerationResult, language: str) -> None:
    if not result.files:
        console.print("[yellow]No eligible declarations found.[/yellow]")
        return

    lexer = SYNTAX_LEXERS.get(language, "text")
    for name, code in result.files.items():
        console.print(
            Panel(Syntax(code.strip("\n"), lexer, theme="monokai"), title=name)
        )


def _show_metadata(result: GenerationResult) -> None:
    table = Table(
        title="Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Property", style="bold")
    table.add_column("Value", style="green")

    for key, value in result.metadata.items():
        table.add_row(key.replace("_", " ").title(), str(value))

    console.print(table)


if __name__ == "__main__":
    sys.exit(main())
