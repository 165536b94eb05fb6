"""
Command-line interface for vsconfig.

Commands:
    vsconfig generate MODEL   Extract toolchains and write vscodeconfig.json
    vsconfig show MODEL       Print the rendered document to stdout
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from vsconfig import __version__
from vsconfig.config import ExtractionConfig, ExtractionContext, pretty_printing_from_env
from vsconfig.extraction import DependencySourcesError, extract
from vsconfig.model import ToolchainRecord
from vsconfig.model_loader import ModelLoadError, load_context
from vsconfig.output import TimedLogger, init_timer, log_detail, log_header, set_verbose
from vsconfig.serializer import ConfigWriteError, render, write_config
from vsconfig.toolchains import DiscoveryError


@dataclass
class GenerateArgs:
    """Arguments for the generate command."""

    model: Path
    project_dir: Path
    output: Optional[Path] = None
    pretty: Optional[bool] = None
    strict: bool = False
    verbose: bool = False


@dataclass
class ShowArgs:
    """Arguments for the show command."""

    model: Path
    pretty: Optional[bool] = None
    strict: bool = False


def _summary_table(records: List[ToolchainRecord]) -> Table:
    table = Table(title="Toolchains")
    table.add_column("Name", no_wrap=True)
    table.add_column("Identity")
    table.add_column("Family", no_wrap=True)
    table.add_column("C++ compiler")
    table.add_column("Binaries", justify="right")
    table.add_column("Sources", justify="right")
    for record in records:
        table.add_row(
            record.name,
            str(record.identity),
            record.compiler.family.value,
            record.compiler.cpp_path,
            str(len(record.binaries)),
            str(len(record.source_binaries)),
        )
    return table


def _load(model: Path, strict: bool) -> ExtractionContext:
    context = load_context(model, strict_dependencies=strict)
    log_detail(f"{len(context.binaries)} binaries, {len(context.visual_cpp_platforms) + len(context.gcc_platforms)} toolchain definitions", verbose_only=True)
    return context


def generate_command(args: GenerateArgs, console: Console) -> None:
    """Extract toolchains and write the configuration file.

    Examples:
        vsconfig generate build-model.json
        vsconfig generate build-model.json -o .vscode/vscodeconfig.json
        vsconfig generate build-model.json --pretty --strict
    """
    init_timer()
    set_verbose(args.verbose)
    log_header("vsconfig", __version__)

    config = ExtractionConfig.for_project(args.project_dir, pretty_printing=args.pretty)
    if args.output is not None:
        config = ExtractionConfig(config_file=args.output, pretty_printing=config.pretty_printing)

    with TimedLogger("Loading build model", phase=(1, 3)):
        context = _load(args.model, args.strict)

    with TimedLogger("Extracting toolchains", phase=(2, 3)) as timed:
        records = extract(context)
        timed.detail(f"{len(records)} toolchain(s)")

    with TimedLogger("Writing configuration", phase=(3, 3)) as timed:
        path = write_config(records, config)
        timed.detail(f"Config: {path}")

    if args.verbose:
        console.print(_summary_table(records))
    console.print("[bold green]✓ Configuration generated[/bold green]")


def show_command(args: ShowArgs) -> None:
    """Print the rendered configuration document to stdout."""
    pretty = args.pretty if args.pretty is not None else pretty_printing_from_env()
    records = extract(load_context(args.model, strict_dependencies=args.strict))
    sys.stdout.write(render(records, pretty))
    sys.stdout.write("\n")


def _run(command: str, args: object, console: Console) -> int:
    try:
        if command == "generate":
            generate_command(args, console)  # type: ignore[arg-type]
        else:
            show_command(args)  # type: ignore[arg-type]
        return 0

    except ModelLoadError as e:
        console.print("[bold red]✗ Error: Invalid build model[/bold red]")
        console.print(str(e), markup=False)
        return 1

    except DiscoveryError as e:
        console.print("[bold red]✗ Error: Toolchain discovery failed[/bold red]")
        console.print(str(e), markup=False)
        return 1

    except DependencySourcesError as e:
        console.print("[bold red]✗ Error: Library dependency failed[/bold red]")
        console.print(str(e), markup=False)
        return 1

    except ConfigWriteError as e:
        console.print("[bold red]✗ Error: Cannot write configuration[/bold red]")
        console.print(str(e), markup=False)
        return 1

    except KeyboardInterrupt:
        console.print("[bold yellow]✗ Interrupted[/bold yellow]")
        return 130


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vsconfig",
        description="Generate editor toolchain configuration from a native build model",
    )
    parser.add_argument("--version", action="version", version=f"vsconfig {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    generate_parser = subparsers.add_parser("generate", help="Extract toolchains and write the configuration file")
    generate_parser.add_argument("model", type=Path, help="Build model JSON file")
    generate_parser.add_argument(
        "-d",
        "--project-dir",
        type=Path,
        default=Path.cwd(),
        help="Project directory; output defaults to <project-dir>/build/vscodeconfig.json",
    )
    generate_parser.add_argument("-o", "--output", type=Path, default=None, help="Output file (overrides the project default)")
    generate_parser.add_argument(
        "--pretty",
        action="store_true",
        default=None,
        help="Pretty-print the document (default: VSCONFIG_PRETTY environment variable)",
    )
    generate_parser.add_argument("--strict", action="store_true", help="Fail when a library dependency cannot report its source files")
    generate_parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output and a toolchain summary")

    show_parser = subparsers.add_parser("show", help="Print the configuration document to stdout")
    show_parser.add_argument("model", type=Path, help="Build model JSON file")
    show_parser.add_argument(
        "--pretty",
        action="store_true",
        default=None,
        help="Pretty-print the document (default: VSCONFIG_PRETTY environment variable)",
    )
    show_parser.add_argument("--strict", action="store_true", help="Fail when a library dependency cannot report its source files")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the CLI."""
    parser = _build_parser()
    parsed_args = parser.parse_args(argv)

    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    console = Console(stderr=parsed_args.command == "show")

    if not parsed_args.model.is_file():
        console.print(f"[bold red]✗ Error: Build model not found: {parsed_args.model}[/bold red]")
        sys.exit(2)

    args: object
    if parsed_args.command == "generate":
        args = GenerateArgs(
            model=parsed_args.model,
            project_dir=parsed_args.project_dir,
            output=parsed_args.output,
            pretty=parsed_args.pretty,
            strict=parsed_args.strict,
            verbose=parsed_args.verbose,
        )
    else:
        args = ShowArgs(model=parsed_args.model, pretty=parsed_args.pretty, strict=parsed_args.strict)

    sys.exit(_run(parsed_args.command, args, console))


if __name__ == "__main__":
    main()
