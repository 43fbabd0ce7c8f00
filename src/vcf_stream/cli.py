"""vcf-stream: inspect and check VCF files from the command line."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import ConfigValidationError, ParserConfig, load_config
from .errors import VCFError
from .sources import open_vcf


def version_callback(value: bool) -> None:
    if value:
        print(__version__)
        raise typer.Exit()


app = typer.Typer(name="vcf-stream", help="Parse and inspect Variant Call Format files")
console = Console()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version and exit"
        ),
    ] = None,
) -> None:
    pass


def setup_logging(verbose: bool, quiet: bool, default_level: str = "INFO") -> None:
    """Configure logging based on verbosity flags."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, default_level.upper())

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("vcf_stream").setLevel(level)


def _load_parser_config(config_file: Path | None) -> ParserConfig:
    if config_file is None:
        return ParserConfig()
    try:
        return load_config(config_file)
    except (FileNotFoundError, ConfigValidationError) as e:
        console.print(f"[red]Configuration Error: {e}[/red]")
        raise typer.Exit(1) from None


def _number_label(number) -> str:
    if number is None:
        return "."
    if isinstance(number, int):
        return str(number)
    return number.value


@app.command()
def meta(
    vcf_path: Annotated[Path, typer.Argument(help="Path to VCF file (.vcf or .vcf.gz)")],
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="TOML configuration file")
    ] = None,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
) -> None:
    """Show the INFO, FILTER and FORMAT declarations and samples of a VCF."""
    config = _load_parser_config(config_file)
    setup_logging(verbose, quiet, config.log_level)

    if not vcf_path.exists():
        console.print(f"[red]Error: VCF file not found: {vcf_path}[/red]")
        raise typer.Exit(1)

    try:
        with open_vcf(vcf_path, config) as reader:
            schema = reader.meta()
    except VCFError as e:
        console.print(f"[red]Parse Error: {e}[/red]")
        raise typer.Exit(1) from None

    for title, declarations in (("INFO", schema.info), ("FORMAT", schema.formats)):
        table = Table(title=title)
        table.add_column("ID")
        table.add_column("Number")
        table.add_column("Type")
        table.add_column("Description")
        for declaration in declarations.values():
            table.add_row(
                declaration.id,
                _number_label(declaration.number),
                declaration.type.value,
                declaration.description,
            )
        console.print(table)

    filters = Table(title="FILTER")
    filters.add_column("ID")
    filters.add_column("Description")
    for declaration in schema.filters.values():
        filters.add_row(declaration.id, declaration.description)
    console.print(filters)

    if schema.has_genotypes:
        console.print(f"Samples ({len(schema.sample_ids)}): {', '.join(schema.sample_ids)}")
    else:
        console.print("Samples: none (sites-only)")


@app.command()
def check(
    vcf_path: Annotated[Path, typer.Argument(help="Path to VCF file (.vcf or .vcf.gz)")],
    vep: Annotated[
        str | None, typer.Option("--vep", help="Also decode this VEP annotation field")
    ] = None,
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="TOML configuration file")
    ] = None,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
) -> None:
    """Parse every record of a VCF and report the first error, if any."""
    config = _load_parser_config(config_file)
    setup_logging(verbose, quiet, config.log_level)

    if not vcf_path.exists():
        console.print(f"[red]Error: VCF file not found: {vcf_path}[/red]")
        raise typer.Exit(1)

    n_records = 0
    n_annotations = 0
    try:
        with open_vcf(vcf_path, config) as reader:
            parse_vep = reader.vep_parser(vep) if vep else None
            for record in reader:
                n_records += 1
                if parse_vep is not None:
                    n_annotations += len(parse_vep(record) or [])
    except VCFError as e:
        console.print(f"[red]Parse Error: {e}[/red]")
        raise typer.Exit(1) from None

    if not quiet:
        console.print(f"[green]✓[/green] {vcf_path.name}: {n_records:,} records")
        if vep:
            console.print(f"  {vep} annotations: {n_annotations:,}")


if __name__ == "__main__":
    app()
