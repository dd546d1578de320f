"""
ProtFunc Command Line Interface.

This module provides a CLI for classifying protein sequences into Gene
Ontology functional categories, comparing proteins in embedding space and
checking sequences before analysis. Built with Click, with Rich for
console output.

Usage:
    protfunc classify MKWVTFISLLFLFSSAYS...
    protfunc classify --uniprot P69905 --format csv -o results/
    protfunc classify --file proteins.fasta --provider esm2
    protfunc similarity SEQ_A SEQ_B
    protfunc list-providers
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .. import __version__

# Initialize rich console for pretty output
console = Console()

PROVIDER_CHOICES = ["mock", "esm2", "none"]


def print_banner():
    """Print the ProtFunc banner."""
    banner = f"""
    ╔═══════════════════════════════════════════════════════════════╗
    ║                        ProtFunc v{__version__}                        ║
    ║       Gene Ontology Classification of Protein Sequences       ║
    ╚═══════════════════════════════════════════════════════════════╝
    """
    console.print(banner, style="bold blue")


def _make_provider(name: str):
    from ..embeddings import get_provider

    if name == "none":
        return None
    return get_provider(name)


@click.group()
@click.version_option(version=__version__, prog_name="ProtFunc")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.pass_context
def cli(ctx, verbose: bool, quiet: bool):
    """
    ProtFunc: rule-based Gene Ontology classification of proteins.

    \b
    • Composition statistics (hydrophobicity, charge, residue content)
    • Protein language model embedding features (ESM-2)
    • UniProt metadata retrieval
    • JSON/CSV export

    Run 'protfunc COMMAND --help' for command-specific help.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    if not quiet:
        print_banner()


def _print_report(report):
    result = report.classification

    header = (
        f"[bold]Sequence ID:[/bold] {result.sequence_id}\n"
        f"[bold]Length:[/bold] {result.length}\n"
        f"[bold]Hydrophobicity:[/bold] {report.stats.hydrophobicity:.1f}%\n"
        f"[bold]Net charge:[/bold] {report.stats.net_charge:+.1f}\n"
        f"[bold]Overall confidence:[/bold] {result.confidence:.3f}"
    )
    if report.uniprot:
        header += (
            f"\n[bold]Protein:[/bold] {report.uniprot.protein_name}"
            f"\n[bold]Organism:[/bold] {report.uniprot.organism.scientific_name}"
        )
    if report.embedding_summary:
        s = report.embedding_summary
        header += (
            f"\n[bold]Embedding:[/bold] {s.provider}, layer {s.layer}, "
            f"{s.dimension} dims, std {s.std:.3f}"
        )
    console.print(Panel(header, title="[bold]Analysis[/bold]", border_style="blue"))

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Rank")
    table.add_column("GO ID")
    table.add_column("Function", style="bold")
    table.add_column("Type")
    table.add_column("Confidence")

    rows = [(f, "primary") for f in result.primary_functions]
    rows += [(f, "secondary") for f in result.secondary_functions]
    for f, rank in rows:
        name = f"{f.name} *" if f.embedding_based else f.name
        table.add_row(rank, f.id, name, f.type.label, f"{f.confidence:.3f}")

    console.print(table)

    for note in result.notes:
        console.print(f"  [dim]•[/dim] {note}")


@cli.command("classify")
@click.argument("sequence", required=False)
@click.option("--uniprot", "-u", "uniprot_id", help="UniProt accession to fetch and classify")
@click.option("--file", "-f", "fasta_file", type=click.Path(exists=True), help="FASTA file with one or more sequences")
@click.option(
    "--provider", "-p",
    type=click.Choice(PROVIDER_CHOICES),
    default="mock",
    help="Embedding provider (default: mock)"
)
@click.option(
    "--format", "fmt",
    type=click.Choice(["json", "csv"]),
    default=None,
    help="Export format (default: json; writes to the current directory unless --output is given)"
)
@click.option("--output", "-o", type=click.Path(), help="Output directory for exported results")
@click.pass_context
def classify(
    ctx,
    sequence: Optional[str],
    uniprot_id: Optional[str],
    fasta_file: Optional[str],
    provider: str,
    fmt: Optional[str],
    output: Optional[str],
):
    """
    Classify protein sequence(s) into Gene Ontology categories.

    \b
    Examples:
        protfunc classify MVLSPADKTNVKAAWGKVGAHAGEYGAEALERMFLSFPTTKTYFPHFDLSH
        protfunc classify --uniprot P69905 -o results/ --format csv
        protfunc classify -f proteins.fasta -p none
    """
    from ..core.sequence import SequenceError, parse_fasta
    from ..embeddings import EmbeddingProviderError
    from ..export import export_report
    from ..pipeline import ProteinAnalyzer
    from ..uniprot import UniProtError

    if not sequence and not uniprot_id and not fasta_file:
        console.print("[yellow]No input provided. Give a SEQUENCE, --uniprot or --file.[/yellow]")
        sys.exit(1)

    if fmt and not output:
        output = "."
    if output and not fmt:
        fmt = "json"

    reports = []
    try:
        with ProteinAnalyzer(provider=_make_provider(provider)) as analyzer:
            if fasta_file:
                records = [(rid, seq) for rid, _, seq in parse_fasta(Path(fasta_file))]
                console.print(f"[green]✓[/green] Loaded {len(records)} sequence(s)")
                reports.extend(analyzer.analyze_batch(records))
            if sequence or uniprot_id:
                reports.append(analyzer.analyze(sequence=sequence, uniprot_id=uniprot_id))
    except (SequenceError, UniProtError, EmbeddingProviderError, ValueError, OSError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        sys.exit(1)

    for report in reports:
        _print_report(report)

    if output:
        for report in reports:
            try:
                path = export_report(report, output, fmt)
            except OSError as e:
                console.print(f"[red]✗ Export failed:[/red] {e}")
                sys.exit(1)
            console.print(f"[green]✓[/green] Results saved to: {path}")


@cli.command("similarity")
@click.argument("sequence_a")
@click.argument("sequence_b")
@click.option(
    "--provider", "-p",
    type=click.Choice(["mock", "esm2"]),
    default="mock",
    help="Embedding provider (default: mock)"
)
def similarity(sequence_a: str, sequence_b: str, provider: str):
    """
    Cosine similarity of two sequences in embedding space.
    """
    from ..core.sequence import SequenceError, SequenceValidator, clean_sequence
    from ..embeddings import EmbeddingProviderError
    from ..features.embedding import DimensionMismatchError, cosine_similarity

    validator = SequenceValidator()
    try:
        seq_a = validator.require(clean_sequence(sequence_a))
        seq_b = validator.require(clean_sequence(sequence_b))
        with _make_provider(provider) as embedder:
            score = cosine_similarity(embedder.embed(seq_a), embedder.embed(seq_b))
    except (SequenceError, EmbeddingProviderError, DimensionMismatchError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        sys.exit(1)

    console.print(f"Cosine similarity: [bold]{score:.4f}[/bold]")


@cli.command("list-providers")
def list_providers_cmd():
    """
    List available embedding providers.
    """
    from ..embeddings import list_providers

    table = Table(
        title="Embedding Providers",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Name", style="bold")
    table.add_column("Model")
    table.add_column("Layer")
    table.add_column("Dimension")
    table.add_column("Description")

    for info in list_providers():
        table.add_row(
            info["name"],
            info["model"],
            str(info["layer"]),
            str(info["dimension"]),
            info["description"],
        )

    console.print(table)


@cli.command("validate-sequence")
@click.argument("sequence", required=False)
@click.option("--file", "-f", "fasta_file", type=click.Path(exists=True), help="FASTA file to validate")
@click.option(
    "--min-length",
    type=click.IntRange(min=1),
    default=10,
    show_default=True,
    help="Minimum residues required for classification"
)
def validate_sequence(sequence: Optional[str], fasta_file: Optional[str], min_length: int):
    """
    Check that sequence(s) would pass the classification gate.

    Input is cleaned exactly as 'classify' cleans it, so a pass here
    means the sequence will be accepted for analysis.

    \b
    Examples:
        protfunc validate-sequence MVLSPADKTNVKAAWGKVGAH
        protfunc validate-sequence -f proteins.fasta --min-length 30
    """
    from ..core.sequence import SequenceValidator, clean_sequence, parse_fasta

    records = []
    if sequence:
        records.append(("command_line", clean_sequence(sequence)))
    if fasta_file:
        try:
            records.extend((rid, seq) for rid, _, seq in parse_fasta(Path(fasta_file)))
        except (ValueError, OSError) as e:
            console.print(f"[red]✗ Error reading {fasta_file}:[/red] {e}")
            sys.exit(1)

    if not records:
        console.print("[yellow]No input provided. Give a SEQUENCE or --file.[/yellow]")
        sys.exit(1)

    validator = SequenceValidator(min_length=min_length)
    failures = 0
    for record_id, seq in records:
        is_valid, errors = validator.validate(seq)
        if is_valid:
            console.print(f"[green]✓[/green] {record_id}: {len(seq)} residues")
        else:
            failures += 1
            console.print(f"[red]✗[/red] {record_id}: {'; '.join(errors)}")

    if len(records) > 1:
        console.print(f"{len(records) - failures}/{len(records)} sequence(s) ready for classification")

    sys.exit(1 if failures else 0)


def main():
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
