#!/usr/bin/env python3
"""
ProtFunc Example: Functional Classification of Well-Known Proteins

This script demonstrates the core functionality of ProtFunc on proteins
whose composition makes the classification rules easy to follow:
a hydrophobic membrane peptide, a lysine-rich histone tail and hemoglobin.

Uses the deterministic mock embedding provider, so no network access or
API key is needed.

Run with: python examples/basic_usage.py
"""

from pathlib import Path

from protfunc import (
    ProteinAnalyzer,
    classify,
    cosine_similarity,
    get_provider,
)
from protfunc.export import export_report


def print_header(title: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def print_result(result):
    for f in result.primary_functions:
        flag = " (embedding-adjusted)" if f.embedding_based else ""
        print(f"  [primary]   {f.id} {f.name}: {f.confidence:.2f}{flag}")
    for f in result.secondary_functions:
        print(f"  [secondary] {f.id} {f.name}: {f.confidence:.2f}")
    for note in result.notes:
        print(f"  note: {note}")


def analyze_membrane_peptide():
    """
    Phospholamban transmembrane segment.

    A short, leucine/isoleucine-rich helix: hydrophobicity is far above
    the 45% membrane threshold.
    """
    print_header("Phospholamban transmembrane segment")

    result = classify("LQNLFINFCLILICLLLICIIVMLL", sequence_id="PLN_TM")
    print_result(result)


def analyze_histone_tail():
    """
    Histone H3 N-terminal tail.

    Lysine and arginine give a large positive net charge, the signature
    of DNA binding.
    """
    print_header("Histone H3 N-terminal tail")

    result = classify("ARTKQTARKSTGGKAPRKQLATKAARKSAPATGGVKKPHRYRPG", sequence_id="H3_TAIL")
    print_result(result)


def analyze_and_export():
    """Full analysis with an embedding summary, exported as CSV."""
    print_header("Hemoglobin alpha: full report")

    sequence = "MVLSPADKTNVKAAWGKVGAHAGEYGAEALERMFLSFPTTKTYFPHFDLSH"
    with ProteinAnalyzer(provider=get_provider("mock")) as analyzer:
        report = analyzer.analyze(sequence=sequence)

    summary = report.embedding_summary
    print(f"  Embedding: {summary.dimension} dims, layer {summary.layer}, std {summary.std:.3f}")
    print(f"  Hydrophobicity: {report.stats.hydrophobicity:.1f}%")
    print_result(report.classification)

    path = export_report(report, Path("results"), "csv")
    print(f"\n  Saved: {path}")


def compare_embeddings():
    """Cosine similarity between two proteins in embedding space."""
    print_header("Embedding similarity")

    provider = get_provider("mock")
    a = provider.embed("MVLSPADKTNVKAAWGKVGAHAGEYGAEALERMFLSFPTTKTYFPHFDLSH")
    b = provider.embed("MVHLTPEEKSAVTALWGKVNVDEVGGEALGRLLVVYPWTQRFFESFGDLS")
    print(f"  HBA vs HBB: {cosine_similarity(a, b):.4f}")


if __name__ == "__main__":
    analyze_membrane_peptide()
    analyze_histone_tail()
    analyze_and_export()
    compare_embeddings()
