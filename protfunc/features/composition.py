"""
Amino acid composition analysis.

Composition is the simplest sequence-level signal for protein function:
membrane proteins are enriched in nonpolar residues, nucleic-acid binding
proteins carry a strong net charge, and catalytic or structural roles leave
traces in histidine, proline and cysteine content. Every statistic here is a
percentage of the sequence length.
"""

from __future__ import annotations

import logging
from collections import Counter

from ..core.models import CompositionStats

logger = logging.getLogger(__name__)


# Nonpolar residue set used for the hydrophobicity percentage
HYDROPHOBIC_RESIDUES = frozenset("AILMFWPV")

# Charged residues at physiological pH
POSITIVE_RESIDUES = frozenset("KRH")
NEGATIVE_RESIDUES = frozenset("DE")


def calculate_composition(sequence: str) -> dict[str, float]:
    """
    Calculate amino acid composition as percentages.

    Args:
        sequence: Cleaned, non-empty protein sequence

    Returns:
        Dictionary mapping each observed residue code to its percentage

    Raises:
        ValueError: If the sequence is empty
    """
    if not sequence:
        raise ValueError("Cannot compute composition of an empty sequence")

    total = len(sequence)
    counts = Counter(sequence)
    return {aa: count / total * 100 for aa, count in counts.items()}


def calculate_stats(sequence: str) -> CompositionStats:
    """
    Calculate composition and derived biochemical statistics.

    Args:
        sequence: Cleaned, non-empty protein sequence

    Returns:
        CompositionStats with hydrophobicity and charge percentages
    """
    composition = calculate_composition(sequence)
    length = len(sequence)

    hydrophobic_count = sum(1 for aa in sequence if aa in HYDROPHOBIC_RESIDUES)
    hydrophobicity = hydrophobic_count / length * 100

    positive = sum(1 for aa in sequence if aa in POSITIVE_RESIDUES) / length * 100
    negative = sum(1 for aa in sequence if aa in NEGATIVE_RESIDUES) / length * 100

    logger.debug(
        f"Composition stats: length={length}, hydrophobicity={hydrophobicity:.1f}%, "
        f"net_charge={positive - negative:+.1f}"
    )

    return CompositionStats(
        length=length,
        composition=composition,
        hydrophobicity=hydrophobicity,
        positive_charge=positive,
        negative_charge=negative,
        net_charge=positive - negative,
    )
