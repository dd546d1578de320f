"""
Feature extraction for functional classification.

Two complementary views of a protein feed the classifier:

1. **Composition** (`composition`): residue percentages, hydrophobicity
   and charge balance computed directly from the sequence
2. **Embedding** (`embedding`): descriptive statistics of a protein
   language model embedding, used to boost confidence where the
   embedding suggests structured, functionally diverse proteins
"""

from .composition import (
    HYDROPHOBIC_RESIDUES,
    NEGATIVE_RESIDUES,
    POSITIVE_RESIDUES,
    calculate_composition,
    calculate_stats,
)
from .embedding import (
    N_REGIONS,
    DimensionMismatchError,
    calculate_embedding_stats,
    cosine_similarity,
    extract_embedding_features,
    region_bounds,
)

__all__ = [
    "calculate_composition",
    "calculate_stats",
    "HYDROPHOBIC_RESIDUES",
    "POSITIVE_RESIDUES",
    "NEGATIVE_RESIDUES",
    "calculate_embedding_stats",
    "extract_embedding_features",
    "cosine_similarity",
    "region_bounds",
    "DimensionMismatchError",
    "N_REGIONS",
]
