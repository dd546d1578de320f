"""
Feature extraction from protein language model embeddings.

A per-protein embedding (for example the mean-pooled layer-12 representation
of ESM-2) is a fixed-length vector whose individual dimensions have no direct
biological meaning. The classifier therefore uses only coarse descriptors:

- **Global statistics**: mean, population standard deviation, min and max
- **Regional means**: the vector split into ten contiguous partitions
- **Magnitude**: Euclidean norm of the whole vector
- **Dynamic range**: spread between the largest and smallest values
- **Complexity**: the standard deviation, a proxy for structural and
  functional diversity

Cosine similarity is provided for comparing proteins in embedding space.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from ..core.models import EmbeddingFeatures, EmbeddingStats

logger = logging.getLogger(__name__)

N_REGIONS = 10


class DimensionMismatchError(ValueError):
    """Raised when two embeddings of different length are compared."""
    pass


def calculate_embedding_stats(embedding: Sequence[float]) -> EmbeddingStats:
    """
    Calculate descriptive statistics of an embedding.

    Args:
        embedding: Non-empty embedding vector

    Returns:
        EmbeddingStats with mean, population std, min and max
    """
    arr = np.asarray(embedding, dtype=float)
    if arr.size == 0:
        raise ValueError("Cannot compute statistics of an empty embedding")

    return EmbeddingStats(
        mean=float(arr.mean()),
        std=float(arr.std()),
        min=float(arr.min()),
        max=float(arr.max()),
    )


def region_bounds(length: int, n_regions: int = N_REGIONS) -> list[tuple[int, int]]:
    """
    Split [0, length) into contiguous regions of floor(length / n_regions).

    The final region extends to the end of the vector and absorbs any
    remainder.
    """
    size = length // n_regions
    return [
        (i * size, length if i == n_regions - 1 else (i + 1) * size)
        for i in range(n_regions)
    ]


def extract_embedding_features(embedding: Sequence[float]) -> EmbeddingFeatures:
    """
    Extract classification features from an embedding.

    Args:
        embedding: Embedding vector with at least 10 dimensions

    Returns:
        EmbeddingFeatures with statistics, regional means, norm,
        dynamic range and complexity

    Raises:
        ValueError: If the embedding has fewer than 10 dimensions
    """
    arr = np.asarray(embedding, dtype=float)
    if arr.size < N_REGIONS:
        raise ValueError(
            f"Embedding must have at least {N_REGIONS} dimensions, got {arr.size}"
        )

    stats = calculate_embedding_stats(arr)
    regions = [float(arr[start:end].mean()) for start, end in region_bounds(arr.size)]

    return EmbeddingFeatures(
        stats=stats,
        regions=regions,
        overall_magnitude=float(np.sqrt(np.sum(arr * arr))),
        dynamic_range=stats.max - stats.min,
        complexity=stats.std,
    )


def cosine_similarity(embedding1: Sequence[float], embedding2: Sequence[float]) -> float:
    """
    Cosine similarity between two embeddings.

    Args:
        embedding1: First embedding
        embedding2: Second embedding of the same length

    Returns:
        Similarity in [-1, 1], or 0.0 if either vector has zero norm

    Raises:
        DimensionMismatchError: If the embeddings differ in length
    """
    a = np.asarray(embedding1, dtype=float)
    b = np.asarray(embedding2, dtype=float)
    if a.shape != b.shape:
        raise DimensionMismatchError(
            f"Embeddings must have same length ({a.size} vs {b.size})"
        )

    denominator = np.sqrt(np.dot(a, a)) * np.sqrt(np.dot(b, b))
    if denominator == 0:
        return 0.0
    # Rounding can push self-similarity a hair past 1
    return float(np.clip(np.dot(a, b) / denominator, -1.0, 1.0))
