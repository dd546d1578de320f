"""
Deterministic offline embedding generator.

Produces ESM-2-shaped vectors without a network call, for development,
demonstrations and tests. Each residue contributes a phase-shifted sine
wave across all dimensions, seeded only by its character code, and the
accumulated vector is z-normalized. Identical sequences always yield
bit-identical embeddings; the vectors carry no biological meaning.
"""

from __future__ import annotations

import logging

import numpy as np

from .base import EmbeddingProvider, register_provider
from .esm2 import build_esm2_response, parse_esm2_response

logger = logging.getLogger(__name__)


def generate_mock_embedding(sequence: str, dimension: int = 1280) -> list[float]:
    """
    Generate a deterministic embedding from a sequence.

    Args:
        sequence: Protein sequence
        dimension: Vector length

    Returns:
        Z-normalized embedding vector
    """
    codes = np.array([ord(c) for c in sequence], dtype=float)
    dims = np.arange(dimension, dtype=float)

    embedding = np.zeros(dimension)
    for code in codes:
        embedding += np.sin((code + dims) * 0.01) * 0.05

    normalized = (embedding - embedding.mean()) / (embedding.std() + 1e-8)
    return normalized.tolist()


@register_provider
class MockEmbeddingProvider(EmbeddingProvider):
    """Offline provider returning deterministic sinusoidal embeddings."""

    name = "mock"
    model = "mock-esm2"
    description = "Deterministic offline generator (no biological meaning)"
    cacheable = False

    def _embed_impl(self, sequence: str) -> list[float]:
        embedding = generate_mock_embedding(sequence, self.config.dimension)
        response = build_esm2_response(embedding, layer=self.config.layer)
        return parse_esm2_response(response, layer=self.config.layer)
