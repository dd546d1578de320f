"""
Core data structures and utilities for ProtFunc.

Modules:
    models: Pydantic models for statistics, features and classification results
    sequence: Sequence cleaning, validation and FASTA parsing
"""

from .models import (
    CategoryReferences,
    ClassificationResult,
    CompositionStats,
    EmbeddingFeatures,
    EmbeddingStats,
    EmbeddingSummary,
    FunctionalCategory,
    FunctionType,
)
from .sequence import (
    ALLOWED_CHARS,
    STANDARD_AA,
    InvalidSequenceError,
    SequenceError,
    SequenceValidator,
    clean_sequence,
    parse_fasta,
    sequence_hash,
    validate_sequence,
)

__all__ = [
    # Models
    "CompositionStats",
    "EmbeddingStats",
    "EmbeddingFeatures",
    "EmbeddingSummary",
    "CategoryReferences",
    "FunctionalCategory",
    "FunctionType",
    "ClassificationResult",
    # Sequence utilities
    "clean_sequence",
    "validate_sequence",
    "SequenceValidator",
    "SequenceError",
    "InvalidSequenceError",
    "parse_fasta",
    "sequence_hash",
    "STANDARD_AA",
    "ALLOWED_CHARS",
]
