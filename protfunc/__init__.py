"""
ProtFunc: Gene Ontology classification of protein sequences.

This package assigns functional categories from the three Gene Ontology
namespaces (molecular function, biological process, cellular component) to
protein sequences. Classification combines residue composition statistics
with descriptive features of protein language model embeddings, and can be
enriched with metadata fetched from UniProt.

Composition carries functional signal because physicochemical constraints
shape sequences: transmembrane transporters are dominated by nonpolar
residues, nucleic-acid binding proteins carry a large net charge, and
catalytic or disulfide-rich proteins are enriched in histidine or cysteine.
Embedding statistics are used to adjust confidence where they indicate
structured, functionally diverse proteins.

Key components:
    - core: Data models and sequence cleaning/validation
    - features: Composition statistics and embedding features
    - classification: Rule-based GO classifier
    - embeddings: Embedding providers (deterministic mock, ESM-2 API)
    - uniprot: UniProt REST client and entry decoder
    - pipeline: End-to-end analysis with validation gate
    - export: JSON/CSV export
    - cli: Command-line interface

Basic usage:
    >>> from protfunc import classify
    >>> result = classify("MVLSPADKTNVKAAWGKVGAHAGEYGAEALERMFLSFPTTKTYFPHFDLSH")
    >>> for f in result.primary_functions:
    ...     print(f"{f.name}: {f.confidence:.2f}")

License: MIT
"""

__version__ = "0.1.0"

from typing import Optional

from .classification.functional import FunctionalClassifier, classify_function
from .core.models import (
    ClassificationResult,
    CompositionStats,
    EmbeddingFeatures,
    FunctionalCategory,
    FunctionType,
)
from .core.sequence import (
    InvalidSequenceError,
    SequenceValidator,
    clean_sequence,
    validate_sequence,
)
from .embeddings import EmbeddingProvider, get_provider, list_providers
from .features.composition import calculate_stats
from .features.embedding import (
    DimensionMismatchError,
    cosine_similarity,
    extract_embedding_features,
)
from .pipeline import AnalysisReport, ProteinAnalyzer, analyze_protein


def classify(
    sequence: str,
    provider: Optional[str] = "mock",
    sequence_id: str = "N/A",
) -> ClassificationResult:
    """
    Classify a protein sequence into Gene Ontology categories.

    This is the main high-level interface. For UniProt lookups, exports or
    batch work use ProteinAnalyzer directly.

    Args:
        sequence: Raw sequence or FASTA text
        provider: Embedding provider name ('mock', 'esm2') or None to
                  classify from composition alone
        sequence_id: Identifier recorded in the result

    Returns:
        ClassificationResult

    Raises:
        InvalidSequenceError: If the sequence is invalid or shorter than 10 residues

    Example:
        >>> result = classify("MKWVTFISLLFLFSSAYSRGVFRRDTHKSEIAHRFKDLGE", provider=None)
        >>> result.primary_functions[0].name
        'Transferase Activity'
    """
    embedder = get_provider(provider) if provider else None
    try:
        report = ProteinAnalyzer(provider=embedder).analyze(sequence=sequence)
    finally:
        if embedder is not None:
            embedder.close()
    if sequence_id != report.sequence_id:
        return report.classification.model_copy(update={"sequence_id": sequence_id})
    return report.classification


__all__ = [
    # Version
    "__version__",
    # Main function
    "classify",
    # Models
    "ClassificationResult",
    "CompositionStats",
    "EmbeddingFeatures",
    "FunctionalCategory",
    "FunctionType",
    # Sequence utilities
    "clean_sequence",
    "validate_sequence",
    "SequenceValidator",
    "InvalidSequenceError",
    # Features
    "calculate_stats",
    "extract_embedding_features",
    "cosine_similarity",
    "DimensionMismatchError",
    # Classification
    "FunctionalClassifier",
    "classify_function",
    # Embeddings
    "EmbeddingProvider",
    "get_provider",
    "list_providers",
    # Pipeline
    "AnalysisReport",
    "ProteinAnalyzer",
    "analyze_protein",
]
