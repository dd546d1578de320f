"""
End-to-end protein analysis.

The analyzer is the boundary around the pure classification core. It
accepts a raw sequence or a UniProt accession, resolves the sequence,
enforces the validation gate, obtains an embedding from the configured
provider and runs composition analysis and classification.

    sequence / accession
        -> UniProt fetch (accession only)
        -> clean_sequence -> SequenceValidator (alphabet, >= 10 residues)
        -> EmbeddingProvider.embed -> extract_embedding_features
        -> calculate_stats
        -> FunctionalClassifier.classify
        -> AnalysisReport
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from pydantic import BaseModel

from .classification.functional import FunctionalClassifier
from .core.models import (
    ClassificationResult,
    CompositionStats,
    EmbeddingFeatures,
    EmbeddingSummary,
)
from .core.sequence import SequenceValidator, clean_sequence
from .embeddings.base import EmbeddingProvider
from .features.composition import calculate_stats
from .features.embedding import extract_embedding_features
from .uniprot.client import UniProtClient
from .uniprot.parser import UniProtEntry

logger = logging.getLogger(__name__)


class AnalysisReport(BaseModel):
    """Everything produced by one analysis."""
    classification: ClassificationResult
    stats: CompositionStats
    embedding_features: Optional[EmbeddingFeatures] = None
    embedding_summary: Optional[EmbeddingSummary] = None
    uniprot: Optional[UniProtEntry] = None

    @property
    def sequence_id(self) -> str:
        return self.classification.sequence_id


class ProteinAnalyzer:
    """
    Runs the full analysis for sequences or UniProt accessions.

    Args:
        provider: Embedding provider; None classifies without embedding boosts
        uniprot_client: Client used to resolve accessions (created on demand)
        validator: Validation gate (defaults to a 10-residue minimum)
        classifier: Functional classifier
    """

    def __init__(
        self,
        provider: Optional[EmbeddingProvider] = None,
        uniprot_client: Optional[UniProtClient] = None,
        validator: Optional[SequenceValidator] = None,
        classifier: Optional[FunctionalClassifier] = None,
    ):
        self.provider = provider
        self._uniprot_client = uniprot_client
        self.validator = validator or SequenceValidator()
        self.classifier = classifier or FunctionalClassifier()

    @property
    def uniprot_client(self) -> UniProtClient:
        if self._uniprot_client is None:
            self._uniprot_client = UniProtClient()
        return self._uniprot_client

    def analyze(
        self,
        sequence: Optional[str] = None,
        uniprot_id: Optional[str] = None,
    ) -> AnalysisReport:
        """
        Analyze one protein.

        Args:
            sequence: Raw sequence or FASTA text
            uniprot_id: UniProt accession; fetched only when no sequence is given

        Returns:
            AnalysisReport

        Raises:
            ValueError: If neither sequence nor uniprot_id is given
            InvalidSequenceError: If the cleaned sequence fails validation
            UniProtError: If the UniProt entry cannot be fetched
            EmbeddingProviderError: If the embedding cannot be generated
        """
        if not sequence and not uniprot_id:
            raise ValueError("Either sequence or uniprotId is required")

        sequence_id = uniprot_id or "N/A"
        entry: Optional[UniProtEntry] = None

        if uniprot_id and not sequence:
            entry = self.uniprot_client.get_entry(uniprot_id)
            sequence = entry.sequence
            if entry.accession != "Unknown":
                sequence_id = entry.accession

        cleaned = self.validator.require(clean_sequence(sequence))
        logger.info(f"Analyzing {sequence_id} ({len(cleaned)} residues)")

        features = None
        summary = None
        if self.provider is not None:
            embedding = self.provider.embed(cleaned)
            features = extract_embedding_features(embedding)
            summary = EmbeddingSummary(
                dimension=len(embedding),
                layer=self.provider.config.layer,
                mean=features.mean,
                std=features.std,
                range=(features.min, features.max),
                provider=self.provider.name,
            )

        stats = calculate_stats(cleaned)
        classification = self.classifier.classify(
            stats,
            features,
            sequence=cleaned,
            sequence_id=sequence_id,
        )

        return AnalysisReport(
            classification=classification,
            stats=stats,
            embedding_features=features,
            embedding_summary=summary,
            uniprot=entry,
        )

    def analyze_batch(self, records: Iterable[tuple[str, str]]) -> list[AnalysisReport]:
        """
        Analyze several (sequence_id, sequence) pairs.

        Invalid sequences raise immediately; nothing is skipped silently.
        """
        reports = []
        for sequence_id, sequence in records:
            report = self.analyze(sequence=sequence)
            classification = report.classification.model_copy(update={"sequence_id": sequence_id})
            reports.append(report.model_copy(update={"classification": classification}))
        return reports

    def close(self, provider: bool = True):
        """
        Release network clients.

        Args:
            provider: Also close the embedding provider; pass False when
                the caller owns it
        """
        if provider and self.provider is not None:
            self.provider.close()
        if self._uniprot_client is not None:
            self._uniprot_client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def analyze_protein(
    sequence: Optional[str] = None,
    uniprot_id: Optional[str] = None,
    provider: Optional[EmbeddingProvider] = None,
) -> AnalysisReport:
    """
    Convenience wrapper around ProteinAnalyzer.analyze().

    The provider stays open; the caller owns it.
    """
    analyzer = ProteinAnalyzer(provider=provider)
    try:
        return analyzer.analyze(sequence=sequence, uniprot_id=uniprot_id)
    finally:
        analyzer.close(provider=False)
