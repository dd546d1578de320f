"""
Core data models for ProtFunc.

This module defines the data structures that flow through the classification
pipeline: composition statistics derived from the sequence, descriptive
features derived from an embedding vector, and the Gene Ontology categories
assigned by the classifier. All models use Pydantic for validation and
serialization, and the result models are frozen once constructed.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FunctionType(str, Enum):
    """
    Gene Ontology namespace of a functional category.

    - MOLECULAR_FUNCTION: Elemental activity of the gene product (binding, catalysis)
    - BIOLOGICAL_PROCESS: Larger process the product takes part in
    - CELLULAR_COMPONENT: Location of the product within the cell
    """
    MOLECULAR_FUNCTION = "molecular_function"
    BIOLOGICAL_PROCESS = "biological_process"
    CELLULAR_COMPONENT = "cellular_component"

    @property
    def label(self) -> str:
        """Human-readable namespace, e.g. 'molecular function'."""
        return self.value.replace("_", " ")


class CompositionStats(BaseModel):
    """
    Amino acid composition and derived biochemical statistics.

    All percentages are relative to the full sequence length, so
    `composition` values sum to 100 over the observed residue codes.
    """
    model_config = ConfigDict(frozen=True)

    length: int = Field(..., ge=1, description="Number of residues")
    composition: dict[str, float] = Field(
        ..., description="Residue code -> percentage of sequence (observed codes only)"
    )
    hydrophobicity: float = Field(..., ge=0, le=100, description="Percent of A, I, L, M, F, W, P, V")
    positive_charge: float = Field(..., ge=0, le=100, description="Percent of K, R, H")
    negative_charge: float = Field(..., ge=0, le=100, description="Percent of D, E")
    net_charge: float = Field(..., description="positive_charge - negative_charge")

    def fraction(self, residue: str) -> float:
        """Percentage of a residue code, 0.0 when it does not occur."""
        return self.composition.get(residue.upper(), 0.0)


class EmbeddingStats(BaseModel):
    """Descriptive statistics of an embedding vector."""
    model_config = ConfigDict(frozen=True)

    mean: float
    std: float = Field(..., ge=0, description="Population standard deviation")
    min: float
    max: float


class EmbeddingFeatures(BaseModel):
    """
    Features extracted from a sequence embedding.

    The embedding is treated as an opaque numeric signal: global statistics,
    the means of ten contiguous regions, the Euclidean norm and the spread
    of values are used as proxies for structural and functional diversity.
    """
    model_config = ConfigDict(frozen=True)

    stats: EmbeddingStats
    regions: list[float] = Field(..., min_length=10, max_length=10)
    overall_magnitude: float = Field(..., ge=0, description="Euclidean norm")
    dynamic_range: float = Field(..., ge=0, description="max - min")
    complexity: float = Field(..., ge=0, description="Equal to stats.std")

    @property
    def mean(self) -> float:
        return self.stats.mean

    @property
    def std(self) -> float:
        return self.stats.std

    @property
    def min(self) -> float:
        return self.stats.min

    @property
    def max(self) -> float:
        return self.stats.max


class EmbeddingSummary(BaseModel):
    """Compact description of the embedding used for an analysis."""
    model_config = ConfigDict(frozen=True)

    dimension: int
    layer: int
    mean: float
    std: float
    range: tuple[float, float]
    provider: str


class CategoryReferences(BaseModel):
    """Citation information for a functional category."""
    model_config = ConfigDict(frozen=True)

    gene_ontology: str = Field(..., description="GO term identifier")
    uniprot: Optional[str] = Field(None, description="Matching UniProt keyword/feature")


class FunctionalCategory(BaseModel):
    """
    A candidate Gene Ontology classification with its confidence.

    Produced fresh for every classification call and never mutated.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="GO-style identifier, e.g. GO:0005215")
    name: str
    type: FunctionType
    confidence: float = Field(..., ge=0, le=1)
    description: str = ""
    examples: list[str] = Field(default_factory=list)
    references: CategoryReferences
    embedding_based: bool = Field(
        False, description="Whether embedding features contributed to the confidence"
    )


class ClassificationResult(BaseModel):
    """
    Complete functional classification of one protein sequence.

    Primary and secondary functions are each ordered by descending
    confidence and together hold at most eight categories.
    """
    model_config = ConfigDict(frozen=True)

    sequence: str
    sequence_id: str = "N/A"
    length: int = Field(..., ge=0)
    primary_functions: list[FunctionalCategory] = Field(default_factory=list)
    secondary_functions: list[FunctionalCategory] = Field(default_factory=list)
    confidence: float = Field(..., ge=0, le=1, description="Mean primary confidence")
    notes: list[str] = Field(default_factory=list)
    embedding_features: Optional[EmbeddingFeatures] = None

    def all_functions(self) -> list[FunctionalCategory]:
        """All retained categories ranked by confidence."""
        return sorted(
            [*self.primary_functions, *self.secondary_functions],
            key=lambda f: f.confidence,
            reverse=True,
        )

    def get_function(self, category_id: str) -> Optional[FunctionalCategory]:
        """Look up a retained category by GO identifier."""
        for function in self.all_functions():
            if function.id == category_id:
                return function
        return None

    def summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            f"Functional classification for {self.sequence_id} ({self.length} residues)",
            f"  Overall confidence: {self.confidence:.0%}",
        ]
        if self.primary_functions:
            lines.append("  Primary functions:")
            for f in self.primary_functions:
                lines.append(f"    - {f.name} [{f.id}] {f.confidence:.2f}")
        if self.secondary_functions:
            lines.append("  Secondary functions:")
            for f in self.secondary_functions:
                lines.append(f"    - {f.name} [{f.id}] {f.confidence:.2f}")
        if self.notes:
            lines.append("  Notes:")
            for note in self.notes:
                lines.append(f"    - {note}")
        return "\n".join(lines)
