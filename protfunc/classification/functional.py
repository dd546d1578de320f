"""
Rule-based Gene Ontology classification.

This module maps sequence composition and embedding features onto Gene
Ontology categories using a fixed set of threshold rules.

Biological Background
---------------------
Bulk residue composition carries a surprising amount of functional signal:

- **Hydrophobic proteins** (>45% nonpolar residues) typically contain
  transmembrane segments and act as transporters or channels
- **Highly charged proteins** (|net charge| > 15%) often bind nucleic acids
  through extended electrostatic surfaces (histones, ribosomal proteins)
- **Histidine** is a common catalytic residue in transferases
- **Proline-rich** segments mediate signalling through SH3/WW domains
- **Cysteine-rich** proteins form disulfide networks in redox enzymes and
  extracellular structural proteins

Embedding complexity (the spread of the language-model representation) is
used only to adjust confidence, never to trigger a rule on its own.

This is a heuristic annotator; predictions are hypotheses for experimental
or homology-based follow-up, not curated annotations.

References
----------
- Ashburner et al. (2000) - Gene Ontology: tool for the unification of biology
- Lin et al. (2023) - ESM-2 protein language models
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..core.models import (
    CategoryReferences,
    ClassificationResult,
    CompositionStats,
    EmbeddingFeatures,
    FunctionalCategory,
    FunctionType,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Category Catalog
# =============================================================================

@dataclass(frozen=True)
class CategoryTemplate:
    """Static description of a GO category; confidence is assigned per call."""
    id: str
    name: str
    type: FunctionType
    description: str
    examples: tuple[str, ...] = ()
    uniprot: Optional[str] = None

    def instantiate(self, confidence: float, embedding_based: bool = False) -> FunctionalCategory:
        return FunctionalCategory(
            id=self.id,
            name=self.name,
            type=self.type,
            confidence=clamp_confidence(confidence),
            description=self.description,
            examples=list(self.examples),
            references=CategoryReferences(gene_ontology=self.id, uniprot=self.uniprot),
            embedding_based=embedding_based,
        )


TRANSPORTER_ACTIVITY = CategoryTemplate(
    id="GO:0005215",
    name="Transporter Activity",
    type=FunctionType.MOLECULAR_FUNCTION,
    description="Enables the directed movement of substances across membranes or cellular components.",
    examples=("Ion channels", "Aquaporins", "Transporters"),
    uniprot="TRANSMEM",
)

MEMBRANE_COMPONENT = CategoryTemplate(
    id="GO:0031224",
    name="Intrinsic Component of Membrane",
    type=FunctionType.CELLULAR_COMPONENT,
    description="Proteins with strong hydrophobic character often localize to membranes.",
    examples=("GPCRs", "Tight junction proteins", "Adhesion molecules"),
)

DNA_BINDING = CategoryTemplate(
    id="GO:0003677",
    name="DNA Binding",
    type=FunctionType.MOLECULAR_FUNCTION,
    description="Interacting selectively and non-covalently with DNA.",
    examples=("Transcription factors", "Histones", "Helicases"),
    uniprot="DNA_BIND",
)

RNA_BINDING = CategoryTemplate(
    id="GO:0003723",
    name="RNA Binding",
    type=FunctionType.MOLECULAR_FUNCTION,
    description="Interacting selectively and non-covalently with RNA.",
    examples=("Ribosomes", "snRNPs", "tRNA synthetases"),
    uniprot="RNA_BIND",
)

TRANSFERASE_ACTIVITY = CategoryTemplate(
    id="GO:0016740",
    name="Transferase Activity",
    type=FunctionType.MOLECULAR_FUNCTION,
    description="Catalyzes the transfer of a group from one compound to another.",
    examples=("Kinases", "Phosphatases", "Methyltransferases"),
    uniprot="TRANSFERASE",
)

SIGNAL_TRANSDUCER = CategoryTemplate(
    id="GO:0004871",
    name="Signal Transducer Activity",
    type=FunctionType.MOLECULAR_FUNCTION,
    description="Conveys a signal across a cell to trigger a response.",
    examples=("SH3-domain proteins", "PH-domain proteins"),
)

DISULFIDE_OXIDOREDUCTASE = CategoryTemplate(
    id="GO:0015035",
    name="Protein Disulfide Oxidoreductase Activity",
    type=FunctionType.MOLECULAR_FUNCTION,
    description="Catalyzes the formation and reduction of disulfide bonds.",
    examples=("Thioredoxins", "PDI", "Glutaredoxins"),
)

STRUCTURAL_PROTEIN = CategoryTemplate(
    id="GO:0005200",
    name="Structural Protein Activity",
    type=FunctionType.MOLECULAR_FUNCTION,
    description="Provides structural support to cells.",
    examples=("Keratins", "Collagens", "Fibrinogen"),
)

METABOLIC_PROCESS = CategoryTemplate(
    id="GO:0008152",
    name="Metabolic Process",
    type=FunctionType.BIOLOGICAL_PROCESS,
    description="Chemical reactions and pathways that modify substances.",
    examples=("Glycolysis", "TCA cycle", "Photosynthesis"),
)

INTRACELLULAR_COMPONENT = CategoryTemplate(
    id="GO:0005623",
    name="Intracellular Component",
    type=FunctionType.CELLULAR_COMPONENT,
    description="Proteins contained within the cell.",
    examples=("Soluble proteins", "Organellar proteins"),
)

CATEGORY_CATALOG: dict[str, CategoryTemplate] = {
    t.id: t
    for t in (
        TRANSPORTER_ACTIVITY,
        MEMBRANE_COMPONENT,
        DNA_BINDING,
        RNA_BINDING,
        TRANSFERASE_ACTIVITY,
        SIGNAL_TRANSDUCER,
        DISULFIDE_OXIDOREDUCTASE,
        STRUCTURAL_PROTEIN,
        METABOLIC_PROCESS,
        INTRACELLULAR_COMPONENT,
    )
}


# =============================================================================
# Thresholds
# =============================================================================

@dataclass(frozen=True)
class ClassifierThresholds:
    """Rule thresholds (percentages unless noted)."""
    hydrophobicity: float = 45.0
    net_charge: float = 15.0
    histidine: float = 2.0
    proline: float = 5.0
    cysteine: float = 3.0
    long_sequence: int = 300
    short_sequence: int = 50
    # Embedding-derived (unitless)
    membrane_complexity: float = 0.5
    complexity_note: float = 0.7
    dynamic_range_note: float = 1.5


MAX_FUNCTIONS = 8
DEFAULT_CONFIDENCE = 0.5
MAX_BOOSTED_CONFIDENCE = 0.95


def clamp_confidence(value: float) -> float:
    """Clamp a confidence value to [0, 1]."""
    if value > 1.0 or value < 0.0:
        logger.debug(f"Clamping out-of-range confidence {value:.3f}")
    return min(max(value, 0.0), 1.0)


# =============================================================================
# Classifier
# =============================================================================

@dataclass
class _Candidates:
    primary: list[FunctionalCategory] = field(default_factory=list)
    secondary: list[FunctionalCategory] = field(default_factory=list)


class FunctionalClassifier:
    """
    Threshold-rule classifier for Gene Ontology functional categories.

    The classifier is stateless: each call evaluates every rule
    independently, collects candidate categories into primary and
    secondary lists, keeps the eight most confident overall and
    derives explanatory notes.

    Usage:
        >>> classifier = FunctionalClassifier()
        >>> result = classifier.classify(stats, embedding_features)
        >>> print(result.summary())
    """

    def __init__(
        self,
        thresholds: Optional[ClassifierThresholds] = None,
        max_functions: int = MAX_FUNCTIONS,
    ):
        self.thresholds = thresholds or ClassifierThresholds()
        self.max_functions = max_functions

    def classify(
        self,
        stats: CompositionStats,
        embedding_features: Optional[EmbeddingFeatures] = None,
        sequence: str = "",
        sequence_id: str = "N/A",
    ) -> ClassificationResult:
        """
        Classify a protein from its composition statistics.

        Args:
            stats: Composition statistics of a validated sequence
            embedding_features: Optional embedding features for confidence boosts
            sequence: The sequence itself, echoed into the result
            sequence_id: Identifier echoed into the result

        Returns:
            ClassificationResult with ranked primary and secondary functions
        """
        candidates = _Candidates()

        self._apply_membrane_rules(stats, embedding_features, candidates)
        self._apply_charge_rules(stats, embedding_features, candidates)
        self._apply_composition_rules(stats, candidates)
        self._apply_length_rules(stats, candidates)

        primary, secondary = self._rank(candidates)

        if primary:
            confidence = sum(f.confidence for f in primary) / len(primary)
        else:
            confidence = DEFAULT_CONFIDENCE

        return ClassificationResult(
            sequence=sequence,
            sequence_id=sequence_id,
            length=stats.length,
            primary_functions=primary,
            secondary_functions=secondary,
            confidence=clamp_confidence(confidence),
            notes=self._generate_notes(stats, embedding_features),
            embedding_features=embedding_features,
        )

    def _apply_membrane_rules(
        self,
        stats: CompositionStats,
        embedding: Optional[EmbeddingFeatures],
        candidates: _Candidates,
    ):
        """Hydrophobic-rich proteins: transporters and membrane components."""
        t = self.thresholds
        if stats.hydrophobicity <= t.hydrophobicity:
            return

        confidence = 0.75 + (stats.hydrophobicity - t.hydrophobicity) * 0.005
        # Structured membrane proteins show high embedding complexity
        if embedding is not None and embedding.complexity > t.membrane_complexity:
            confidence = min(confidence + 0.1, MAX_BOOSTED_CONFIDENCE)

        logger.debug(f"Membrane rule triggered (hydrophobicity={stats.hydrophobicity:.1f}%)")
        candidates.primary.append(
            TRANSPORTER_ACTIVITY.instantiate(confidence, embedding_based=embedding is not None)
        )
        candidates.secondary.append(MEMBRANE_COMPONENT.instantiate(0.68))

    def _apply_charge_rules(
        self,
        stats: CompositionStats,
        embedding: Optional[EmbeddingFeatures],
        candidates: _Candidates,
    ):
        """Highly charged proteins: nucleic acid binding."""
        if abs(stats.net_charge) <= self.thresholds.net_charge:
            return

        complexity = embedding.complexity if embedding is not None else 0.0
        confidence = min(0.7 + complexity * 0.15, MAX_BOOSTED_CONFIDENCE)

        logger.debug(f"Charge rule triggered (net_charge={stats.net_charge:+.1f})")
        candidates.primary.append(
            DNA_BINDING.instantiate(confidence, embedding_based=embedding is not None)
        )
        candidates.primary.append(RNA_BINDING.instantiate(0.65))

    def _apply_composition_rules(self, stats: CompositionStats, candidates: _Candidates):
        """Residue-specific enrichment rules (H, P, C)."""
        t = self.thresholds

        if stats.fraction("H") > t.histidine:
            candidates.primary.append(TRANSFERASE_ACTIVITY.instantiate(0.62))

        if stats.fraction("P") > t.proline:
            candidates.secondary.append(SIGNAL_TRANSDUCER.instantiate(0.58))

        if stats.fraction("C") > t.cysteine:
            candidates.secondary.append(DISULFIDE_OXIDOREDUCTASE.instantiate(0.64))
            candidates.secondary.append(STRUCTURAL_PROTEIN.instantiate(0.60))

    def _apply_length_rules(self, stats: CompositionStats, candidates: _Candidates):
        """Long proteins and the default localization."""
        if stats.length > self.thresholds.long_sequence:
            candidates.primary.append(METABOLIC_PROCESS.instantiate(0.55))

        candidates.primary.append(INTRACELLULAR_COMPONENT.instantiate(0.5))

    def _rank(
        self,
        candidates: _Candidates,
    ) -> tuple[list[FunctionalCategory], list[FunctionalCategory]]:
        """
        Keep the most confident categories and split them by origin.

        Candidates are ranked together with a stable sort, so ties keep
        primary-before-secondary rule order. Categories demoted past
        `max_functions` are dropped from both lists.
        """
        tagged = [(f, True) for f in candidates.primary]
        tagged += [(f, False) for f in candidates.secondary]
        tagged.sort(key=lambda item: item[0].confidence, reverse=True)
        kept = tagged[:self.max_functions]

        primary = [f for f, is_primary in kept if is_primary]
        secondary = [f for f, is_primary in kept if not is_primary]
        return primary, secondary

    def _generate_notes(
        self,
        stats: CompositionStats,
        embedding: Optional[EmbeddingFeatures],
    ) -> list[str]:
        """Generate advisory interpretation notes."""
        t = self.thresholds
        notes = []

        if stats.hydrophobicity > t.hydrophobicity:
            notes.append(
                f"High hydrophobicity ({stats.hydrophobicity:.1f}%) suggests membrane association"
            )
        if abs(stats.net_charge) > t.net_charge:
            notes.append(
                f"High net charge ({stats.net_charge:+.1f}) suggests nucleic acid binding"
            )
        if stats.length < t.short_sequence:
            notes.append("Short sequence detected - may be a peptide or domain")

        if embedding is not None:
            if embedding.complexity > t.complexity_note:
                notes.append(
                    f"Complex structural patterns detected in embedding "
                    f"(score: {embedding.complexity:.2f})"
                )
            if embedding.dynamic_range > t.dynamic_range_note:
                notes.append("Diverse functional regions predicted based on embedding analysis")

        return notes


def classify_function(
    stats: CompositionStats,
    embedding_features: Optional[EmbeddingFeatures] = None,
    sequence: str = "",
    sequence_id: str = "N/A",
) -> ClassificationResult:
    """
    Convenience function for functional classification.

    Args:
        stats: Composition statistics
        embedding_features: Optional embedding features
        sequence: Sequence echoed into the result
        sequence_id: Identifier echoed into the result

    Returns:
        ClassificationResult
    """
    return FunctionalClassifier().classify(
        stats,
        embedding_features,
        sequence=sequence,
        sequence_id=sequence_id,
    )
