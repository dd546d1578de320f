"""
Functional classification into Gene Ontology categories.

Threshold rules over composition statistics assign candidate categories
from the three GO namespaces (molecular function, biological process,
cellular component). Embedding features, when available, raise confidence
for the rules whose biology they inform (membrane transport, nucleic acid
binding) and contribute advisory notes.

References:
    Ashburner et al. (2000) - Gene Ontology
"""

from .functional import (
    # Catalog
    CATEGORY_CATALOG,
    CategoryTemplate,
    # Configuration
    ClassifierThresholds,
    MAX_FUNCTIONS,
    # Main classifier
    FunctionalClassifier,
    # Convenience functions
    classify_function,
    clamp_confidence,
)

__all__ = [
    "CATEGORY_CATALOG",
    "CategoryTemplate",
    "ClassifierThresholds",
    "MAX_FUNCTIONS",
    "FunctionalClassifier",
    "classify_function",
    "clamp_confidence",
]
