"""
UniProt metadata retrieval.

The client fetches UniProtKB entries over the REST API; the parser decodes
them into a typed UniProtEntry with per-field defaults.
"""

from .client import UniProtClient, UniProtConfig, UniProtError
from .parser import (
    Citation,
    CrossReference,
    Organism,
    SequenceFeature,
    UniProtEntry,
    parse_uniprot_entry,
)

__all__ = [
    "UniProtClient",
    "UniProtConfig",
    "UniProtError",
    "UniProtEntry",
    "Organism",
    "SequenceFeature",
    "Citation",
    "CrossReference",
    "parse_uniprot_entry",
]
