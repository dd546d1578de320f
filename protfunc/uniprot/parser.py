"""
Decoding of UniProtKB JSON entries.

UniProt entries are deeply nested and many sections are optional, so every
field is extracted by its own helper that checks types explicitly and falls
back to a documented default. Decoding never raises: a malformed or partial
entry yields a best-effort UniProtEntry.

Defaults:
    accession          "Unknown"
    protein_name       "Unknown protein" ("Unknown" if a recommended name
                       exists without a full name)
    organism           scientific_name "Unknown organism", taxon_id 0
    sequence           "" (sequence_length 0)
    protein_existence  "Unknown"
    list fields        []
    last_update        None
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

MAX_REFERENCES = 5


class Organism(BaseModel):
    scientific_name: str = "Unknown organism"
    common_name: Optional[str] = None
    taxon_id: int = 0


class SequenceFeature(BaseModel):
    type: str = "Unknown"
    description: Optional[str] = None
    position: Optional[str] = Field(None, description="'start-end', 1-based")


class Citation(BaseModel):
    title: str = "Untitled"
    authors: list[str] = Field(default_factory=list)
    journal: Optional[str] = None
    pubmed_id: Optional[int] = None


class CrossReference(BaseModel):
    database: str
    ids: list[str] = Field(default_factory=list)


class UniProtEntry(BaseModel):
    """Application-level view of a UniProtKB entry."""
    accession: str = "Unknown"
    protein_name: str = "Unknown protein"
    short_name: Optional[str] = None
    gene: Optional[str] = None
    organism: Organism = Field(default_factory=Organism)
    sequence: str = ""
    sequence_length: int = 0
    protein_existence: str = "Unknown"
    keywords: list[str] = Field(default_factory=list)
    functions: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    features: list[SequenceFeature] = Field(default_factory=list)
    references: list[Citation] = Field(default_factory=list)
    xrefs: list[CrossReference] = Field(default_factory=list)
    last_update: Optional[str] = None


# =============================================================================
# Field helpers
# =============================================================================

def _dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return None


def _comments(data: dict, comment_type: str) -> list[dict]:
    return [
        c for c in _list(data.get("comments"))
        if isinstance(c, dict) and c.get("commentType") == comment_type
    ]


def extract_protein_name(data: dict) -> tuple[str, Optional[str]]:
    """Return (full_name, short_name) from the recommended name."""
    recommended = _dict(_dict(data.get("proteinDescription")).get("recommendedName"))
    if not recommended:
        return "Unknown protein", None

    full = _str(_dict(recommended.get("fullName")).get("value")) or "Unknown"
    short_names = _list(recommended.get("shortNames"))
    short = _str(_dict(short_names[0]).get("value")) if short_names else None
    return full, short


def extract_gene(data: dict) -> Optional[str]:
    genes = _list(data.get("genes"))
    if not genes:
        return None
    return _str(_dict(_dict(genes[0]).get("geneName")).get("value"))


def extract_organism(data: dict) -> Organism:
    organism = _dict(data.get("organism"))
    if not organism:
        return Organism()
    return Organism(
        scientific_name=_str(organism.get("scientificName")) or "Unknown",
        common_name=_str(organism.get("commonName")),
        taxon_id=_int(organism.get("taxonId")) or 0,
    )


def extract_functions(data: dict) -> list[str]:
    """Free-text FUNCTION comments."""
    functions = []
    for comment in _comments(data, "FUNCTION"):
        for text in _list(comment.get("texts")):
            value = _str(_dict(text).get("value"))
            if value:
                functions.append(value)
    return functions


def extract_locations(data: dict) -> list[str]:
    """Subcellular locations from SUBCELLULAR_LOCATION comments."""
    locations = []
    for comment in _comments(data, "SUBCELLULAR_LOCATION"):
        for loc in _list(comment.get("subcellularLocations")):
            value = _str(_dict(_dict(loc).get("location")).get("value"))
            if value:
                locations.append(value)
    return locations


def extract_keywords(data: dict) -> list[str]:
    return [
        name for name in (_str(_dict(kw).get("name")) for kw in _list(data.get("keywords")))
        if name
    ]


def extract_features(data: dict) -> list[SequenceFeature]:
    """Domains, sites and modifications with their 1-based span."""
    features = []
    for feature in _list(data.get("features")):
        feature = _dict(feature)
        location = _dict(feature.get("location"))
        start = _dict(location.get("start")).get("value")
        end = _dict(location.get("end")).get("value")
        features.append(SequenceFeature(
            type=_str(feature.get("type")) or "Unknown",
            description=_str(feature.get("description")),
            position=f"{start}-{end}" if start and end else None,
        ))
    return features


def extract_references(data: dict) -> list[Citation]:
    """First few literature citations."""
    references = []
    for ref in _list(data.get("references"))[:MAX_REFERENCES]:
        citation = _dict(_dict(ref).get("citation"))
        if not citation:
            continue
        references.append(Citation(
            title=_str(citation.get("title")) or "Untitled",
            authors=[a for a in _list(citation.get("authors")) if isinstance(a, str)],
            journal=_str(citation.get("journal")),
            pubmed_id=_int(citation.get("pubmedId")),
        ))
    return references


def extract_xrefs(data: dict) -> list[CrossReference]:
    """Cross-references grouped by database, ids de-duplicated in order."""
    grouped: dict[str, list[str]] = {}
    for xref in _list(data.get("uniProtKBCrossReferences")):
        xref = _dict(xref)
        database = _str(xref.get("database")) or "Unknown"
        ids = grouped.setdefault(database, [])
        xref_id = _str(xref.get("id"))
        if xref_id and xref_id not in ids:
            ids.append(xref_id)
    return [CrossReference(database=db, ids=ids) for db, ids in grouped.items()]


def parse_uniprot_entry(data: Any) -> UniProtEntry:
    """
    Convert a UniProt REST JSON entry to a UniProtEntry.

    Args:
        data: Decoded JSON of a /uniprotkb/{accession}.json response

    Returns:
        UniProtEntry; missing or malformed fields take their defaults
    """
    data = _dict(data)
    full_name, short_name = extract_protein_name(data)
    sequence = _str(_dict(data.get("sequence")).get("value")) or ""

    entry = UniProtEntry(
        accession=_str(data.get("primaryAccession")) or "Unknown",
        protein_name=full_name,
        short_name=short_name,
        gene=extract_gene(data),
        organism=extract_organism(data),
        sequence=sequence,
        sequence_length=len(sequence),
        protein_existence=_str(data.get("proteinExistence")) or "Unknown",
        keywords=extract_keywords(data),
        functions=extract_functions(data),
        locations=extract_locations(data),
        features=extract_features(data),
        references=extract_references(data),
        xrefs=extract_xrefs(data),
        last_update=_str(_dict(data.get("entryAudit")).get("lastAnnotationUpdateDate")),
    )
    logger.debug(f"Parsed UniProt entry {entry.accession} ({entry.sequence_length} residues)")
    return entry
