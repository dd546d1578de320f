"""
Tests for UniProt entry decoding and the REST client.
"""

import httpx
import pytest

from protfunc.uniprot import (
    UniProtClient,
    UniProtConfig,
    UniProtEntry,
    UniProtError,
    parse_uniprot_entry,
)

HBA_HUMAN = {
    "primaryAccession": "P69905",
    "proteinExistence": "1: Evidence at protein level",
    "proteinDescription": {
        "recommendedName": {
            "fullName": {"value": "Hemoglobin subunit alpha"},
            "shortNames": [{"value": "HBA"}],
        }
    },
    "genes": [{"geneName": {"value": "HBA1"}}],
    "organism": {
        "scientificName": "Homo sapiens",
        "commonName": "Human",
        "taxonId": 9606,
    },
    "sequence": {"value": "MVLSPADKTNVKAAWGKVGAHAGEYGAEALERMFLSFPTTKTYFPHFDLSH", "length": 51},
    "keywords": [{"id": "KW-0349", "name": "Heme"}, {"id": "KW-0408", "name": "Iron"}],
    "comments": [
        {
            "commentType": "FUNCTION",
            "texts": [{"value": "Involved in oxygen transport from the lung to the various peripheral tissues."}],
        },
        {
            "commentType": "SUBCELLULAR_LOCATION",
            "subcellularLocations": [{"location": {"value": "Cytoplasm"}}],
        },
    ],
    "features": [
        {
            "type": "Domain",
            "description": "Globin",
            "location": {"start": {"value": 2}, "end": {"value": 142}},
        },
        {"type": "Binding site", "location": {"start": {"value": 59}}},
    ],
    "references": [
        {"citation": {"title": f"Paper {i}", "authors": ["Smith J."], "journal": "Nature", "pubmedId": str(1000 + i)}}
        for i in range(7)
    ],
    "uniProtKBCrossReferences": [
        {"database": "PDB", "id": "1A00"},
        {"database": "PDB", "id": "1A01"},
        {"database": "PDB", "id": "1A00"},
        {"database": "Pfam", "id": "PF00042"},
    ],
    "entryAudit": {"lastAnnotationUpdateDate": "2024-07-24"},
}


class TestParseEntry:
    """Decoding a complete entry."""

    def test_identity_fields(self):
        entry = parse_uniprot_entry(HBA_HUMAN)

        assert entry.accession == "P69905"
        assert entry.protein_name == "Hemoglobin subunit alpha"
        assert entry.short_name == "HBA"
        assert entry.gene == "HBA1"
        assert entry.protein_existence == "1: Evidence at protein level"
        assert entry.last_update == "2024-07-24"

    def test_organism(self):
        organism = parse_uniprot_entry(HBA_HUMAN).organism

        assert organism.scientific_name == "Homo sapiens"
        assert organism.common_name == "Human"
        assert organism.taxon_id == 9606

    def test_sequence(self):
        entry = parse_uniprot_entry(HBA_HUMAN)

        assert entry.sequence.startswith("MVLSPADKTN")
        assert entry.sequence_length == len(entry.sequence)

    def test_annotations(self):
        entry = parse_uniprot_entry(HBA_HUMAN)

        assert entry.keywords == ["Heme", "Iron"]
        assert entry.functions[0].startswith("Involved in oxygen transport")
        assert entry.locations == ["Cytoplasm"]

    def test_features(self):
        features = parse_uniprot_entry(HBA_HUMAN).features

        assert features[0].type == "Domain"
        assert features[0].description == "Globin"
        assert features[0].position == "2-142"
        assert features[1].position is None

    def test_references_limited(self):
        references = parse_uniprot_entry(HBA_HUMAN).references

        assert len(references) == 5
        assert references[0].title == "Paper 0"
        assert references[0].pubmed_id == 1000

    def test_xrefs_grouped_and_deduplicated(self):
        xrefs = {x.database: x.ids for x in parse_uniprot_entry(HBA_HUMAN).xrefs}
        assert xrefs == {"PDB": ["1A00", "1A01"], "Pfam": ["PF00042"]}


class TestParseDefaults:
    """Missing or malformed fields fall back to defaults; nothing raises."""

    def test_empty_entry(self):
        entry = parse_uniprot_entry({})

        assert entry == UniProtEntry()
        assert entry.accession == "Unknown"
        assert entry.protein_name == "Unknown protein"
        assert entry.organism.scientific_name == "Unknown organism"
        assert entry.organism.taxon_id == 0
        assert entry.sequence == ""
        assert entry.last_update is None

    def test_not_a_dict(self):
        assert parse_uniprot_entry(None) == UniProtEntry()
        assert parse_uniprot_entry(["P69905"]) == UniProtEntry()

    def test_recommended_name_without_full_name(self):
        entry = parse_uniprot_entry({"proteinDescription": {"recommendedName": {"shortNames": []}}})
        assert entry.protein_name == "Unknown"

    def test_organism_without_scientific_name(self):
        entry = parse_uniprot_entry({"organism": {"taxonId": 9606}})

        assert entry.organism.scientific_name == "Unknown"
        assert entry.organism.taxon_id == 9606

    def test_malformed_sections(self):
        entry = parse_uniprot_entry({
            "organism": "human",
            "genes": [None],
            "keywords": [{"name": 5}, "Heme"],
            "features": [{"location": {"start": {"value": 1}}}],
            "references": [{"citation": {"authors": ["A.", 3]}}, "junk"],
            "comments": "none",
            "sequence": {"value": 42},
        })

        assert entry.organism.scientific_name == "Unknown organism"
        assert entry.gene is None
        assert entry.keywords == []
        assert entry.features[0].type == "Unknown"
        assert entry.features[0].position is None
        assert entry.references[0].title == "Untitled"
        assert entry.references[0].authors == ["A."]
        assert len(entry.references) == 1
        assert entry.functions == []
        assert entry.sequence == ""


def make_client(handler):
    return UniProtClient(client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestUniProtClient:

    def test_fetches_json_endpoint(self):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json=HBA_HUMAN)

        with make_client(handler) as client:
            entry = client.get_entry(" P69905 ")

        assert seen == ["https://rest.uniprot.org/uniprotkb/P69905.json"]
        assert entry.accession == "P69905"

    def test_custom_base_url(self):
        seen = []

        def handler(request):
            seen.append(str(request.url))
            return httpx.Response(200, json={})

        client = UniProtClient(
            UniProtConfig(base_url="http://localhost:8080"),
            client=httpx.Client(transport=httpx.MockTransport(handler)),
        )
        client.fetch_entry("Q9XYZ1")

        assert seen == ["http://localhost:8080/uniprotkb/Q9XYZ1.json"]

    def test_not_found(self):
        def handler(request):
            return httpx.Response(404)

        with make_client(handler) as client:
            with pytest.raises(UniProtError, match="UniProt API error: 404 Not Found"):
                client.get_entry("XXXXXX")

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectTimeout("timed out", request=request)

        with make_client(handler) as client:
            with pytest.raises(UniProtError, match="Failed to fetch UniProt sequence"):
                client.get_entry("P69905")

    def test_invalid_json(self):
        def handler(request):
            return httpx.Response(200, text="<html>maintenance</html>")

        with make_client(handler) as client:
            with pytest.raises(UniProtError, match="invalid JSON"):
                client.get_entry("P69905")
