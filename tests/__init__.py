"""
ProtFunc test suite.

Tests are organized by module:
- test_sequence: Cleaning, validation and FASTA parsing
- test_features: Composition statistics and embedding features
- test_classification: GO rules, ranking and notes
- test_embeddings: Mock and ESM-2 providers, caching, registry
- test_uniprot: Entry decoding and REST client
- test_pipeline, test_export, test_cli: End-to-end workflows
"""
