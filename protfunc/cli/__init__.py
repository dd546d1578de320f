"""
Command-line interface for ProtFunc.

Usage patterns:
    protfunc classify SEQUENCE
    protfunc classify --uniprot P69905 -o results/ --format csv
    protfunc similarity SEQ_A SEQ_B
    protfunc list-providers
"""

from .main import cli, main

__all__ = ["cli", "main"]
