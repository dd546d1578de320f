"""
Sequence handling utilities for ProtFunc.

This module cleans raw user input (plain text or FASTA) into a normalized
protein sequence and validates it before any statistics are computed.
Classification thresholds are expressed as residue percentages, so stray
whitespace, line numbers or header text would silently distort every
downstream feature.
"""

from __future__ import annotations

import hashlib
import re
from io import StringIO
from pathlib import Path
from typing import Iterator, Union

from Bio import SeqIO


# Standard amino acid alphabet
STANDARD_AA = set("ACDEFGHIKLMNPQRSTVWY")

# Accepted alphabet: standard residues plus stop (*) and gap (-)
ALLOWED_CHARS = STANDARD_AA | set("*-")

_WHITESPACE = re.compile(r"\s+")
_DIGITS = re.compile(r"[0-9]")
_FASTA_HEADER = re.compile(r"^>.*$", re.MULTILINE)


class SequenceError(Exception):
    """Exception raised for sequence-related errors."""
    pass


class InvalidSequenceError(SequenceError):
    """Raised when a cleaned sequence is empty, too short or has invalid characters."""
    pass


def _normalize(text: str) -> str:
    return _WHITESPACE.sub("", text.upper())


def clean_sequence(text: str) -> str:
    """
    Clean and normalize a protein sequence.

    If the input contains a FASTA header line, the first line is discarded
    and the remaining lines are joined. The result is uppercased with all
    whitespace, line breaks and digits removed.

    Args:
        text: Raw sequence or single-record FASTA text

    Returns:
        Cleaned sequence (possibly empty)
    """
    if _FASTA_HEADER.search(text):
        text = "".join(text.splitlines()[1:])

    return _DIGITS.sub("", _normalize(text))


def validate_sequence(sequence: str) -> bool:
    """
    Check that a sequence uses only the accepted alphabet.

    Args:
        sequence: Sequence to check (case and whitespace are ignored)

    Returns:
        True if the sequence is non-empty and every character is in
        ACDEFGHIKLMNPQRSTVWY*-
    """
    seq = _normalize(sequence)
    return len(seq) > 0 and set(seq) <= ALLOWED_CHARS


class SequenceValidator:
    """
    Gate applied to cleaned sequences before analysis.

    The composition analyzer assumes its input is valid, so every caller
    that accepts user input must pass it through this validator first.
    """

    MIN_LENGTH = 10

    def __init__(self, min_length: int = MIN_LENGTH):
        """
        Initialize validator.

        Args:
            min_length: Minimum number of residues required for analysis
        """
        self.min_length = min_length

    def validate(self, sequence: str) -> tuple[bool, list[str]]:
        """
        Validate a sequence and return status with error messages.

        Args:
            sequence: Cleaned protein sequence

        Returns:
            Tuple of (is_valid, list_of_error_messages)
        """
        errors = []
        seq = _normalize(sequence)

        if not validate_sequence(seq):
            if not seq:
                errors.append("Sequence is empty")
            else:
                invalid = sorted(set(seq) - ALLOWED_CHARS)
                errors.append(f"Invalid protein sequence format: {invalid}")

        if seq and len(seq) < self.min_length:
            errors.append(
                f"Sequence must be at least {self.min_length} amino acids long "
                f"(got {len(seq)})"
            )

        return len(errors) == 0, errors

    def require(self, sequence: str) -> str:
        """
        Return the normalized sequence or raise if it fails validation.

        Raises:
            InvalidSequenceError: If the sequence is invalid
        """
        is_valid, errors = self.validate(sequence)
        if not is_valid:
            raise InvalidSequenceError("; ".join(errors))
        return _normalize(sequence)


def parse_fasta(source: Union[str, Path, StringIO]) -> Iterator[tuple[str, str, str]]:
    """
    Parse protein sequences from FASTA format.

    Args:
        source: File path, FASTA string, or StringIO object

    Yields:
        Tuples of (record_id, description, cleaned_sequence)
    """
    if isinstance(source, str) and (source.startswith(">") or "\n>" in source):
        handle = StringIO(source)
    elif isinstance(source, (str, Path)):
        handle = open(source, "r")
    else:
        handle = source

    try:
        for record in SeqIO.parse(handle, "fasta"):
            yield record.id, record.description, clean_sequence(str(record.seq))
    finally:
        if handle is not source:
            handle.close()


def sequence_hash(sequence: str) -> str:
    """
    Generate a unique hash for a sequence.

    Used as the cache key for embeddings. Uses MD5 for speed
    (not cryptographic security).
    """
    return hashlib.md5(_normalize(sequence).encode()).hexdigest()
