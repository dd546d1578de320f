"""
Unit tests for ProtFunc sequence handling utilities.

Every classification threshold is a residue percentage, so these tests pin
down exactly what survives cleaning (headers, whitespace and digits do not)
and what the validation gate lets through to the analyzers.
"""

from io import StringIO

import pytest

from protfunc.core.sequence import (
    ALLOWED_CHARS,
    STANDARD_AA,
    InvalidSequenceError,
    SequenceError,
    SequenceValidator,
    clean_sequence,
    parse_fasta,
    sequence_hash,
    validate_sequence,
)


class TestCleanSequence:
    """Tests for input normalization."""

    def test_uppercases_and_strips_whitespace(self):
        """Lowercase input with spaces and line breaks is normalized."""
        assert clean_sequence("  mvl sp\nadk\tt ") == "MVLSPADKT"

    def test_strips_digits(self):
        """GenBank-style line numbers are removed."""
        assert clean_sequence("1 mvlspadktn 11 vkaawgkvga") == "MVLSPADKTNVKAAWGKVGA"

    def test_drops_fasta_header(self):
        """The header line is discarded and sequence lines joined."""
        text = ">sp|P69905|HBA_HUMAN Hemoglobin subunit alpha\nMVLSPADKTN\nVKAAWGKVGA\n"
        assert clean_sequence(text) == "MVLSPADKTNVKAAWGKVGA"

    def test_header_with_crlf_line_endings(self):
        """Windows line endings are handled like Unix ones."""
        assert clean_sequence(">seq1\r\nMKT\r\nAYI\r\n") == "MKTAYI"

    def test_header_only(self):
        """A header without sequence lines cleans to nothing."""
        assert clean_sequence(">empty record") == ""

    def test_empty_input(self):
        assert clean_sequence("") == ""
        assert clean_sequence("   \n ") == ""

    def test_keeps_stop_and_gap(self):
        """Stop and gap symbols are not cleaning targets."""
        assert clean_sequence("mkt-ayi*") == "MKT-AYI*"


class TestValidateSequence:
    """Tests for the alphabet check."""

    def test_standard_residues(self):
        assert validate_sequence("ACDEFGHIKLMNPQRSTVWY")

    def test_stop_and_gap_allowed(self):
        assert validate_sequence("MKT*-")

    def test_case_and_whitespace_ignored(self):
        assert validate_sequence(" mkt ayi ")

    def test_empty_is_invalid(self):
        assert not validate_sequence("")

    @pytest.mark.parametrize("sequence", ["MVLXSP", "MVLBSP", "MVL1SP", "MVL.SP", "MVLUSP"])
    def test_non_standard_characters_rejected(self, sequence):
        """Ambiguity codes, digits and punctuation are all rejected."""
        assert not validate_sequence(sequence)

    def test_alphabet_constants(self):
        assert len(STANDARD_AA) == 20
        assert ALLOWED_CHARS == STANDARD_AA | {"*", "-"}


class TestSequenceValidator:
    """
    Tests for the validation gate.

    Sequences shorter than ten residues give composition percentages
    too coarse for the thresholds to mean anything.
    """

    def test_valid_sequence(self):
        validator = SequenceValidator()
        is_valid, errors = validator.validate("MVLSPADKTNVKAAWGKVGAH")

        assert is_valid
        assert errors == []

    def test_empty_sequence(self):
        is_valid, errors = SequenceValidator().validate("")

        assert not is_valid
        assert errors == ["Sequence is empty"]

    def test_invalid_characters_reported(self):
        is_valid, errors = SequenceValidator().validate("MVLSPADKTNXB")

        assert not is_valid
        assert errors[0].startswith("Invalid protein sequence format")
        assert "'B'" in errors[0] and "'X'" in errors[0]

    def test_too_short(self):
        is_valid, errors = SequenceValidator().validate("MVLSPADKT")

        assert not is_valid
        assert errors == ["Sequence must be at least 10 amino acids long (got 9)"]

    def test_exactly_minimum_length(self):
        is_valid, _ = SequenceValidator().validate("MVLSPADKTN")
        assert is_valid

    def test_custom_minimum(self):
        is_valid, _ = SequenceValidator(min_length=3).validate("MKT")
        assert is_valid

    def test_require_returns_normalized(self):
        assert SequenceValidator().require("mvlspadktnv") == "MVLSPADKTNV"

    def test_require_raises(self):
        with pytest.raises(InvalidSequenceError, match="at least 10"):
            SequenceValidator().require("MKT")

    def test_invalid_sequence_error_is_sequence_error(self):
        assert issubclass(InvalidSequenceError, SequenceError)


class TestParseFasta:
    """Tests for FASTA parsing."""

    FASTA = (
        ">seq1 first protein\n"
        "MVLSPADKTN\n"
        "VKAAWGKVGA\n"
        ">seq2 second protein\n"
        "mktayiakqr\n"
    )

    def test_parse_string(self):
        records = list(parse_fasta(self.FASTA))

        assert [r[0] for r in records] == ["seq1", "seq2"]
        assert records[0][1] == "seq1 first protein"
        assert records[0][2] == "MVLSPADKTNVKAAWGKVGA"

    def test_sequences_are_cleaned(self):
        records = list(parse_fasta(self.FASTA))
        assert records[1][2] == "MKTAYIAKQR"

    def test_parse_stringio(self):
        records = list(parse_fasta(StringIO(self.FASTA)))
        assert len(records) == 2

    def test_parse_file(self, tmp_path):
        path = tmp_path / "proteins.fasta"
        path.write_text(self.FASTA)

        records = list(parse_fasta(path))
        assert len(records) == 2
        assert records[0][0] == "seq1"


class TestSequenceHash:

    def test_deterministic(self):
        assert sequence_hash("MVLSPADKTN") == sequence_hash("MVLSPADKTN")

    def test_case_and_whitespace_insensitive(self):
        assert sequence_hash("mvlsp adktn") == sequence_hash("MVLSPADKTN")

    def test_distinct_sequences(self):
        assert sequence_hash("MVLSPADKTN") != sequence_hash("MVLSPADKTM")
