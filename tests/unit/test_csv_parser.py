"""
Unit tests for the bulk import CSV parser.

Tests header detection, column handling, row classification and
upload rejection.
"""

import pytest

from parsers.csv_parser import (
    CSV_TEMPLATE,
    parse_card_csv,
    read_csv_upload,
    summarize_rows,
)
from models.csv_import import RowStatus
from exceptions import CSVFileRejectedError


HEADER = "store,last4,amount,added_by,notes"


# ===================
# TEMPLATE
# ===================

class TestTemplate:
    """Tests for the downloadable template."""

    def test_template_is_byte_exact(self):
        """Spreadsheet users rely on this exact text."""
        assert CSV_TEMPLATE == (
            "store,last4,amount,added_by,notes\n"
            "Walmart,1234,100.00,Sarah Johnson,Example card\n"
            "Target,5678,50.00,Mike Davis,"
        )

    def test_template_round_trip(self):
        """Template parses to two valid rows against an empty dataset."""
        rows = parse_card_csv(CSV_TEMPLATE, [])

        assert [r.status for r in rows] == [RowStatus.VALID, RowStatus.VALID]
        assert rows[0].store == "Walmart"
        assert rows[0].notes == "Example card"
        assert rows[1].store == "Target"
        assert rows[1].notes == ""

    def test_template_second_row_is_duplicate_of_sample_dataset(self, existing_cards):
        """Target/5678 is already in the sample dataset."""
        rows = parse_card_csv(CSV_TEMPLATE, existing_cards)
        assert [r.status for r in rows] == [RowStatus.VALID, RowStatus.DUPLICATE]


# ===================
# LINE HANDLING
# ===================

class TestLineHandling:
    """Tests for header, blank line and line ending handling."""

    def test_headerless_file_is_accepted(self):
        """Without 'store' in the first line every line is data."""
        rows = parse_card_csv("Walmart,1234,10,Amy Brown,\nGap,2222,20,Amy Brown,", [])
        assert [r.row_num for r in rows] == [1, 2]

    def test_header_detection_ignores_case(self):
        """'STORE' in the first line marks it as a header."""
        rows = parse_card_csv("STORE,LAST4,AMOUNT,ADDED_BY,NOTES\nGap,2222,20,Amy Brown,", [])
        assert len(rows) == 1
        assert rows[0].store == "Gap"

    def test_first_line_mentioning_store_is_dropped(self):
        """Header detection is a substring test on the first line only."""
        rows = parse_card_csv("Dollar Store,1111,5,Amy Brown,\nGap,2222,20,Amy Brown,", [])
        assert [r.store for r in rows] == ["Gap"]

    def test_crlf_line_endings(self):
        """Windows line endings split the same as bare newlines."""
        rows = parse_card_csv(f"{HEADER}\r\nGap,2222,20,Amy Brown,\r\nKFC,3333,15,Lisa Chen,\r\n", [])

        assert len(rows) == 2
        assert rows[0].notes == ""
        assert rows[1].store == "KFC"

    def test_blank_lines_skipped_and_numbering_contiguous(self):
        """Row numbers count data rows only."""
        text = f"{HEADER}\n\nGap,2222,20,Amy Brown,\n   \nKFC,3333,15,Lisa Chen,\n\n"
        rows = parse_card_csv(text, [])

        assert [(r.row_num, r.store) for r in rows] == [(1, "Gap"), (2, "KFC")]

    def test_empty_text(self):
        """Nothing to parse."""
        assert parse_card_csv("", []) == []
        assert parse_card_csv(HEADER, []) == []


# ===================
# COLUMN HANDLING
# ===================

class TestColumns:
    """Tests for field splitting."""

    def test_fields_are_trimmed(self):
        """Whitespace around tokens is removed."""
        rows = parse_card_csv("  Gap , 2222 ,  20.00 , Amy Brown , gift  ", [])
        row = rows[0]

        assert (row.store, row.last4, row.amount, row.added_by, row.notes) == (
            "Gap", "2222", "20.00", "Amy Brown", "gift"
        )

    def test_notes_keep_commas(self):
        """Tokens from the fifth on are re-joined into notes."""
        rows = parse_card_csv("Gap,2222,20,Amy Brown,birthday, from grandma, unopened", [])
        assert rows[0].notes == "birthday,from grandma,unopened"
        assert rows[0].status == RowStatus.VALID

    def test_missing_trailing_fields_default_empty(self):
        """Short rows fill with empty strings and fail validation."""
        rows = parse_card_csv("Gap,2222", [])
        row = rows[0]

        assert row.amount == ""
        assert row.added_by == ""
        assert row.notes == ""
        assert row.errors == ["Invalid amount", "Added by missing"]


# ===================
# CLASSIFICATION
# ===================

class TestClassification:
    """Tests for row status derivation."""

    def test_short_last4_is_error(self):
        """A two-digit last-4 makes the row an error."""
        rows = parse_card_csv(f"{HEADER}\nWalmart,12,100.00,Sarah Johnson,", [])

        assert len(rows) == 1
        assert rows[0].status == RowStatus.ERROR
        assert "Last 4 must be exactly 4 digits" in rows[0].errors

    def test_duplicate_against_dataset_ignores_case(self, existing_cards):
        """Store match is case-insensitive."""
        rows = parse_card_csv("target,5678,50.00,Mike Davis,", existing_cards)
        assert rows[0].status == RowStatus.DUPLICATE
        assert rows[0].errors == []

    def test_error_beats_duplicate(self, existing_cards):
        """An invalid row is an error even if it matches the dataset."""
        rows = parse_card_csv("Target,5678,0,Mike Davis,", existing_cards)
        assert rows[0].status == RowStatus.ERROR

    def test_identical_rows_in_one_file_are_not_duplicates_of_each_other(self):
        """Rows are only checked against the pre-loaded dataset."""
        rows = parse_card_csv("Gap,2222,20,Amy Brown,\nGap,2222,20,Amy Brown,", [])
        assert [r.status for r in rows] == [RowStatus.VALID, RowStatus.VALID]

    def test_leading_zero_last4_does_not_match_short_form(self, existing_cards):
        """'0042' in the dataset is not hit by '42', which is an error anyway."""
        rows = parse_card_csv("Starbucks,0042,5,Amy Brown,\nStarbucks,42,5,Amy Brown,", existing_cards)
        assert [r.status for r in rows] == [RowStatus.DUPLICATE, RowStatus.ERROR]

    def test_parsing_is_deterministic(self, existing_cards):
        """Same text, same rows."""
        text = f"{HEADER}\nTarget,5678,50,Mike Davis,\nGap,22,0,,\nKFC,3333,15,Lisa Chen,x"
        assert parse_card_csv(text, existing_cards) == parse_card_csv(text, existing_cards)


class TestSummarizeRows:
    """Tests for summarize_rows."""

    def test_counts_per_status(self, existing_cards):
        """Counts add up to the total."""
        text = f"{HEADER}\nTarget,5678,50,Mike Davis,\nGap,22,0,,\nKFC,3333,15,Lisa Chen,"
        summary = summarize_rows(parse_card_csv(text, existing_cards))

        assert (summary.total, summary.valid, summary.duplicate, summary.error) == (3, 1, 1, 1)


# ===================
# UPLOAD READING
# ===================

class TestReadCsvUpload:
    """Tests for read_csv_upload."""

    def test_reads_utf8(self):
        """Plain UTF-8 comes back as text."""
        assert read_csv_upload("cards.csv", CSV_TEMPLATE.encode("utf-8")) == CSV_TEMPLATE

    def test_strips_bom(self):
        """Spreadsheet exports often start with a BOM."""
        text = read_csv_upload("cards.csv", b"\xef\xbb\xbfGap,2222,20,Amy Brown,")
        assert text.startswith("Gap")

    @pytest.mark.parametrize("filename", ["cards.txt", "cards.xlsx", "cards.csv.bak", "", None])
    def test_rejects_non_csv_names(self, filename):
        """Only .csv files are parsed."""
        with pytest.raises(CSVFileRejectedError) as exc_info:
            read_csv_upload(filename, b"Gap,2222,20,Amy Brown,")

        assert exc_info.value.status_code == 422
        assert exc_info.value.code == "CSV_FILE_REJECTED"

    def test_rejects_undecodable_bytes(self):
        """Binary content is rejected before parsing."""
        with pytest.raises(CSVFileRejectedError):
            read_csv_upload("cards.csv", b"\xff\xfe\x00\x81")
