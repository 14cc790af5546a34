"""
CSV parser for bulk gift card imports.

Expected columns: store, last4, amount, added_by, notes.
The header row is optional. Notes may contain commas.
Every row is validated and duplicate-checked on its own; nothing
is rejected wholesale except a file that cannot be read at all.
"""

import re
from typing import Sequence

import structlog

from exceptions import CSVFileRejectedError
from models.card import ExistingRecord
from models.csv_import import CSVRow, CSVSummary, RowStatus
from services.duplicate_service import DuplicateIndex
from services.validation_service import row_errors
from utils.text_utils import split_csv_line

logger = structlog.get_logger(__name__)


CSV_TEMPLATE = (
    "store,last4,amount,added_by,notes\n"
    "Walmart,1234,100.00,Sarah Johnson,Example card\n"
    "Target,5678,50.00,Mike Davis,"
)

CSV_COLUMNS = ["store", "last4", "amount", "added_by", "notes"]

_LINE_BREAK = re.compile(r"\r?\n")


def read_csv_upload(filename: str, content: bytes) -> str:
    """
    Turn an uploaded file into text, rejecting anything that is not a CSV.

    Args:
        filename: Name the browser sent with the upload
        content: Raw file bytes

    Returns:
        Decoded text (UTF-8, leading BOM removed)

    Raises:
        CSVFileRejectedError: Wrong extension or undecodable content
    """
    if not filename or not filename.endswith(".csv"):
        logger.warning("csv_upload_rejected", filename=filename, reason="extension")
        raise CSVFileRejectedError(filename or "", "Only .csv files can be imported")

    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning("csv_upload_rejected", filename=filename, reason="encoding", error=str(e))
        raise CSVFileRejectedError(filename, "File is not readable UTF-8 text")

    logger.debug("csv_upload_read", filename=filename, size=len(content))
    return text


def parse_card_csv(
    raw_text: str,
    existing: Sequence[ExistingRecord],
) -> list[CSVRow]:
    """
    Parse and classify every data row of a CSV import.

    Duplicates are looked up against the pre-loaded dataset only;
    cards added this session and earlier rows of the same file are
    not consulted.

    Args:
        raw_text: Full file contents
        existing: Pre-loaded dataset

    Returns:
        Rows in file order, numbered from 1
    """
    lines = _LINE_BREAK.split(raw_text.strip())

    if lines and "store" in lines[0].lower():
        lines = lines[1:]

    data_lines = [line for line in lines if line.strip()]
    index = DuplicateIndex(existing)

    rows = [
        _parse_row(row_num, line, index)
        for row_num, line in enumerate(data_lines, start=1)
    ]

    summary = summarize_rows(rows)
    logger.info(
        "csv_parsed",
        row_count=summary.total,
        valid=summary.valid,
        duplicate=summary.duplicate,
        error=summary.error,
    )

    return rows


def _parse_row(row_num: int, line: str, index: DuplicateIndex) -> CSVRow:
    """Split, validate and classify one data line."""
    parts = split_csv_line(line)
    store, last4, amount, added_by = (parts + [""] * 4)[:4]
    notes = ",".join(parts[4:]).strip()

    errors = row_errors(store, last4, amount, added_by)

    if errors:
        status = RowStatus.ERROR
    elif index.find(store, last4) is not None:
        status = RowStatus.DUPLICATE
    else:
        status = RowStatus.VALID

    return CSVRow(
        row_num=row_num,
        store=store,
        last4=last4,
        amount=amount,
        added_by=added_by,
        notes=notes,
        status=status,
        errors=errors,
    )


def summarize_rows(rows: Sequence[CSVRow]) -> CSVSummary:
    """Count rows per status."""
    counts = {status: 0 for status in RowStatus}
    for row in rows:
        counts[row.status] += 1
    return CSVSummary(
        total=len(rows),
        valid=counts[RowStatus.VALID],
        duplicate=counts[RowStatus.DUPLICATE],
        error=counts[RowStatus.ERROR],
    )
