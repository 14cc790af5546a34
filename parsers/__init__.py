"""
File parsers module.
"""

from parsers.csv_parser import (
    CSV_TEMPLATE,
    CSV_COLUMNS,
    read_csv_upload,
    parse_card_csv,
    summarize_rows,
)

__all__ = [
    "CSV_TEMPLATE",
    "CSV_COLUMNS",
    "read_csv_upload",
    "parse_card_csv",
    "summarize_rows",
]
