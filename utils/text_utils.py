"""
Text utilities for card fields.

Used for store name comparison and last-4 input masking.
"""

import re
from typing import Optional


_NON_DIGITS = re.compile(r"[^0-9]")


def store_key(name: Optional[str]) -> str:
    """
    Normalize a store name for duplicate comparison.

    Only case is folded; spacing and punctuation stay significant:
    - "TARGET" → "target"
    - "Trader Joe's" → "trader joe's"

    Args:
        name: Store name as entered

    Returns:
        Lowercased name, or "" for None
    """
    if not name:
        return ""
    return name.lower()


def sanitize_last4(raw: Optional[str]) -> str:
    """
    Apply the last-4 input mask: keep digits only, at most four.

    - "12-34" → "1234"
    - "123456" → "1234"
    - "ab" → ""
    """
    if not raw:
        return ""
    return _NON_DIGITS.sub("", raw)[:4]


def split_csv_line(line: str) -> list[str]:
    """Split a CSV line on commas and trim each token."""
    return [part.strip() for part in line.split(",")]
