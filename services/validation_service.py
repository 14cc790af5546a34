"""
Field validation for candidate cards.

Every rule runs on every call so a card can carry several errors at
once. The single-entry form reports errors keyed by field; the CSV
import reports the same failures as a flat list of row messages.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from models.card import CandidateRecord, FieldErrors


LAST4_PATTERN = re.compile(r"[0-9]{4}")

# Plain decimal only: no exponent, no currency symbol, no thousands separator
AMOUNT_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")

# Rule order is the order errors are reported in
VALIDATED_FIELDS = ["store", "last4", "amount", "added_by"]

FORM_MESSAGES = {
    "store": "Store is required",
    "last4": "Must be exactly 4 digits",
    "amount": "Enter a valid dollar amount",
    "added_by": "Added by is required",
}

ROW_MESSAGES = {
    "store": "Store missing",
    "last4": "Last 4 must be exactly 4 digits",
    "amount": "Invalid amount",
    "added_by": "Added by missing",
}


def parse_amount(text: Optional[str]) -> Optional[Decimal]:
    """
    Parse an amount typed by an operator.

    Args:
        text: Raw amount text, e.g. "50.00"

    Returns:
        Decimal value (sign preserved), or None if the text is not
        a plain decimal number
    """
    if text is None:
        return None
    text = text.strip()
    if not text or not AMOUNT_PATTERN.fullmatch(text):
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def is_valid_amount(text: Optional[str]) -> bool:
    """True for a parseable amount strictly greater than zero."""
    value = parse_amount(text)
    return value is not None and value > 0


def failing_fields(
    store: str,
    last4: str,
    amount: str,
    added_by: str,
) -> list[str]:
    """
    Run every field rule and return the names of the fields that fail.

    Args:
        store: Store name
        last4: Last four digits
        amount: Amount text
        added_by: Operator name

    Returns:
        Failing field names in VALIDATED_FIELDS order
    """
    checks = {
        "store": bool(store and store.strip()),
        "last4": bool(last4 and LAST4_PATTERN.fullmatch(last4)),
        "amount": is_valid_amount(amount),
        "added_by": bool(added_by and added_by.strip()),
    }
    return [name for name in VALIDATED_FIELDS if not checks[name]]


def validate_candidate(candidate: CandidateRecord) -> FieldErrors:
    """
    Validate a candidate card for the single-entry form.

    Notes are optional and never fail.

    Returns:
        Mapping of field name to message; empty when the card may
        proceed to the duplicate check
    """
    failed = failing_fields(
        candidate.store,
        candidate.last4,
        candidate.amount,
        candidate.added_by,
    )
    return {name: FORM_MESSAGES[name] for name in failed}


def row_errors(store: str, last4: str, amount: str, added_by: str) -> list[str]:
    """Same rules as validate_candidate, phrased for the import table."""
    return [ROW_MESSAGES[name] for name in failing_fields(store, last4, amount, added_by)]


def is_valid(candidate: CandidateRecord) -> bool:
    """True when the candidate has no field errors."""
    return not validate_candidate(candidate)
