"""
Bulk import decision: which parsed CSV rows enter the ledger.
"""

from typing import Sequence

import structlog

from exceptions import CardValidationError
from models.card import CandidateRecord
from models.csv_import import CSVRow, ImportPolicy, POLICY_STATUSES
from services.ledger_service import SessionLedger
from services.validation_service import validate_candidate

logger = structlog.get_logger(__name__)


def select_rows(rows: Sequence[CSVRow], policy: ImportPolicy) -> list[CSVRow]:
    """Rows the policy would commit, in file order. Error rows never qualify."""
    allowed = POLICY_STATUSES[policy]
    return [row for row in rows if row.status in allowed]


def row_to_candidate(row: CSVRow) -> CandidateRecord:
    """Build a candidate from a parsed row; date_added defaults to today."""
    return CandidateRecord(
        store=row.store,
        last4=row.last4,
        amount=row.amount,
        added_by=row.added_by,
        notes=row.notes,
    )


def import_rows(
    rows: Sequence[CSVRow],
    policy: ImportPolicy,
    ledger: SessionLedger,
) -> int:
    """
    Commit the rows selected by the policy.

    Args:
        rows: Parsed rows from parse_card_csv
        policy: VALID_ONLY or INCLUDE_DUPLICATES
        ledger: Session ledger to append to

    Returns:
        Number of rows committed

    Raises:
        CardValidationError: If a selected row fails validation; nothing
            is committed in that case
    """
    selected = select_rows(rows, policy)
    candidates = [row_to_candidate(row) for row in selected]

    for row, candidate in zip(selected, candidates):
        field_errors = validate_candidate(candidate)
        if field_errors:
            logger.warning(
                "bulk_import_rejected",
                row_num=row.row_num,
                field_errors=field_errors,
            )
            raise CardValidationError(field_errors)

    logger.info(
        "bulk_import_started",
        policy=policy.value,
        row_count=len(rows),
        selected=len(selected),
    )

    for candidate in candidates:
        ledger.commit(candidate)

    logger.info(
        "bulk_import_completed",
        policy=policy.value,
        imported=len(selected),
        ledger_size=len(ledger),
    )

    return len(selected)
