"""
Session ledger: the append-only list of cards added in one session.

Together with the pre-loaded dataset it forms the duplicate pool, so a
card added earlier in the session is a duplicate hazard for later
entries. Entries are never removed or reordered.
"""

import threading
from datetime import datetime, timezone
from typing import Optional, Sequence

import structlog

from exceptions import CardValidationError
from models.card import CandidateRecord, CommittedRecord, ExistingRecord
from services.validation_service import parse_amount, validate_candidate

logger = structlog.get_logger(__name__)

SESSION_CARD_STATUS = "Active"


class SessionLedger:
    """
    Cards committed during one intake session.

    Identifiers start above both id_base and every existing dataset id,
    then increase by one per commit. Commits are serialized with a lock.
    """

    def __init__(
        self,
        existing: Sequence[ExistingRecord] = (),
        id_base: int = 9000,
    ):
        highest_existing = max((card.id for card in existing), default=0)
        self._next_id = max(id_base, highest_existing + 1)
        self._records: list[CommittedRecord] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    # ===================
    # WRITE OPERATIONS
    # ===================

    def commit(self, candidate: CandidateRecord) -> CommittedRecord:
        """
        Append a validated candidate.

        Args:
            candidate: Card that passed validate_candidate

        Returns:
            The new CommittedRecord

        Raises:
            CardValidationError: If the candidate has field errors
        """
        field_errors = validate_candidate(candidate)
        if field_errors:
            logger.warning("commit_rejected", field_errors=field_errors)
            raise CardValidationError(field_errors)

        with self._lock:
            record = CommittedRecord(
                id=self._next_id,
                store=candidate.store,
                last4=candidate.last4,
                amount=parse_amount(candidate.amount),
                added_by=candidate.added_by,
                notes=candidate.notes,
                date_added=candidate.date_added,
                committed_at=datetime.now(timezone.utc),
            )
            self._records.append(record)
            self._next_id += 1

        logger.info(
            "card_committed",
            card_id=record.id,
            store=record.store,
            last4=record.last4,
            ledger_size=len(self._records),
        )
        return record

    # ===================
    # READ OPERATIONS
    # ===================

    def all(self) -> list[CommittedRecord]:
        """Committed cards, oldest first (copy)."""
        with self._lock:
            return list(self._records)

    def latest(self) -> Optional[CommittedRecord]:
        """Most recently committed card, or None."""
        with self._lock:
            return self._records[-1] if self._records else None

    def pool_records(self) -> list[ExistingRecord]:
        """
        Committed cards in the shape of the pre-loaded dataset.

        Balance is the full amount and status is Active, since a card
        added this session cannot have been redeemed yet.
        """
        return [
            ExistingRecord(
                id=record.id,
                store=record.store,
                last4=record.last4,
                initial_balance=record.amount,
                remaining_balance=record.amount,
                status=SESSION_CARD_STATUS,
                added_date=record.date_added,
                added_by=record.added_by,
            )
            for record in self.all()
        ]
