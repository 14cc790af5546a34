"""
Single-card intake workflow.

form → submit → success (no duplicate, card committed)
form → submit → confirm-duplicate (duplicate found, nothing committed)
confirm-duplicate → confirm → success (committed anyway)
confirm-duplicate → go_back → form (fields kept for editing)
success → add_another → form (empty candidate)

A duplicate is only a warning; the operator can always add the card.
"""

from typing import Optional, Sequence

import structlog

from exceptions import InvalidStageTransitionError, UnknownFieldError
from models.card import (
    CANDIDATE_FIELDS,
    CandidateRecord,
    CommittedRecord,
    ExistingRecord,
    FieldErrors,
)
from models.intake import IntakeStage, IntakeState, STAGE_EVENTS, is_event_allowed
from services.duplicate_service import build_pool, find_duplicate, live_duplicate
from services.ledger_service import SessionLedger
from services.validation_service import validate_candidate
from utils.text_utils import sanitize_last4

logger = structlog.get_logger(__name__)


class IntakeSession:
    """
    State of the single-entry tab for one operator.

    The ledger is shared with bulk imports of the same session, so
    cards imported from CSV also count as duplicates here.
    """

    def __init__(
        self,
        ledger: SessionLedger,
        existing: Sequence[ExistingRecord] = (),
    ):
        self.ledger = ledger
        self.existing = list(existing)
        self.stage = IntakeStage.FORM
        self.candidate = CandidateRecord()
        self.field_errors: FieldErrors = {}
        self.pending_duplicate: Optional[ExistingRecord] = None
        self.last_committed: Optional[CommittedRecord] = None

    # ===================
    # POOL
    # ===================

    def pool(self) -> list[ExistingRecord]:
        """Existing dataset followed by this session's cards."""
        return build_pool(self.existing, self.ledger.pool_records())

    @property
    def live_duplicate(self) -> Optional[ExistingRecord]:
        """Duplicate warning for the fields typed so far."""
        return live_duplicate(self.candidate.store, self.candidate.last4, self.pool())

    # ===================
    # EVENTS
    # ===================

    def set_field(self, field: str, value: str) -> None:
        """
        Edit one candidate field and clear its published error.

        Typed last-4 goes through the input mask: digits only, at most four.
        """
        self._require("set_field")
        if field not in CANDIDATE_FIELDS:
            raise UnknownFieldError(field, CANDIDATE_FIELDS)

        data = self.candidate.model_dump()
        data[field] = sanitize_last4(value) if field == "last4" else value
        self.candidate = CandidateRecord(**data)
        self.field_errors.pop(field, None)

    def submit(self, candidate: Optional[CandidateRecord] = None) -> IntakeStage:
        """
        Validate and duplicate-check the candidate.

        Args:
            candidate: Replaces the current form fields when given

        Returns:
            Stage after the submit
        """
        self._require("submit")
        if candidate is not None:
            self.candidate = candidate

        errors = validate_candidate(self.candidate)
        if errors:
            self.field_errors = errors
            logger.info("intake_submit_invalid", fields=sorted(errors))
            return self.stage

        self.field_errors = {}
        duplicate = find_duplicate(self.candidate.store, self.candidate.last4, self.pool())
        if duplicate is not None:
            self.pending_duplicate = duplicate
            self._move_to(IntakeStage.CONFIRM_DUPLICATE)
            logger.info(
                "intake_duplicate_found",
                store=self.candidate.store,
                last4=self.candidate.last4,
                matched_id=duplicate.id,
            )
            return self.stage

        self._commit()
        return self.stage

    def confirm(self) -> IntakeStage:
        """Add the held card despite the duplicate warning."""
        self._require("confirm")
        logger.info("intake_duplicate_confirmed", matched_id=self.pending_duplicate.id)
        self._commit()
        return self.stage

    def go_back(self) -> IntakeStage:
        """Drop the duplicate warning and return to the form."""
        self._require("go_back")
        self.pending_duplicate = None
        self._move_to(IntakeStage.FORM)
        return self.stage

    def add_another(self) -> IntakeStage:
        """Start a fresh form; committed cards stay in the ledger."""
        self._require("add_another")
        self.candidate = CandidateRecord()
        self.field_errors = {}
        self.pending_duplicate = None
        self._move_to(IntakeStage.FORM)
        return self.stage

    def snapshot(self) -> IntakeState:
        """Current state for the UI."""
        return IntakeState(
            stage=self.stage,
            candidate=self.candidate,
            field_errors=dict(self.field_errors),
            live_duplicate=self.live_duplicate if self.stage == IntakeStage.FORM else None,
            pending_duplicate=self.pending_duplicate,
            last_committed=self.last_committed if self.stage == IntakeStage.SUCCESS else None,
            session_card_count=len(self.ledger),
        )

    # ===================
    # HELPERS
    # ===================

    def _commit(self) -> None:
        self.last_committed = self.ledger.commit(self.candidate)
        self.pending_duplicate = None
        self._move_to(IntakeStage.SUCCESS)

    def _move_to(self, stage: IntakeStage) -> None:
        logger.debug("intake_stage_changed", from_stage=self.stage.value, to_stage=stage.value)
        self.stage = stage

    def _require(self, event: str) -> None:
        if not is_event_allowed(self.stage, event):
            raise InvalidStageTransitionError(
                self.stage.value,
                event,
                [stage.value for stage in STAGE_EVENTS[event]],
            )
