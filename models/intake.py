"""
Single-card intake schemas and stage rules.
"""

from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field

from models.base import BaseSchema
from models.card import CandidateRecord, CommittedRecord, ExistingRecord, FieldErrors


class IntakeStage(str, Enum):
    """Stages of the single-card intake workflow."""
    FORM = "form"
    CONFIRM_DUPLICATE = "confirm-duplicate"
    SUCCESS = "success"


# Stages in which each intake event is accepted
STAGE_EVENTS = {
    "set_field": [IntakeStage.FORM],
    "submit": [IntakeStage.FORM],
    "confirm": [IntakeStage.CONFIRM_DUPLICATE],
    "go_back": [IntakeStage.CONFIRM_DUPLICATE],
    "add_another": [IntakeStage.SUCCESS],
}


def is_event_allowed(stage: IntakeStage, event: str) -> bool:
    """
    Check if an intake event may fire in the given stage.

    Rules:
    - Edits and submits only happen on the form
    - A held duplicate can only be confirmed or abandoned
    - After a commit the only way forward is a fresh form
    """
    return stage in STAGE_EVENTS.get(event, [])


class IntakeState(BaseSchema):
    """
    What the UI needs to render the single-entry tab.

    pending_duplicate is set only in confirm-duplicate;
    last_committed only in success.
    """

    stage: IntakeStage
    candidate: CandidateRecord
    field_errors: FieldErrors = Field(default_factory=dict)
    live_duplicate: Optional[ExistingRecord] = None
    pending_duplicate: Optional[ExistingRecord] = None
    last_committed: Optional[CommittedRecord] = None
    session_card_count: int = 0


class FieldUpdate(BaseSchema):
    """Edit one candidate field."""
    model_config = ConfigDict(str_strip_whitespace=False)

    field: str = Field(..., description="Candidate field name, e.g. 'last4'")
    value: str = Field(default="", description="New field value")
