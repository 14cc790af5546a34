"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    FrozenSchema,
)
from models.card import (
    FieldErrors,
    CANDIDATE_FIELDS,
    CandidateRecord,
    CommittedRecord,
    ExistingRecord,
    SessionCreatedResponse,
    SessionCardsResponse,
)
from models.intake import (
    IntakeStage,
    STAGE_EVENTS,
    is_event_allowed,
    IntakeState,
    FieldUpdate,
)
from models.csv_import import (
    RowStatus,
    ImportPolicy,
    POLICY_STATUSES,
    CSVRow,
    CSVSummary,
    ImportPreviewResponse,
    ImportConfirmRequest,
    ImportConfirmResponse,
)
from models.reference import (
    StoreOptionsResponse,
    VolunteerListResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "FrozenSchema",

    # Card
    "FieldErrors",
    "CANDIDATE_FIELDS",
    "CandidateRecord",
    "CommittedRecord",
    "ExistingRecord",
    "SessionCreatedResponse",
    "SessionCardsResponse",

    # Intake
    "IntakeStage",
    "STAGE_EVENTS",
    "is_event_allowed",
    "IntakeState",
    "FieldUpdate",

    # CSV import
    "RowStatus",
    "ImportPolicy",
    "POLICY_STATUSES",
    "CSVRow",
    "CSVSummary",
    "ImportPreviewResponse",
    "ImportConfirmRequest",
    "ImportConfirmResponse",

    # Reference
    "StoreOptionsResponse",
    "VolunteerListResponse",
]
