"""
Business logic services.

Each service handles one part of the card intake pipeline.
"""

from services.validation_service import (
    validate_candidate,
    is_valid,
    parse_amount,
    row_errors,
)
from services.duplicate_service import (
    build_pool,
    find_duplicate,
    live_duplicate,
    DuplicateIndex,
)
from services.ledger_service import SessionLedger
from services.import_service import import_rows, select_rows
from services.intake_service import IntakeSession
from services.dataset_service import load_existing_cards, get_existing_cards
from services.session_service import (
    CardSession,
    SessionService,
    get_session_service,
)

__all__ = [
    "validate_candidate",
    "is_valid",
    "parse_amount",
    "row_errors",
    "build_pool",
    "find_duplicate",
    "live_duplicate",
    "DuplicateIndex",
    "SessionLedger",
    "import_rows",
    "select_rows",
    "IntakeSession",
    "load_existing_cards",
    "get_existing_cards",
    "CardSession",
    "SessionService",
    "get_session_service",
]
