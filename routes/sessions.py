"""
Intake session API routes.

Single-card entry: edit fields, submit, confirm or abandon a duplicate,
start another card. Field errors are returned in the state, not as
HTTP errors.
"""

from typing import Optional

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
import structlog

from config import settings
from models.card import CandidateRecord, SessionCardsResponse, SessionCreatedResponse
from models.intake import FieldUpdate, IntakeState
from services.session_service import get_session_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# SESSION ROUTES
# ===================

@router.post("", response_model=SessionCreatedResponse, status_code=201)
async def create_session():
    """
    Open an intake session.

    The session holds the cards added during this visit.
    """
    try:
        session = get_session_service().create()
        return SessionCreatedResponse(
            session_id=session.session_id,
            expires_in_minutes=settings.session_ttl_minutes
        )

    except Exception as e:
        return handle_error(e)


@router.get("/{session_id}/cards", response_model=SessionCardsResponse)
async def list_session_cards(session_id: str):
    """
    List cards added in this session, oldest first.
    """
    try:
        ledger = get_session_service().get(session_id).ledger
        records = ledger.all()
        return SessionCardsResponse(
            data=records,
            total=len(records),
            latest=records[-1] if records else None
        )

    except Exception as e:
        return handle_error(e)


# ===================
# INTAKE ROUTES
# ===================

@router.get("/{session_id}/intake", response_model=IntakeState)
async def get_intake_state(session_id: str):
    """Current stage, fields, errors and duplicate warnings."""
    try:
        return get_session_service().get(session_id).intake.snapshot()

    except Exception as e:
        return handle_error(e)


@router.put("/{session_id}/intake/fields", response_model=IntakeState)
async def update_intake_field(session_id: str, data: FieldUpdate):
    """
    Edit one field of the card being entered.

    Clears that field's error and refreshes the live duplicate check.
    """
    try:
        intake = get_session_service().get(session_id).intake
        intake.set_field(data.field, data.value)
        return intake.snapshot()

    except Exception as e:
        return handle_error(e)


@router.post("/{session_id}/intake/submit", response_model=IntakeState)
async def submit_intake(
    session_id: str,
    candidate: Optional[CandidateRecord] = Body(None)
):
    """
    Submit the card.

    Stays on form with field_errors, moves to confirm-duplicate with
    pending_duplicate, or commits and moves to success.
    """
    try:
        intake = get_session_service().get(session_id).intake
        stage = intake.submit(candidate)
        logger.info("intake_submitted", session_id=session_id, stage=stage.value)
        return intake.snapshot()

    except Exception as e:
        return handle_error(e)


@router.post("/{session_id}/intake/confirm", response_model=IntakeState)
async def confirm_intake(session_id: str):
    """Add the card despite the duplicate warning."""
    try:
        intake = get_session_service().get(session_id).intake
        intake.confirm()
        return intake.snapshot()

    except Exception as e:
        return handle_error(e)


@router.post("/{session_id}/intake/back", response_model=IntakeState)
async def back_to_form(session_id: str):
    """Abandon the duplicate warning and edit the card again."""
    try:
        intake = get_session_service().get(session_id).intake
        intake.go_back()
        return intake.snapshot()

    except Exception as e:
        return handle_error(e)


@router.post("/{session_id}/intake/add-another", response_model=IntakeState)
async def add_another_card(session_id: str):
    """Start an empty form after a successful add."""
    try:
        intake = get_session_service().get(session_id).intake
        intake.add_another()
        return intake.snapshot()

    except Exception as e:
        return handle_error(e)
