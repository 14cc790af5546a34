"""
Gift card schemas.

CandidateRecord keeps every field as text so the validator can report
problems instead of pydantic rejecting the payload. CommittedRecord and
ExistingRecord are frozen.
"""

from pydantic import AliasChoices, ConfigDict, Field
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

from models.base import BaseSchema, FrozenSchema


# Field name -> error message. Absent key means no error.
FieldErrors = dict[str, str]

CANDIDATE_FIELDS = ["store", "last4", "amount", "added_by", "notes"]


class CandidateRecord(BaseSchema):
    """
    Card data as typed by the operator or read from a CSV row.

    Nothing is required at this layer: validation happens in
    services.validation_service. Text is kept as typed; a padded
    last-4 such as "1234 " fails the four-digit rule.
    """
    model_config = ConfigDict(str_strip_whitespace=False)

    store: str = Field(default="", description="Store name (free text)")
    last4: str = Field(default="", description="Last four digits of the card number")
    amount: str = Field(default="", description="Card amount as typed, e.g. '50.00'")
    added_by: str = Field(default="", description="Operator who registered the card")
    notes: str = Field(default="", description="Optional notes")
    date_added: date = Field(
        default_factory=date.today,
        description="Date the card was added (defaults to today)"
    )


class CommittedRecord(FrozenSchema):
    """A candidate accepted into the session ledger."""

    id: int = Field(..., description="Session-unique identifier")
    store: str
    last4: str
    amount: Decimal = Field(..., gt=0, description="Card amount in dollars")
    added_by: str
    notes: str = ""
    date_added: date
    committed_at: datetime = Field(..., description="When the card entered the ledger")


class ExistingRecord(FrozenSchema):
    """
    Card from the pre-loaded dataset.

    Accepts the camelCase keys used by the dataset JSON as well as
    snake_case names; always serializes as snake_case.
    """

    id: int
    store: str
    last4: str
    initial_balance: Decimal = Field(
        ...,
        validation_alias=AliasChoices("initialBalance", "initial_balance")
    )
    remaining_balance: Decimal = Field(
        ...,
        validation_alias=AliasChoices("remainingBalance", "remaining_balance")
    )
    status: str = "Active"
    added_date: Optional[date] = Field(
        None,
        validation_alias=AliasChoices("addedDate", "added_date")
    )
    added_by: str = Field(
        "",
        validation_alias=AliasChoices("addedBy", "added_by")
    )


class SessionCreatedResponse(BaseSchema):
    """Response after opening an intake session."""
    session_id: str
    expires_in_minutes: int


class SessionCardsResponse(BaseSchema):
    """Cards committed during a session, oldest first."""
    data: list[CommittedRecord]
    total: int
    latest: Optional[CommittedRecord] = None
