"""
Bulk CSV import schemas.
"""

from enum import Enum

from pydantic import Field

from models.base import BaseSchema


class RowStatus(str, Enum):
    """Derived classification of a parsed CSV row."""
    VALID = "valid"
    DUPLICATE = "duplicate"
    ERROR = "error"


class ImportPolicy(str, Enum):
    """Which parsed rows a bulk import commits."""
    VALID_ONLY = "valid_only"
    INCLUDE_DUPLICATES = "include_duplicates"


# Row statuses each policy commits. ERROR never appears here.
POLICY_STATUSES = {
    ImportPolicy.VALID_ONLY: {RowStatus.VALID},
    ImportPolicy.INCLUDE_DUPLICATES: {RowStatus.VALID, RowStatus.DUPLICATE},
}


class CSVRow(BaseSchema):
    """One parsed data line. Fields are kept as text."""

    row_num: int = Field(..., ge=1, description="1-based position among data rows")
    store: str = ""
    last4: str = ""
    amount: str = ""
    added_by: str = ""
    notes: str = ""
    status: RowStatus
    errors: list[str] = Field(default_factory=list)


class CSVSummary(BaseSchema):
    """Row counts per status."""
    total: int = 0
    valid: int = 0
    duplicate: int = 0
    error: int = 0


class ImportPreviewResponse(BaseSchema):
    """Parsed CSV waiting for an import decision."""
    preview_id: str
    filename: str
    rows: list[CSVRow] = Field(default_factory=list)
    summary: CSVSummary
    expires_in_minutes: int = 30


class ImportConfirmRequest(BaseSchema):
    """Commit rows from a preview under a policy."""
    preview_id: str
    policy: ImportPolicy = ImportPolicy.VALID_ONLY


class ImportConfirmResponse(BaseSchema):
    """Result of a bulk import."""
    success: bool
    imported_count: int
    session_card_count: int
    message: str
