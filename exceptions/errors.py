"""
Custom exception classes for the application.

Field validation failures and duplicate warnings are not exceptions;
they are reported as data. Only conditions the caller cannot express
as a field error end up here.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "INTAKE_SESSION_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with current state (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


# ===================
# CARD ERRORS
# ===================

class CardValidationError(ValidationError):
    """A candidate card was committed without passing validation."""

    def __init__(self, field_errors: dict[str, str]):
        super().__init__(
            code="CARD_VALIDATION_FAILED",
            message=f"Card failed validation on {len(field_errors)} field(s)",
            details={"field_errors": field_errors}
        )


class DatasetLoadError(AppError):
    """Existing card dataset could not be loaded (500)."""

    def __init__(self, path: str, message: str):
        super().__init__(
            code="DATASET_LOAD_FAILED",
            message=f"Failed to load existing cards: {message}",
            status_code=500,
            details={"path": path}
        )


# ===================
# INTAKE ERRORS
# ===================

class IntakeSessionNotFoundError(NotFoundError):
    """Intake session expired or never existed."""

    def __init__(self, session_id: str):
        super().__init__(
            resource="Intake session",
            identifier=session_id,
            code="INTAKE_SESSION_NOT_FOUND"
        )


class InvalidStageTransitionError(ConflictError):
    """Intake event not accepted in the current stage."""

    def __init__(self, current_stage: str, event: str, allowed_stages: list[str]):
        super().__init__(
            code="INVALID_STAGE_TRANSITION",
            message=f"Cannot {event} while in stage {current_stage}",
            details={
                "current_stage": current_stage,
                "event": event,
                "allowed_stages": allowed_stages,
            }
        )


class UnknownFieldError(ValidationError):
    """Field name is not part of a candidate card."""

    def __init__(self, field: str, valid: list[str]):
        super().__init__(
            code="UNKNOWN_CARD_FIELD",
            message=f"Unknown card field: {field}",
            details={"provided": field, "valid": valid}
        )


# ===================
# CSV IMPORT ERRORS
# ===================

class CSVFileRejectedError(ValidationError):
    """Uploaded file is not a readable CSV; rejected before parsing."""

    def __init__(self, filename: str, reason: str):
        super().__init__(
            code="CSV_FILE_REJECTED",
            message=reason,
            details={"filename": filename}
        )


class ImportPreviewNotFoundError(NotFoundError):
    """CSV preview expired or was already confirmed."""

    def __init__(self, preview_id: str):
        super().__init__(
            resource="Import preview",
            identifier=preview_id,
            code="IMPORT_PREVIEW_NOT_FOUND"
        )
