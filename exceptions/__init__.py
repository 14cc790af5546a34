"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConflictError,

    # Cards
    CardValidationError,
    DatasetLoadError,

    # Intake
    IntakeSessionNotFoundError,
    InvalidStageTransitionError,
    UnknownFieldError,

    # CSV import
    CSVFileRejectedError,
    ImportPreviewNotFoundError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",

    # Cards
    "CardValidationError",
    "DatasetLoadError",

    # Intake
    "IntakeSessionNotFoundError",
    "InvalidStageTransitionError",
    "UnknownFieldError",

    # CSV import
    "CSVFileRejectedError",
    "ImportPreviewNotFoundError",
]
