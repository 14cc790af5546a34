"""
Base schemas for all models.
"""

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base for all schemas.

    Features:
        - Auto-trim whitespace from strings
        - Validate on attribute assignment
        - Allow ORM objects (from_attributes)
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True
    )


class FrozenSchema(BaseModel):
    """
    Base for records that must never change once created.

    Committed cards and the external dataset both use this. Strings are
    kept exactly as given.
    """
    model_config = ConfigDict(
        from_attributes=True,
        frozen=True
    )
