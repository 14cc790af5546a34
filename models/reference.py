"""
Reference list schemas (store picker, volunteer list).
"""

from pydantic import Field

from models.base import BaseSchema


class StoreOptionsResponse(BaseSchema):
    """Stores matching a picker query."""
    query: str = ""
    options: list[str] = Field(default_factory=list)
    is_new_store: bool = Field(
        default=False,
        description="True when the query names a store not in the known list"
    )


class VolunteerListResponse(BaseSchema):
    """Operators who can be recorded as added-by."""
    data: list[str]
    total: int
