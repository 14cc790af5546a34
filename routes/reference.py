"""
Reference list API routes (store picker, volunteers).
"""

from fastapi import APIRouter, Query

from models.reference import StoreOptionsResponse, VolunteerListResponse
from services.reference_service import filter_store_options, list_volunteers

router = APIRouter()


@router.get("/stores", response_model=StoreOptionsResponse)
async def search_stores(
    query: str = Query("", description="Case-insensitive substring of the store name")
):
    """Known stores matching the query, and whether it names a new store."""
    return filter_store_options(query)


@router.get("/volunteers", response_model=VolunteerListResponse)
async def get_volunteers():
    """Operators who can be recorded as added-by."""
    volunteers = list_volunteers()
    return VolunteerListResponse(data=volunteers, total=len(volunteers))
