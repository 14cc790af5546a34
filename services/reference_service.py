"""
Store and volunteer reference lists for the intake form.
"""

from typing import Optional, Sequence

from config import settings
from models.reference import StoreOptionsResponse


def filter_store_options(
    query: str,
    options: Optional[Sequence[str]] = None,
) -> StoreOptionsResponse:
    """
    Stores whose name contains the query, ignoring case.

    An empty query lists every store. is_new_store is set when the query
    does not exactly (ignoring case) name a known store, so the picker can
    offer to add it.
    """
    options = list(settings.store_options if options is None else options)
    query = (query or "").strip()

    if not query:
        return StoreOptionsResponse(query="", options=options, is_new_store=False)

    needle = query.lower()
    matches = [store for store in options if needle in store.lower()]
    is_new = not any(store.lower() == needle for store in options)

    return StoreOptionsResponse(query=query, options=matches, is_new_store=is_new)


def list_volunteers() -> list[str]:
    """Configured operators, in configured order."""
    return list(settings.volunteers)
