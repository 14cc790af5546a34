"""
Duplicate detection for gift cards.

A card is a duplicate when another card in the pool has the same store
(case-insensitive) and the same last-4 string (exact, leading zeros
significant). The first match in pool order wins: existing dataset
cards come before cards added during the session.
"""

from typing import Iterable, Optional, Sequence

from models.card import ExistingRecord
from utils.text_utils import store_key


def build_pool(
    existing: Sequence[ExistingRecord],
    session_records: Sequence[ExistingRecord] = (),
) -> list[ExistingRecord]:
    """
    Build the duplicate pool in canonical order.

    Args:
        existing: Pre-loaded dataset
        session_records: Cards committed this session, already projected
                         into the ExistingRecord shape, oldest first

    Returns:
        New list: existing cards, then session cards
    """
    return [*existing, *session_records]


def find_duplicate(
    store: str,
    last4: str,
    pool: Iterable[ExistingRecord],
) -> Optional[ExistingRecord]:
    """
    Return the first card in the pool matching store and last-4.

    Args:
        store: Store name (compared case-insensitively)
        last4: Last four digits (compared as an exact string)
        pool: Cards to search, in canonical order

    Returns:
        Matching card, or None
    """
    key = store_key(store)
    for card in pool:
        if card.last4 == last4 and store_key(card.store) == key:
            return card
    return None


def live_duplicate(
    store: str,
    last4: str,
    pool: Iterable[ExistingRecord],
) -> Optional[ExistingRecord]:
    """
    Duplicate check while the operator is still typing.

    Stays quiet until there is a store and a full 4-character last-4.
    """
    if not store or not last4 or len(last4) != 4:
        return None
    return find_duplicate(store, last4, pool)


class DuplicateIndex:
    """
    Hash index over a pool for bulk lookups.

    Keeps only the first card per (store, last4) key so lookups return
    exactly what find_duplicate would.
    """

    def __init__(self, pool: Iterable[ExistingRecord]):
        self._index: dict[tuple[str, str], ExistingRecord] = {}
        for card in pool:
            self._index.setdefault((store_key(card.store), card.last4), card)

    def __len__(self) -> int:
        return len(self._index)

    def find(self, store: str, last4: str) -> Optional[ExistingRecord]:
        """Return the first pooled card with this store and last-4."""
        return self._index.get((store_key(store), last4))
