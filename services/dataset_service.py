"""
Loader for the pre-existing card dataset.

The dataset is read once and cached; the pipeline only ever reads it.
File format: {"cards": [{"id", "store", "last4", "initialBalance",
"remainingBalance", "status", "addedDate", "addedBy"}, ...]}

A sample dataset ships in data/existing_cards.json. Point the app at it
with EXISTING_CARDS_PATH=data/existing_cards.json; without that setting
the dataset is empty.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

import structlog
from pydantic import ValidationError as PydanticValidationError

from config import settings
from exceptions import DatasetLoadError
from models.card import ExistingRecord

logger = structlog.get_logger(__name__)


def load_existing_cards(path: Union[str, Path]) -> list[ExistingRecord]:
    """
    Read and validate the dataset file.

    Args:
        path: JSON file path

    Returns:
        Cards in file order

    Raises:
        DatasetLoadError: Missing file, bad JSON or invalid card
    """
    path = Path(path)
    logger.info("loading_existing_cards", path=str(path))

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.error("existing_cards_read_failed", path=str(path), error=str(e))
        raise DatasetLoadError(str(path), str(e)) from e

    raw_cards = payload.get("cards", []) if isinstance(payload, dict) else payload
    if not isinstance(raw_cards, list):
        raise DatasetLoadError(str(path), "'cards' must be a list")

    try:
        cards = [ExistingRecord.model_validate(card) for card in raw_cards]
    except PydanticValidationError as e:
        logger.error("existing_cards_invalid", path=str(path), error_count=e.error_count())
        raise DatasetLoadError(str(path), f"{e.error_count()} invalid card field(s)") from e

    logger.info("existing_cards_loaded", count=len(cards))
    return cards


@lru_cache()
def get_existing_cards(path: Optional[str] = None) -> tuple[ExistingRecord, ...]:
    """
    Cached dataset for the configured path.

    Call get_existing_cards.cache_clear() to reload.

    Returns:
        Tuple of cards; empty when no dataset is configured
    """
    path = path or settings.existing_cards_path
    if not path:
        logger.warning("existing_cards_not_configured")
        return ()
    return tuple(load_existing_cards(path))
