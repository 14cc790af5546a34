"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from unittest.mock import patch

from models.card import CandidateRecord, ExistingRecord
from services.ledger_service import SessionLedger
from services.intake_service import IntakeSession
from tests.factories import ExistingCardFactory


# ===================
# DATASET
# ===================

@pytest.fixture
def existing_cards() -> list[ExistingRecord]:
    """
    Pre-loaded dataset used across tests.

    Contains the Target/5678 card from the duplicate scenario.
    """
    return [
        ExistingRecord.model_validate(ExistingCardFactory.create(
            id=1,
            store="Target",
            last4="5678",
            initial_balance=50.00,
            remaining_balance=20.00,
            added_date="2024-01-01",
            added_by="Lisa Chen",
        )),
        ExistingRecord.model_validate(ExistingCardFactory.create(
            id=2,
            store="Starbucks",
            last4="0042",
            added_by="Amy Brown",
        )),
    ]


@pytest.fixture
def sample_dataset_file(tmp_path, existing_cards):
    """Dataset JSON file written in the loader's camelCase format."""
    import json

    path = tmp_path / "existing_cards.json"
    path.write_text(json.dumps({
        "cards": [
            ExistingCardFactory.create(
                id=card.id,
                store=card.store,
                last4=card.last4,
                initial_balance=float(card.initial_balance),
                remaining_balance=float(card.remaining_balance),
                added_date=card.added_date.isoformat(),
                added_by=card.added_by,
            )
            for card in existing_cards
        ]
    }))
    return path


# ===================
# PIPELINE
# ===================

@pytest.fixture
def ledger(existing_cards) -> SessionLedger:
    """Empty session ledger over the sample dataset."""
    return SessionLedger(existing_cards, id_base=9000)


@pytest.fixture
def intake(ledger, existing_cards) -> IntakeSession:
    """Fresh intake workflow in the form stage."""
    return IntakeSession(ledger, existing_cards)


@pytest.fixture
def valid_candidate() -> CandidateRecord:
    """A card that passes every field rule and is not a duplicate."""
    return CandidateRecord(
        store="Walmart",
        last4="1234",
        amount="100.00",
        added_by="Sarah Johnson",
        notes="Example card",
    )


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client(existing_cards):
    """
    Create FastAPI test client over the sample dataset.

    Usage:
        def test_endpoint(test_client):
            response = test_client.post("/api/sessions")
            assert response.status_code == 201
    """
    from fastapi.testclient import TestClient
    from main import app
    import services.session_service as session_module
    from services.session_service import SessionService

    session_module.reset_session_service()
    with patch("main.get_existing_cards", return_value=tuple(existing_cards)):
        session_module._session_service = SessionService(existing_cards)
        yield TestClient(app)
    session_module.reset_session_service()
