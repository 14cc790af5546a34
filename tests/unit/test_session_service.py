"""
Unit tests for the session registry and CSV previews.
"""

from datetime import datetime, timedelta
import pytest

from models.csv_import import ImportPolicy
from parsers.csv_parser import parse_card_csv
from services import preview_cache_service
from services.session_service import SessionService
from exceptions import IntakeSessionNotFoundError, ImportPreviewNotFoundError


@pytest.fixture
def session_service(existing_cards):
    """Registry over the sample dataset."""
    preview_cache_service.clear_previews()
    yield SessionService(existing_cards)
    preview_cache_service.clear_previews()


class TestSessions:
    """Tests for create and get."""

    def test_create_and_get(self, session_service):
        """A created session can be looked up."""
        session = session_service.create()

        assert session_service.get(session.session_id) is session
        assert session_service.count() == 1

    def test_sessions_have_separate_ledgers(self, session_service, valid_candidate):
        """Cards added in one session are not in another."""
        first = session_service.create()
        second = session_service.create()
        first.intake.submit(valid_candidate)

        assert len(first.ledger) == 1
        assert len(second.ledger) == 0
        assert second.intake.submit(valid_candidate).value == "success"

    def test_unknown_session(self, session_service):
        """Unknown id raises a 404 error."""
        with pytest.raises(IntakeSessionNotFoundError) as exc_info:
            session_service.get("missing")
        assert exc_info.value.status_code == 404

    def test_expired_session(self, session_service):
        """Idle sessions are dropped."""
        session = session_service.create()
        session.last_seen = datetime.now() - session_service.ttl - timedelta(seconds=1)

        with pytest.raises(IntakeSessionNotFoundError):
            session_service.get(session.session_id)
        assert session_service.count() == 0


class TestPreviews:
    """Tests for hold_preview and confirm_import."""

    def test_preview_then_confirm(self, session_service, existing_cards):
        """Confirmed rows land in the session ledger."""
        session = session_service.create()
        rows = parse_card_csv("Gap,2222,20,Amy Brown,\nTarget,5678,50,Mike Davis,", existing_cards)
        preview_id = session.hold_preview("cards.csv", rows)

        assert session.confirm_import(preview_id, ImportPolicy.INCLUDE_DUPLICATES) == 2
        assert len(session.ledger) == 2
        assert session.pending_preview_id is None

    def test_confirm_twice_fails(self, session_service):
        """A preview can only be imported once."""
        session = session_service.create()
        preview_id = session.hold_preview("cards.csv", parse_card_csv("Gap,2222,20,Amy Brown,", []))
        session.confirm_import(preview_id, ImportPolicy.VALID_ONLY)

        with pytest.raises(ImportPreviewNotFoundError):
            session.confirm_import(preview_id, ImportPolicy.VALID_ONLY)
        assert len(session.ledger) == 1

    def test_new_upload_replaces_pending_preview(self, session_service):
        """Starting a new upload supersedes the old one."""
        session = session_service.create()
        old_id = session.hold_preview("old.csv", parse_card_csv("Gap,2222,20,Amy Brown,", []))
        new_id = session.hold_preview("new.csv", parse_card_csv("KFC,3333,15,Lisa Chen,", []))

        with pytest.raises(ImportPreviewNotFoundError):
            session.confirm_import(old_id, ImportPolicy.VALID_ONLY)
        assert session.confirm_import(new_id, ImportPolicy.VALID_ONLY) == 1
        assert session.ledger.latest().store == "KFC"

    def test_preview_belongs_to_its_session(self, session_service):
        """Another session cannot confirm it."""
        owner = session_service.create()
        other = session_service.create()
        preview_id = owner.hold_preview("cards.csv", parse_card_csv("Gap,2222,20,Amy Brown,", []))

        with pytest.raises(ImportPreviewNotFoundError):
            other.confirm_import(preview_id, ImportPolicy.VALID_ONLY)
        assert len(other.ledger) == 0


class TestPreviewCache:
    """Tests for preview_cache_service expiry."""

    def test_expired_preview_is_gone(self):
        """Entries past their TTL are not returned."""
        preview_id = preview_cache_service.store_preview({"rows": []}, ttl_minutes=1)
        expires_at, data = preview_cache_service._cache[preview_id]
        preview_cache_service._cache[preview_id] = (datetime.now() - timedelta(seconds=1), data)

        assert preview_cache_service.retrieve_preview(preview_id) is None
        assert preview_id not in preview_cache_service._cache
