"""
In-memory registry of intake sessions.

A session owns one ledger, the single-entry workflow that commits into
it, and at most one pending CSV preview. Nothing here survives a
restart.
"""

import threading
import uuid
from datetime import datetime, timedelta
from typing import Optional, Sequence

import structlog

from config import settings
from exceptions import ImportPreviewNotFoundError, IntakeSessionNotFoundError
from models.card import ExistingRecord
from models.csv_import import CSVRow, ImportPolicy
from services import preview_cache_service
from services.dataset_service import get_existing_cards
from services.import_service import import_rows
from services.intake_service import IntakeSession
from services.ledger_service import SessionLedger

logger = structlog.get_logger(__name__)


class CardSession:
    """One operator's session: ledger, intake form and pending preview."""

    def __init__(self, session_id: str, existing: Sequence[ExistingRecord]):
        self.session_id = session_id
        self.existing = list(existing)
        self.ledger = SessionLedger(self.existing, id_base=settings.session_id_base)
        self.intake = IntakeSession(self.ledger, self.existing)
        self.pending_preview_id: Optional[str] = None
        self.last_seen = datetime.now()

    # ===================
    # BULK IMPORT
    # ===================

    def hold_preview(self, filename: str, rows: list[CSVRow]) -> str:
        """
        Keep parsed rows until the operator picks a policy.

        A new upload replaces any preview still pending.
        """
        if self.pending_preview_id:
            preview_cache_service.delete_preview(self.pending_preview_id)
            logger.info("import_preview_replaced", session_id=self.session_id)

        self.pending_preview_id = preview_cache_service.store_preview(
            {"session_id": self.session_id, "filename": filename, "rows": rows}
        )
        return self.pending_preview_id

    def confirm_import(self, preview_id: str, policy: ImportPolicy) -> int:
        """
        Commit a held preview under the chosen policy.

        Raises:
            ImportPreviewNotFoundError: Unknown, expired, replaced or
                                        belonging to another session
        """
        data = preview_cache_service.retrieve_preview(preview_id)
        if data is None or data["session_id"] != self.session_id:
            raise ImportPreviewNotFoundError(preview_id)

        imported = import_rows(data["rows"], policy, self.ledger)

        preview_cache_service.delete_preview(preview_id)
        if self.pending_preview_id == preview_id:
            self.pending_preview_id = None
        return imported


class SessionService:
    """
    Session registry business logic.

    Sessions idle longer than session_ttl_minutes are dropped.
    """

    def __init__(self, existing: Optional[Sequence[ExistingRecord]] = None):
        self.existing = list(get_existing_cards() if existing is None else existing)
        self.ttl = timedelta(minutes=settings.session_ttl_minutes)
        self._sessions: dict[str, CardSession] = {}
        self._lock = threading.Lock()

    def create(self) -> CardSession:
        """Open a new session."""
        session = CardSession(str(uuid.uuid4()), self.existing)
        with self._lock:
            self._cleanup_expired()
            self._sessions[session.session_id] = session
        logger.info(
            "intake_session_created",
            session_id=session.session_id,
            existing_cards=len(self.existing),
        )
        return session

    def get(self, session_id: str) -> CardSession:
        """
        Look up a live session and mark it as used.

        Raises:
            IntakeSessionNotFoundError: Unknown or expired session
        """
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None or datetime.now() - session.last_seen > self.ttl:
                self._sessions.pop(session_id, None)
                raise IntakeSessionNotFoundError(session_id)
            session.last_seen = datetime.now()
            return session

    def count(self) -> int:
        """Number of sessions held in memory."""
        return len(self._sessions)

    def _cleanup_expired(self) -> None:
        now = datetime.now()
        expired = [k for k, s in self._sessions.items() if now - s.last_seen > self.ttl]
        for k in expired:
            del self._sessions[k]
        if expired:
            logger.info("intake_sessions_expired", count=len(expired))


# Singleton instance for convenience
_session_service: Optional[SessionService] = None


def get_session_service() -> SessionService:
    """Get or create SessionService instance."""
    global _session_service
    if _session_service is None:
        _session_service = SessionService()
    return _session_service


def reset_session_service() -> None:
    """Forget every session (tests and dataset reloads)."""
    global _session_service
    _session_service = None
    preview_cache_service.clear_previews()
