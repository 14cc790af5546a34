"""
Temporary storage for parsed CSV previews.
Stores parsed rows in memory with TTL expiration until the operator
picks an import policy. Single-process only.
"""
import threading
import uuid
from datetime import datetime, timedelta
from typing import Any, Optional

from config import settings

_cache: dict[str, tuple[datetime, Any]] = {}
_lock = threading.Lock()


def store_preview(data: Any, ttl_minutes: Optional[int] = None) -> str:
    """Store parsed data, return preview_id."""
    ttl = ttl_minutes or settings.preview_ttl_minutes
    preview_id = str(uuid.uuid4())
    expires_at = datetime.now() + timedelta(minutes=ttl)
    with _lock:
        _cache[preview_id] = (expires_at, data)
        _cleanup_expired()
    return preview_id


def retrieve_preview(preview_id: str) -> Optional[Any]:
    """Retrieve parsed data by preview_id. Returns None if expired/not found."""
    with _lock:
        entry = _cache.get(preview_id)
        if entry is None:
            return None
        expires_at, data = entry
        if datetime.now() > expires_at:
            del _cache[preview_id]
            return None
        return data


def delete_preview(preview_id: str) -> None:
    """Remove preview after confirm or replacement."""
    with _lock:
        _cache.pop(preview_id, None)


def clear_previews() -> None:
    """Drop every preview."""
    with _lock:
        _cache.clear()


def _cleanup_expired() -> None:
    """Remove all expired entries. Caller holds _lock."""
    now = datetime.now()
    expired = [k for k, (exp, _) in _cache.items() if now > exp]
    for k in expired:
        del _cache[k]
