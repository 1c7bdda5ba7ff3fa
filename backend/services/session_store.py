"""In-process store of active intake sessions, keyed by session id.

Sessions that have not been looked up for ``session_ttl_minutes`` are evicted
the next time the store is touched.
"""

import logging
from time import monotonic

from config import settings
from services.intake_session import IntakeSession

logger = logging.getLogger(__name__)

_sessions: dict[str, IntakeSession] = {}
_last_seen: dict[str, float] = {}


def _evict_idle(now: float) -> None:
    cutoff = now - settings.session_ttl_minutes * 60
    for session_id in [sid for sid, seen in _last_seen.items() if seen < cutoff]:
        logger.info("Evicting idle intake session %s", session_id)
        discard(session_id)


def create_session(client_id: str) -> IntakeSession:
    now = monotonic()
    _evict_idle(now)
    session = IntakeSession(client_id)
    _sessions[session.session_id] = session
    _last_seen[session.session_id] = now
    logger.info("Created intake session %s for client %s", session.session_id, client_id)
    return session


def get_session(session_id: str, client_id: str) -> IntakeSession:
    """Look up a session owned by ``client_id``. Raises KeyError otherwise."""
    now = monotonic()
    _evict_idle(now)
    session = _sessions.get(session_id)
    if session is None or session.client_id != client_id:
        raise KeyError(session_id)
    _last_seen[session_id] = now
    return session


def discard(session_id: str) -> None:
    """Forget a session and cancel anything it still has running."""
    _last_seen.pop(session_id, None)
    session = _sessions.pop(session_id, None)
    if session is not None:
        session.close()


def clear() -> None:
    """Drop all sessions. Useful for testing."""
    _sessions.clear()
    _last_seen.clear()
