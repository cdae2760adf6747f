"""In-memory wizard session registry.

Each HTTP client drives its own WizardController. Sessions are kept in
process memory keyed by a random id; there is no persistence, so a
restart drops every open wizard.

WHY TTL:
- Clients rarely send DELETE; abandoned wizards would otherwise hold
  their slot until restart
- Expiry slides on every lookup, so an active wizard never times out
"""

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import structlog

from career_compass.core.errors import NotFoundError, SessionLimitError
from career_compass.models.profile import ProfileDraft
from career_compass.wizard.controller import WizardController

logger = structlog.get_logger()

# Idle lifetime of a session (1 hour)
DEFAULT_SESSION_TTL_MINUTES = 60


@dataclass
class WizardSession:
    """One registered wizard.

    Attributes:
        id: Session identifier returned to the client.
        controller: The wizard being driven.
        created_at: Creation time (UTC).
        expires_at: When the session is dropped unless used again.
        completed_profile: Set once the wizard is finalized.
        exited: Set when the user retreated out of the first step.
    """

    id: str
    controller: WizardController = field(init=False)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    expires_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    completed_profile: ProfileDraft | None = None
    exited: bool = False

    @property
    def is_finished(self) -> bool:
        """True once the wizard was finalized or exited."""
        return self.completed_profile is not None or self.exited


class SessionRegistry:
    """Holds open wizard sessions.

    Note: Safe for use from a single event loop, not across threads.

    Args:
        max_sessions: Maximum number of sessions held at once.
        ttl_minutes: Idle time after which a session expires.
    """

    def __init__(
        self, max_sessions: int, ttl_minutes: int = DEFAULT_SESSION_TTL_MINUTES
    ) -> None:
        self._max_sessions = max_sessions
        self._ttl = timedelta(minutes=ttl_minutes)
        self._sessions: dict[str, WizardSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, build: Callable[[WizardSession], WizardController]) -> WizardSession:
        """Register a new session.

        Expired sessions are dropped first. If the registry is still full,
        finished (finalized or exited) sessions give up their slots.

        Args:
            build: Called with the session so the controller's callbacks can
                record completion and exit on it.

        Raises:
            SessionLimitError: If max_sessions unfinished sessions are open.
        """
        self.cleanup_expired()
        if len(self._sessions) >= self._max_sessions:
            self._evict(
                [sid for sid, s in self._sessions.items() if s.is_finished],
                reason="finished",
            )
        if len(self._sessions) >= self._max_sessions:
            logger.warning("wizard_session_limit_reached", limit=self._max_sessions)
            raise SessionLimitError(self._max_sessions)

        session_id = uuid.uuid4().hex
        now = datetime.now(UTC)
        session = WizardSession(id=session_id, created_at=now, expires_at=now + self._ttl)
        session.controller = build(session)
        self._sessions[session_id] = session
        logger.info("wizard_session_created", session_id=session_id)
        return session

    def get(self, session_id: str) -> WizardSession:
        """Look up a session and extend its expiry.

        Raises:
            NotFoundError: If no such session is open, or it has expired.
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise NotFoundError("Wizard session", session_id)

        now = datetime.now(UTC)
        if now > session.expires_at:
            self._evict([session_id], reason="expired")
            raise NotFoundError("Wizard session", session_id)

        session.expires_at = now + self._ttl
        return session

    def close(self, session_id: str) -> WizardSession:
        """Close and forget a session. Pending results are discarded.

        Raises:
            NotFoundError: If no such session is open.
        """
        session = self.get(session_id)
        session.controller.close()
        del self._sessions[session_id]
        logger.info("wizard_session_closed", session_id=session_id)
        return session

    def cleanup_expired(self) -> int:
        """Close and remove all expired sessions.

        Returns:
            Number of sessions removed.
        """
        now = datetime.now(UTC)
        expired = [sid for sid, s in self._sessions.items() if now > s.expires_at]
        self._evict(expired, reason="expired")
        return len(expired)

    def close_all(self) -> None:
        for session in self._sessions.values():
            session.controller.close()
        self._sessions.clear()

    def _evict(self, session_ids: list[str], *, reason: str) -> None:
        for session_id in session_ids:
            self._sessions.pop(session_id).controller.close()
        if session_ids:
            logger.info("wizard_sessions_evicted", count=len(session_ids), reason=reason)
