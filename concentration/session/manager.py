"""
Session Manager - Creates and tracks game sessions.

LIFECYCLE:
1. Player starts a game -> ephemeral session (in-memory only)
2. During the game: taps and resets go to the session's GameSession
3. Player leaves or the session goes stale -> session destroyed

PERSISTENCE RULES:
- NO database, NO files
- Nothing survives a restart
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable
import logging
import time
import uuid

from ..config import get_mismatch_delay
from .game import GameSession
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a managed session."""
    ACTIVE = "active"  # Game in progress
    WON = "won"  # Every pair matched, waiting for a reset
    ENDED = "ended"  # Player left
    ABANDONED = "abandoned"  # Cleaned up as stale


@dataclass
class Session:
    """
    A managed game session.

    Wraps the GameSession with an id and bookkeeping.
    The session is destroyed when it ends; nothing is persisted.
    """
    session_id: str
    game: GameSession
    created_at: float
    last_active_at: float
    ended_state: SessionState | None = None

    @property
    def state(self) -> SessionState:
        if self.ended_state is not None:
            return self.ended_state
        return SessionState.WON if self.game.is_won() else SessionState.ACTIVE

    def is_active(self) -> bool:
        """Check if session is still active."""
        return self.ended_state is None

    def touch(self) -> None:
        self.last_active_at = time.time()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions
    - Track active sessions
    - Clean up ended and stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(
        self,
        scheduler_factory: Callable[[], Scheduler] | None = None,
        mismatch_delay: float | None = None,
    ):
        self._sessions: dict[str, Session] = {}
        self._scheduler_factory = scheduler_factory
        self._mismatch_delay = mismatch_delay

    @property
    def mismatch_delay(self) -> float:
        """Delay applied to sessions created by this manager."""
        if self._mismatch_delay is not None:
            return self._mismatch_delay
        return get_mismatch_delay()

    def create_session(
        self,
        pair_count: int,
        seed: int | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            pair_count: Pairs in the first deal
            seed: Optional seed for a reproducible shuffle

        Returns:
            New Session with a dealt deck

        Raises:
            InvalidPairCountError: if pair_count is not a positive int
        """
        scheduler = self._scheduler_factory() if self._scheduler_factory else None
        game = GameSession(
            pair_count,
            scheduler=scheduler,
            mismatch_delay=self._mismatch_delay,
            seed=seed,
        )
        now = time.time()
        session = Session(
            session_id=str(uuid.uuid4()),
            game=game,
            created_at=now,
            last_active_at=now,
        )
        self._sessions[session.session_id] = session
        logger.info("Created session %s with %d pairs", session.session_id, pair_count)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "ended") -> bool:
        """
        End a session and release it.

        Pending mismatch reversions are cancelled.
        Returns False if the session did not exist.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        session.game.close()
        if reason == "stale":
            session.ended_state = SessionState.ABANDONED
        else:
            session.ended_state = SessionState.ENDED
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> list[str]:
        """
        End sessions idle for longer than max_age_seconds.

        Returns the IDs that were removed.
        """
        cutoff = time.time() - max_age_seconds
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if session.last_active_at < cutoff
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return to_remove

    def shutdown(self) -> None:
        """End every session."""
        for session_id in list(self._sessions):
            self.end_session(session_id, reason="shutdown")
