"""
Tests for SessionManager.

Tests:
- Session lifecycle
- Won state
- Stale cleanup
"""

import time

import pytest

from ..engine_core.errors import InvalidPairCountError
from ..session import SessionState
from .conftest import pair_positions, mismatched_indices


class TestSessionLifecycle:
    """Tests for creating and ending sessions."""

    def test_create_session(self, manager):
        """New sessions are active with a dealt deck."""
        session = manager.create_session(4, seed=1)

        assert session.session_id
        assert session.state == SessionState.ACTIVE
        assert session.game.pair_count == 4
        assert manager.get_session(session.session_id) is session

    def test_create_rejects_bad_pair_count(self, manager):
        """Invalid pair counts are not registered."""
        with pytest.raises(InvalidPairCountError):
            manager.create_session(0)

        assert manager.list_active_sessions() == []

    def test_end_session(self, manager):
        """Ended sessions disappear and cancel pending reversions."""
        session = manager.create_session(2, seed=3)
        i, j = mismatched_indices(session.game.state)
        session.game.tap(i)
        session.game.tap(j)

        assert manager.end_session(session.session_id)

        assert manager.get_session(session.session_id) is None
        assert session.state == SessionState.ENDED
        assert manager.clock.pending == 0

    def test_end_unknown_session(self, manager):
        """Ending an unknown session reports False."""
        assert not manager.end_session("missing")

    def test_list_active_sessions(self, manager):
        """Every live session is listed."""
        ids = {manager.create_session(2).session_id for _ in range(3)}

        assert set(manager.list_active_sessions()) == ids

    def test_won_state(self, manager):
        """Session reports WON once every pair is matched."""
        session = manager.create_session(2, seed=9)
        for i, j in pair_positions(session.game.state).values():
            session.game.tap(i)
            session.game.tap(j)

        assert session.state == SessionState.WON
        assert session.is_active()

    def test_mismatch_delay_from_manager(self, manager):
        """Sessions take the manager's delay."""
        session = manager.create_session(2)

        assert session.game.mismatch_delay == 1.0
        assert manager.mismatch_delay == 1.0


class TestCleanup:
    """Tests for stale-session cleanup."""

    def test_idle_sessions_removed(self, manager):
        """Sessions idle past the limit are abandoned."""
        stale = manager.create_session(2)
        fresh = manager.create_session(2)
        stale.last_active_at = time.time() - 7200

        removed = manager.cleanup_stale_sessions(max_age_seconds=3600)

        assert removed == [stale.session_id]
        assert stale.state == SessionState.ABANDONED
        assert manager.get_session(fresh.session_id) is fresh

    def test_touch_keeps_session(self, manager):
        """Activity resets the idle clock."""
        session = manager.create_session(2)
        session.last_active_at = time.time() - 7200
        session.touch()

        assert manager.cleanup_stale_sessions(max_age_seconds=3600) == []

    def test_shutdown_ends_everything(self, manager):
        """Shutdown removes every session."""
        manager.create_session(2)
        manager.create_session(4)

        manager.shutdown()

        assert manager.list_active_sessions() == []
