"""
tests/test_user_service.py — User Service Integration Tests
============================================================

Covers request-identity resolution, point awards, check-in stamping and
leaderboard paging.

Uses an in-memory SQLite database via the shared conftest fixtures.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from beacon.database.models import User
from beacon.services import user_service


@pytest.fixture
def engine(db_engine):
    """Re-use the shared conftest db_engine (SQLite, StaticPool)."""
    return db_engine


class TestResolveCurrentUser:
    def test_creates_demo_user_when_table_empty(self, engine, cfg):
        user = user_service.resolve_current_user(engine, cfg)
        assert user.username == "DemoUser"
        assert user.password == "demo"
        assert user.points == 0
        assert user.last_checkin is None
        assert len(user_service.get_all_users(engine)) == 1

    def test_second_call_reuses_demo_user(self, engine, cfg):
        first = user_service.resolve_current_user(engine, cfg)
        second = user_service.resolve_current_user(engine, cfg)
        assert first.id == second.id
        assert len(user_service.get_all_users(engine)) == 1

    def test_most_recently_created_user_wins(self, engine, cfg):
        user_service.create_user(engine, "alice", "pw")
        user_service.create_user(engine, "bob", "pw")
        newest = user_service.create_user(engine, "carol", "pw")

        assert user_service.resolve_current_user(engine, cfg).id == newest.id

    def test_losing_the_bootstrap_race_reuses_the_winner(self, engine, cfg, monkeypatch):
        # Another request inserts the demo user between our empty read and
        # our insert.
        winner = user_service.create_user(engine, cfg.demo_username, "pw")
        reads = iter([[], user_service.get_all_users(engine)])
        monkeypatch.setattr(user_service, "get_all_users", lambda _engine: next(reads))

        assert user_service.resolve_current_user(engine, cfg).id == winner.id

    def test_bootstrap_integrity_error_with_no_users_propagates(
        self, engine, cfg, monkeypatch,
    ):
        user_service.create_user(engine, cfg.demo_username, "pw")
        monkeypatch.setattr(user_service, "get_all_users", lambda _engine: [])

        with pytest.raises(IntegrityError):
            user_service.resolve_current_user(engine, cfg)

    def test_demo_credentials_come_from_config(self, engine):
        from beacon.config import BeaconConfig

        cfg = BeaconConfig(demo_username="Guest", demo_password="guest")
        assert user_service.resolve_current_user(engine, cfg).username == "Guest"


class TestCreateUser:
    def test_assigns_unique_referral_codes(self, engine):
        a = user_service.create_user(engine, "alice", "pw")
        b = user_service.create_user(engine, "bob", "pw")
        assert a.referral_code and b.referral_code
        assert a.referral_code != b.referral_code

    def test_get_all_users_is_creation_order(self, engine):
        names = ["u1", "u2", "u3"]
        for n in names:
            user_service.create_user(engine, n, "pw")
        assert [u.username for u in user_service.get_all_users(engine)] == names


class TestPoints:
    def test_update_user_points_adds_delta(self, engine):
        user = user_service.create_user(engine, "alice", "pw")
        user_service.update_user_points(engine, user.id, 1)
        updated = user_service.update_user_points(engine, user.id, 4)
        assert updated.points == 5

        with Session(engine) as session:
            assert session.get(User, user.id).points == 5

    def test_update_unknown_user_raises(self, engine):
        with pytest.raises(ValueError):
            user_service.update_user_points(engine, "missing", 1)


class TestCheckin:
    def test_stamps_time_and_awards_points(self, engine):
        user = user_service.create_user(engine, "alice", "pw")
        when = datetime(2026, 6, 10, 9, 30, tzinfo=UTC)

        updated = user_service.update_user_checkin(engine, user.id, 10, now=when)

        assert updated.points == 10
        assert updated.last_checkin == when

    def test_stored_timestamp_round_trips(self, engine):
        user = user_service.create_user(engine, "alice", "pw")
        user_service.update_user_checkin(engine, user.id, 10)

        reloaded = user_service.get_user(engine, user.id)
        assert reloaded.last_checkin is not None
        assert reloaded.points == 10


class TestLeaderboard:
    def _seed(self, engine, count: int) -> None:
        for i in range(count):
            user = user_service.create_user(engine, f"user{i:02d}", "pw")
            user_service.update_user_points(engine, user.id, i)

    def test_ranked_by_points_descending(self, engine):
        self._seed(engine, 5)
        board = user_service.get_leaderboard(engine, 0, 10)
        assert [u.points for u in board] == [4, 3, 2, 1, 0]

    def test_pages_are_fixed_size_slices(self, engine):
        self._seed(engine, 23)
        page0 = user_service.get_leaderboard(engine, 0, 10)
        page1 = user_service.get_leaderboard(engine, 1, 10)
        page2 = user_service.get_leaderboard(engine, 2, 10)
        page3 = user_service.get_leaderboard(engine, 3, 10)

        assert len(page0) == 10 and len(page1) == 10 and len(page2) == 3
        assert page3 == []
        assert page0[0].points == 22
        assert page1[0].points == 12
        assert page2[-1].points == 0

    def test_ties_keep_older_user_first(self, engine):
        first = user_service.create_user(engine, "first", "pw")
        second = user_service.create_user(engine, "second", "pw")
        board = user_service.get_leaderboard(engine, 0, 10)
        assert [u.id for u in board] == [first.id, second.id]
