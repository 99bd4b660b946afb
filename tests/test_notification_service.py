"""
tests/test_notification_service.py — Notification Service Tests
================================================================
"""

from __future__ import annotations

import pytest

from beacon.services import notification_service, user_service


@pytest.fixture
def engine(db_engine):
    return db_engine


@pytest.fixture
def user(engine):
    return user_service.create_user(engine, "alice", "pw")


def _notify(engine, user_id: str, title: str = "Hello"):
    return notification_service.create_notification(
        engine, {"title": title, "message": "body"}, user_id,
    )


class TestCreateAndList:
    def test_new_notification_is_unread(self, engine, user):
        n = _notify(engine, user.id)
        assert n.read is False
        assert n.user_id == user.id

    def test_list_is_scoped_to_user_and_newest_first(self, engine, user):
        other = user_service.create_user(engine, "bob", "pw")
        _notify(engine, user.id, "first")
        _notify(engine, other.id, "not mine")
        _notify(engine, user.id, "second")

        titles = [
            n.title
            for n in notification_service.get_notifications_by_user_id(engine, user.id)
        ]
        assert titles == ["second", "first"]


class TestReadState:
    def test_mark_one_read(self, engine, user):
        n = _notify(engine, user.id)
        updated = notification_service.mark_notification_as_read(engine, n.id)
        assert updated is not None
        assert updated.read is True

    def test_mark_unknown_returns_none(self, engine):
        assert notification_service.mark_notification_as_read(engine, "nope") is None

    def test_mark_all_read_only_touches_user(self, engine, user):
        other = user_service.create_user(engine, "bob", "pw")
        _notify(engine, user.id)
        _notify(engine, user.id)
        _notify(engine, other.id)

        touched = notification_service.mark_all_notifications_as_read(engine, user.id)

        assert touched == 2
        assert all(
            n.read for n in notification_service.get_notifications_by_user_id(engine, user.id)
        )
        assert not any(
            n.read for n in notification_service.get_notifications_by_user_id(engine, other.id)
        )


class TestDelete:
    def test_delete_known(self, engine, user):
        n = _notify(engine, user.id)
        assert notification_service.delete_notification(engine, n.id) is True
        assert notification_service.get_notifications_by_user_id(engine, user.id) == []

    def test_delete_unknown(self, engine, user):
        _notify(engine, user.id)
        assert notification_service.delete_notification(engine, "nope") is False
        assert len(notification_service.get_notifications_by_user_id(engine, user.id)) == 1
