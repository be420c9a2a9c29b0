"""Tests for habit statistics."""

from services.habit_service import HabitService
from services.stats_service import StatsService


def _habit(db, user, name, streak, longest):
    h = HabitService.create(db, user.id, {"name": name, "category": "other"})
    h.streak, h.longest_streak = streak, longest
    db.commit()
    return h


def test_no_habits_is_all_zero(db, make_user):
    alice = make_user("alice")
    assert StatsService.get(db, alice.id) == {
        "total_habits": 0,
        "total_streak": 0,
        "average_streak": 0,
        "longest_streak": 0,
    }


def test_aggregates_active_habits(db, make_user):
    alice = make_user("alice")
    _habit(db, alice, "A", 2, 5)
    _habit(db, alice, "B", 3, 3)
    archived = _habit(db, alice, "C", 50, 90)
    HabitService.delete(db, alice.id, archived.id)

    stats = StatsService.get(db, alice.id)
    assert stats["total_habits"] == 2
    assert stats["total_streak"] == 5
    assert stats["average_streak"] == 3  # 2.5 rounds half up
    assert stats["longest_streak"] == 5


def test_other_users_habits_ignored(db, make_user):
    alice, bob = make_user("alice"), make_user("bob")
    _habit(db, bob, "Run", 4, 4)
    _habit(db, alice, "Read", 1, 2)
    assert StatsService.get(db, alice.id)["total_streak"] == 1


def test_rounding_down(db, make_user):
    alice = make_user("alice")
    for name, streak in (("A", 1), ("B", 1), ("C", 2)):
        _habit(db, alice, name, streak, streak)
    assert StatsService.get(db, alice.id)["average_streak"] == 1
