"""Tests for the habit store."""

from datetime import date, timedelta

import pytest

from errors import DuplicateName, NotFound, ValidationError
from models.check_in import CheckIn
from models.habit import Category, Frequency
from services.checkin_service import CheckInService
from services.habit_service import HabitService


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob")


class TestCreate:
    def test_defaults(self, db, alice):
        h = HabitService.create(db, alice.id, {"name": "  Drink water ", "category": "health"})
        assert h.name == "Drink water"
        assert h.category is Category.HEALTH
        assert h.frequency is Frequency.DAILY
        assert h.is_active is True
        assert (h.streak, h.longest_streak, h.total_completions) == (0, 0, 0)
        assert h.description is None

    def test_duplicate_name_case_insensitive(self, db, alice):
        HabitService.create(db, alice.id, {"name": "Read", "category": "learning"})
        with pytest.raises(DuplicateName):
            HabitService.create(db, alice.id, {"name": "read", "category": "learning"})

    def test_same_name_other_owner(self, db, alice, bob):
        HabitService.create(db, alice.id, {"name": "Read", "category": "learning"})
        h = HabitService.create(db, bob.id, {"name": "READ", "category": "learning"})
        assert h.user_id == bob.id

    def test_archived_habit_releases_name(self, db, alice):
        h = HabitService.create(db, alice.id, {"name": "Read", "category": "learning"})
        HabitService.delete(db, alice.id, h.id)
        again = HabitService.create(db, alice.id, {"name": "Read", "category": "learning"})
        assert again.id != h.id

    @pytest.mark.parametrize(
        "data, field",
        [
            ({"category": "health"}, "name"),
            ({"name": "   ", "category": "health"}, "name"),
            ({"name": "x" * 101, "category": "health"}, "name"),
            ({"name": "Run"}, "category"),
            ({"name": "Run", "category": "sports"}, "category"),
            ({"name": "Run", "category": "fitness", "frequency": "monthly"}, "frequency"),
            ({"name": "Run", "category": "fitness", "description": "d" * 501}, "description"),
        ],
    )
    def test_validation(self, db, alice, data, field):
        with pytest.raises(ValidationError) as exc:
            HabitService.create(db, alice.id, data)
        assert exc.value.field == field


class TestUpdate:
    def test_partial_update_leaves_absent_fields(self, db, alice):
        h = HabitService.create(
            db, alice.id, {"name": "Run", "category": "fitness", "description": "5k"}
        )
        h = HabitService.update(db, alice.id, h.id, {"frequency": "weekly"})
        assert h.frequency is Frequency.WEEKLY
        assert h.name == "Run"
        assert h.description == "5k"
        assert h.category is Category.FITNESS

    def test_empty_description_clears(self, db, alice):
        h = HabitService.create(
            db, alice.id, {"name": "Run", "category": "fitness", "description": "5k"}
        )
        h = HabitService.update(db, alice.id, h.id, {"description": ""})
        assert h.description is None

    def test_rename_to_existing_name_fails(self, db, alice):
        HabitService.create(db, alice.id, {"name": "Run", "category": "fitness"})
        h = HabitService.create(db, alice.id, {"name": "Walk", "category": "fitness"})
        with pytest.raises(DuplicateName):
            HabitService.update(db, alice.id, h.id, {"name": "RUN"})

    def test_change_case_of_own_name(self, db, alice):
        h = HabitService.create(db, alice.id, {"name": "run", "category": "fitness"})
        h = HabitService.update(db, alice.id, h.id, {"name": "Run"})
        assert h.name == "Run"

    def test_invalid_update_changes_nothing(self, db, alice):
        h = HabitService.create(db, alice.id, {"name": "Run", "category": "fitness"})
        with pytest.raises(ValidationError):
            HabitService.update(db, alice.id, h.id, {"name": "Jog", "category": None})
        db.expire_all()
        assert HabitService.get_owned(db, alice.id, h.id).name == "Run"

    def test_other_owner_is_not_found(self, db, alice, bob):
        h = HabitService.create(db, alice.id, {"name": "Run", "category": "fitness"})
        with pytest.raises(NotFound):
            HabitService.update(db, bob.id, h.id, {"name": "Mine"})


class TestOwnership:
    def test_missing_archived_and_foreign_look_the_same(self, db, alice, bob):
        archived = HabitService.create(db, alice.id, {"name": "Old", "category": "other"})
        HabitService.delete(db, alice.id, archived.id)
        foreign = HabitService.create(db, bob.id, {"name": "Bob's", "category": "other"})

        messages = set()
        for habit_id in (9999, archived.id, foreign.id):
            with pytest.raises(NotFound) as exc:
                HabitService.get_owned(db, alice.id, habit_id)
            messages.add(exc.value.message)
        assert messages == {"Habit not found"}

    def test_delete_keeps_counters(self, db, alice):
        h = HabitService.create(db, alice.id, {"name": "Run", "category": "fitness"})
        CheckInService.create(db, alice.id, h.id)
        HabitService.delete(db, alice.id, h.id)
        db.refresh(h)
        assert h.is_active is False
        assert h.streak == 1
        assert HabitService.list_for_owner(db, alice.id) == []


class TestList:
    def test_checked_in_today_flag(self, db, alice):
        today = date(2024, 3, 10)
        run = HabitService.create(db, alice.id, {"name": "Run", "category": "fitness"})
        read = HabitService.create(db, alice.id, {"name": "Read", "category": "learning"})
        CheckInService.create(db, alice.id, run.id, today=today - timedelta(days=1))
        CheckInService.create(db, alice.id, read.id, today=today)

        rows = HabitService.list_for_owner(db, alice.id, today=today)
        flags = {r["habit"].name: r["checked_in_today"] for r in rows}
        assert flags == {"Run": False, "Read": True}

    def test_newest_first(self, db, alice):
        HabitService.create(db, alice.id, {"name": "First", "category": "other"})
        HabitService.create(db, alice.id, {"name": "Second", "category": "other"})
        names = [r["habit"].name for r in HabitService.list_for_owner(db, alice.id)]
        assert names == ["Second", "First"]


class TestReconcile:
    def test_recomputes_from_ledger(self, db, alice):
        h = HabitService.create(db, alice.id, {"name": "Run", "category": "fitness"})
        start = date(2024, 1, 1)
        for i, completed in enumerate([True, True, False, True]):
            db.add(CheckIn(habit_id=h.id, user_id=alice.id, date=start + timedelta(days=i),
                           completed=completed))
        db.commit()

        h = HabitService.reconcile(db, alice.id, h.id)
        assert (h.streak, h.longest_streak, h.total_completions) == (1, 2, 3)

    def test_keeps_higher_stored_longest(self, db, alice):
        h = HabitService.create(db, alice.id, {"name": "Run", "category": "fitness"})
        h.streak, h.longest_streak, h.total_completions = 9, 12, 40
        db.commit()

        h = HabitService.reconcile(db, alice.id, h.id)
        assert (h.streak, h.longest_streak, h.total_completions) == (0, 12, 0)
