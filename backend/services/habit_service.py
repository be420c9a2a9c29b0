"""
habit_service.py — Habit store
Owns habit records and their streak counters. Every lookup that acts on a
habit goes through `get_owned`, so a habit that is missing, archived, or
belongs to someone else looks the same to the caller.
"""

import logging
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errors import DuplicateName, NotFound, ValidationError
from models.check_in import CheckIn
from models.habit import Habit, Category, Frequency
from services import streak_engine
from services.common import clean_text, parse_choice, today_utc

logger = logging.getLogger(__name__)

NAME_MAX = 100
DESCRIPTION_MAX = 500


class HabitService:
    @staticmethod
    def get_owned(db: Session, user_id: int, habit_id: int, for_update: bool = False) -> Habit:
        query = db.query(Habit).filter_by(id=habit_id, user_id=user_id, is_active=True)
        if for_update:
            # Row lock on backends that support it; counters are read-modify-write
            query = query.with_for_update()
        habit = query.first()
        if not habit:
            raise NotFound("Habit not found", field="habit_id")
        return habit

    @staticmethod
    def _ensure_unique_name(db: Session, user_id: int, name: str, exclude_id: int | None = None):
        query = db.query(Habit.id).filter(
            Habit.user_id == user_id,
            Habit.name_key == name.lower(),
            Habit.is_active.is_(True),
        )
        if exclude_id is not None:
            query = query.filter(Habit.id != exclude_id)
        if query.first():
            raise DuplicateName()

    @staticmethod
    def create(db: Session, user_id: int, data: dict) -> Habit:
        name = clean_text(data.get("name"), "name", NAME_MAX, required=True)
        if data.get("category") is None:
            raise ValidationError("category is required", field="category")
        category = parse_choice(data["category"], Category, "category")
        frequency = Frequency.DAILY
        if data.get("frequency") is not None:
            frequency = parse_choice(data["frequency"], Frequency, "frequency")
        description = clean_text(data.get("description"), "description", DESCRIPTION_MAX)

        HabitService._ensure_unique_name(db, user_id, name)

        habit = Habit(
            user_id=user_id,
            name=name,
            name_key=name.lower(),
            description=description,
            category=category,
            frequency=frequency,
        )
        try:
            db.add(habit)
            db.commit()
        except IntegrityError:
            # Lost a race against a concurrent create with the same name
            db.rollback()
            raise DuplicateName()
        except Exception:
            db.rollback()
            raise
        db.refresh(habit)
        logger.info("Habit %s created for user %s", habit.id, user_id)
        return habit

    @staticmethod
    def update(db: Session, user_id: int, habit_id: int, data: dict) -> Habit:
        """Apply only the fields present in `data`; an empty description clears it."""
        habit = HabitService.get_owned(db, user_id, habit_id)

        # Validate everything before touching the row
        changes = {}
        if "name" in data:
            name = clean_text(data["name"], "name", NAME_MAX, required=True)
            if name.lower() != habit.name_key:
                HabitService._ensure_unique_name(db, user_id, name, exclude_id=habit.id)
            changes["name"] = name
            changes["name_key"] = name.lower()
        if "description" in data:
            changes["description"] = clean_text(data["description"], "description", DESCRIPTION_MAX)
        for field, enum_cls in (("category", Category), ("frequency", Frequency)):
            if field in data:
                if data[field] is None:
                    raise ValidationError(f"{field} cannot be empty", field=field)
                changes[field] = parse_choice(data[field], enum_cls, field)

        for k, v in changes.items():
            setattr(habit, k, v)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise DuplicateName()
        except Exception:
            db.rollback()
            raise
        db.refresh(habit)
        return habit

    @staticmethod
    def delete(db: Session, user_id: int, habit_id: int) -> None:
        """Soft delete. Counters are kept but the habit drops out of every listing."""
        habit = HabitService.get_owned(db, user_id, habit_id)
        habit.is_active = False
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info("Habit %s archived for user %s", habit_id, user_id)

    @staticmethod
    def list_for_owner(db: Session, user_id: int, today: date | None = None) -> list[dict]:
        """Active habits, newest first, each flagged with today's check-in status."""
        d = today or today_utc()
        habits = (
            db.query(Habit)
            .filter_by(user_id=user_id, is_active=True)
            .order_by(Habit.created_at.desc(), Habit.id.desc())
            .all()
        )
        checked = {
            habit_id
            for (habit_id,) in db.query(CheckIn.habit_id).filter(
                CheckIn.user_id == user_id, CheckIn.date == d
            )
        }
        return [{"habit": h, "checked_in_today": h.id in checked} for h in habits]

    @staticmethod
    def reconcile(db: Session, user_id: int, habit_id: int) -> Habit:
        """Recompute the counters by replaying the habit's ledger oldest first."""
        habit = HabitService.get_owned(db, user_id, habit_id)
        flags = [
            completed
            for (completed,) in db.query(CheckIn.completed)
            .filter(CheckIn.habit_id == habit.id)
            .order_by(CheckIn.date.asc(), CheckIn.id.asc())
        ]
        before = streak_engine.read(habit)
        replayed = streak_engine.replay(flags)
        repaired = replayed._replace(
            longest_streak=max(before.longest_streak, replayed.longest_streak)
        )
        streak_engine.write(habit, repaired)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        db.refresh(habit)
        if repaired != before:
            logger.warning("Habit %s counters drifted: %s -> %s", habit.id, before, repaired)
        return habit
