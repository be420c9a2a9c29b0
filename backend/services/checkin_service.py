"""
checkin_service.py — Check-in ledger
At most one check-in per habit per calendar day. The (habit_id, date) unique
constraint is the gate: the row is inserted first and a conflicting insert
fails in the database, so concurrent requests cannot both succeed. The
ledger row and the habit's counter update are committed together.
"""

import logging
import math
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import CHECKINS_PAGE_LIMIT, RECENT_LIMIT
from errors import AlreadyCheckedIn, NotFound, ValidationError
from models.check_in import CheckIn
from models.habit import Habit
from services import streak_engine
from services.common import clean_text, positive_int, today_utc
from services.habit_service import HabitService

logger = logging.getLogger(__name__)

NOTES_MAX = 500
MAX_LIMIT = 100


class CheckInService:
    @staticmethod
    def create(
        db: Session,
        user_id: int,
        habit_id: int,
        completed: bool = True,
        notes: str | None = None,
        today: date | None = None,
    ) -> CheckIn:
        """Record today's check-in and move the habit's streak counters."""
        if not isinstance(completed, bool):
            raise ValidationError("completed must be a boolean", field="completed")
        notes = clean_text(notes, "notes", NOTES_MAX)

        habit = HabitService.get_owned(db, user_id, habit_id, for_update=True)
        check_in = CheckIn(
            habit_id=habit.id,
            user_id=habit.user_id,
            date=today or today_utc(),
            completed=completed,
            notes=notes,
        )

        try:
            db.add(check_in)
            db.flush()
        except IntegrityError:
            db.rollback()
            logger.warning("Duplicate check-in rejected for habit %s", habit_id)
            raise AlreadyCheckedIn()
        except Exception:
            db.rollback()
            raise

        try:
            counters = streak_engine.apply(streak_engine.read(habit), completed)
            streak_engine.write(habit, counters)
            db.commit()
        except IntegrityError:
            # Flush passed but a concurrent insert committed first
            db.rollback()
            raise AlreadyCheckedIn()
        except Exception:
            db.rollback()
            raise

        db.refresh(check_in)
        logger.info(
            "Check-in %s recorded for habit %s (completed=%s, streak=%s)",
            check_in.id, habit.id, completed, habit.streak,
        )
        return check_in

    @staticmethod
    def list_for_habit(
        db: Session, user_id: int, habit_id: int, page: int = 1, limit: int = CHECKINS_PAGE_LIMIT
    ) -> dict:
        """One page of a habit's check-ins, newest first."""
        page = positive_int(page, "page")
        limit = positive_int(limit, "limit", maximum=MAX_LIMIT)
        habit = HabitService.get_owned(db, user_id, habit_id)

        query = db.query(CheckIn).filter(CheckIn.habit_id == habit.id)
        total = query.count()
        check_ins = (
            query.order_by(CheckIn.date.desc(), CheckIn.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return {
            "check_ins": check_ins,
            "pagination": {
                "current": page,
                "pages": math.ceil(total / limit),
                "total": total,
            },
        }

    @staticmethod
    def recent(db: Session, user_id: int, limit: int = RECENT_LIMIT) -> list[tuple[CheckIn, Habit]]:
        """Latest check-ins across the owner's active habits, paired with their habit."""
        limit = positive_int(limit, "limit", maximum=MAX_LIMIT)
        return (
            db.query(CheckIn, Habit)
            .join(Habit, CheckIn.habit_id == Habit.id)
            .filter(CheckIn.user_id == user_id, Habit.is_active.is_(True))
            .order_by(CheckIn.date.desc(), CheckIn.created_at.desc(), CheckIn.id.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def delete(db: Session, user_id: int, check_in_id: int) -> Habit:
        """Remove a check-in, reversing its streak effect if it was completed.

        The reversal always hits the live counters, even for a check-in from an
        earlier day; run `HabitService.reconcile` for an exact recount.
        """
        check_in = db.query(CheckIn).filter_by(id=check_in_id, user_id=user_id).first()
        if not check_in:
            raise NotFound("Check-in not found", field="check_in_id")

        try:
            # Archived habits keep their counters; their check-ins are frozen
            habit = HabitService.get_owned(db, user_id, check_in.habit_id, for_update=True)
        except NotFound:
            raise NotFound("Check-in not found", field="check_in_id") from None

        try:
            if check_in.completed:
                streak_engine.write(habit, streak_engine.reverse(streak_engine.read(habit)))
            db.delete(check_in)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info("Check-in %s deleted for user %s", check_in_id, user_id)
        db.refresh(habit)
        return habit
