"""
stats_service.py — Habit statistics
Summary numbers over a user's active habits, recomputed on every call.
"""

import math

from sqlalchemy.orm import Session

from models.habit import Habit


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class StatsService:

    @staticmethod
    def get(db: Session, user_id: int) -> dict:
        habits = db.query(Habit).filter_by(user_id=user_id, is_active=True).all()

        total_habits = len(habits)
        total_streak = sum(h.streak for h in habits)
        return {
            "total_habits": total_habits,
            "total_streak": total_streak,
            "average_streak": _round_half_up(total_streak / total_habits) if total_habits else 0,
            "longest_streak": max([h.longest_streak for h in habits] + [0]),
        }
