"""JSON shapes shared by the routers."""

from models.check_in import CheckIn
from models.habit import Habit
from models.user import User


def _iso(value):
    return value.isoformat() if value else None


def habit_out(h: Habit, **extra) -> dict:
    data = {
        "id": h.id,
        "name": h.name,
        "description": h.description,
        "category": h.category.value,
        "frequency": h.frequency.value,
        "is_active": h.is_active,
        "streak": h.streak,
        "longest_streak": h.longest_streak,
        "total_completions": h.total_completions,
        "created_at": _iso(h.created_at),
        "updated_at": _iso(h.updated_at),
    }
    data.update(extra)
    return data


def public_habit_out(h: Habit) -> dict:
    return {
        "id": h.id,
        "name": h.name,
        "category": h.category.value,
        "streak": h.streak,
        "longest_streak": h.longest_streak,
        "total_completions": h.total_completions,
        "created_at": _iso(h.created_at),
    }


def habit_summary(h: Habit) -> dict:
    return {"id": h.id, "name": h.name, "category": h.category.value}


def user_out(u: User) -> dict:
    return {"id": u.id, "username": u.username, "email": u.email}


def check_in_out(c: CheckIn, **extra) -> dict:
    data = {
        "id": c.id,
        "habit_id": c.habit_id,
        "user_id": c.user_id,
        "date": _iso(c.date),
        "completed": c.completed,
        "notes": c.notes,
        "created_at": _iso(c.created_at),
    }
    data.update(extra)
    return data
