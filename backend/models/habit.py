import enum
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Enum, Index, text
from database import Base


class Category(str, enum.Enum):
    HEALTH = "health"
    FITNESS = "fitness"
    LEARNING = "learning"
    PRODUCTIVITY = "productivity"
    MINDFULNESS = "mindfulness"
    SOCIAL = "social"
    OTHER = "other"


class Frequency(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Habit(Base):
    __tablename__ = "habits"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    name_key = Column(String(100), nullable=False)  # lower-cased name, for per-owner uniqueness
    description = Column(Text, nullable=True)
    category = Column(Enum(Category, native_enum=False, values_callable=_enum_values), nullable=False)
    frequency = Column(
        Enum(Frequency, native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=Frequency.DAILY,
    )
    is_active = Column(Boolean, nullable=False, default=True)
    streak = Column(Integer, nullable=False, default=0)
    longest_streak = Column(Integer, nullable=False, default=0)
    total_completions = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        # Soft-deleted habits release their name
        Index(
            "uq_habit_owner_name_active",
            "user_id",
            "name_key",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
    )
