# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from models.user import User
from models.habit import Habit, Category, Frequency
from models.check_in import CheckIn
from models.follow import Follow

__all__ = [
    "User",
    "Habit",
    "Category",
    "Frequency",
    "CheckIn",
    "Follow",
]
