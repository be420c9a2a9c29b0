"""
user_service.py — User directory
Lookup, creation and substring search over user accounts. Accounts are
provisioned by the identity provider; `create` exists for seeding.
"""

import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import SEARCH_LIMIT
from errors import Conflict, NotFound, ValidationError
from models.user import User
from services.common import clean_text

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class UserService:
    @staticmethod
    def create(db: Session, username: str, email: str) -> User:
        username = clean_text(username, "username", 50, required=True)
        email = clean_text(email, "email", 255, required=True)
        user = User(username=username, email=email.lower())
        try:
            db.add(user)
            db.commit()
        except IntegrityError:
            db.rollback()
            raise Conflict("Username or email already registered", field="username")
        except Exception:
            db.rollback()
            raise
        db.refresh(user)
        logger.info("User %s created", user.id)
        return user

    @staticmethod
    def get(db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if not user:
            raise NotFound("User not found", field="user_id")
        return user

    @staticmethod
    def search(db: Session, user_id: int, query: str | None, limit: int = SEARCH_LIMIT) -> list[User]:
        """Case-insensitive substring match on username or email, excluding the caller."""
        q = (query or "").strip()
        if len(q) < MIN_QUERY_LENGTH:
            raise ValidationError(
                f"Search query must be at least {MIN_QUERY_LENGTH} characters", field="q"
            )

        pattern = f"%{_escape_like(q)}%"
        return (
            db.query(User)
            .filter(
                or_(
                    User.username.ilike(pattern, escape="\\"),
                    User.email.ilike(pattern, escape="\\"),
                ),
                User.id != user_id,
            )
            .order_by(User.username.asc())
            .limit(limit)
            .all()
        )
