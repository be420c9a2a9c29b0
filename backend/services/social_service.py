"""
social_service.py — Follow graph & activity feed
A single Follow row holds both directions of the relation, so following and
followers can never disagree. The feed reads followed users' check-ins.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import FEED_LIMIT
from errors import AlreadyFollowing, FollowRequired, NotFollowing, SelfFollow
from models.check_in import CheckIn
from models.follow import Follow
from models.habit import Habit
from models.user import User
from services.common import positive_int
from services.user_service import UserService

logger = logging.getLogger(__name__)

MAX_FEED_LIMIT = 100


class SocialService:
    @staticmethod
    def is_following(db: Session, user_id: int, target_id: int) -> bool:
        return (
            db.query(Follow.id).filter_by(follower_id=user_id, following_id=target_id).first()
            is not None
        )

    @staticmethod
    def follow(db: Session, user_id: int, target_id: int) -> Follow:
        if target_id == user_id:
            raise SelfFollow()
        UserService.get(db, target_id)
        if SocialService.is_following(db, user_id, target_id):
            raise AlreadyFollowing()

        follow = Follow(follower_id=user_id, following_id=target_id)
        try:
            db.add(follow)
            db.commit()
        except IntegrityError:
            db.rollback()
            raise AlreadyFollowing()
        except Exception:
            db.rollback()
            raise
        db.refresh(follow)
        logger.info("User %s now follows user %s", user_id, target_id)
        return follow

    @staticmethod
    def unfollow(db: Session, user_id: int, target_id: int) -> None:
        follow = db.query(Follow).filter_by(follower_id=user_id, following_id=target_id).first()
        if not follow:
            raise NotFollowing()
        try:
            db.delete(follow)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info("User %s unfollowed user %s", user_id, target_id)

    @staticmethod
    def following(db: Session, user_id: int) -> list[User]:
        return (
            db.query(User)
            .join(Follow, Follow.following_id == User.id)
            .filter(Follow.follower_id == user_id)
            .order_by(Follow.created_at.asc(), Follow.id.asc())
            .all()
        )

    @staticmethod
    def followers(db: Session, user_id: int) -> list[User]:
        return (
            db.query(User)
            .join(Follow, Follow.follower_id == User.id)
            .filter(Follow.following_id == user_id)
            .order_by(Follow.created_at.asc(), Follow.id.asc())
            .all()
        )

    @staticmethod
    def feed(db: Session, user_id: int, limit: int = FEED_LIMIT) -> list[tuple[CheckIn, Habit, User]]:
        """Newest check-ins by followed users, with their habit and author."""
        limit = positive_int(limit, "limit", maximum=MAX_FEED_LIMIT)
        followed = select(Follow.following_id).where(Follow.follower_id == user_id)
        return (
            db.query(CheckIn, Habit, User)
            .join(Habit, CheckIn.habit_id == Habit.id)
            .join(User, CheckIn.user_id == User.id)
            .filter(CheckIn.user_id.in_(followed), Habit.is_active.is_(True))
            .order_by(CheckIn.date.desc(), CheckIn.created_at.desc(), CheckIn.id.desc())
            .limit(limit)
            .all()
        )

    @staticmethod
    def followed_user_habits(db: Session, user_id: int, target_id: int) -> list[Habit]:
        """Active habits of a user the caller follows, best streak first."""
        if not SocialService.is_following(db, user_id, target_id):
            raise FollowRequired()
        return (
            db.query(Habit)
            .filter_by(user_id=target_id, is_active=True)
            .order_by(Habit.streak.desc(), Habit.id.asc())
            .all()
        )
