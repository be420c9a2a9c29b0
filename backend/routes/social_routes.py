import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional

from auth import get_current_user
from config import FEED_LIMIT
from database import get_db
from errors import HabitTrackerError
from routes.serializers import check_in_out, habit_summary, public_habit_out, user_out
from services.social_service import SocialService
from services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["Social"])
logger = logging.getLogger(__name__)

@router.get("/search")
def search_users(q: Optional[str] = None, db: Session = Depends(get_db), current_user_id: int = Depends(get_current_user)):
    """Find users to follow by username or email."""
    try:
        return [user_out(u) for u in UserService.search(db, current_user_id, q)]
    except HabitTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception:
        logger.exception("Search users error")
        raise HTTPException(status_code=500, detail="Server error")

@router.post("/follow/{user_id}")
def follow_user(user_id: int, db: Session = Depends(get_db), current_user_id: int = Depends(get_current_user)):
    try:
        SocialService.follow(db, current_user_id, user_id)
        return {"message": "Successfully followed user"}
    except HabitTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception:
        logger.exception("Follow user error")
        raise HTTPException(status_code=500, detail="Server error")

@router.delete("/follow/{user_id}")
def unfollow_user(user_id: int, db: Session = Depends(get_db), current_user_id: int = Depends(get_current_user)):
    try:
        SocialService.unfollow(db, current_user_id, user_id)
        return {"message": "Successfully unfollowed user"}
    except HabitTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception:
        logger.exception("Unfollow user error")
        raise HTTPException(status_code=500, detail="Server error")

@router.get("/following")
def list_following(db: Session = Depends(get_db), current_user_id: int = Depends(get_current_user)):
    try:
        return [user_out(u) for u in SocialService.following(db, current_user_id)]
    except Exception:
        logger.exception("Get following error")
        raise HTTPException(status_code=500, detail="Server error")

@router.get("/followers")
def list_followers(db: Session = Depends(get_db), current_user_id: int = Depends(get_current_user)):
    try:
        return [user_out(u) for u in SocialService.followers(db, current_user_id)]
    except Exception:
        logger.exception("Get followers error")
        raise HTTPException(status_code=500, detail="Server error")

@router.get("/feed")
def get_feed(limit: int = FEED_LIMIT, db: Session = Depends(get_db), current_user_id: int = Depends(get_current_user)):
    """Recent check-ins from followed users."""
    try:
        rows = SocialService.feed(db, current_user_id, limit=limit)
        return [
            check_in_out(c, habit=habit_summary(h), user={"id": u.id, "username": u.username})
            for c, h, u in rows
        ]
    except HabitTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception:
        logger.exception("Get feed error")
        raise HTTPException(status_code=500, detail="Server error")

@router.get("/{user_id}/habits")
def followed_user_habits(user_id: int, db: Session = Depends(get_db), current_user_id: int = Depends(get_current_user)):
    try:
        habits = SocialService.followed_user_habits(db, current_user_id, user_id)
        return [public_habit_out(h) for h in habits]
    except HabitTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception:
        logger.exception("Get user habits error")
        raise HTTPException(status_code=500, detail="Server error")
