import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, StrictBool
from sqlalchemy.orm import Session
from typing import Optional

from auth import get_current_user
from config import CHECKINS_PAGE_LIMIT, RECENT_LIMIT
from database import get_db
from errors import HabitTrackerError
from routes.serializers import check_in_out, habit_out, habit_summary
from services.checkin_service import CheckInService

router = APIRouter(prefix="/api/v1/checkins", tags=["Check-ins"])
logger = logging.getLogger(__name__)

class CheckInCreate(BaseModel):
    habit_id: int
    completed: StrictBool = True
    notes: Optional[str] = None

@router.post("", status_code=201)
def create_check_in(body: CheckInCreate, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    try:
        check_in = CheckInService.create(db, user_id, body.habit_id, completed=body.completed, notes=body.notes)
        return check_in_out(check_in, habit=habit_out(check_in.habit))
    except HabitTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception:
        logger.exception("Create check-in error")
        raise HTTPException(status_code=500, detail="Server error")

@router.get("/habit/{habit_id}")
def list_check_ins(
    habit_id: int,
    page: int = 1,
    limit: int = CHECKINS_PAGE_LIMIT,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user),
):
    try:
        result = CheckInService.list_for_habit(db, user_id, habit_id, page=page, limit=limit)
        return {
            "check_ins": [check_in_out(c) for c in result["check_ins"]],
            "pagination": result["pagination"],
        }
    except HabitTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception:
        logger.exception("Get check-ins error")
        raise HTTPException(status_code=500, detail="Server error")

@router.get("/recent")
def recent_check_ins(limit: int = RECENT_LIMIT, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    try:
        rows = CheckInService.recent(db, user_id, limit=limit)
        return [check_in_out(c, habit=habit_summary(h)) for c, h in rows]
    except HabitTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception:
        logger.exception("Get recent check-ins error")
        raise HTTPException(status_code=500, detail="Server error")

@router.delete("/{check_in_id}")
def delete_check_in(check_in_id: int, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    try:
        habit = CheckInService.delete(db, user_id, check_in_id)
        return {
            "message": "Check-in deleted successfully",
            "habit": habit_out(habit),
        }
    except HabitTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception:
        logger.exception("Delete check-in error")
        raise HTTPException(status_code=500, detail="Server error")
