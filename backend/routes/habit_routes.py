import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session
from typing import Optional

from auth import get_current_user
from database import get_db
from errors import HabitTrackerError
from routes.serializers import habit_out
from services.habit_service import HabitService
from services.stats_service import StatsService

router = APIRouter(prefix="/api/v1/habits", tags=["Habits"])
logger = logging.getLogger(__name__)

class HabitCreate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    frequency: Optional[str] = None
    description: Optional[str] = None

class HabitUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    frequency: Optional[str] = None
    description: Optional[str] = None

@router.get("")
def list_habits(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    try:
        rows = HabitService.list_for_owner(db, user_id)
        return [habit_out(r["habit"], checked_in_today=r["checked_in_today"]) for r in rows]
    except HabitTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception:
        logger.exception("Get habits error")
        raise HTTPException(status_code=500, detail="Server error")

@router.post("", status_code=201)
def create_habit(habit_data: HabitCreate, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    try:
        habit = HabitService.create(db, user_id, habit_data.dict(exclude_unset=True))
        return habit_out(habit, checked_in_today=False)
    except HabitTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception:
        logger.exception("Create habit error")
        raise HTTPException(status_code=500, detail="Server error")

@router.get("/stats")
def habit_stats(db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    try:
        return StatsService.get(db, user_id)
    except Exception:
        logger.exception("Get stats error")
        raise HTTPException(status_code=500, detail="Server error")

@router.put("/{habit_id}")
def update_habit(habit_id: int, habit_data: HabitUpdate, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    try:
        # exclude_unset keeps "absent" apart from an explicit null/empty value
        habit = HabitService.update(db, user_id, habit_id, habit_data.dict(exclude_unset=True))
        return habit_out(habit)
    except HabitTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception:
        logger.exception("Update habit error")
        raise HTTPException(status_code=500, detail="Server error")

@router.delete("/{habit_id}")
def delete_habit(habit_id: int, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    try:
        HabitService.delete(db, user_id, habit_id)
        return {"message": "Habit deleted successfully"}
    except HabitTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception:
        logger.exception("Delete habit error")
        raise HTTPException(status_code=500, detail="Server error")

@router.post("/{habit_id}/reconcile")
def reconcile_habit(habit_id: int, db: Session = Depends(get_db), user_id: int = Depends(get_current_user)):
    """Recount streak counters from the check-in history."""
    try:
        habit = HabitService.reconcile(db, user_id, habit_id)
        return habit_out(habit)
    except HabitTrackerError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception:
        logger.exception("Reconcile habit error")
        raise HTTPException(status_code=500, detail="Server error")
