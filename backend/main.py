import os
import sys

# Ensure this directory is in the path when launched as a script
current_dir = os.path.dirname(os.path.abspath(__file__))
if current_dir not in sys.path:
    sys.path.append(current_dir)

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from database import init_db

from routes.habit_routes import router as habit_router
from routes.checkin_routes import router as checkin_router
from routes.social_routes import router as social_router

logger = logging.getLogger(__name__)

# Initialize db configuration
try:
    init_db()
except Exception as e:
    logger.warning(f"Database init skipped or failed: {e}")

app = FastAPI(title="Streakly Habit Tracker")

@app.get("/api/v1/health-check")
def health():
    return {"status": "ok", "message": "Backend is alive!"}

# Configure CORS for the web client
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(habit_router)
app.include_router(checkin_router)
app.include_router(social_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
