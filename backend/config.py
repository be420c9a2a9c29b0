import os
from dotenv import load_dotenv

load_dotenv()

# --- JWT Configuration ---
JWT_SECRET = os.getenv("JWT_SECRET", "change-this-secret-key")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRY_HOURS = int(os.getenv("JWT_EXPIRY_HOURS", "720"))  # 30 days

# --- Database ---
# Default to local SQLite, but prefer environment variable
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/streakly.db")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Query limits ---
FEED_LIMIT = int(os.getenv("FEED_LIMIT", "20"))
RECENT_LIMIT = int(os.getenv("RECENT_LIMIT", "10"))
CHECKINS_PAGE_LIMIT = int(os.getenv("CHECKINS_PAGE_LIMIT", "30"))
SEARCH_LIMIT = int(os.getenv("SEARCH_LIMIT", "10"))
