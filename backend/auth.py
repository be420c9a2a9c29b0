from datetime import datetime, timedelta, timezone

from fastapi import Depends, Request, HTTPException, status
from jose import jwt, JWTError
from sqlalchemy.orm import Session
import uuid

from config import JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRY_HOURS
from database import get_db
from models.user import User


def create_token(data: dict) -> str:
    """Create a JWT token with an expiry claim and a unique JTI."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(hours=JWT_EXPIRY_HOURS)
    jti = str(uuid.uuid4())
    to_encode.update({"exp": expire, "jti": jti})
    return jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> dict | None:
    """Decode and verify a JWT token. Returns the payload or None on failure."""
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
        return payload
    except JWTError:
        return None


def _unauthenticated(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(request: Request, db: Session = Depends(get_db)) -> int:
    """
    FastAPI dependency — extracts the Bearer token from the Authorization
    header, verifies it, and returns the user_id of an existing user.
    Raises HTTP 401 if the token is missing or invalid.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise _unauthenticated("Missing or invalid Authorization header")

    token = auth_header.split(" ", 1)[1]
    payload = verify_token(token)
    if payload is None:
        raise _unauthenticated("Invalid or expired token")

    user_id = payload.get("user_id")
    if user_id is None:
        raise _unauthenticated("Token payload missing required claims")

    # Tokens can outlive the account they were issued for
    if db.get(User, user_id) is None:
        raise _unauthenticated("User no longer exists")

    return user_id
