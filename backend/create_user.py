"""
Provision a user account and print a bearer token for it.

    python create_user.py alice alice@example.com
    python create_user.py --list
"""
import sys

from database import SessionLocal, init_db
from auth import create_token
from errors import HabitTrackerError
from models.user import User
from services.user_service import UserService


def main(argv: list[str]) -> int:
    init_db()
    db = SessionLocal()
    try:
        if argv[:1] == ["--list"]:
            users = db.query(User).order_by(User.id).all()
            print(f"Total users: {len(users)}")
            for u in users:
                print(f"ID: {u.id}, Username: {u.username}, Email: {u.email}")
            return 0

        if len(argv) != 2:
            print(__doc__)
            return 2

        try:
            user = UserService.create(db, argv[0], argv[1])
        except HabitTrackerError as e:
            print(f"Could not create user: {e.message}")
            return 1

        token = create_token({"user_id": user.id, "username": user.username})
        print(f"Created user ID {user.id} ({user.username})")
        print(f"Token: {token}")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
