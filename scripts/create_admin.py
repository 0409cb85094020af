"""
Admin account script

Creates an admin user, or promotes and re-keys an existing one.

Run from project root: python scripts/create_admin.py USERNAME EMAIL
The password is read from ADMIN_PASSWORD or prompted for.
"""

import argparse
import getpass
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from auth import get_password_hash
from database import SessionLocal
from models import UserDB


def create_admin(db, username: str, email: str, password: str) -> UserDB:
    user = db.query(UserDB).filter(UserDB.username == username).first()
    if user is None:
        user = UserDB(username=username, email=email)
        db.add(user)
    user.hashed_password = get_password_hash(password)
    user.verified = True
    user.role = "admin"
    db.commit()
    db.refresh(user)
    return user


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create or promote an admin user")
    parser.add_argument("username")
    parser.add_argument("email")
    args = parser.parse_args(argv)

    password = os.getenv("ADMIN_PASSWORD") or getpass.getpass("Password: ")
    if len(password.encode("utf-8")) > 72:
        print("Password must not exceed 72 bytes.")
        return 1

    db = SessionLocal()
    try:
        user = create_admin(db, args.username, args.email, password)
    finally:
        db.close()

    print(f"Admin '{user.username}' is ready")
    return 0


if __name__ == "__main__":
    sys.exit(main())
