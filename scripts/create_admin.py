"""
Create the initial admin user if nobody holds the admin role yet.
Requires the access catalog to be seeded (scripts/seed_access.py).

Usage:
  python scripts/create_admin.py                         # uses INITIAL_ADMIN_* settings
  python scripts/create_admin.py admin@acme.com 'S3cret-pass' "Jane Admin"
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.core.config import settings
from app.core.security import validate_password
from app.db.init_db import bootstrap_initial_admin
from app.db.session import SessionLocal


def main():
    email = sys.argv[1] if len(sys.argv) > 1 else settings.INITIAL_ADMIN_EMAIL
    password = sys.argv[2] if len(sys.argv) > 2 else settings.INITIAL_ADMIN_PASSWORD
    name = sys.argv[3] if len(sys.argv) > 3 else settings.INITIAL_ADMIN_NAME

    try:
        password = validate_password(password)
    except ValueError as e:
        print(f"Invalid password: {e}")
        sys.exit(1)

    db = SessionLocal()
    try:
        user = bootstrap_initial_admin(db, email=email, password=password, name=name)
        if user is None:
            print("An admin user already exists, nothing to do")
        else:
            print(f"Admin user created: {user.email}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
