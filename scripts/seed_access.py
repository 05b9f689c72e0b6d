"""
Apply the permission / role catalog to the database. Safe to re-run: rows
are upserted by name, nothing is deleted and custom roles are untouched.
Run from the repository root with .env loaded, after `alembic upgrade head`.

Usage:
  python scripts/seed_access.py
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.core.logging import setup_logging
from app.db.init_db import seed_access_control
from app.db.session import SessionLocal


def main():
    setup_logging()
    db = SessionLocal()
    try:
        summary = seed_access_control(db)
        print(
            f"Seed complete: {summary['resources_created']} resources, "
            f"{summary['permissions_created']} permissions, "
            f"{summary['roles_created']} roles created"
        )
    finally:
        db.close()


if __name__ == "__main__":
    main()
