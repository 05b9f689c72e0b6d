"""
Engine and session factory
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings

# SQLite connections are shared across FastAPI's threadpool
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args={"check_same_thread": False} if settings.is_sqlite else {},
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_sqlite_schema() -> None:
    """Create all tables directly for SQLite deployments that skip Alembic"""
    if not settings.is_sqlite:
        return
    import app.models  # noqa: F401  registers every model on Base.metadata
    from app.db.base import Base

    Base.metadata.create_all(bind=engine)
