"""
Pytest configuration and fixtures
"""
import os

# Settings are read at import time; give the test run its own values
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_hrms.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-the-test-suite-only")
os.environ.setdefault("APP_ENV", "local")
os.environ["SEED_ON_STARTUP"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.engine import Engine

from app.main import app
from app.db.base import Base
from app.db.init_db import seed_access_control
from app.core.deps import get_db
from app.core.security import create_access_token, hash_password
from app.models import Company, Organization, Role, User  # noqa: F401  registers models


# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# Enable foreign keys for SQLite
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Test client fixture with database override"""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded(db):
    """Database with the permission / role catalog applied"""
    seed_access_control(db)
    return db


@pytest.fixture
def org_a(db):
    org = Organization(name="Acme Holdings")
    db.add(org)
    db.commit()
    db.refresh(org)
    return org


@pytest.fixture
def org_b(db):
    org = Organization(name="Globex Group")
    db.add(org)
    db.commit()
    db.refresh(org)
    return org


@pytest.fixture
def company_a1(db, org_a):
    company = Company(name="Acme Retail", org_id=org_a.id)
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


@pytest.fixture
def company_a2(db, org_a):
    company = Company(name="Acme Logistics", org_id=org_a.id)
    db.add(company)
    db.commit()
    db.refresh(company)
    return company


@pytest.fixture
def make_user(db):
    """Factory: make_user(email, roles=[...], org_id=None, company_id=None, is_active=True)"""
    def _make_user(email, roles=(), org_id=None, company_id=None, is_active=True, password="password123"):
        user = User(
            name=email.split("@")[0].title(),
            email=email,
            password_hash=hash_password(password),
            is_active=is_active,
            org_id=org_id,
            company_id=company_id,
        )
        user.roles = [db.query(Role).filter(Role.name == name).one() for name in roles]
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


def _bearer(user):
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    """auth_headers(user) -> Authorization header for that user"""
    return _bearer


@pytest.fixture
def admin_user(seeded, make_user):
    return make_user("admin@example.com", roles=["admin"])


@pytest.fixture
def admin_headers(admin_user):
    return _bearer(admin_user)
