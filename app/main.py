"""
HRMS access-control API
"""
import logging

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError

from app.api.router import api_router
from app.core.config import settings
from app.core.errors import (
    AppError,
    app_error_handler,
    generic_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from app.core.logging import setup_logging
from app.db.init_db import bootstrap_initial_admin, seed_access_control
from app.db.session import SessionLocal, create_sqlite_schema

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="HRMS Access Control",
    description="Multi-tenant role and permission management for the HRMS",
    version=settings.VERSION or "1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=settings.ALLOWED_ORIGINS != "*",
    allow_methods=["*"],
    allow_headers=["*"],
)

for exc_class, handler in (
    (AppError, app_error_handler),
    (HTTPException, http_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (Exception, generic_exception_handler),
):
    app.add_exception_handler(exc_class, handler)

app.include_router(api_router, prefix=settings.API_PREFIX)


def _seed_access_control() -> None:
    create_sqlite_schema()
    db = SessionLocal()
    try:
        seed_access_control(db)
        bootstrap_initial_admin(
            db,
            email=settings.INITIAL_ADMIN_EMAIL,
            password=settings.INITIAL_ADMIN_PASSWORD,
            name=settings.INITIAL_ADMIN_NAME,
        )
    except OperationalError as e:
        message = str(e).lower()
        if "no such table" not in message and "does not exist" not in message:
            raise
        logger.warning("Access-control tables are missing; run 'alembic upgrade head' before seeding")
    finally:
        db.close()


@app.on_event("startup")
def on_startup() -> None:
    """
    Log the database target and, unless SEED_ON_STARTUP=false, apply the
    role/permission catalog and make sure an admin exists (both idempotent).
    """
    logger.info(
        "Starting %s (env=%s, db=%s)",
        app.title,
        settings.APP_ENV,
        make_url(settings.DATABASE_URL).render_as_string(hide_password=True),
    )
    if settings.SEED_ON_STARTUP:
        _seed_access_control()
