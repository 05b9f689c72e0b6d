"""
FastAPI dependencies: database session, current user, permission guard, paging
"""
from typing import Generator, Optional

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import InvalidTokenError, decode_token
from app.db.session import SessionLocal
from app.models.user import User
from app.services import authorization_service

bearer_scheme = HTTPBearer()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _user_id_from_token(token: str) -> int:
    try:
        claims = decode_token(token)
    except InvalidTokenError:
        raise _unauthorized("Invalid authentication credentials")
    # sub is issued as a string
    subject = claims.get("sub")
    if subject is None or not str(subject).isdigit():
        raise _unauthorized("Invalid authentication credentials")
    return int(subject)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to an active user"""
    user = db.get(User, _user_id_from_token(credentials.credentials))
    if user is None:
        raise _unauthorized("User not found")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")
    return user


def require_permission(permission: str):
    """
    Guard an endpoint with a permission name

        @router.post("/roles")
        async def create(user: User = Depends(require_permission("create_roles"))):
            ...
    """
    def permission_checker(
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
    ) -> User:
        authorization_service.ensure_authorized(db, current_user, permission)
        return current_user
    return permission_checker


class Pagination:
    """page / per_page query parameters, clamped to MAX_PER_PAGE"""

    def __init__(
        self,
        page: int = Query(1, ge=1, description="Page number"),
        per_page: Optional[int] = Query(None, ge=1, description="Items per page"),
    ):
        self.page = page
        self.per_page = min(per_page or settings.DEFAULT_PER_PAGE, settings.MAX_PER_PAGE)
