"""
Authentication endpoints
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.deps import get_current_user, get_db
from app.core.responses import success_response
from app.core.security import create_access_token, verify_password
from app.models.user import User
from app.schemas.auth import LoginRequest, TokenResponse
from app.schemas.user import UserDetailOut
from app.services.user_role_service import serialize_user_detail

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login")
async def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return JWT token

    Validates email and password, rejects inactive users.
    The response carries the user's roles and effective permissions.
    """
    user = db.query(User).filter(User.email == login_data.email).first()

    if not user or not verify_password(login_data.password, user.password_hash):
        logger.info("Failed login for %s", login_data.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive"
        )

    # JWT sub must be a string
    access_token = create_access_token({"sub": str(user.id), "email": user.email})
    token = TokenResponse(
        access_token=access_token,
        user=UserDetailOut(**serialize_user_detail(db, user)),
    )
    return success_response(token, "Login successful")


@router.get("/me")
async def me(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Current user with roles and effective permissions"""
    return success_response(
        UserDetailOut(**serialize_user_detail(db, current_user)),
        "User retrieved successfully",
    )
