"""
User listing and role assignment endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import Pagination, get_db, require_permission
from app.core.responses import paginated_response, success_response
from app.models.user import User
from app.schemas.role import RoleOut
from app.schemas.user import UserDetailOut, UserOut, UserRoleChange, UserRolesAssign
from app.services import user_role_service


router = APIRouter()


def _detail(db: Session, user: User) -> UserDetailOut:
    return UserDetailOut(**user_role_service.serialize_user_detail(db, user))


@router.get("")
async def list_users_endpoint(
    search: Optional[str] = Query(None, description="Match on name or email"),
    role: Optional[str] = Query(None, description="Only users holding this role"),
    pagination: Pagination = Depends(),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("view_users")),
):
    """
    List users in the caller's tenant, paginated.
    """
    users, total = user_role_service.list_users(
        db,
        current_user,
        search=search,
        role=role,
        page=pagination.page,
        per_page=pagination.per_page,
    )
    return paginated_response(
        [UserOut(**user_role_service.serialize_user(u)) for u in users],
        total,
        pagination.page,
        pagination.per_page,
        "Users retrieved successfully",
    )


@router.get("/{user_id}")
async def get_user_endpoint(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("view_users")),
):
    user = user_role_service.get_user(db, user_id, current_user)
    return success_response(_detail(db, user), "User retrieved successfully")


@router.get("/{user_id}/roles")
async def get_user_roles_endpoint(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("view_users")),
):
    roles = user_role_service.get_user_roles(db, user_id, current_user)
    return success_response(
        [RoleOut.model_validate(r) for r in roles],
        "User roles retrieved successfully",
    )


@router.post("/{user_id}/roles")
async def assign_roles_endpoint(
    user_id: int,
    assign_data: UserRolesAssign,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("assign_roles")),
):
    """
    Replace the user's roles with the given set.
    """
    user = user_role_service.assign_roles(db, user_id, assign_data.roles, current_user)
    return success_response(_detail(db, user), "Roles assigned successfully")


@router.post("/{user_id}/roles/add")
async def add_role_endpoint(
    user_id: int,
    change: UserRoleChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("assign_roles")),
):
    user = user_role_service.add_role(db, user_id, change.role, current_user)
    return success_response(_detail(db, user), "Role added successfully")


@router.post("/{user_id}/roles/remove")
async def remove_role_endpoint(
    user_id: int,
    change: UserRoleChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("assign_roles")),
):
    user = user_role_service.remove_role(db, user_id, change.role, current_user)
    return success_response(_detail(db, user), "Role removed successfully")
