"""
Role management endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import get_db, require_permission
from app.core.responses import success_response
from app.models.role import Role
from app.models.user import User
from app.schemas.permission import PermissionOut
from app.schemas.role import (
    RoleCreate,
    RoleDetailOut,
    RoleListItem,
    RoleOut,
    RolePermissionsSync,
    RoleUpdate,
)
from app.services import role_service


router = APIRouter()


def _detail(db: Session, role: Role) -> RoleDetailOut:
    return RoleDetailOut(
        **RoleOut.model_validate(role).model_dump(),
        permissions=role.permission_names,
        users_count=role_service.count_users(db, role.id),
    )


@router.get("")
async def list_roles_endpoint(
    search: Optional[str] = Query(None, description="Substring match on role name"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("view_roles")),
):
    """
    List roles ordered by hierarchy level, with permission and user counts.
    """
    entries = role_service.list_roles(db, search=search)
    roles = [
        RoleListItem(
            **RoleOut.model_validate(entry["role"]).model_dump(),
            permissions_count=entry["permissions_count"],
            users_count=entry["users_count"],
        )
        for entry in entries
    ]
    return success_response(roles, "Roles retrieved successfully")


@router.post("", status_code=201)
async def create_role_endpoint(
    role_data: RoleCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("create_roles")),
):
    """
    Create a custom role.
    """
    role = role_service.create_role(db, role_data, current_user.id)
    return success_response(_detail(db, role), "Role created successfully", status_code=201)


@router.get("/{role_id}")
async def get_role_endpoint(
    role_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("view_roles")),
):
    role = role_service.get_role_or_404(db, role_id)
    return success_response(_detail(db, role), "Role retrieved successfully")


@router.put("/{role_id}")
async def update_role_endpoint(
    role_id: int,
    role_data: RoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("edit_roles")),
):
    """
    Update a role. System roles accept description and icon changes only.
    """
    role = role_service.update_role(db, role_id, role_data, current_user.id)
    return success_response(_detail(db, role), "Role updated successfully")


@router.delete("/{role_id}")
async def delete_role_endpoint(
    role_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("delete_roles")),
):
    role_service.delete_role(db, role_id, current_user.id)
    return success_response(None, "Role deleted successfully")


@router.get("/{role_id}/permissions")
async def get_role_permissions_endpoint(
    role_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("view_roles")),
):
    permissions = role_service.get_role_permissions(db, role_id)
    return success_response(
        [PermissionOut.model_validate(p) for p in permissions],
        "Role permissions retrieved successfully",
    )


@router.post("/{role_id}/permissions/sync")
async def sync_role_permissions_endpoint(
    role_id: int,
    sync_data: RolePermissionsSync,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("edit_roles")),
):
    """
    Replace the role's permission set. Unknown names reject the whole request.
    """
    role = role_service.sync_permissions(db, role_id, sync_data.permissions, current_user.id)
    return success_response(_detail(db, role), "Permissions synced successfully")
