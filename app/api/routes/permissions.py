"""
Permission registry endpoints (read-only)
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import Pagination, get_db, require_permission
from app.core.errors import NotFoundError
from app.core.responses import paginated_response, success_response
from app.models.user import User
from app.schemas.permission import PermissionOut, ResourceGroupOut
from app.services import permission_service


router = APIRouter()


@router.get("")
async def list_permissions_endpoint(
    module: Optional[str] = Query(None, description="Filter by resource slug"),
    search: Optional[str] = Query(None, description="Substring match on permission name"),
    pagination: Pagination = Depends(),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("view_roles")),
):
    """
    List permissions, paginated.
    """
    items, total = permission_service.list_permissions(
        db,
        module=module,
        search=search,
        page=pagination.page,
        per_page=pagination.per_page,
    )
    return paginated_response(
        [PermissionOut.model_validate(p) for p in items],
        total,
        pagination.page,
        pagination.per_page,
        "Permissions retrieved successfully",
    )


@router.get("/grouped")
async def grouped_permissions_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("view_roles")),
):
    """
    Permissions grouped by resource, for the role editor.
    """
    groups = [
        ResourceGroupOut(
            **{k: v for k, v in group.items() if k != "permissions"},
            permissions=[PermissionOut.model_validate(p) for p in group["permissions"]],
        )
        for group in permission_service.group_by_resource(db)
    ]
    return success_response(groups, "Permissions retrieved successfully")


@router.get("/{permission_id}")
async def get_permission_endpoint(
    permission_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("view_roles")),
):
    permission = permission_service.get_permission(db, permission_id)
    if not permission:
        raise NotFoundError(f"Permission with id {permission_id} not found")
    return success_response(PermissionOut.model_validate(permission), "Permission retrieved successfully")
