"""
Resource (feature group) endpoints (read-only)
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import get_db, require_permission
from app.core.errors import NotFoundError
from app.core.responses import success_response
from app.models.user import User
from app.schemas.permission import PermissionOut, ResourceGroupOut, ResourceOut
from app.services import permission_service


router = APIRouter()


def _with_permissions(db: Session, resource) -> ResourceGroupOut:
    base = ResourceOut.model_validate(resource).model_dump()
    permissions = permission_service.permissions_for_resource(db, resource.slug)
    return ResourceGroupOut(
        **base,
        permissions=[PermissionOut.model_validate(p) for p in permissions],
    )


@router.get("")
async def list_resources_endpoint(
    search: Optional[str] = Query(None, description="Match on name or slug"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("view_roles")),
):
    resources = permission_service.list_resources(db, search=search)
    return success_response(
        [ResourceOut.model_validate(r) for r in resources],
        "Resources retrieved successfully",
    )


@router.get("/slug/{slug}")
async def get_resource_by_slug_endpoint(
    slug: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("view_roles")),
):
    resource = permission_service.get_resource_by_slug(db, slug)
    if not resource:
        raise NotFoundError(f"Resource '{slug}' not found")
    return success_response(_with_permissions(db, resource), "Resource retrieved successfully")


@router.get("/{resource_id}")
async def get_resource_endpoint(
    resource_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("view_roles")),
):
    resource = permission_service.get_resource(db, resource_id)
    if not resource:
        raise NotFoundError(f"Resource with id {resource_id} not found")
    return success_response(_with_permissions(db, resource), "Resource retrieved successfully")
