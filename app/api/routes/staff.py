"""
Staff member endpoints (tenant-scoped)
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.deps import Pagination, get_db, require_permission
from app.core.responses import paginated_response, success_response
from app.models.user import User
from app.schemas.staff import StaffMemberCreate, StaffMemberOut
from app.services import staff_service


router = APIRouter()


@router.get("")
async def list_staff_endpoint(
    search: Optional[str] = Query(None, description="Match on name or staff code"),
    pagination: Pagination = Depends(),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("view_staff")),
):
    items, total = staff_service.list_staff(
        db,
        current_user,
        search=search,
        page=pagination.page,
        per_page=pagination.per_page,
    )
    return paginated_response(
        [StaffMemberOut.model_validate(s) for s in items],
        total,
        pagination.page,
        pagination.per_page,
        "Staff members retrieved successfully",
    )


@router.post("", status_code=201)
async def create_staff_endpoint(
    staff_data: StaffMemberCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("create_staff")),
):
    """
    Create a staff member in the caller's organization / company.
    """
    staff = staff_service.create_staff(db, staff_data, current_user)
    return success_response(
        StaffMemberOut.model_validate(staff),
        "Staff member created successfully",
        status_code=201,
    )


@router.get("/{staff_id}")
async def get_staff_endpoint(
    staff_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("view_staff")),
):
    staff = staff_service.get_staff(db, staff_id, current_user)
    return success_response(StaffMemberOut.model_validate(staff), "Staff member retrieved successfully")


@router.delete("/{staff_id}")
async def delete_staff_endpoint(
    staff_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("delete_staff")),
):
    staff_service.delete_staff(db, staff_id, current_user)
    return success_response(None, "Staff member deleted successfully")
