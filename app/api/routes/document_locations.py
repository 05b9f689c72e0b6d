"""
Document storage location endpoints (tenant-scoped, read-only)
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.deps import get_db, require_permission
from app.core.responses import success_response
from app.models.user import User
from app.schemas.document_location import DocumentLocationOut
from app.services import staff_service
from app.services.storage_service import build_storage


router = APIRouter()


@router.get("")
async def list_locations_endpoint(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("view_settings")),
):
    locations = staff_service.list_document_locations(db, current_user)
    return success_response(
        [DocumentLocationOut.model_validate(loc) for loc in locations],
        "Document locations retrieved successfully",
    )


@router.get("/{location_id}")
async def get_location_endpoint(
    location_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("view_settings")),
):
    location = staff_service.get_document_location(db, location_id, current_user)
    return success_response(DocumentLocationOut.model_validate(location), "Document location retrieved successfully")


@router.get("/{location_id}/check")
async def check_location_endpoint(
    location_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("view_settings")),
):
    """
    Build the location's storage backend and report whether it is reachable.
    """
    location = staff_service.get_document_location(db, location_id, current_user)
    result = build_storage(location).check()
    return success_response(
        {"id": location.id, "location_type": location.location_type, **result},
        "Storage check completed",
    )
