"""
Staff member and document location services (tenant-scoped records)
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError
from app.models.document_location import DocumentLocation
from app.models.staff_member import StaffMember
from app.models.user import User
from app.schemas.staff import StaffMemberCreate
from app.services import authorization_service
from app.services.audit_service import log_audit

logger = logging.getLogger(__name__)


def list_staff(
    db: Session,
    viewer: User,
    search: Optional[str] = None,
    page: int = 1,
    per_page: int = 15,
) -> Tuple[List[StaffMember], int]:
    query = authorization_service.scope_query(db, db.query(StaffMember), StaffMember, viewer)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(StaffMember.full_name.ilike(pattern), StaffMember.staff_code.ilike(pattern))
        )
    total = query.count()
    items = query.order_by(StaffMember.full_name.asc()).offset((page - 1) * per_page).limit(per_page).all()
    return items, total


def get_staff(db: Session, staff_id: int, viewer: User) -> StaffMember:
    return authorization_service.get_scoped_or_404(db, StaffMember, staff_id, viewer, "Staff member")


def create_staff(db: Session, staff_data: StaffMemberCreate, creator: User) -> StaffMember:
    """
    Create a staff member in the creator's tenant

    Raises:
        ForbiddenError: org_id / company_id point at another tenant
        ConflictError: staff_code already used within the same organization
    """
    staff = StaffMember(**staff_data.model_dump())
    authorization_service.apply_tenant(db, staff, creator)

    duplicate = (
        db.query(StaffMember.id)
        .filter(StaffMember.staff_code == staff.staff_code)
        .filter(
            StaffMember.org_id == staff.org_id
            if staff.org_id is not None
            else StaffMember.org_id.is_(None)
        )
        .first()
    )
    if duplicate:
        raise ConflictError(
            f"Staff code '{staff.staff_code}' already exists",
            errors={"staff_code": ["The staff code has already been taken."]},
        )

    db.add(staff)
    db.flush()
    log_audit(
        db=db,
        actor_id=creator.id,
        action="staff_created",
        entity_type="staff_member",
        entity_id=staff.id,
        new_values=staff_data.model_dump(),
    )
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create staff member %s", staff.staff_code)
        raise
    db.refresh(staff)
    return staff


def delete_staff(db: Session, staff_id: int, actor: User) -> None:
    staff = get_staff(db, staff_id, actor)
    log_audit(
        db=db,
        actor_id=actor.id,
        action="staff_deleted",
        entity_type="staff_member",
        entity_id=staff.id,
        old_values={"staff_code": staff.staff_code, "full_name": staff.full_name},
    )
    db.delete(staff)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete staff member %s", staff_id)
        raise


def list_document_locations(db: Session, viewer: User) -> List[DocumentLocation]:
    query = authorization_service.scope_query(db, db.query(DocumentLocation), DocumentLocation, viewer)
    return query.order_by(DocumentLocation.name.asc()).all()


def get_document_location(db: Session, location_id: int, viewer: User) -> DocumentLocation:
    return authorization_service.get_scoped_or_404(
        db, DocumentLocation, location_id, viewer, "Document location"
    )
