"""
Authorization gate and tenant scoping

A user is authorized for a permission when at least one of the roles they
hold grants it. Nothing is implied by a role's hierarchy level or by its
name: the `admin` role can do everything only because the seed grants it
every permission. Holding the `admin` system role does lift the tenant
boundary.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Set

from sqlalchemy import and_, or_, select
from sqlalchemy.orm import Query, Session

from app.core.errors import ForbiddenError, NotFoundError, ValidationError
from app.models.permission import Permission
from app.models.role import Role, role_permissions, user_roles
from app.models.tenant import Company
from app.models.user import User

logger = logging.getLogger(__name__)

ADMIN_ROLE_NAME = "admin"


@dataclass(frozen=True)
class TenantScope:
    org_id: Optional[int] = None
    company_id: Optional[int] = None
    unrestricted: bool = False


def is_admin_role(role: Role) -> bool:
    # System roles cannot be renamed, so the name is a stable key
    return role.is_system and role.name == ADMIN_ROLE_NAME


def is_platform_admin(user: User) -> bool:
    return any(is_admin_role(role) for role in user.roles)


def get_user_permission_names(db: Session, user: User) -> Set[str]:
    """Union of the permissions granted by every role the user holds"""
    rows = (
        db.query(Permission.name)
        .join(role_permissions, role_permissions.c.permission_id == Permission.id)
        .join(user_roles, user_roles.c.role_id == role_permissions.c.role_id)
        .filter(user_roles.c.user_id == user.id)
        .distinct()
        .all()
    )
    return {name for (name,) in rows}


def authorize(db: Session, user: Optional[User], permission: str) -> bool:
    """
    Whether `user` may perform the action named by `permission`

    Unknown permission names and anonymous users are always denied.
    """
    if user is None or not user.is_active:
        return False

    granted = (
        db.query(Role.id)
        .join(user_roles, user_roles.c.role_id == Role.id)
        .join(role_permissions, role_permissions.c.role_id == Role.id)
        .join(Permission, Permission.id == role_permissions.c.permission_id)
        .filter(user_roles.c.user_id == user.id, Permission.name == permission)
        .first()
    )
    return granted is not None


def ensure_authorized(db: Session, user: Optional[User], permission: str) -> None:
    """
    Raises:
        ForbiddenError: The user holds no role granting `permission`
    """
    if not authorize(db, user, permission):
        logger.info(
            "Permission denied: user=%s permission=%s",
            getattr(user, "id", None),
            permission,
        )
        raise ForbiddenError("You do not have permission to perform this action")


def resolve_tenant_scope(db: Session, user: User) -> TenantScope:
    """
    Tenant boundary for a user

    A company-scoped user is also bound to that company's organization,
    even when the user row does not carry org_id.
    """
    if is_platform_admin(user):
        return TenantScope(unrestricted=True)

    org_id = user.org_id
    company_id = user.company_id
    if company_id is not None:
        company = db.query(Company).filter(Company.id == company_id).first()
        if company is not None:
            org_id = company.org_id
    return TenantScope(org_id=org_id, company_id=company_id)


def scope_query(db: Session, query: Query, model, user: User) -> Query:
    """
    Restrict `query` over a tenant-scoped `model` to rows the user may see

    Only rows with both org_id and company_id null are global and always
    visible. A row carrying just a company_id belongs to that company's
    organization. A non-admin user without a tenant sees only global rows.
    """
    scope = resolve_tenant_scope(db, user)
    if scope.unrestricted:
        return query

    if scope.org_id is None:
        query = query.filter(model.org_id.is_(None))
    else:
        org_companies = select(Company.id).where(Company.org_id == scope.org_id)
        query = query.filter(
            or_(
                model.org_id == scope.org_id,
                and_(
                    model.org_id.is_(None),
                    or_(model.company_id.is_(None), model.company_id.in_(org_companies)),
                ),
            )
        )

    if scope.company_id is None:
        if scope.org_id is None:
            query = query.filter(model.company_id.is_(None))
    else:
        query = query.filter(or_(model.company_id == scope.company_id, model.company_id.is_(None)))
    return query


def get_scoped_or_404(db: Session, model, record_id: int, user: User, label: Optional[str] = None):
    """
    Fetch one tenant-scoped row by id

    Rows outside the user's scope are reported as missing so their
    existence is not disclosed.
    """
    query = scope_query(db, db.query(model), model, user)
    record = query.filter(model.id == record_id).first()
    if record is None:
        raise NotFoundError(f"{label or model.__name__} with id {record_id} not found")
    return record


def apply_tenant(db: Session, record, user: User) -> None:
    """
    Stamp a new tenant-scoped row with the creator's tenant

    Administrators may target any tenant; everyone else is pinned to their
    own and may not write into another.

    Raises:
        ForbiddenError: A non-admin user targets another tenant, or has none
        ValidationError: company_id is unknown or not under org_id
    """
    scope = resolve_tenant_scope(db, user)
    if scope.unrestricted:
        if record.company_id is not None:
            company = db.query(Company).filter(Company.id == record.company_id).first()
            if company is None:
                raise ValidationError(
                    "Validation failed",
                    errors={"company_id": [f"Company {record.company_id} does not exist"]},
                )
            if record.org_id is not None and record.org_id != company.org_id:
                raise ValidationError(
                    "Validation failed",
                    errors={"company_id": ["Company does not belong to the given organization"]},
                )
            record.org_id = company.org_id
        return

    if scope.org_id is None:
        raise ForbiddenError("Your account is not assigned to an organization")
    if record.org_id is not None and record.org_id != scope.org_id:
        raise ForbiddenError("Cannot create records for another organization")
    if (
        record.company_id is not None
        and scope.company_id is not None
        and record.company_id != scope.company_id
    ):
        raise ForbiddenError("Cannot create records for another company")

    if record.company_id is not None and scope.company_id is None:
        company = db.query(Company).filter(Company.id == record.company_id).first()
        if company is None or company.org_id != scope.org_id:
            raise ForbiddenError("Cannot create records for another organization")

    record.org_id = scope.org_id
    if scope.company_id is not None:
        record.company_id = scope.company_id

