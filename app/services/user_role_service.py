"""
User listing and user <-> role assignment
"""
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ForbiddenError, NotFoundError, ValidationError
from app.models.role import Role
from app.models.tenant import Company
from app.models.user import User
from app.services import authorization_service
from app.services.audit_service import log_audit

logger = logging.getLogger(__name__)


def serialize_user(user: User) -> Dict:
    primary = user.primary_role
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "is_active": user.is_active,
        "org_id": user.org_id,
        "company_id": user.company_id,
        "roles_list": user.role_names,
        "primary_role": primary.name if primary else None,
        "primary_role_icon": primary.icon if primary else None,
        "created_at": user.created_at,
    }


def serialize_user_detail(db: Session, user: User) -> Dict:
    data = serialize_user(user)
    data["permissions_list"] = sorted(authorization_service.get_user_permission_names(db, user))
    return data


def _scoped_users(db: Session, viewer: User):
    """
    Users the viewer may see and manage

    Unlike tenant-scoped records, users without a tenant are not global:
    only administrators see them, and a viewer without a tenant sees only
    themselves.
    """
    scope = authorization_service.resolve_tenant_scope(db, viewer)
    query = db.query(User)
    if scope.unrestricted:
        return query
    if scope.company_id is not None:
        return query.filter(User.company_id == scope.company_id)
    if scope.org_id is not None:
        org_companies = select(Company.id).where(Company.org_id == scope.org_id)
        return query.filter(or_(User.org_id == scope.org_id, User.company_id.in_(org_companies)))
    return query.filter(User.id == viewer.id)


def list_users(
    db: Session,
    viewer: User,
    search: Optional[str] = None,
    role: Optional[str] = None,
    page: int = 1,
    per_page: int = 15,
) -> Tuple[List[User], int]:
    """
    Users visible to `viewer`, optionally filtered by name/email and role name

    Returns:
        (users on this page, total matching rows)
    """
    query = _scoped_users(db, viewer)
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(User.name.ilike(pattern), User.email.ilike(pattern)))
    if role:
        query = query.filter(User.roles.any(Role.name == role))

    total = query.count()
    users = query.order_by(User.name.asc(), User.id.asc()).offset((page - 1) * per_page).limit(per_page).all()
    return users, total


def get_user(db: Session, user_id: int, viewer: User) -> User:
    """
    Raises:
        NotFoundError: Unknown user, or one outside the viewer's tenant
    """
    user = _scoped_users(db, viewer).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError(f"User with id {user_id} not found")
    return user


def get_user_roles(db: Session, user_id: int, viewer: User) -> List[Role]:
    return list(get_user(db, user_id, viewer).roles)


def _resolve_roles(db: Session, names: Sequence[str], field: str) -> List[Role]:
    requested = list(dict.fromkeys(names))
    if not requested:
        return []
    found = db.query(Role).filter(Role.name.in_(requested)).all()
    by_name = {r.name: r for r in found}
    missing = [name for name in requested if name not in by_name]
    if missing:
        raise ValidationError(
            "The selected roles are invalid",
            errors={field: [f"Unknown role: {name}" for name in missing]},
        )
    return [by_name[name] for name in requested]


def _check_grantable(viewer: User, roles) -> None:
    """The admin role can only be granted or revoked by an administrator"""
    if authorization_service.is_platform_admin(viewer):
        return
    if any(authorization_service.is_admin_role(r) for r in roles):
        raise ForbiddenError("Only administrators can grant or revoke the admin role")


def _commit(db: Session, user: User, what: str) -> User:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to %s for user %s; transaction rolled back", what, user.id)
        raise
    db.refresh(user)
    return user


def assign_roles(
    db: Session,
    user_id: int,
    role_names: Sequence[str],
    viewer: User,
) -> User:
    """
    Replace the user's role set. An empty list removes every role.

    Raises:
        NotFoundError: Unknown user
        ValidationError: Any role name does not exist; nothing is changed
        ForbiddenError: A non-administrator grants or revokes the admin role
    """
    user = get_user(db, user_id, viewer)
    roles = _resolve_roles(db, role_names, "roles")
    _check_grantable(viewer, set(roles) | set(user.roles))

    old_roles = user.role_names
    user.roles = roles
    log_audit(
        db=db,
        actor_id=viewer.id,
        action="user_roles_assigned",
        entity_type="user",
        entity_id=user.id,
        old_values={"roles": old_roles},
        new_values={"roles": [r.name for r in roles]},
    )
    return _commit(db, user, "assign roles")


def add_role(db: Session, user_id: int, role_name: str, viewer: User) -> User:
    """Grant one role; granting a role already held is a no-op"""
    user = get_user(db, user_id, viewer)
    (role,) = _resolve_roles(db, [role_name], "role")
    _check_grantable(viewer, [role])

    if role in user.roles:
        return user

    user.roles.append(role)
    log_audit(
        db=db,
        actor_id=viewer.id,
        action="user_role_added",
        entity_type="user",
        entity_id=user.id,
        new_values={"role": role.name},
    )
    return _commit(db, user, "add role")


def remove_role(db: Session, user_id: int, role_name: str, viewer: User) -> User:
    """Revoke one role; revoking a role not held is a no-op"""
    user = get_user(db, user_id, viewer)
    (role,) = _resolve_roles(db, [role_name], "role")
    _check_grantable(viewer, [role])

    if role not in user.roles:
        return user

    user.roles.remove(role)
    log_audit(
        db=db,
        actor_id=viewer.id,
        action="user_role_removed",
        entity_type="user",
        entity_id=user.id,
        old_values={"role": role.name},
    )
    return _commit(db, user, "remove role")
