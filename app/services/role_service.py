"""
Role service - business logic for role management and role-permission sync
"""
import logging
from typing import Dict, List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.models.role import (
    DEFAULT_HIERARCHY_LEVEL,
    MAX_HIERARCHY_LEVEL,
    MIN_HIERARCHY_LEVEL,
    Role,
    role_permissions,
    user_roles,
)
from app.schemas.role import RoleCreate, RoleUpdate
from app.services import permission_service
from app.services.audit_service import log_audit

logger = logging.getLogger(__name__)


def _snapshot(role: Role) -> Dict:
    return {
        "name": role.name,
        "is_system": role.is_system,
        "hierarchy_level": role.hierarchy_level,
        "description": role.description,
        "icon": role.icon,
    }


def _check_hierarchy_level(level: Optional[int]) -> None:
    if level is None:
        return
    if not MIN_HIERARCHY_LEVEL <= level <= MAX_HIERARCHY_LEVEL:
        raise ValidationError(
            "Validation failed",
            errors={
                "hierarchy_level": [
                    f"Hierarchy level must be between {MIN_HIERARCHY_LEVEL} and {MAX_HIERARCHY_LEVEL}"
                ]
            },
        )


def _name_taken(db: Session, name: str, exclude_id: Optional[int] = None) -> bool:
    # Exact, case-sensitive comparison
    query = db.query(Role.id).filter(Role.name == name)
    if exclude_id is not None:
        query = query.filter(Role.id != exclude_id)
    return query.first() is not None


def _commit(db: Session, what: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to %s; transaction rolled back", what)
        raise


def get_role(db: Session, role_id: int) -> Optional[Role]:
    """Get a role by ID."""
    return db.query(Role).filter(Role.id == role_id).first()


def get_role_or_404(db: Session, role_id: int) -> Role:
    role = get_role(db, role_id)
    if role is None:
        raise NotFoundError(f"Role with id {role_id} not found")
    return role


def count_users(db: Session, role_id: int) -> int:
    return db.query(func.count(user_roles.c.user_id)).filter(user_roles.c.role_id == role_id).scalar() or 0


def list_roles(db: Session, search: Optional[str] = None) -> List[Dict]:
    """
    List roles ordered by hierarchy level then name

    Each entry carries permissions_count and users_count.
    """
    query = db.query(Role)
    if search:
        query = query.filter(Role.name.ilike(f"%{search}%"))
    roles = query.order_by(Role.hierarchy_level.asc(), Role.name.asc()).all()

    permission_counts = dict(
        db.query(role_permissions.c.role_id, func.count(role_permissions.c.permission_id))
        .group_by(role_permissions.c.role_id)
        .all()
    )
    user_counts = dict(
        db.query(user_roles.c.role_id, func.count(user_roles.c.user_id))
        .group_by(user_roles.c.role_id)
        .all()
    )

    return [
        {
            "role": role,
            "permissions_count": permission_counts.get(role.id, 0),
            "users_count": user_counts.get(role.id, 0),
        }
        for role in roles
    ]


def create_role(db: Session, role_data: RoleCreate, actor_id: Optional[int]) -> Role:
    """
    Create a custom role

    Raises:
        ConflictError: A role with exactly this name exists
        ValidationError: hierarchy_level outside [1, 99]
    """
    _check_hierarchy_level(role_data.hierarchy_level)
    if _name_taken(db, role_data.name):
        raise ConflictError(
            f"Role with name '{role_data.name}' already exists",
            errors={"name": ["The name has already been taken."]},
        )

    role = Role(
        name=role_data.name,
        is_system=False,
        hierarchy_level=(
            role_data.hierarchy_level
            if role_data.hierarchy_level is not None
            else DEFAULT_HIERARCHY_LEVEL
        ),
        description=role_data.description,
        icon=role_data.icon,
    )
    db.add(role)
    db.flush()

    log_audit(
        db=db,
        actor_id=actor_id,
        action="role_created",
        entity_type="role",
        entity_id=role.id,
        new_values=_snapshot(role),
    )
    _commit(db, "create role")
    db.refresh(role)

    logger.info("Role created: %s (level %d)", role.name, role.hierarchy_level)
    return role


def update_role(
    db: Session,
    role_id: int,
    role_data: RoleUpdate,
    actor_id: Optional[int],
) -> Role:
    """
    Update a role

    System roles keep their name and hierarchy level; only description and
    icon may change. Sending the current value for either is a no-op.

    Raises:
        NotFoundError: Unknown role id
        ForbiddenError: Rename or re-level of a system role
        ConflictError: New name collides with another role
    """
    role = get_role_or_404(db, role_id)
    update_dict = role_data.model_dump(exclude_unset=True)

    new_name = update_dict.get("name")
    new_level = update_dict.get("hierarchy_level")
    _check_hierarchy_level(new_level)

    if role.is_system:
        if new_name is not None and new_name != role.name:
            raise ForbiddenError("Cannot rename system roles")
        if new_level is not None and new_level != role.hierarchy_level:
            raise ForbiddenError("Cannot change the hierarchy level of system roles")

    if new_name is not None and new_name != role.name and _name_taken(db, new_name, exclude_id=role.id):
        raise ConflictError(
            f"Role with name '{new_name}' already exists",
            errors={"name": ["The name has already been taken."]},
        )

    old_values = _snapshot(role)

    if new_name is not None:
        role.name = new_name
    if new_level is not None:
        role.hierarchy_level = new_level
    if "description" in update_dict:
        role.description = update_dict["description"]
    if "icon" in update_dict:
        role.icon = update_dict["icon"]

    log_audit(
        db=db,
        actor_id=actor_id,
        action="role_updated",
        entity_type="role",
        entity_id=role.id,
        old_values=old_values,
        new_values=_snapshot(role),
    )
    _commit(db, "update role")
    db.refresh(role)
    return role


def delete_role(db: Session, role_id: int, actor_id: Optional[int]) -> None:
    """
    Delete a custom role

    Roles still assigned to users are deleted as well; those users simply
    lose the role.

    Raises:
        NotFoundError: Unknown role id
        ForbiddenError: The role is a system role
    """
    role = get_role_or_404(db, role_id)
    if role.is_system:
        raise ForbiddenError("Cannot delete system roles")

    assigned = count_users(db, role.id)
    if assigned:
        logger.warning(
            "Deleting role '%s' still assigned to %d user(s); their assignment is removed",
            role.name,
            assigned,
        )

    log_audit(
        db=db,
        actor_id=actor_id,
        action="role_deleted",
        entity_type="role",
        entity_id=role.id,
        old_values={**_snapshot(role), "permissions": role.permission_names, "users_count": assigned},
    )
    role_name = role.name
    db.delete(role)
    _commit(db, "delete role")
    logger.info("Role deleted: %s", role_name)


def sync_permissions(
    db: Session,
    role_id: int,
    permission_names: Sequence[str],
    actor_id: Optional[int],
) -> Role:
    """
    Replace a role's entire permission set

    Either every submitted name is known and the set is replaced in one
    transaction, or nothing changes. An empty list clears the role.

    Raises:
        NotFoundError: Unknown role id
        ValidationError: One or more names are not in the permission catalog
    """
    role = get_role_or_404(db, role_id)

    missing = permission_service.find_missing_names(db, permission_names)
    if missing:
        raise ValidationError(
            "The selected permissions are invalid",
            errors={"permissions": [f"Unknown permission: {name}" for name in missing]},
        )

    old_permissions = role.permission_names
    new_permissions = permission_service.get_by_names(db, permission_names)

    role.permissions = new_permissions
    log_audit(
        db=db,
        actor_id=actor_id,
        action="permissions_synced",
        entity_type="role",
        entity_id=role.id,
        old_values={"permissions": old_permissions},
        new_values={"permissions": sorted(p.name for p in new_permissions)},
    )
    _commit(db, "sync role permissions")
    db.refresh(role)

    logger.info(
        "Permissions synced for role '%s': %d -> %d",
        role.name,
        len(old_permissions),
        len(new_permissions),
    )
    return role


def get_role_permissions(db: Session, role_id: int):
    role = get_role_or_404(db, role_id)
    return list(role.permissions)
