"""
Database initialization: access-control seed and initial admin bootstrap

Both functions are idempotent and are run once per deploy (application
startup or scripts/seed_access.py), never from a request handler.
"""
import logging
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.db import access_catalog
from app.models.permission import Permission, Resource
from app.models.role import Role
from app.models.user import User

logger = logging.getLogger(__name__)


def _upsert_resources(db: Session, summary: Dict[str, int]) -> None:
    existing = {r.slug: r for r in db.query(Resource).all()}
    for name, slug, icon, description, sort_order in access_catalog.RESOURCES:
        resource = existing.get(slug)
        if resource is None:
            resource = Resource(slug=slug)
            db.add(resource)
            summary["resources_created"] += 1
        resource.name = name
        resource.icon = icon
        resource.description = description
        resource.sort_order = sort_order


def _upsert_permissions(db: Session, summary: Dict[str, int]) -> Dict[str, Permission]:
    by_name = {p.name: p for p in db.query(Permission).all()}
    for name, resource, action, description, sort_order in access_catalog.PERMISSIONS:
        permission = by_name.get(name)
        if permission is None:
            permission = Permission(name=name)
            db.add(permission)
            by_name[name] = permission
            summary["permissions_created"] += 1
        permission.resource = resource
        permission.action = action
        permission.description = description
        permission.sort_order = sort_order
    db.flush()
    return by_name


def _upsert_system_roles(db: Session, summary: Dict[str, int]) -> Dict[str, Role]:
    roles = {}
    for name, level, icon, description in access_catalog.SYSTEM_ROLES:
        role = db.query(Role).filter(Role.name == name).first()
        if role is None:
            role = Role(name=name)
            db.add(role)
            summary["roles_created"] += 1
        role.is_system = True
        role.hierarchy_level = level
        role.icon = icon
        role.description = description
        roles[name] = role
    db.flush()
    return roles


def _assign_canonical_permissions(
    roles: Dict[str, Role],
    permissions: Dict[str, Permission],
) -> None:
    for name, role in roles.items():
        if name in access_catalog.ALL_PERMISSIONS_ROLES:
            role.permissions = list(permissions.values())
        else:
            role.permissions = [permissions[p] for p in access_catalog.ROLE_PERMISSIONS.get(name, [])]


def _copy_legacy_aliases(db: Session, canonical: Dict[str, Role], summary: Dict[str, int]) -> None:
    """
    Create each legacy role if missing and copy its canonical role's
    permission set onto it. The copy is a snapshot: later edits to either
    role do not propagate to the other.
    """
    for legacy_name, canonical_name in access_catalog.LEGACY_ROLE_ALIASES.items():
        source = canonical[canonical_name]
        legacy = db.query(Role).filter(Role.name == legacy_name).first()
        if legacy is None:
            legacy = Role(
                name=legacy_name,
                is_system=True,
                hierarchy_level=source.hierarchy_level,
                description=f"Legacy alias of {canonical_name} role",
                icon=source.icon,
            )
            db.add(legacy)
            summary["roles_created"] += 1
        legacy.permissions = list(source.permissions)


def seed_access_control(db: Session) -> Dict[str, int]:
    """
    Upsert resources, permissions and system roles from the catalog

    Existing rows keep their ids; nothing absent from the catalog is
    deleted and custom roles are left untouched.

    Returns:
        Counts of rows created in this run
    """
    summary = {
        "resources_created": 0,
        "permissions_created": 0,
        "roles_created": 0,
    }
    try:
        _upsert_resources(db, summary)
        permissions = _upsert_permissions(db, summary)
        roles = _upsert_system_roles(db, summary)
        _assign_canonical_permissions(roles, permissions)
        _copy_legacy_aliases(db, roles, summary)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Access-control seed failed, rolled back")
        raise

    logger.info(
        "Access-control seed complete: %d resources, %d permissions, %d roles created",
        summary["resources_created"],
        summary["permissions_created"],
        summary["roles_created"],
    )
    return summary


def bootstrap_initial_admin(
    db: Session,
    email: str,
    password: str,
    name: str = "System Administrator",
) -> Optional[User]:
    """
    Create the first admin user if nobody holds the admin role yet

    Returns:
        The created user, or None when an admin already exists
    """
    admin_role = db.query(Role).filter(Role.name == "admin").first()
    if admin_role is None:
        raise RuntimeError("admin role missing; run seed_access_control first")

    if admin_role.users:
        logger.info("Admin user already exists, skipping initial bootstrap")
        return None

    user = db.query(User).filter(User.email == email).first()
    if user is None:
        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            is_active=True,
        )
        db.add(user)
    user.roles = list(user.roles) + [admin_role]
    db.commit()
    db.refresh(user)
    logger.info("Initial admin user created: %s", email)
    return user
