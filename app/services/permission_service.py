"""
Permission registry - read access to the seeded permission catalog

The catalog is written only by app.db.init_db.seed_access_control; nothing
here mutates it.
"""
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.models.permission import Permission, Resource

logger = logging.getLogger(__name__)

UNGROUPED_SLUG = "other"


def _catalog_order(query):
    return query.order_by(Permission.resource.asc(), Permission.sort_order.asc(), Permission.action.asc())


def list_all(db: Session) -> List[Permission]:
    """Every permission, ordered by resource, sort_order, action"""
    return _catalog_order(db.query(Permission)).all()


def find_by_name(db: Session, name: str) -> Optional[Permission]:
    return db.query(Permission).filter(Permission.name == name).first()


def get_permission(db: Session, permission_id: int) -> Optional[Permission]:
    return db.query(Permission).filter(Permission.id == permission_id).first()


def list_permissions(
    db: Session,
    module: Optional[str] = None,
    search: Optional[str] = None,
    page: int = 1,
    per_page: int = 50,
) -> Tuple[List[Permission], int]:
    """
    Paginated permission listing

    Args:
        module: Resource slug to filter by (e.g. "payroll")
        search: Case-insensitive substring match on the permission name
        page: 1-based page number
        per_page: Page size

    Returns:
        (permissions on this page, total matching rows)
    """
    query = db.query(Permission)
    if module:
        query = query.filter(Permission.resource == module)
    if search:
        query = query.filter(Permission.name.ilike(f"%{search}%"))

    total = query.count()
    items = _catalog_order(query).offset((page - 1) * per_page).limit(per_page).all()
    return items, total


def find_missing_names(db: Session, names: Iterable[str]) -> List[str]:
    """Names that are not in the catalog, in the order given, without duplicates"""
    requested = list(dict.fromkeys(names))
    if not requested:
        return []
    known = {
        name for (name,) in db.query(Permission.name).filter(Permission.name.in_(requested)).all()
    }
    return [name for name in requested if name not in known]


def get_by_names(db: Session, names: Iterable[str]) -> List[Permission]:
    requested = list(dict.fromkeys(names))
    if not requested:
        return []
    return db.query(Permission).filter(Permission.name.in_(requested)).all()


def group_by_resource(db: Session) -> List[Dict]:
    """
    Resource-grouped permission tree for the role editor

    Resources are ordered by their sort_order; each resource's permissions
    by sort_order then action. Permissions whose resource has no Resource
    row are collected in a trailing "other" group so they stay grantable.
    """
    resources = db.query(Resource).order_by(Resource.sort_order.asc(), Resource.id.asc()).all()
    permissions = (
        db.query(Permission)
        .order_by(Permission.sort_order.asc(), Permission.action.asc())
        .all()
    )

    by_resource: Dict[Optional[str], List[Permission]] = {}
    for permission in permissions:
        by_resource.setdefault(permission.resource, []).append(permission)

    groups = [
        {
            "id": resource.id,
            "name": resource.name,
            "slug": resource.slug,
            "icon": resource.icon,
            "description": resource.description,
            "sort_order": resource.sort_order,
            "permissions": by_resource.pop(resource.slug, []),
        }
        for resource in resources
    ]

    ungrouped = sorted(
        (p for perms in by_resource.values() for p in perms),
        key=lambda p: (p.sort_order, p.action or ""),
    )
    if ungrouped:
        logger.warning(
            "Permissions without a resource row: %s",
            ", ".join(sorted(p.name for p in ungrouped)),
        )
        groups.append(
            {
                "id": None,
                "name": "Other",
                "slug": UNGROUPED_SLUG,
                "icon": None,
                "description": "Permissions not attached to a known resource",
                "sort_order": max((r.sort_order for r in resources), default=0) + 1,
                "permissions": ungrouped,
            }
        )
    return groups


def list_resources(db: Session, search: Optional[str] = None) -> List[Resource]:
    query = db.query(Resource)
    if search:
        pattern = f"%{search}%"
        query = query.filter(Resource.name.ilike(pattern) | Resource.slug.ilike(pattern))
    return query.order_by(Resource.sort_order.asc()).all()


def get_resource(db: Session, resource_id: int) -> Optional[Resource]:
    return db.query(Resource).filter(Resource.id == resource_id).first()


def get_resource_by_slug(db: Session, slug: str) -> Optional[Resource]:
    return db.query(Resource).filter(Resource.slug == slug).first()


def permissions_for_resource(db: Session, slug: str) -> List[Permission]:
    return (
        db.query(Permission)
        .filter(Permission.resource == slug)
        .order_by(Permission.sort_order.asc(), Permission.action.asc())
        .all()
    )
