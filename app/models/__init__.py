"""
Database models
"""
from app.models.tenant import Organization, Company
from app.models.permission import Permission, Resource
from app.models.role import Role, role_permissions, user_roles
from app.models.user import User
from app.models.audit_log import AuditLog
from app.models.staff_member import StaffMember
from app.models.document_location import DocumentLocation, LocationType

__all__ = [
    "Organization",
    "Company",
    "Permission",
    "Resource",
    "Role",
    "role_permissions",
    "user_roles",
    "User",
    "AuditLog",
    "StaffMember",
    "DocumentLocation",
    "LocationType",
]
