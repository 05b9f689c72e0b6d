"""
User and user-role assignment schemas
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class UserRolesAssign(BaseModel):
    """Full replacement role set for a user"""

    roles: List[str] = Field(..., description="Role names")


class UserRoleChange(BaseModel):
    role: str = Field(..., min_length=1, description="Role name")


class UserOut(BaseModel):
    """User with role summary"""

    id: int
    name: str
    email: str
    is_active: bool
    org_id: Optional[int] = None
    company_id: Optional[int] = None
    roles_list: List[str] = []
    primary_role: Optional[str] = None
    primary_role_icon: Optional[str] = None
    created_at: Optional[datetime] = None


class UserDetailOut(UserOut):
    """User with the effective permission set (union over all roles)"""

    permissions_list: List[str] = []
