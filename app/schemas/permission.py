"""
Permission and resource schemas
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class PermissionOut(BaseModel):
    """Permission output schema"""

    id: int
    name: str
    resource: Optional[str] = None
    action: Optional[str] = None
    description: Optional[str] = None
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


class ResourceOut(BaseModel):
    """Resource (feature group) output schema"""

    id: int
    name: str
    slug: str
    icon: Optional[str] = None
    description: Optional[str] = None
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


class ResourceGroupOut(ResourceOut):
    """A resource bundled with its ordered permissions, for the role editor

    id is None for the group of permissions without a resource row.
    """

    id: Optional[int] = None

    permissions: List[PermissionOut] = []
