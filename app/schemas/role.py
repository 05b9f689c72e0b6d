"""
Role schemas
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator

from app.models.role import MAX_HIERARCHY_LEVEL, MIN_HIERARCHY_LEVEL


def _not_blank(v: Optional[str]) -> Optional[str]:
    if v is not None and not v.strip():
        raise ValueError("Role name cannot be blank")
    return v


class RoleCreate(BaseModel):
    """Schema for creating a custom role"""

    name: str = Field(..., max_length=255, description="Unique role name (case-sensitive)")
    description: Optional[str] = None
    icon: Optional[str] = Field(default=None, max_length=255)
    hierarchy_level: Optional[int] = Field(
        default=None,
        ge=MIN_HIERARCHY_LEVEL,
        le=MAX_HIERARCHY_LEVEL,
        description="Smaller = more privileged by convention; defaults to 99",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return _not_blank(v)


class RoleUpdate(BaseModel):
    """
    Schema for updating a role

    name and hierarchy_level are rejected for system roles when they differ
    from the stored value.
    """

    name: Optional[str] = Field(default=None, max_length=255)
    description: Optional[str] = None
    icon: Optional[str] = Field(default=None, max_length=255)
    hierarchy_level: Optional[int] = Field(
        default=None,
        ge=MIN_HIERARCHY_LEVEL,
        le=MAX_HIERARCHY_LEVEL,
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return _not_blank(v)


class RolePermissionsSync(BaseModel):
    """Full replacement permission set; an empty list clears the role"""

    permissions: List[str] = Field(..., description="Permission names")


class RoleOut(BaseModel):
    """Role output schema"""

    id: int
    name: str
    is_system: bool
    hierarchy_level: int
    description: Optional[str] = None
    icon: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RoleListItem(RoleOut):
    permissions_count: int = 0
    users_count: int = 0


class RoleDetailOut(RoleOut):
    """Role with its currently assigned permission names"""

    permissions: List[str] = []
    users_count: int = 0
