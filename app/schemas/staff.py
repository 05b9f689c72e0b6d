"""
Staff member schemas
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class StaffMemberCreate(BaseModel):
    """
    Schema for creating a staff member

    org_id / company_id default to the caller's tenant.
    """
    staff_code: str = Field(..., min_length=1, max_length=50)
    full_name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    job_title: Optional[str] = Field(default=None, max_length=255)
    org_id: Optional[int] = None
    company_id: Optional[int] = None


class StaffMemberOut(BaseModel):
    id: int
    staff_code: str
    full_name: str
    email: Optional[str] = None
    job_title: Optional[str] = None
    is_active: bool
    org_id: Optional[int] = None
    company_id: Optional[int] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
