"""
Document location schemas
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict


class DocumentLocationOut(BaseModel):
    """Storage location; credentials are never serialized"""

    id: int
    name: str
    location_type: str
    root_path: Optional[str] = None
    bucket: Optional[str] = None
    region: Optional[str] = None
    endpoint: Optional[str] = None
    is_active: bool
    org_id: Optional[int] = None
    company_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)
