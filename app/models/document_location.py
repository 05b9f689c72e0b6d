"""
Document storage location model (tenant-scoped, may be global)
"""
import enum

from sqlalchemy import Boolean, Column, Integer, String

from app.db.base import Base
from app.models.mixins import TenantMixin, TimestampMixin


class LocationType(str, enum.Enum):
    LOCAL = "local"
    WASABI = "wasabi"
    AWS = "aws"


class DocumentLocation(TenantMixin, TimestampMixin, Base):
    __tablename__ = "document_locations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    location_type = Column(String(20), nullable=False, default=LocationType.LOCAL.value)
    # local
    root_path = Column(String(1024), nullable=True)
    # wasabi / aws
    bucket = Column(String(255), nullable=True)
    region = Column(String(100), nullable=True)
    endpoint = Column(String(1024), nullable=True)
    access_key = Column(String(255), nullable=True)
    secret_key = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
