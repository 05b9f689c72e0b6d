"""
Staff member model (tenant-scoped)
"""
from sqlalchemy import Boolean, Column, Integer, String

from app.db.base import Base
from app.models.mixins import TenantMixin, TimestampMixin


class StaffMember(TenantMixin, TimestampMixin, Base):
    __tablename__ = "staff_members"

    id = Column(Integer, primary_key=True, index=True)
    staff_code = Column(String(50), nullable=False, index=True)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    job_title = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
