"""
Permission catalog and the resources (feature groups) it is organised by
"""
from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.models.mixins import TimestampMixin


class Resource(TimestampMixin, Base):
    __tablename__ = "resources"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)
    icon = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)


class Permission(TimestampMixin, Base):
    __tablename__ = "permissions"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False, index=True)
    # Matches Resource.slug, e.g. "staff" / "payroll"
    resource = Column(String(100), nullable=True, index=True)
    action = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)

    roles = relationship("Role", secondary="role_permissions", back_populates="permissions")
