"""
User model
"""
from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.models.mixins import TimestampMixin
from app.models.role import user_roles


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    # Tenant scope; both null for platform administrators
    org_id = Column(Integer, ForeignKey("organizations.id", ondelete="SET NULL"), nullable=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="SET NULL"), nullable=True, index=True)

    roles = relationship(
        "Role",
        secondary=user_roles,
        back_populates="users",
        order_by="Role.hierarchy_level",
    )
    organization = relationship("Organization")
    company = relationship("Company")

    @property
    def role_names(self):
        return [r.name for r in self.roles]

    @property
    def primary_role(self):
        """The most privileged role held (lowest hierarchy level)"""
        return min(self.roles, key=lambda r: (r.hierarchy_level, r.name), default=None)
