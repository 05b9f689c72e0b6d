"""
Role model and the role <-> permission / user <-> role association tables
"""
from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Table, Text

from sqlalchemy.orm import relationship

from app.db.base import Base
from app.models.mixins import TimestampMixin

# Custom roles default to the lowest privilege position
DEFAULT_HIERARCHY_LEVEL = 99
MIN_HIERARCHY_LEVEL = 1
MAX_HIERARCHY_LEVEL = 99


role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    Column("permission_id", Integer, ForeignKey("permissions.id", ondelete="CASCADE"), primary_key=True),
)

user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(TimestampMixin, Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False, index=True)
    # System roles cannot be deleted, renamed or re-levelled
    is_system = Column(Boolean, nullable=False, default=False)
    # Smaller level = higher privilege, by convention only (grants nothing)
    hierarchy_level = Column(Integer, nullable=False, default=DEFAULT_HIERARCHY_LEVEL, index=True)
    description = Column(Text, nullable=True)
    icon = Column(String(100), nullable=True)

    permissions = relationship(
        "Permission",
        secondary=role_permissions,
        back_populates="roles",
        order_by="Permission.name",
    )
    users = relationship("User", secondary=user_roles, back_populates="roles")

    @property
    def permission_names(self):
        return [p.name for p in self.permissions]
