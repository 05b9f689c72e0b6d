"""
Column mixins shared by tenant-scoped models
"""
from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy.orm import declared_attr
from sqlalchemy.sql import func


class TimestampMixin:
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.current_timestamp(),
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
        nullable=False,
    )


class TenantMixin:
    """
    Nullable org_id / company_id columns.

    A row with both ids null is global and visible to every tenant.
    Queries must go through authorization_service.scope_query so the
    tenant filter is applied in one place.
    """

    @declared_attr
    def org_id(cls):
        return Column(
            Integer,
            ForeignKey("organizations.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        )

    @declared_attr
    def company_id(cls):
        return Column(
            Integer,
            ForeignKey("companies.id", ondelete="CASCADE"),
            nullable=True,
            index=True,
        )
