"""Tenant model - the isolation boundary for roles, memberships and invitations."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.rbac.core.validators import MAX_TENANT_SLUG_LENGTH
from src.rbac.models.base import utc_now
from src.rbac.models.enums import TenantType


class Tenant(SQLModel, table=True):
    """Tenant ("organization") registry."""

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100, index=True)
    slug: str = Field(max_length=MAX_TENANT_SLUG_LENGTH, unique=True, index=True)
    tenant_type: str = Field(default=TenantType.OTHER.value, max_length=30)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    deleted_at: datetime | None = Field(default=None)

    @property
    def is_deleted(self) -> bool:
        """Check if tenant is soft-deleted."""
        return self.deleted_at is not None
