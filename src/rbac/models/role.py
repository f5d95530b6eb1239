"""Role and permission grant models, scoped per tenant."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel

from src.rbac.models.base import utc_now
from src.rbac.models.enums import RoleKind


class Role(SQLModel, table=True):
    """Named bundle of grants. System roles are seeded; custom roles are tenant-authored."""

    __tablename__ = "roles"
    __table_args__ = (UniqueConstraint("tenant_id", "name", name="uq_roles_tenant_name"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", ondelete="CASCADE", index=True)
    name: str = Field(max_length=50)
    kind: str = Field(default=RoleKind.CUSTOM.value, max_length=20)
    description: str | None = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_system(self) -> bool:
        return self.kind == RoleKind.SYSTEM.value


class Permission(SQLModel, table=True):
    """A (resource, actions) grant attached to a role."""

    __tablename__ = "permissions"
    __table_args__ = (
        UniqueConstraint("role_id", "resource", name="uq_permissions_role_resource"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    role_id: UUID = Field(foreign_key="roles.id", ondelete="CASCADE", index=True)
    resource: str = Field(max_length=50)
    actions: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utc_now)

    def allows(self, action: str) -> bool:
        return action in self.actions
