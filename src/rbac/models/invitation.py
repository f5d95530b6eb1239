"""Tenant invitation model."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import Index, text
from sqlmodel import Field, SQLModel

from src.rbac.models.base import utc_now
from src.rbac.models.enums import InvitationStatus


class Invitation(SQLModel, table=True):
    """Pending offer of membership at a given role, bounded by an expiry."""

    __tablename__ = "invitations"
    __table_args__ = (
        # At most one pending invitation per (tenant, email)
        Index(
            "uq_invitations_pending_tenant_email",
            "tenant_id",
            "email",
            unique=True,
            postgresql_where=text("status = 'pending'"),
            sqlite_where=text("status = 'pending'"),
        ),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", ondelete="CASCADE", index=True)
    email: str = Field(max_length=255, index=True)
    role: str = Field(max_length=50)
    status: str = Field(default=InvitationStatus.PENDING.value, max_length=20)
    expires_at: datetime
    inviter_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    created_at: datetime = Field(default_factory=utc_now)

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or utc_now()) > self.expires_at
