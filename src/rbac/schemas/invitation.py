"""Invitation schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr

from src.rbac.services import InvitationView


class InvitationCreateRequest(BaseModel):
    """Request to invite an email address at a given role."""

    email: EmailStr
    role: str


class InvitationRead(BaseModel):
    id: UUID
    tenant_id: UUID
    email: str
    role: str
    status: str
    expires_at: datetime
    inviter_id: UUID
    created_at: datetime

    model_config = {"from_attributes": True}


class InvitationListItem(InvitationRead):
    """Invitation with the inviter's display details (admin view)."""

    inviter_name: str | None = None
    inviter_email: str | None = None

    @classmethod
    def from_view(cls, view: InvitationView) -> "InvitationListItem":
        return cls.model_validate(view.invitation).model_copy(
            update={"inviter_name": view.inviter_name, "inviter_email": view.inviter_email}
        )


class InvitationListResponse(BaseModel):
    invitations: list[InvitationListItem]
    total: int


class InvitationAcceptResponse(BaseModel):
    """Response after accepting an invitation."""

    tenant_id: UUID
    tenant_name: str
    membership_id: UUID
    role: str
