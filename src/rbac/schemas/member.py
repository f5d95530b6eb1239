"""Member schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from src.rbac.services import MemberView


class MemberRead(BaseModel):
    id: UUID
    user_id: UUID
    email: str
    full_name: str
    role: str
    joined_at: datetime

    @classmethod
    def from_view(cls, view: MemberView) -> "MemberRead":
        membership = view.membership
        return cls(
            id=membership.id,
            user_id=membership.user_id,
            email=view.email,
            full_name=view.full_name,
            role=membership.role,
            joined_at=membership.joined_at,
        )


class MemberListResponse(BaseModel):
    members: list[MemberRead]
    total: int
