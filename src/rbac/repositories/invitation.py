"""Repository for Invitation entity."""

from uuid import UUID

from sqlmodel import select

from src.rbac.models import Invitation, InvitationStatus, User
from src.rbac.repositories.base import BaseRepository


class InvitationRepository(BaseRepository[Invitation]):
    model = Invitation

    async def get_in_tenant(self, invitation_id: UUID, tenant_id: UUID) -> Invitation | None:
        result = await self.session.execute(
            select(Invitation).where(
                Invitation.id == invitation_id,
                Invitation.tenant_id == tenant_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_pending(self, tenant_id: UUID, email: str) -> Invitation | None:
        """Get the pending invite for email in tenant."""
        result = await self.session.execute(
            select(Invitation).where(
                Invitation.tenant_id == tenant_id,
                Invitation.email == email,
                Invitation.status == InvitationStatus.PENDING.value,
            )
        )
        return result.scalar_one_or_none()

    async def list_with_inviters(self, tenant_id: UUID) -> list[tuple[Invitation, User | None]]:
        """List all invitations of a tenant, any status, newest first, with the inviter."""
        result = await self.session.execute(
            select(Invitation, User)
            .outerjoin(User, User.id == Invitation.inviter_id)  # type: ignore[arg-type]
            .where(Invitation.tenant_id == tenant_id)
            .order_by(Invitation.created_at.desc())  # type: ignore[attr-defined]
        )
        return [(invitation, inviter) for invitation, inviter in result.all()]

    def set_status(self, invitation: Invitation, status: InvitationStatus) -> Invitation:
        """Transition an invitation (no flush/commit)."""
        invitation.status = status.value
        self.session.add(invitation)
        return invitation
