"""Repository for Membership entity."""

from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from src.rbac.models import Membership, SystemRole, User
from src.rbac.repositories.base import BaseRepository


class MembershipRepository(BaseRepository[Membership]):
    """Repository for user-tenant memberships."""

    model = Membership

    async def get_membership(self, user_id: UUID, tenant_id: UUID) -> Membership | None:
        """Get membership for a user in a tenant."""
        result = await self.session.execute(
            select(Membership).where(
                Membership.user_id == user_id,
                Membership.tenant_id == tenant_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_in_tenant(self, membership_id: UUID, tenant_id: UUID) -> Membership | None:
        """Get a membership by id, only if it belongs to the tenant."""
        result = await self.session.execute(
            select(Membership).where(
                Membership.id == membership_id,
                Membership.tenant_id == tenant_id,
            )
        )
        return result.scalar_one_or_none()

    async def user_has_membership(self, user_id: UUID, tenant_id: UUID) -> bool:
        membership = await self.get_membership(user_id, tenant_id)
        return membership is not None

    async def lock_owners(self, tenant_id: UUID) -> list[Membership]:
        """Select the tenant's owner memberships FOR UPDATE.

        Concurrent removals serialise on these rows. Backends without row
        locks (SQLite) ignore the clause.
        """
        result = await self.session.execute(
            select(Membership)
            .where(
                Membership.tenant_id == tenant_id,
                Membership.role == SystemRole.OWNER.value,
            )
            .with_for_update()
        )
        return list(result.scalars().all())

    async def count_with_role(self, tenant_id: UUID, role: str) -> int:
        result = await self.session.execute(
            select(func.count())
            .select_from(Membership)
            .where(Membership.tenant_id == tenant_id, Membership.role == role)
        )
        return result.scalar_one()

    async def list_with_users(self, tenant_id: UUID) -> list[tuple[Membership, User]]:
        """List a tenant's memberships joined with active users, oldest first."""
        result = await self.session.execute(
            select(Membership, User)
            .join(User, User.id == Membership.user_id)  # type: ignore[arg-type]
            .where(
                Membership.tenant_id == tenant_id,
                User.is_active == True,  # noqa: E712
            )
            .order_by(Membership.joined_at)  # type: ignore[arg-type]
        )
        return [(membership, user) for membership, user in result.all()]

    def create_membership(self, user_id: UUID, tenant_id: UUID, role: str) -> Membership:
        """Create a new membership (add to session, no commit)."""
        membership = Membership(user_id=user_id, tenant_id=tenant_id, role=role)
        self.session.add(membership)
        return membership
