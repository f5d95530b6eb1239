"""Repository for Tenant entity."""

from uuid import UUID

from sqlmodel import select

from src.rbac.models import Membership, Tenant
from src.rbac.models.base import utc_now
from src.rbac.repositories.base import BaseRepository


class TenantRepository(BaseRepository[Tenant]):
    model = Tenant

    async def get_active(self, tenant_id: UUID) -> Tenant | None:
        """Get a tenant by id unless it is soft-deleted."""
        result = await self.session.execute(
            select(Tenant).where(
                Tenant.id == tenant_id,
                Tenant.deleted_at == None,  # noqa: E711
            )
        )
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: UUID) -> list[tuple[Tenant, Membership]]:
        """List active tenants the user belongs to, with the user's membership."""
        result = await self.session.execute(
            select(Tenant, Membership)
            .join(Membership, Membership.tenant_id == Tenant.id)  # type: ignore[arg-type]
            .where(
                Membership.user_id == user_id,
                Tenant.deleted_at == None,  # noqa: E711
            )
            .order_by(Tenant.name)  # type: ignore[arg-type]
        )
        return [(tenant, membership) for tenant, membership in result.all()]

    def soft_delete(self, tenant: Tenant) -> Tenant:
        """Mark tenant as deleted (no flush/commit)."""
        tenant.deleted_at = utc_now()
        tenant.updated_at = tenant.deleted_at
        self.session.add(tenant)
        return tenant
