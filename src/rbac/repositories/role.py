"""Repository for Role and Permission grant entities."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from src.rbac.core.role_catalog import GrantSpec
from src.rbac.models import Permission, Role
from src.rbac.models.base import utc_now
from src.rbac.repositories.base import BaseRepository


@dataclass(slots=True)
class RoleWithGrants:
    """A role together with its grant rows."""

    role: Role
    grants: list[Permission] = field(default_factory=list)


class RoleRepository(BaseRepository[Role]):
    """Tenant-scoped roles and their (resource, actions) grants."""

    model = Role

    async def get_in_tenant(self, tenant_id: UUID, role_id: UUID) -> Role | None:
        """Get a role by id, only if it belongs to the tenant."""
        result = await self.session.execute(
            select(Role).where(Role.id == role_id, Role.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, tenant_id: UUID, name: str) -> Role | None:
        result = await self.session.execute(
            select(Role).where(Role.tenant_id == tenant_id, Role.name == name)
        )
        return result.scalar_one_or_none()

    async def create_with_grants(
        self,
        tenant_id: UUID,
        name: str,
        kind: str,
        description: str | None,
        grants: Iterable[GrantSpec],
    ) -> RoleWithGrants:
        """Insert a role and its grants (flush, no commit)."""
        role = Role(tenant_id=tenant_id, name=name, kind=kind, description=description)
        self.session.add(role)
        await self.session.flush()  # Role row must exist before its grants

        permissions = self._build_permissions(role.id, grants)
        self.session.add_all(permissions)
        await self.session.flush()
        return RoleWithGrants(role=role, grants=permissions)

    async def replace_permissions(
        self, role: Role, grants: Iterable[GrantSpec]
    ) -> list[Permission]:
        """Delete every grant of the role, then insert the new set (flush, no commit)."""
        stmt = delete(Permission).where(Permission.role_id == role.id)  # type: ignore[arg-type]
        await self.session.execute(stmt)
        permissions = self._build_permissions(role.id, grants)
        self.session.add_all(permissions)
        role.updated_at = utc_now()
        await self.session.flush()
        return permissions

    async def list_grants(self, role_id: UUID) -> list[Permission]:
        result = await self.session.execute(
            select(Permission)
            .where(Permission.role_id == role_id)
            .order_by(Permission.resource)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())

    async def list_with_grants(self, tenant_id: UUID) -> list[RoleWithGrants]:
        """List every role of a tenant with its grants from a single outer-join scan.

        Roles without grants are included with an empty grant list.
        """
        result = await self.session.execute(
            select(Role, Permission)
            .outerjoin(Permission, Permission.role_id == Role.id)  # type: ignore[arg-type]
            .where(Role.tenant_id == tenant_id)
            .order_by(Role.name, Permission.resource)  # type: ignore[arg-type]
        )

        aggregated: dict[UUID, RoleWithGrants] = {}
        for role, permission in result.all():
            entry = aggregated.setdefault(role.id, RoleWithGrants(role=role))
            if permission is not None:
                entry.grants.append(permission)
        return list(aggregated.values())

    async def get_grant(
        self, tenant_id: UUID, role_name: str, resource: str
    ) -> Permission | None:
        """Get the grant a named role holds on a resource, if any."""
        result = await self.session.execute(
            select(Permission)
            .join(Role, Role.id == Permission.role_id)  # type: ignore[arg-type]
            .where(
                Role.tenant_id == tenant_id,
                Role.name == role_name,
                Permission.resource == resource,
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _build_permissions(role_id: UUID, grants: Iterable[GrantSpec]) -> list[Permission]:
        return [
            Permission(role_id=role_id, resource=grant.resource, actions=list(grant.actions))
            for grant in grants
        ]
