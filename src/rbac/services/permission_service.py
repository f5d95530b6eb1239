"""Permission engine - answers "may this role perform this action on this resource"."""

from uuid import UUID

from src.rbac.repositories import RoleRepository


class PermissionEngine:
    """Resolve permissions from the tenant's persisted roles and grants.

    Deny by default: a missing role, a missing grant, or an action absent
    from the grant all yield False. There is no role hierarchy, and
    system and custom roles are evaluated identically.
    """

    def __init__(self, role_repo: RoleRepository):
        self.role_repo = role_repo

    async def has_permission(
        self, tenant_id: UUID, role_name: str, resource: str, action: str
    ) -> bool:
        grant = await self.role_repo.get_grant(tenant_id, role_name, resource)
        if grant is None:
            return False
        return grant.allows(action)
