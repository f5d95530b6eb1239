"""Role and permission management for a tenant."""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.rbac.core.errors import (
    ErrorReason,
    ServiceError,
    duplicate_error,
    forbidden_error,
    not_found_error,
    validation_error,
)
from src.rbac.core.logging import get_logger
from src.rbac.core.result import Failure, ServiceResult, Success
from src.rbac.core.role_catalog import GrantSpec
from src.rbac.core.validators import validate_permission_token, validate_role_name
from src.rbac.models import Role, RoleKind
from src.rbac.repositories import RoleRepository, RoleWithGrants
from src.rbac.services.membership_guard import MembershipGuard

logger = get_logger(__name__)


def check_grants(grants: Sequence[GrantSpec]) -> ServiceError | None:
    """Validate a grant list: well-formed identifiers, non-empty actions, one grant per resource."""
    seen: set[str] = set()
    for grant in grants:
        try:
            validate_permission_token(grant.resource)
            for action in grant.actions:
                validate_permission_token(action)
        except ValueError as e:
            return validation_error(str(e), grant.resource)
        if not grant.actions:
            return validation_error(
                f"Grant for '{grant.resource}' must list at least one action", grant.resource
            )
        if grant.resource in seen:
            return validation_error(
                f"Resource '{grant.resource}' is granted more than once", grant.resource
            )
        seen.add(grant.resource)
    return None


def normalize_grants(grants: Sequence[GrantSpec]) -> list[GrantSpec]:
    """Drop repeated actions within a grant, keeping first-seen order."""
    return [GrantSpec(g.resource, tuple(dict.fromkeys(g.actions))) for g in grants]


class RoleService:
    """Create, list, re-grant and delete tenant roles.

    Mutations require `organization:update` on the tenant; listing requires
    `member:read`.
    """

    def __init__(self, role_repo: RoleRepository, guard: MembershipGuard, session: AsyncSession):
        self.role_repo = role_repo
        self.guard = guard
        self.session = session

    async def create_role(
        self,
        tenant_id: UUID,
        caller_id: UUID | None,
        name: str,
        description: str | None = None,
        grants: Sequence[GrantSpec] = (),
    ) -> ServiceResult[RoleWithGrants]:
        """Create a custom role and its grants in one transaction."""
        access = await self.guard.require_permission(caller_id, tenant_id, "organization", "update")
        if not access.is_success:
            return access

        try:
            validate_role_name(name)
        except ValueError as e:
            return Failure.of(validation_error(str(e), name))
        if error := check_grants(grants):
            return Failure.of(error)

        if await self.role_repo.get_by_name(tenant_id, name) is not None:
            return Failure.of(duplicate_error("Role", "name", name))

        try:
            created = await self.role_repo.create_with_grants(
                tenant_id=tenant_id,
                name=name,
                kind=RoleKind.CUSTOM.value,
                description=description,
                grants=normalize_grants(grants),
            )
            await self.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent create of the same name
            await self.session.rollback()
            return Failure.of(duplicate_error("Role", "name", name))
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to create role",
                operation="create_role",
                tenant_id=str(tenant_id),
                error=str(e),
            )
            raise

        logger.info(
            "Role created", tenant_id=str(tenant_id), role=name, role_id=str(created.role.id)
        )
        return Success(created)

    async def update_permissions(
        self,
        tenant_id: UUID,
        caller_id: UUID | None,
        role_id: UUID,
        grants: Sequence[GrantSpec],
    ) -> ServiceResult[RoleWithGrants]:
        """Replace every grant of a role with `grants`, atomically."""
        access = await self.guard.require_permission(caller_id, tenant_id, "organization", "update")
        if not access.is_success:
            return access

        if not grants:
            return Failure.of(validation_error("At least one permission is required"))
        if error := check_grants(grants):
            return Failure.of(error)

        role = await self.role_repo.get_in_tenant(tenant_id, role_id)
        if role is None:
            return Failure.of(not_found_error("Role", role_id))

        try:
            permissions = await self.role_repo.replace_permissions(role, normalize_grants(grants))
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to update role permissions",
                operation="update_permissions",
                tenant_id=str(tenant_id),
                role_id=str(role_id),
                error=str(e),
            )
            raise

        logger.info("Role permissions updated", tenant_id=str(tenant_id), role_id=str(role_id))
        return Success(RoleWithGrants(role=role, grants=permissions))

    async def delete_role(
        self, tenant_id: UUID, caller_id: UUID | None, role_id: UUID
    ) -> ServiceResult[Role]:
        """Delete a custom role; its grants cascade. System roles are protected."""
        access = await self.guard.require_permission(caller_id, tenant_id, "organization", "update")
        if not access.is_success:
            return access

        role = await self.role_repo.get_in_tenant(tenant_id, role_id)
        if role is None:
            return Failure.of(not_found_error("Role", role_id))
        if role.is_system:
            return Failure.of(
                forbidden_error("System roles cannot be deleted", ErrorReason.SYSTEM_ROLE_DELETE)
            )

        try:
            await self.role_repo.delete(role)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to delete role",
                operation="delete_role",
                tenant_id=str(tenant_id),
                role_id=str(role_id),
                error=str(e),
            )
            raise

        logger.info("Role deleted", tenant_id=str(tenant_id), role=role.name, role_id=str(role_id))
        return Success(role)

    async def list_roles(
        self, tenant_id: UUID, caller_id: UUID | None
    ) -> ServiceResult[list[RoleWithGrants]]:
        access = await self.guard.require_permission(caller_id, tenant_id, "member", "read")
        if not access.is_success:
            return access
        return Success(await self.role_repo.list_with_grants(tenant_id))

    async def find_role_by_id(self, tenant_id: UUID, role_id: UUID) -> ServiceResult[Role]:
        """Unguarded lookup scoped to the tenant."""
        role = await self.role_repo.get_in_tenant(tenant_id, role_id)
        if role is None:
            return Failure.of(not_found_error("Role", role_id))
        return Success(role)

    async def find_role_by_name(self, tenant_id: UUID, name: str) -> ServiceResult[Role]:
        role = await self.role_repo.get_by_name(tenant_id, name)
        if role is None:
            return Failure.of(not_found_error("Role", name))
        return Success(role)
