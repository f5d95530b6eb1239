"""Tenant lifecycle: creation with role seeding, updates, soft deletion."""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.rbac.core.errors import (
    duplicate_error,
    not_found_error,
    unauthorized_error,
    validation_error,
)
from src.rbac.core.logging import get_logger
from src.rbac.core.result import Failure, ServiceResult, Success
from src.rbac.core.validators import slugify_tenant_name
from src.rbac.models import SystemRole, Tenant, TenantType
from src.rbac.models.base import utc_now
from src.rbac.repositories import MembershipRepository, TenantRepository, UserRepository
from src.rbac.services.membership_guard import MembershipGuard
from src.rbac.services.role_seeder import seed_system_roles

logger = get_logger(__name__)

MAX_TENANT_NAME_LENGTH = 100


@dataclass(frozen=True, slots=True)
class UserTenant:
    tenant: Tenant
    role: str


def _check_name(name: str) -> str | None:
    name = name.strip()
    if not name or len(name) > MAX_TENANT_NAME_LENGTH:
        return None
    return name


def _check_tenant_type(tenant_type: str) -> TenantType | None:
    try:
        return TenantType(tenant_type)
    except ValueError:
        return None


class TenantService:
    """Tenant lifecycle - business logic only."""

    def __init__(
        self,
        tenant_repo: TenantRepository,
        membership_repo: MembershipRepository,
        user_repo: UserRepository,
        guard: MembershipGuard,
        session: AsyncSession,
    ):
        self.tenant_repo = tenant_repo
        self.membership_repo = membership_repo
        self.user_repo = user_repo
        self.guard = guard
        self.session = session

    async def create_tenant(
        self, name: str, tenant_type: str, owner_id: UUID | None
    ) -> ServiceResult[Tenant]:
        """Create a tenant, seed its system roles and make the caller its owner.

        All three steps commit together; any failure leaves nothing behind.
        """
        if owner_id is None:
            return Failure.of(unauthorized_error())

        clean_name = _check_name(name)
        if clean_name is None:
            return Failure.of(
                validation_error(
                    f"Organization name must be 1-{MAX_TENANT_NAME_LENGTH} characters", name
                )
            )
        kind = _check_tenant_type(tenant_type)
        if kind is None:
            return Failure.of(
                validation_error(f"Unknown organization type '{tenant_type}'", tenant_type)
            )

        if await self.user_repo.get_by_id(owner_id) is None:
            return Failure.of(not_found_error("User", owner_id))

        slug = slugify_tenant_name(clean_name)
        tenant = Tenant(name=clean_name, slug=slug, tenant_type=kind.value)
        try:
            self.tenant_repo.add(tenant)
            await self.session.flush()  # Tenant row must exist before roles and membership
            await seed_system_roles(self.session, tenant.id)
            self.membership_repo.create_membership(
                user_id=owner_id, tenant_id=tenant.id, role=SystemRole.OWNER.value
            )
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            return Failure.of(duplicate_error("Organization", "slug", slug))
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create tenant", operation="create_tenant", error=str(e))
            raise

        logger.info(
            "Tenant created",
            tenant_id=str(tenant.id),
            slug=tenant.slug,
            tenant_type=tenant.tenant_type,
            owner_id=str(owner_id),
        )
        return Success(tenant)

    async def get_tenant(self, tenant_id: UUID, caller_id: UUID | None) -> ServiceResult[Tenant]:
        access = await self.guard.require_membership(caller_id, tenant_id)
        if not access.is_success:
            return access

        tenant = await self.tenant_repo.get_active(tenant_id)
        if tenant is None:
            return Failure.of(not_found_error("Organization", tenant_id))
        return Success(tenant)

    async def update_tenant(
        self,
        tenant_id: UUID,
        caller_id: UUID | None,
        name: str | None = None,
        tenant_type: str | None = None,
    ) -> ServiceResult[Tenant]:
        """Rename and/or retype a tenant. Fields left as None are unchanged."""
        access = await self.guard.require_permission(caller_id, tenant_id, "organization", "update")
        if not access.is_success:
            return access

        tenant = await self.tenant_repo.get_active(tenant_id)
        if tenant is None:
            return Failure.of(not_found_error("Organization", tenant_id))

        # Validate every field before touching the row
        clean_name = _check_name(name) if name is not None else None
        if name is not None and clean_name is None:
            return Failure.of(
                validation_error(
                    f"Organization name must be 1-{MAX_TENANT_NAME_LENGTH} characters", name
                )
            )
        kind = _check_tenant_type(tenant_type) if tenant_type is not None else None
        if tenant_type is not None and kind is None:
            return Failure.of(
                validation_error(f"Unknown organization type '{tenant_type}'", tenant_type)
            )

        if clean_name is not None:
            tenant.name = clean_name
        if kind is not None:
            tenant.tenant_type = kind.value

        try:
            tenant.updated_at = utc_now()
            self.tenant_repo.add(tenant)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to update tenant",
                operation="update_tenant",
                tenant_id=str(tenant_id),
                error=str(e),
            )
            raise

        logger.info("Tenant updated", tenant_id=str(tenant_id))
        return Success(tenant)

    async def delete_tenant(self, tenant_id: UUID, caller_id: UUID | None) -> ServiceResult[Tenant]:
        """Soft-delete a tenant. Its rows stay in place until a hard delete cascades them."""
        access = await self.guard.require_permission(caller_id, tenant_id, "organization", "delete")
        if not access.is_success:
            return access

        tenant = await self.tenant_repo.get_active(tenant_id)
        if tenant is None:
            return Failure.of(not_found_error("Organization", tenant_id))

        try:
            self.tenant_repo.soft_delete(tenant)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to delete tenant",
                operation="delete_tenant",
                tenant_id=str(tenant_id),
                error=str(e),
            )
            raise

        logger.info("Tenant deleted", tenant_id=str(tenant_id), deleted_by=str(caller_id))
        return Success(tenant)

    async def list_user_tenants(self, user_id: UUID | None) -> ServiceResult[list[UserTenant]]:
        if user_id is None:
            return Failure.of(unauthorized_error())
        rows = await self.tenant_repo.list_for_user(user_id)
        return Success(
            [UserTenant(tenant=tenant, role=membership.role) for tenant, membership in rows]
        )
