"""Membership guard - gate for every tenant-scoped operation."""

from uuid import UUID

from src.rbac.core.errors import (
    ErrorReason,
    forbidden_error,
    not_found_error,
    unauthorized_error,
)
from src.rbac.core.logging import get_logger
from src.rbac.core.result import Failure, ServiceResult, Success
from src.rbac.models import Membership
from src.rbac.repositories import MembershipRepository, TenantRepository
from src.rbac.services.permission_service import PermissionEngine

logger = get_logger(__name__)


class MembershipGuard:
    """Resolve the caller's membership in a tenant and check its permissions.

    A soft-deleted tenant is inaccessible: once the caller has passed the
    membership (and permission) check, it is reported as not found.
    """

    def __init__(
        self,
        membership_repo: MembershipRepository,
        permission_engine: PermissionEngine,
        tenant_repo: TenantRepository,
    ):
        self.membership_repo = membership_repo
        self.permission_engine = permission_engine
        self.tenant_repo = tenant_repo

    async def require_membership(
        self, caller_id: UUID | None, tenant_id: UUID
    ) -> ServiceResult[Membership]:
        """Succeed with the caller's membership, or fail Unauthorized/Forbidden/NotFound."""
        result = await self._resolve_membership(caller_id, tenant_id)
        if not result.is_success:
            return result
        return await self._require_active_tenant(tenant_id, result)

    async def require_permission(
        self, caller_id: UUID | None, tenant_id: UUID, resource: str, action: str
    ) -> ServiceResult[Membership]:
        """Like `require_membership`, and the member's role must grant `resource:action`."""
        result = await self._resolve_membership(caller_id, tenant_id)
        if not result.is_success:
            return result

        membership = result.data
        allowed = await self.permission_engine.has_permission(
            tenant_id, membership.role, resource, action
        )
        if not allowed:
            logger.info(
                "Access denied: insufficient permissions",
                user_id=str(caller_id),
                tenant_id=str(tenant_id),
                role=membership.role,
                permission=f"{resource}:{action}",
            )
            return Failure.of(
                forbidden_error(
                    f"Insufficient permissions: {resource}:{action} required",
                    ErrorReason.INSUFFICIENT_PERMISSIONS,
                )
            )
        return await self._require_active_tenant(tenant_id, result)

    async def _resolve_membership(
        self, caller_id: UUID | None, tenant_id: UUID
    ) -> ServiceResult[Membership]:
        if caller_id is None:
            return Failure.of(unauthorized_error())

        membership = await self.membership_repo.get_membership(caller_id, tenant_id)
        if membership is None:
            logger.info(
                "Access denied: not a member",
                user_id=str(caller_id),
                tenant_id=str(tenant_id),
            )
            return Failure.of(
                forbidden_error("Not a member of this organization", ErrorReason.NOT_A_MEMBER)
            )
        return Success(membership)

    async def _require_active_tenant(
        self, tenant_id: UUID, granted: Success[Membership]
    ) -> ServiceResult[Membership]:
        if await self.tenant_repo.get_active(tenant_id) is None:
            return Failure.of(not_found_error("Organization", tenant_id))
        return granted
