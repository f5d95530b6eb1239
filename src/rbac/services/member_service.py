"""Tenant membership listing and removal."""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.rbac.core.errors import ErrorReason, forbidden_error, not_found_error
from src.rbac.core.logging import get_logger
from src.rbac.core.result import Failure, ServiceResult, Success
from src.rbac.models import Membership, SystemRole
from src.rbac.repositories import MembershipRepository
from src.rbac.services.membership_guard import MembershipGuard

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class MemberView:
    membership: Membership
    email: str
    full_name: str


class MemberService:
    """Membership mutations that must keep every tenant with at least one owner."""

    def __init__(
        self,
        membership_repo: MembershipRepository,
        guard: MembershipGuard,
        session: AsyncSession,
    ):
        self.membership_repo = membership_repo
        self.guard = guard
        self.session = session

    async def remove_member(
        self, tenant_id: UUID, member_id: UUID, caller_id: UUID | None
    ) -> ServiceResult[Membership]:
        """Delete a membership of the tenant.

        Removing an owner locks the tenant's owner rows first, so the
        owner count and the delete happen in one transaction and two
        concurrent removals cannot both pass the count.
        """
        access = await self.guard.require_permission(caller_id, tenant_id, "member", "delete")
        if not access.is_success:
            return access

        target = await self.membership_repo.get_in_tenant(member_id, tenant_id)
        if target is None:
            return Failure.of(not_found_error("Member", member_id))

        try:
            if target.role == SystemRole.OWNER.value:
                owners = await self.membership_repo.lock_owners(tenant_id)
                if len(owners) <= 1:
                    await self.session.rollback()
                    logger.info(
                        "Refused to remove last owner",
                        tenant_id=str(tenant_id),
                        member_id=str(member_id),
                    )
                    return Failure.of(
                        forbidden_error(
                            "Cannot remove the last owner of the organization",
                            ErrorReason.LAST_OWNER,
                        )
                    )

            await self.membership_repo.delete(target)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to remove member",
                operation="remove_member",
                tenant_id=str(tenant_id),
                member_id=str(member_id),
                error=str(e),
            )
            raise

        logger.info(
            "Member removed",
            tenant_id=str(tenant_id),
            member_id=str(member_id),
            removed_by=str(caller_id),
        )
        return Success(target)

    async def list_members(
        self, tenant_id: UUID, caller_id: UUID | None
    ) -> ServiceResult[list[MemberView]]:
        access = await self.guard.require_permission(caller_id, tenant_id, "member", "read")
        if not access.is_success:
            return access

        rows = await self.membership_repo.list_with_users(tenant_id)
        return Success(
            [
                MemberView(membership=membership, email=user.email, full_name=user.full_name)
                for membership, user in rows
            ]
        )
