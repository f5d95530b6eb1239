"""Tenant invitation lifecycle: invite, accept, cancel, list."""

from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.rbac.core.config import Settings, get_settings
from src.rbac.core.errors import (
    ErrorReason,
    duplicate_error,
    forbidden_error,
    not_found_error,
    unauthorized_error,
    validation_error,
)
from src.rbac.core.logging import get_logger
from src.rbac.core.notifications import NotificationDispatcher, send_invitation_email
from src.rbac.core.result import Failure, ServiceResult, Success
from src.rbac.core.validators import normalize_email
from src.rbac.models import Invitation, InvitationStatus, Membership, Tenant
from src.rbac.models.base import days_from_now
from src.rbac.repositories import (
    InvitationRepository,
    MembershipRepository,
    RoleRepository,
    TenantRepository,
    UserRepository,
)
from src.rbac.services.membership_guard import MembershipGuard

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AcceptedInvitation:
    invitation: Invitation
    membership: Membership
    tenant: Tenant


@dataclass(frozen=True, slots=True)
class InvitationView:
    """An invitation joined with its inviter's display details."""

    invitation: Invitation
    inviter_name: str | None
    inviter_email: str | None


class InvitationService:
    """Service for tenant invitation operations.

    State machine: pending -> accepted | expired | cancelled. Terminal
    states never transition again. Expiry is materialised lazily, the
    first time someone tries to accept a stale invitation.
    """

    def __init__(
        self,
        invitation_repo: InvitationRepository,
        membership_repo: MembershipRepository,
        role_repo: RoleRepository,
        tenant_repo: TenantRepository,
        user_repo: UserRepository,
        guard: MembershipGuard,
        dispatcher: NotificationDispatcher,
        session: AsyncSession,
        settings: Settings | None = None,
    ):
        self.invitation_repo = invitation_repo
        self.membership_repo = membership_repo
        self.role_repo = role_repo
        self.tenant_repo = tenant_repo
        self.user_repo = user_repo
        self.guard = guard
        self.dispatcher = dispatcher
        self.session = session
        self.settings = settings or get_settings()

    async def invite(
        self, tenant_id: UUID, email: str, role_name: str, inviter_id: UUID | None
    ) -> ServiceResult[Invitation]:
        """Create a pending invitation and notify the invitee.

        The notification is sent after commit; a delivery failure is logged
        and does not undo the invitation.
        """
        access = await self.guard.require_permission(inviter_id, tenant_id, "invitation", "create")
        if not access.is_success:
            return access
        inviter_id = access.data.user_id

        tenant = await self.tenant_repo.get_active(tenant_id)
        if tenant is None:
            return Failure.of(not_found_error("Organization", tenant_id))

        if await self.role_repo.get_by_name(tenant_id, role_name) is None:
            return Failure.of(
                validation_error(
                    f"Role '{role_name}' does not exist", role_name, ErrorReason.ROLE_NOT_FOUND
                )
            )

        email = normalize_email(email)
        existing_user = await self.user_repo.get_by_email(email)
        if existing_user is not None and await self.membership_repo.user_has_membership(
            existing_user.id, tenant_id
        ):
            return Failure.of(duplicate_error("Member", "email", email))

        pending = await self.invitation_repo.get_pending(tenant_id, email)
        if pending is not None:
            if not pending.is_expired():
                return Failure.of(duplicate_error("Invitation", "email", email))
            # A lapsed invitation frees the pending slot once its expiry is recorded
            await self._mark_expired(pending)

        invitation = Invitation(
            tenant_id=tenant_id,
            email=email,
            role=role_name,
            status=InvitationStatus.PENDING.value,
            expires_at=days_from_now(self.settings.invite_expire_days),
            inviter_id=inviter_id,
        )
        try:
            self.invitation_repo.add(invitation)
            await self.session.commit()
        except IntegrityError:
            # A concurrent invite for the same email won the pending slot
            await self.session.rollback()
            return Failure.of(duplicate_error("Invitation", "email", email))
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to create invitation",
                operation="invite",
                tenant_id=str(tenant_id),
                error=str(e),
            )
            raise

        inviter = await self.user_repo.get_by_id(inviter_id)
        sent = send_invitation_email(
            self.dispatcher,
            to=email,
            invitation_id=invitation.id,
            tenant_name=tenant.name,
            inviter_name=(inviter.full_name if inviter and inviter.full_name else "Someone"),
            role=role_name,
            expires_at=invitation.expires_at,
        )
        if not sent:
            logger.warning(
                "Invitation email not delivered",
                tenant_id=str(tenant_id),
                invitation_id=str(invitation.id),
            )

        logger.info(
            "Invitation created",
            tenant_id=str(tenant_id),
            invitation_id=str(invitation.id),
            role=role_name,
            invited_by=str(inviter_id),
        )
        return Success(invitation)

    async def accept(
        self, invitation_id: UUID, caller_id: UUID | None, caller_email: str | None
    ) -> ServiceResult[AcceptedInvitation]:
        """Accept an invitation on behalf of the authenticated caller.

        Validates, in order:
        1. Invitation exists
        2. Invitation email matches the caller's email
        3. Invitation is still pending
        4. Invitation has not expired (an expired one is marked expired, then rejected)
        5. Tenant exists and is not deleted
        6. Caller has a user record

        The membership insert and the status change commit together.
        """
        if caller_id is None or not caller_email:
            return Failure.of(unauthorized_error())

        invitation = await self.invitation_repo.get_by_id(invitation_id)
        if invitation is None:
            return Failure.of(not_found_error("Invitation", invitation_id))

        if invitation.email != normalize_email(caller_email):
            return Failure.of(
                forbidden_error(
                    "This invitation is for a different email address",
                    ErrorReason.INVITATION_EMAIL_MISMATCH,
                )
            )

        if invitation.status != InvitationStatus.PENDING.value:
            return Failure.of(
                forbidden_error(
                    "This invitation has already been used or cancelled",
                    ErrorReason.INVITATION_NOT_PENDING,
                )
            )

        if invitation.is_expired():
            await self._mark_expired(invitation)
            return Failure.of(
                forbidden_error("This invitation has expired", ErrorReason.INVITATION_EXPIRED)
            )

        tenant_id, email = invitation.tenant_id, invitation.email
        tenant = await self.tenant_repo.get_active(tenant_id)
        if tenant is None:
            return Failure.of(not_found_error("Organization", tenant_id))

        if await self.user_repo.get_by_id(caller_id) is None:
            return Failure.of(not_found_error("User", caller_id))

        if await self.membership_repo.user_has_membership(caller_id, tenant_id):
            return Failure.of(duplicate_error("Member", "email", email))

        try:
            membership = self.membership_repo.create_membership(
                user_id=caller_id, tenant_id=tenant_id, role=invitation.role
            )
            self.invitation_repo.set_status(invitation, InvitationStatus.ACCEPTED)
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            return Failure.of(duplicate_error("Member", "email", email))
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to accept invitation",
                operation="accept",
                tenant_id=str(tenant_id),
                invitation_id=str(invitation_id),
                error=str(e),
            )
            raise

        logger.info(
            "Invitation accepted",
            tenant_id=str(tenant_id),
            invitation_id=str(invitation_id),
            user_id=str(caller_id),
            role=invitation.role,
        )
        return Success(
            AcceptedInvitation(invitation=invitation, membership=membership, tenant=tenant)
        )

    async def cancel(
        self, invitation_id: UUID, tenant_id: UUID, caller_id: UUID | None
    ) -> ServiceResult[Invitation]:
        access = await self.guard.require_permission(caller_id, tenant_id, "invitation", "delete")
        if not access.is_success:
            return access

        invitation = await self.invitation_repo.get_in_tenant(invitation_id, tenant_id)
        if invitation is None:
            return Failure.of(not_found_error("Invitation", invitation_id))
        if invitation.status != InvitationStatus.PENDING.value:
            return Failure.of(
                forbidden_error(
                    "Only pending invitations can be cancelled",
                    ErrorReason.INVITATION_NOT_PENDING,
                )
            )

        try:
            self.invitation_repo.set_status(invitation, InvitationStatus.CANCELLED)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to cancel invitation",
                operation="cancel",
                tenant_id=str(tenant_id),
                invitation_id=str(invitation_id),
                error=str(e),
            )
            raise

        logger.info(
            "Invitation cancelled",
            tenant_id=str(tenant_id),
            invitation_id=str(invitation_id),
            cancelled_by=str(caller_id),
        )
        return Success(invitation)

    async def list_invitations(
        self, tenant_id: UUID, caller_id: UUID | None
    ) -> ServiceResult[list[InvitationView]]:
        """All invitations of the tenant, any status, with inviter details."""
        access = await self.guard.require_permission(caller_id, tenant_id, "invitation", "read")
        if not access.is_success:
            return access

        rows = await self.invitation_repo.list_with_inviters(tenant_id)
        return Success(
            [
                InvitationView(
                    invitation=invitation,
                    inviter_name=inviter.full_name if inviter else None,
                    inviter_email=inviter.email if inviter else None,
                )
                for invitation, inviter in rows
            ]
        )

    async def _mark_expired(self, invitation: Invitation) -> None:
        """Persist the pending -> expired transition in its own commit."""
        tenant_id, invitation_id = invitation.tenant_id, invitation.id
        try:
            self.invitation_repo.set_status(invitation, InvitationStatus.EXPIRED)
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.error(
                "Failed to expire invitation",
                operation="expire_invitation",
                tenant_id=str(tenant_id),
                invitation_id=str(invitation_id),
                error=str(e),
            )
            raise
        logger.info(
            "Invitation expired",
            tenant_id=str(tenant_id),
            invitation_id=str(invitation_id),
        )
