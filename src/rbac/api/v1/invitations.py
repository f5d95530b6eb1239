"""Tenant invitation API endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.rbac.api.dependencies import CurrentCaller, InvitationServiceDep, caller_id
from src.rbac.api.errors import unwrap
from src.rbac.schemas import (
    InvitationAcceptResponse,
    InvitationCreateRequest,
    InvitationListItem,
    InvitationListResponse,
    InvitationRead,
)

router = APIRouter(tags=["invitations"])


# =============================================================================
# Tenant-scoped endpoints (permission checked against the caller's role)
# =============================================================================


@router.post(
    "/tenants/{tenant_id}/invitations",
    response_model=InvitationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Invite member",
    description="Invite an email address at a role. Requires invitation:create.",
)
async def create_invitation(
    tenant_id: UUID,
    request: InvitationCreateRequest,
    caller: CurrentCaller,
    invitation_service: InvitationServiceDep,
) -> InvitationRead:
    invitation = unwrap(
        await invitation_service.invite(tenant_id, request.email, request.role, caller_id(caller))
    )
    return InvitationRead.model_validate(invitation)


@router.get(
    "/tenants/{tenant_id}/invitations",
    response_model=InvitationListResponse,
    summary="List invitations",
    description="List every invitation of the tenant, any status. Requires invitation:read.",
)
async def list_invitations(
    tenant_id: UUID,
    caller: CurrentCaller,
    invitation_service: InvitationServiceDep,
) -> InvitationListResponse:
    views = unwrap(await invitation_service.list_invitations(tenant_id, caller_id(caller)))
    return InvitationListResponse(
        invitations=[InvitationListItem.from_view(view) for view in views],
        total=len(views),
    )


@router.delete(
    "/tenants/{tenant_id}/invitations/{invitation_id}",
    response_model=InvitationRead,
    summary="Cancel invitation",
    description="Cancel a pending invitation. Requires invitation:delete.",
)
async def cancel_invitation(
    tenant_id: UUID,
    invitation_id: UUID,
    caller: CurrentCaller,
    invitation_service: InvitationServiceDep,
) -> InvitationRead:
    invitation = unwrap(
        await invitation_service.cancel(invitation_id, tenant_id, caller_id(caller))
    )
    return InvitationRead.model_validate(invitation)


# =============================================================================
# Invitee endpoint (caller email must match the invitation)
# =============================================================================


@router.post(
    "/invitations/{invitation_id}/accept",
    response_model=InvitationAcceptResponse,
    summary="Accept invitation",
)
async def accept_invitation(
    invitation_id: UUID,
    caller: CurrentCaller,
    invitation_service: InvitationServiceDep,
) -> InvitationAcceptResponse:
    accepted = unwrap(
        await invitation_service.accept(
            invitation_id,
            caller_id(caller),
            caller.email if caller else None,
        )
    )
    return InvitationAcceptResponse(
        tenant_id=accepted.tenant.id,
        tenant_name=accepted.tenant.name,
        membership_id=accepted.membership.id,
        role=accepted.membership.role,
    )
