"""Tenant member API endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.rbac.api.dependencies import CurrentCaller, MemberServiceDep, caller_id
from src.rbac.api.errors import unwrap
from src.rbac.schemas import MemberListResponse, MemberRead

router = APIRouter(prefix="/tenants/{tenant_id}/members", tags=["members"])


@router.get("", response_model=MemberListResponse, summary="List members")
async def list_members(
    tenant_id: UUID,
    caller: CurrentCaller,
    member_service: MemberServiceDep,
) -> MemberListResponse:
    views = unwrap(await member_service.list_members(tenant_id, caller_id(caller)))
    return MemberListResponse(
        members=[MemberRead.from_view(view) for view in views], total=len(views)
    )


@router.delete(
    "/{member_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove member",
    description="Remove a membership. The last owner of a tenant cannot be removed.",
)
async def remove_member(
    tenant_id: UUID,
    member_id: UUID,
    caller: CurrentCaller,
    member_service: MemberServiceDep,
) -> None:
    unwrap(await member_service.remove_member(tenant_id, member_id, caller_id(caller)))
