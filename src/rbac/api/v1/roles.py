"""Tenant role API endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.rbac.api.dependencies import CurrentCaller, RoleServiceDep, caller_id
from src.rbac.api.errors import unwrap
from src.rbac.schemas import (
    RoleCreateRequest,
    RoleListResponse,
    RolePermissionsUpdateRequest,
    RoleRead,
)

router = APIRouter(prefix="/tenants/{tenant_id}/roles", tags=["roles"])


@router.get(
    "",
    response_model=RoleListResponse,
    summary="List roles",
    description="List system and custom roles with their permissions. Requires member:read.",
)
async def list_roles(
    tenant_id: UUID,
    caller: CurrentCaller,
    role_service: RoleServiceDep,
) -> RoleListResponse:
    entries = unwrap(await role_service.list_roles(tenant_id, caller_id(caller)))
    return RoleListResponse(roles=[RoleRead.from_entry(entry) for entry in entries])


@router.post(
    "",
    response_model=RoleRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create custom role",
    description="Create a custom role with its permissions. Requires organization:update.",
)
async def create_role(
    tenant_id: UUID,
    request: RoleCreateRequest,
    caller: CurrentCaller,
    role_service: RoleServiceDep,
) -> RoleRead:
    entry = unwrap(
        await role_service.create_role(
            tenant_id,
            caller_id(caller),
            name=request.name,
            description=request.description,
            grants=[grant.to_spec() for grant in request.permissions],
        )
    )
    return RoleRead.from_entry(entry)


@router.put(
    "/{role_id}/permissions",
    response_model=RoleRead,
    summary="Replace role permissions",
    description="Replace every permission of a role. Requires organization:update.",
)
async def update_role_permissions(
    tenant_id: UUID,
    role_id: UUID,
    request: RolePermissionsUpdateRequest,
    caller: CurrentCaller,
    role_service: RoleServiceDep,
) -> RoleRead:
    entry = unwrap(
        await role_service.update_permissions(
            tenant_id,
            caller_id(caller),
            role_id,
            [grant.to_spec() for grant in request.permissions],
        )
    )
    return RoleRead.from_entry(entry)


@router.delete(
    "/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete custom role",
    description="Delete a custom role. System roles cannot be deleted.",
)
async def delete_role(
    tenant_id: UUID,
    role_id: UUID,
    caller: CurrentCaller,
    role_service: RoleServiceDep,
) -> None:
    unwrap(await role_service.delete_role(tenant_id, caller_id(caller), role_id))
