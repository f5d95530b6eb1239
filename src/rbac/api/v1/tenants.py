"""Tenant API endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.rbac.api.dependencies import CurrentCaller, TenantServiceDep, caller_id
from src.rbac.api.errors import unwrap
from src.rbac.schemas import (
    TenantCreateRequest,
    TenantRead,
    TenantUpdateRequest,
    UserTenantListResponse,
    UserTenantRead,
)

router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.post(
    "",
    response_model=TenantRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create tenant",
    description="Create a tenant, seed its system roles and make the caller its owner.",
)
async def create_tenant(
    request: TenantCreateRequest,
    caller: CurrentCaller,
    tenant_service: TenantServiceDep,
) -> TenantRead:
    tenant = unwrap(
        await tenant_service.create_tenant(
            request.name, request.tenant_type.value, caller_id(caller)
        )
    )
    return TenantRead.model_validate(tenant)


@router.get("", response_model=UserTenantListResponse, summary="List my tenants")
async def list_my_tenants(
    caller: CurrentCaller,
    tenant_service: TenantServiceDep,
) -> UserTenantListResponse:
    rows = unwrap(await tenant_service.list_user_tenants(caller_id(caller)))
    return UserTenantListResponse(
        tenants=[
            UserTenantRead(tenant=TenantRead.model_validate(row.tenant), role=row.role)
            for row in rows
        ]
    )


@router.get("/{tenant_id}", response_model=TenantRead, summary="Get tenant")
async def get_tenant(
    tenant_id: UUID,
    caller: CurrentCaller,
    tenant_service: TenantServiceDep,
) -> TenantRead:
    tenant = unwrap(await tenant_service.get_tenant(tenant_id, caller_id(caller)))
    return TenantRead.model_validate(tenant)


@router.patch(
    "/{tenant_id}",
    response_model=TenantRead,
    summary="Update tenant",
    description="Rename or retype a tenant. Requires organization:update.",
)
async def update_tenant(
    tenant_id: UUID,
    request: TenantUpdateRequest,
    caller: CurrentCaller,
    tenant_service: TenantServiceDep,
) -> TenantRead:
    tenant = unwrap(
        await tenant_service.update_tenant(
            tenant_id,
            caller_id(caller),
            name=request.name,
            tenant_type=request.tenant_type.value if request.tenant_type else None,
        )
    )
    return TenantRead.model_validate(tenant)


@router.delete(
    "/{tenant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete tenant",
    description="Soft-delete a tenant. Requires organization:delete.",
)
async def delete_tenant(
    tenant_id: UUID,
    caller: CurrentCaller,
    tenant_service: TenantServiceDep,
) -> None:
    unwrap(await tenant_service.delete_tenant(tenant_id, caller_id(caller)))
