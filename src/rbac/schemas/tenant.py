"""Tenant schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.rbac.models import TenantType


class TenantCreateRequest(BaseModel):
    """Request to create a tenant. The caller becomes its owner."""

    name: str = Field(..., min_length=1, max_length=100)
    tenant_type: TenantType = TenantType.OTHER

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Organization name is required")
        return v


class TenantUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    tenant_type: TenantType | None = None


class TenantRead(BaseModel):
    id: UUID
    name: str
    slug: str
    tenant_type: str
    created_at: datetime

    model_config = {"from_attributes": True}


class UserTenantRead(BaseModel):
    """A tenant the caller belongs to, with the caller's role there."""

    tenant: TenantRead
    role: str


class UserTenantListResponse(BaseModel):
    tenants: list[UserTenantRead]
