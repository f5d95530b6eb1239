"""Role and permission schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.rbac.core.role_catalog import GrantSpec
from src.rbac.core.validators import validate_permission_token, validate_role_name
from src.rbac.repositories import RoleWithGrants


class GrantIn(BaseModel):
    """A (resource, actions) pair, e.g. {"resource": "course", "actions": ["read"]}."""

    resource: str = Field(..., min_length=1, max_length=50)
    actions: list[str] = Field(..., min_length=1)

    @field_validator("resource")
    @classmethod
    def validate_resource(cls, v: str) -> str:
        return validate_permission_token(v)

    @field_validator("actions")
    @classmethod
    def validate_actions(cls, v: list[str]) -> list[str]:
        return [validate_permission_token(action) for action in v]

    def to_spec(self) -> GrantSpec:
        return GrantSpec(self.resource, tuple(self.actions))


class GrantRead(BaseModel):
    resource: str
    actions: list[str]

    model_config = {"from_attributes": True}


class RoleCreateRequest(BaseModel):
    name: str
    description: str | None = Field(default=None, max_length=255)
    permissions: list[GrantIn] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_role_name(v)


class RolePermissionsUpdateRequest(BaseModel):
    """Full replacement of a role's grants."""

    permissions: list[GrantIn] = Field(..., min_length=1)


class RoleRead(BaseModel):
    id: UUID
    name: str
    kind: str
    description: str | None
    created_at: datetime
    permissions: list[GrantRead]

    @classmethod
    def from_entry(cls, entry: RoleWithGrants) -> "RoleRead":
        role = entry.role
        return cls(
            id=role.id,
            name=role.name,
            kind=role.kind,
            description=role.description,
            created_at=role.created_at,
            permissions=[GrantRead.model_validate(grant) for grant in entry.grants],
        )


class RoleListResponse(BaseModel):
    roles: list[RoleRead]
