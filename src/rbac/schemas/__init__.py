from src.rbac.schemas.error import ErrorDetail, ErrorResponse
from src.rbac.schemas.invitation import (
    InvitationAcceptResponse,
    InvitationCreateRequest,
    InvitationListItem,
    InvitationListResponse,
    InvitationRead,
)
from src.rbac.schemas.member import MemberListResponse, MemberRead
from src.rbac.schemas.role import (
    GrantIn,
    GrantRead,
    RoleCreateRequest,
    RoleListResponse,
    RolePermissionsUpdateRequest,
    RoleRead,
)
from src.rbac.schemas.tenant import (
    TenantCreateRequest,
    TenantRead,
    TenantUpdateRequest,
    UserTenantListResponse,
    UserTenantRead,
)

__all__ = [
    # Errors
    "ErrorDetail",
    "ErrorResponse",
    # Invitations
    "InvitationAcceptResponse",
    "InvitationCreateRequest",
    "InvitationListItem",
    "InvitationListResponse",
    "InvitationRead",
    # Members
    "MemberListResponse",
    "MemberRead",
    # Roles
    "GrantIn",
    "GrantRead",
    "RoleCreateRequest",
    "RoleListResponse",
    "RolePermissionsUpdateRequest",
    "RoleRead",
    # Tenants
    "TenantCreateRequest",
    "TenantRead",
    "TenantUpdateRequest",
    "UserTenantListResponse",
    "UserTenantRead",
]
