"""Service layer - business logic and transaction control."""

from src.rbac.services.invitation_service import (
    AcceptedInvitation,
    InvitationService,
    InvitationView,
)
from src.rbac.services.member_service import MemberService, MemberView
from src.rbac.services.membership_guard import MembershipGuard
from src.rbac.services.permission_service import PermissionEngine
from src.rbac.services.role_seeder import seed_system_roles
from src.rbac.services.role_service import RoleService
from src.rbac.services.tenant_service import TenantService, UserTenant

__all__ = [
    "AcceptedInvitation",
    "InvitationService",
    "InvitationView",
    "MemberService",
    "MemberView",
    "MembershipGuard",
    "PermissionEngine",
    "RoleService",
    "TenantService",
    "UserTenant",
    "seed_system_roles",
]
