"""Model exports.

Import from here: `from src.rbac.models import Role, Tenant`
"""

from src.rbac.models.enums import InvitationStatus, RoleKind, SystemRole, TenantType
from src.rbac.models.invitation import Invitation
from src.rbac.models.membership import Membership
from src.rbac.models.role import Permission, Role
from src.rbac.models.tenant import Tenant
from src.rbac.models.user import User

__all__ = [
    # Enums
    "InvitationStatus",
    "RoleKind",
    "SystemRole",
    "TenantType",
    # Models
    "Invitation",
    "Membership",
    "Permission",
    "Role",
    "Tenant",
    "User",
]
