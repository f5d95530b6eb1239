"""Repository layer - data access abstraction."""

from src.rbac.repositories.base import BaseRepository
from src.rbac.repositories.invitation import InvitationRepository
from src.rbac.repositories.membership import MembershipRepository
from src.rbac.repositories.role import RoleRepository, RoleWithGrants
from src.rbac.repositories.tenant import TenantRepository
from src.rbac.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "InvitationRepository",
    "MembershipRepository",
    "RoleRepository",
    "RoleWithGrants",
    "TenantRepository",
    "UserRepository",
]
