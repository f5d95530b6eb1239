"""Test helper functions for common data creation patterns."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from src.rbac.core.notifications import NotificationDispatcher
from src.rbac.models import Membership, SystemRole, Tenant, TenantType, User
from src.rbac.repositories import (
    InvitationRepository,
    MembershipRepository,
    RoleRepository,
    TenantRepository,
    UserRepository,
)
from src.rbac.services import (
    InvitationService,
    MembershipGuard,
    MemberService,
    PermissionEngine,
    RoleService,
    TenantService,
)
from tests.factories import MembershipFactory, UserFactory


class RecordingDispatcher:
    """Notification dispatcher that records messages instead of sending them."""

    def __init__(self, succeed: bool = True):
        self.succeed = succeed
        self.sent: list[tuple[str, str, str]] = []

    def send(self, recipient: str, subject: str, body: str) -> bool:
        self.sent.append((recipient, subject, body))
        return self.succeed


@dataclass
class Services:
    """Every service wired to one session, as the API dependencies do per request."""

    guard: MembershipGuard
    tenants: TenantService
    roles: RoleService
    members: MemberService
    invitations: InvitationService


def build_services(session: AsyncSession, dispatcher: NotificationDispatcher) -> Services:
    role_repo = RoleRepository(session)
    membership_repo = MembershipRepository(session)
    invitation_repo = InvitationRepository(session)
    tenant_repo = TenantRepository(session)
    user_repo = UserRepository(session)
    guard = MembershipGuard(membership_repo, PermissionEngine(role_repo), tenant_repo)
    return Services(
        guard=guard,
        tenants=TenantService(tenant_repo, membership_repo, user_repo, guard, session),
        roles=RoleService(role_repo, guard, session),
        members=MemberService(membership_repo, guard, session),
        invitations=InvitationService(
            invitation_repo,
            membership_repo,
            role_repo,
            tenant_repo,
            user_repo,
            guard,
            dispatcher,
            session,
        ),
    )


def caller_headers(user: User) -> dict[str, str]:
    """Identity headers the authentication gateway forwards for `user`."""
    return {"X-User-Id": str(user.id), "X-User-Email": user.email}


async def create_user(session: AsyncSession, **user_kwargs) -> User:
    """Create and commit a user."""
    user = UserFactory.build(**user_kwargs)
    session.add(user)
    await session.commit()
    return user


async def create_tenant_with_owner(
    services: Services,
    session: AsyncSession,
    name: str = "Acme",
    tenant_type: TenantType = TenantType.SCHOOL,
    **owner_kwargs,
) -> tuple[Tenant, User]:
    """Create a user, then a tenant owned by them through the tenant service."""
    owner = await create_user(session, **owner_kwargs)
    result = await services.tenants.create_tenant(name, tenant_type.value, owner.id)
    assert result.is_success, result
    return result.data, owner


async def add_member(
    session: AsyncSession,
    tenant: Tenant,
    role: SystemRole | str = SystemRole.STUDENT,
    **user_kwargs,
) -> tuple[User, Membership]:
    """Create a user and their membership in a tenant (committed).

    Args:
        session: Database session
        tenant: Tenant to create membership in
        role: Role name for the membership (default: student)
        **user_kwargs: Additional args passed to UserFactory

    Returns:
        Tuple of (user, membership)
    """
    user = UserFactory.build(**user_kwargs)
    session.add(user)
    await session.flush()

    membership = MembershipFactory.build(
        user_id=user.id,
        tenant_id=tenant.id,
        role=role.value if isinstance(role, SystemRole) else role,
    )
    session.add(membership)
    await session.commit()
    return user, membership
