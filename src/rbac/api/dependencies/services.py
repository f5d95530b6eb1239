"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from src.rbac.api.dependencies.db import DBSession
from src.rbac.api.dependencies.repositories import (
    InvitationRepo,
    MembershipRepo,
    RoleRepo,
    TenantRepo,
    UserRepo,
)
from src.rbac.core.notifications import EmailDispatcher, NotificationDispatcher
from src.rbac.services import (
    InvitationService,
    MembershipGuard,
    MemberService,
    PermissionEngine,
    RoleService,
    TenantService,
)


def get_notification_dispatcher(request: Request) -> NotificationDispatcher:
    """Dispatcher configured on the app, falling back to email."""
    dispatcher: NotificationDispatcher | None = getattr(
        request.app.state, "notification_dispatcher", None
    )
    return dispatcher or EmailDispatcher()


def get_membership_guard(
    role_repo: RoleRepo, membership_repo: MembershipRepo, tenant_repo: TenantRepo
) -> MembershipGuard:
    return MembershipGuard(membership_repo, PermissionEngine(role_repo), tenant_repo)


Dispatcher = Annotated[NotificationDispatcher, Depends(get_notification_dispatcher)]
Guard = Annotated[MembershipGuard, Depends(get_membership_guard)]


def get_tenant_service(
    tenant_repo: TenantRepo,
    membership_repo: MembershipRepo,
    user_repo: UserRepo,
    guard: Guard,
    session: DBSession,
) -> TenantService:
    return TenantService(tenant_repo, membership_repo, user_repo, guard, session)


def get_role_service(role_repo: RoleRepo, guard: Guard, session: DBSession) -> RoleService:
    return RoleService(role_repo, guard, session)


def get_member_service(
    membership_repo: MembershipRepo, guard: Guard, session: DBSession
) -> MemberService:
    return MemberService(membership_repo, guard, session)


def get_invitation_service(
    invitation_repo: InvitationRepo,
    membership_repo: MembershipRepo,
    role_repo: RoleRepo,
    tenant_repo: TenantRepo,
    user_repo: UserRepo,
    guard: Guard,
    dispatcher: Dispatcher,
    session: DBSession,
) -> InvitationService:
    return InvitationService(
        invitation_repo,
        membership_repo,
        role_repo,
        tenant_repo,
        user_repo,
        guard,
        dispatcher,
        session,
    )


TenantServiceDep = Annotated[TenantService, Depends(get_tenant_service)]
RoleServiceDep = Annotated[RoleService, Depends(get_role_service)]
MemberServiceDep = Annotated[MemberService, Depends(get_member_service)]
InvitationServiceDep = Annotated[InvitationService, Depends(get_invitation_service)]
