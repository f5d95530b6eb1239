"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.rbac.api.dependencies.db import DBSession
from src.rbac.repositories import (
    InvitationRepository,
    MembershipRepository,
    RoleRepository,
    TenantRepository,
    UserRepository,
)


def get_role_repository(session: DBSession) -> RoleRepository:
    return RoleRepository(session)


def get_membership_repository(session: DBSession) -> MembershipRepository:
    return MembershipRepository(session)


def get_invitation_repository(session: DBSession) -> InvitationRepository:
    return InvitationRepository(session)


def get_tenant_repository(session: DBSession) -> TenantRepository:
    return TenantRepository(session)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


RoleRepo = Annotated[RoleRepository, Depends(get_role_repository)]
MembershipRepo = Annotated[MembershipRepository, Depends(get_membership_repository)]
InvitationRepo = Annotated[InvitationRepository, Depends(get_invitation_repository)]
TenantRepo = Annotated[TenantRepository, Depends(get_tenant_repository)]
UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
