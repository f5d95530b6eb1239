"""A soft-deleted tenant is inaccessible through every guarded operation."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from uuid import UUID

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.rbac.core.errors import ErrorCode
from src.rbac.core.result import ServiceResult
from src.rbac.core.role_catalog import GrantSpec
from src.rbac.models import InvitationStatus, Membership, Role, SystemRole, Tenant, User
from tests.helpers import Services, add_member

pytestmark = pytest.mark.integration


@dataclass
class DeletedTenant:
    tenant_id: UUID
    owner_id: UUID
    student_membership_id: UUID
    custom_role_id: UUID
    invitation_id: UUID


@pytest.fixture
async def deleted(
    services: Services, db_session: AsyncSession, acme: tuple[Tenant, User]
) -> DeletedTenant:
    """Acme with a student, a custom role and a pending invitation, then soft-deleted."""
    tenant, owner = acme
    _, student = await add_member(db_session, tenant, SystemRole.STUDENT)
    role = await services.roles.create_role(
        tenant.id, owner.id, "tutor", None, (GrantSpec("course", ("read",)),)
    )
    invitation = await services.invitations.invite(tenant.id, "bob@x.com", "teacher", owner.id)
    assert (await services.tenants.delete_tenant(tenant.id, owner.id)).is_success
    return DeletedTenant(
        tenant_id=tenant.id,
        owner_id=owner.id,
        student_membership_id=student.id,
        custom_role_id=role.data.role.id,
        invitation_id=invitation.data.id,
    )


Operation = Callable[[Services, DeletedTenant], Awaitable[ServiceResult]]

OPERATIONS: dict[str, Operation] = {
    "list_members": lambda s, d: s.members.list_members(d.tenant_id, d.owner_id),
    "remove_member": lambda s, d: s.members.remove_member(
        d.tenant_id, d.student_membership_id, d.owner_id
    ),
    "list_invitations": lambda s, d: s.invitations.list_invitations(d.tenant_id, d.owner_id),
    "cancel_invitation": lambda s, d: s.invitations.cancel(
        d.invitation_id, d.tenant_id, d.owner_id
    ),
    "list_roles": lambda s, d: s.roles.list_roles(d.tenant_id, d.owner_id),
    "create_role": lambda s, d: s.roles.create_role(d.tenant_id, d.owner_id, "ghost"),
    "update_permissions": lambda s, d: s.roles.update_permissions(
        d.tenant_id, d.owner_id, d.custom_role_id, (GrantSpec("grade", ("read",)),)
    ),
    "delete_role": lambda s, d: s.roles.delete_role(d.tenant_id, d.owner_id, d.custom_role_id),
    "get_tenant": lambda s, d: s.tenants.get_tenant(d.tenant_id, d.owner_id),
    "update_tenant": lambda s, d: s.tenants.update_tenant(d.tenant_id, d.owner_id, name="Back"),
}


@pytest.mark.parametrize("operation", OPERATIONS.values(), ids=OPERATIONS.keys())
async def test_operation_reports_tenant_not_found(
    services: Services, deleted: DeletedTenant, operation: Operation
):
    result = await operation(services, deleted)

    assert not result.is_success
    assert result.error.code is ErrorCode.RESOURCE_NOT_FOUND
    assert result.error.value == str(deleted.tenant_id)


async def test_deleted_tenant_rows_are_left_untouched(
    services: Services, db_session: AsyncSession, deleted: DeletedTenant
):
    for operation in OPERATIONS.values():
        await operation(services, deleted)

    assert await db_session.scalar(
        select(func.count()).select_from(Membership).where(
            Membership.tenant_id == deleted.tenant_id
        )
    ) == 2
    role = await db_session.get(Role, deleted.custom_role_id)
    assert role is not None
    invitation = await services.invitations.invitation_repo.get_by_id(deleted.invitation_id)
    assert invitation is not None
    assert invitation.status == InvitationStatus.PENDING.value
    assert await services.roles.role_repo.get_by_name(deleted.tenant_id, "ghost") is None
