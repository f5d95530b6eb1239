"""Tests for the membership guard with mocked collaborators."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from src.rbac.core.errors import ErrorCode, ErrorReason
from src.rbac.models import Membership, Tenant
from src.rbac.services import MembershipGuard

pytestmark = pytest.mark.unit


@pytest.fixture
def membership_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_membership = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def permission_engine() -> MagicMock:
    permission_engine = MagicMock()
    permission_engine.has_permission = AsyncMock(return_value=False)
    return permission_engine


@pytest.fixture
def tenant_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_active = AsyncMock(return_value=Tenant(name="Acme", slug="acme-1a2b3c"))
    return repo


@pytest.fixture
def guard(
    membership_repo: MagicMock, permission_engine: MagicMock, tenant_repo: MagicMock
) -> MembershipGuard:
    return MembershipGuard(membership_repo, permission_engine, tenant_repo)


async def test_no_caller_is_unauthorized(guard: MembershipGuard, membership_repo: MagicMock):
    result = await guard.require_membership(None, uuid4())
    assert not result.is_success
    assert result.error.code is ErrorCode.UNAUTHORIZED
    membership_repo.get_membership.assert_not_awaited()


async def test_non_member_is_forbidden(guard: MembershipGuard):
    result = await guard.require_membership(uuid4(), uuid4())
    assert not result.is_success
    assert result.error.code is ErrorCode.FORBIDDEN
    assert result.error.reason is ErrorReason.NOT_A_MEMBER


async def test_member_resolves(guard: MembershipGuard, membership_repo: MagicMock):
    tenant_id, user_id = uuid4(), uuid4()
    membership = Membership(tenant_id=tenant_id, user_id=user_id, role="teacher")
    membership_repo.get_membership.return_value = membership

    result = await guard.require_membership(user_id, tenant_id)

    assert result.is_success
    assert result.data is membership


async def test_missing_permission_is_forbidden(
    guard: MembershipGuard, membership_repo: MagicMock, permission_engine: MagicMock
):
    tenant_id, user_id = uuid4(), uuid4()
    membership_repo.get_membership.return_value = Membership(
        tenant_id=tenant_id, user_id=user_id, role="student"
    )

    result = await guard.require_permission(user_id, tenant_id, "invitation", "create")

    assert not result.is_success
    assert result.error.reason is ErrorReason.INSUFFICIENT_PERMISSIONS
    permission_engine.has_permission.assert_awaited_once_with(
        tenant_id, "student", "invitation", "create"
    )


async def test_granted_permission_returns_membership(
    guard: MembershipGuard, membership_repo: MagicMock, permission_engine: MagicMock
):
    tenant_id, user_id = uuid4(), uuid4()
    membership = Membership(tenant_id=tenant_id, user_id=user_id, role="admin")
    membership_repo.get_membership.return_value = membership
    permission_engine.has_permission.return_value = True

    result = await guard.require_permission(user_id, tenant_id, "member", "delete")

    assert result.is_success
    assert result.data is membership


async def test_permission_not_checked_for_non_member(
    guard: MembershipGuard, permission_engine: MagicMock
):
    result = await guard.require_permission(uuid4(), uuid4(), "member", "read")
    assert not result.is_success
    permission_engine.has_permission.assert_not_awaited()


async def test_deleted_tenant_is_not_found_for_member(
    guard: MembershipGuard, membership_repo: MagicMock, tenant_repo: MagicMock
):
    tenant_id, user_id = uuid4(), uuid4()
    membership_repo.get_membership.return_value = Membership(
        tenant_id=tenant_id, user_id=user_id, role="owner"
    )
    tenant_repo.get_active.return_value = None

    result = await guard.require_membership(user_id, tenant_id)

    assert result.error.code is ErrorCode.RESOURCE_NOT_FOUND
    tenant_repo.get_active.assert_awaited_once_with(tenant_id)


async def test_deleted_tenant_checked_after_permission(
    guard: MembershipGuard,
    membership_repo: MagicMock,
    permission_engine: MagicMock,
    tenant_repo: MagicMock,
):
    tenant_id, user_id = uuid4(), uuid4()
    membership_repo.get_membership.return_value = Membership(
        tenant_id=tenant_id, user_id=user_id, role="student"
    )
    tenant_repo.get_active.return_value = None

    denied = await guard.require_permission(user_id, tenant_id, "member", "delete")
    assert denied.error.reason is ErrorReason.INSUFFICIENT_PERMISSIONS
    tenant_repo.get_active.assert_not_awaited()

    permission_engine.has_permission.return_value = True
    result = await guard.require_permission(user_id, tenant_id, "member", "delete")
    assert result.error.code is ErrorCode.RESOURCE_NOT_FOUND


async def test_non_member_never_reaches_tenant_lookup(
    guard: MembershipGuard, tenant_repo: MagicMock
):
    result = await guard.require_membership(uuid4(), uuid4())
    assert result.error.reason is ErrorReason.NOT_A_MEMBER
    tenant_repo.get_active.assert_not_awaited()
