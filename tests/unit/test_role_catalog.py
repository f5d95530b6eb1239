"""Tests for the static system role catalog."""

import pytest

from src.rbac.core.role_catalog import SYSTEM_ROLE_CATALOG, get_role_definition
from src.rbac.models import SystemRole

pytestmark = pytest.mark.unit


def _grants(name: str) -> dict[str, set[str]]:
    definition = get_role_definition(name)
    assert definition is not None
    return {grant.resource: set(grant.actions) for grant in definition.grants}


def test_catalog_has_exactly_the_six_system_roles():
    names = [definition.name for definition in SYSTEM_ROLE_CATALOG]
    assert names == [role.value for role in SystemRole]


def test_no_role_grants_a_resource_twice():
    for definition in SYSTEM_ROLE_CATALOG:
        resources = [grant.resource for grant in definition.grants]
        assert len(resources) == len(set(resources)), definition.name


def test_owner_can_update_and_delete_organization():
    assert _grants("owner")["organization"] == {"update", "delete"}


def test_admin_cannot_delete_organization():
    assert _grants("admin")["organization"] == {"update"}


def test_owner_and_admin_share_everything_but_organization_delete():
    owner = _grants("owner")
    admin = _grants("admin")
    owner.pop("organization")
    admin.pop("organization")
    assert owner == admin


def test_teacher_has_no_invitation_or_organization_grants():
    grants = _grants("teacher")
    assert "invitation" not in grants
    assert "organization" not in grants
    assert grants["member"] == {"read"}


def test_student_and_parent_are_read_only():
    for name in ("student", "parent"):
        for resource, actions in _grants(name).items():
            assert actions == {"read"}, (name, resource)
    assert _grants("student") == _grants("parent")


def test_staff_manages_invitations_but_not_member_deletion():
    grants = _grants("staff")
    assert grants["invitation"] == {"create", "read", "delete"}
    assert "delete" not in grants["member"]


def test_system_role_description():
    definition = get_role_definition("teacher")
    assert definition is not None
    assert definition.description == "System role: teacher"


def test_unknown_role_definition_is_none():
    assert get_role_definition("janitor") is None
