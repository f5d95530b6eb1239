"""Static catalog of the system roles seeded into every new tenant.

The catalog is seed data only. Once a tenant exists, its persisted roles
and grants are authoritative and the permission engine never consults
this module.
"""

from dataclasses import dataclass
from typing import Final

from src.rbac.models.enums import SystemRole


@dataclass(frozen=True, slots=True)
class GrantSpec:
    resource: str
    actions: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class RoleDefinition:
    name: str
    grants: tuple[GrantSpec, ...]

    @property
    def description(self) -> str:
        return f"System role: {self.name}"


_CRUD: Final = ("create", "read", "update", "delete")
_CRU: Final = ("create", "read", "update")
_READ: Final = ("read",)

SYSTEM_ROLE_CATALOG: Final[tuple[RoleDefinition, ...]] = (
    RoleDefinition(
        SystemRole.OWNER.value,
        (
            GrantSpec("organization", ("update", "delete")),
            GrantSpec("member", _CRUD),
            GrantSpec("invitation", ("create", "read", "delete")),
            GrantSpec("course", _CRUD),
            GrantSpec("grade", _CRU),
            GrantSpec("attendance", _CRU),
        ),
    ),
    RoleDefinition(
        SystemRole.ADMIN.value,
        (
            GrantSpec("organization", ("update",)),
            GrantSpec("member", _CRUD),
            GrantSpec("invitation", ("create", "read", "delete")),
            GrantSpec("course", _CRUD),
            GrantSpec("grade", _CRU),
            GrantSpec("attendance", _CRU),
        ),
    ),
    RoleDefinition(
        SystemRole.TEACHER.value,
        (
            GrantSpec("member", _READ),
            GrantSpec("course", _CRU),
            GrantSpec("grade", _CRU),
            GrantSpec("attendance", _CRU),
        ),
    ),
    RoleDefinition(
        SystemRole.STUDENT.value,
        (
            GrantSpec("member", _READ),
            GrantSpec("course", _READ),
            GrantSpec("grade", _READ),
            GrantSpec("attendance", _READ),
        ),
    ),
    RoleDefinition(
        SystemRole.PARENT.value,
        (
            GrantSpec("member", _READ),
            GrantSpec("course", _READ),
            GrantSpec("grade", _READ),
            GrantSpec("attendance", _READ),
        ),
    ),
    RoleDefinition(
        SystemRole.STAFF.value,
        (
            GrantSpec("member", _CRU),
            GrantSpec("invitation", ("create", "read", "delete")),
            GrantSpec("course", _READ),
            GrantSpec("attendance", _CRU),
        ),
    ),
)


def get_role_definition(name: str) -> RoleDefinition | None:
    """Look up a catalog entry by role name."""
    for definition in SYSTEM_ROLE_CATALOG:
        if definition.name == name:
            return definition
    return None
