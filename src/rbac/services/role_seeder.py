"""Seed the system role catalog into a tenant."""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.rbac.core.logging import get_logger
from src.rbac.core.role_catalog import SYSTEM_ROLE_CATALOG, RoleDefinition
from src.rbac.models import RoleKind
from src.rbac.repositories import RoleRepository, RoleWithGrants

logger = get_logger(__name__)


async def seed_system_roles(
    session: AsyncSession,
    tenant_id: UUID,
    catalog: Sequence[RoleDefinition] = SYSTEM_ROLE_CATALOG,
) -> list[RoleWithGrants]:
    """Insert one system role, with its grants, per catalog entry.

    Runs inside the caller's transaction and never commits: a failure here
    propagates so the caller rolls back the whole tenant creation.
    """
    role_repo = RoleRepository(session)
    seeded = [
        await role_repo.create_with_grants(
            tenant_id=tenant_id,
            name=definition.name,
            kind=RoleKind.SYSTEM.value,
            description=definition.description,
            grants=definition.grants,
        )
        for definition in catalog
    ]
    logger.debug("System roles seeded", tenant_id=str(tenant_id), count=len(seeded))
    return seeded
