"""Integration fixtures: services and an HTTP client over the in-memory store."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from src.rbac.api.dependencies import get_db_session
from src.rbac.core.db import get_session
from src.rbac.main import create_app
from src.rbac.models import Tenant, User
from tests.helpers import RecordingDispatcher, Services, build_services, create_tenant_with_owner


@pytest.fixture
def services(db_session: AsyncSession, dispatcher: RecordingDispatcher) -> Services:
    return build_services(db_session, dispatcher)


@pytest.fixture
async def acme(services: Services, db_session: AsyncSession) -> tuple[Tenant, User]:
    """Tenant "Acme" (school) owned by a freshly created user."""
    return await create_tenant_with_owner(
        services, db_session, name="Acme", email="owner@acme.test", full_name="Alice Owner"
    )


@pytest.fixture
async def client(
    engine: AsyncEngine, dispatcher: RecordingDispatcher
) -> AsyncGenerator[AsyncClient]:
    """HTTP client whose requests each get their own session on the test engine."""
    app = create_app(notification_dispatcher=dispatcher)

    async def _session_override() -> AsyncGenerator[AsyncSession]:
        async with get_session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = _session_override
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
