"""Database session dependency."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.rbac.core.db import get_session


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """Get a request-scoped database session."""
    async with get_session() as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]
