"""Repository for User entity."""

from sqlmodel import select

from src.rbac.core.validators import normalize_email
from src.rbac.models import User
from src.rbac.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email address (case-insensitive)."""
        result = await self.session.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()
