"""User directory model.

Users are owned by the external authentication system; this engine only
reads them to match invitation emails and to display inviter names.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.rbac.models.base import utc_now


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    full_name: str = Field(default="", max_length=100)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
