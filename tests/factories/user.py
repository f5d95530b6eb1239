"""User and membership factories for test data generation."""

from polyfactory import Use

from src.rbac.models import Membership, SystemRole, User
from tests.factories.base import BaseFactory, generate_uuid, utc_now


class UserFactory(BaseFactory):
    """Factory for generating User test data."""

    __model__ = User

    id = Use(generate_uuid)
    email = Use(lambda: f"user_{generate_uuid().hex[-8:]}@example.com")
    full_name = "Test User"
    is_active = True
    created_at = Use(utc_now)

    @classmethod
    def inactive(cls, **kwargs):
        """Create an inactive user."""
        return cls.build(is_active=False, **kwargs)


class MembershipFactory(BaseFactory):
    """Factory for generating Membership test data."""

    __model__ = Membership

    id = Use(generate_uuid)
    # FK fields - must be set explicitly
    user_id = None
    tenant_id = None
    role = SystemRole.STUDENT.value
    joined_at = Use(utc_now)

    @classmethod
    def owner(cls, **kwargs):
        return cls.build(role=SystemRole.OWNER.value, **kwargs)
