"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, TenantFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.invitation import InvitationFactory
from tests.factories.tenant import TenantFactory
from tests.factories.user import MembershipFactory, UserFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # Tenant
    "TenantFactory",
    # User
    "MembershipFactory",
    "UserFactory",
    # Invitation
    "InvitationFactory",
]
