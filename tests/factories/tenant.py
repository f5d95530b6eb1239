"""Tenant factory for test data generation."""

from polyfactory import Use

from src.rbac.models import Tenant, TenantType
from tests.factories.base import BaseFactory, generate_uuid, utc_now


class TenantFactory(BaseFactory):
    __model__ = Tenant

    id = Use(generate_uuid)
    name = "Test Academy"
    slug = Use(lambda: f"test-academy-{generate_uuid().hex[-6:]}")
    tenant_type = TenantType.SCHOOL.value
    created_at = Use(utc_now)
    updated_at = Use(utc_now)
    deleted_at = None

    @classmethod
    def deleted(cls, **kwargs):
        """Create a soft-deleted tenant."""
        return cls.build(deleted_at=utc_now(), **kwargs)
