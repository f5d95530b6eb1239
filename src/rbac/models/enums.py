"""Shared enums for models."""

from enum import Enum


class TenantType(str, Enum):
    """Kind of organisation a tenant represents."""

    OTHER = "other"
    SCHOOL = "school"
    COLLEGE = "college"
    TUITION = "tuition"
    TRAINING_INSTITUTE = "training_institute"


class RoleKind(str, Enum):
    """Origin of a role: seeded from the catalog or authored by the tenant."""

    SYSTEM = "system"
    CUSTOM = "custom"


class SystemRole(str, Enum):
    """The six roles seeded into every tenant."""

    OWNER = "owner"
    ADMIN = "admin"
    TEACHER = "teacher"
    STUDENT = "student"
    PARENT = "parent"
    STAFF = "staff"


class InvitationStatus(str, Enum):
    """Tenant invitation status."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
