"""Input validators shared by schemas and services."""

import re
import secrets
from typing import Final

MAX_TENANT_SLUG_LENGTH: Final[int] = 63
MAX_ROLE_NAME_LENGTH: Final[int] = 50
ROLE_NAME_REGEX: Final[str] = r"^[a-z][a-z0-9]*([-_][a-z0-9]+)*$"
PERMISSION_TOKEN_REGEX: Final[str] = r"^[a-z][a-z0-9_]*$"

_ROLE_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(ROLE_NAME_REGEX)
_PERMISSION_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(PERMISSION_TOKEN_REGEX)
_NON_SLUG_CHARS: Final[re.Pattern[str]] = re.compile(r"[^a-z0-9]+")


def normalize_email(email: str) -> str:
    """Lower-case and trim an email address for storage and comparison."""
    return email.strip().lower()


def validate_role_name(name: str) -> str:
    """Validate a role name: lowercase, starts with a letter, single - or _ separators."""
    if len(name) > MAX_ROLE_NAME_LENGTH:
        raise ValueError(f"Role name must be at most {MAX_ROLE_NAME_LENGTH} characters")
    if not _ROLE_NAME_PATTERN.match(name):
        raise ValueError(
            "Role name must start with a letter and contain only lowercase letters, numbers, "
            "and single hyphens or underscores as separators"
        )
    return name


def validate_permission_token(token: str) -> str:
    """Validate a resource or action identifier, e.g. 'invitation' or 'delete'."""
    if not _PERMISSION_TOKEN_PATTERN.match(token):
        raise ValueError(
            f"Invalid permission identifier '{token}': "
            "use lowercase letters, numbers and underscores"
        )
    return token


def slugify_tenant_name(name: str) -> str:
    """Derive a unique-enough slug from a tenant display name.

    E.g., 'Acme Academy!' -> 'acme-academy-3f9a1c'
    """
    base = _NON_SLUG_CHARS.sub("-", name.lower()).strip("-") or "tenant"
    suffix = secrets.token_hex(3)
    return f"{base[: MAX_TENANT_SLUG_LENGTH - len(suffix) - 1]}-{suffix}"
