"""Error kinds produced by the access-control engine.

Guarded operations report failures as data (`ServiceError`) rather than
raising, so route handlers can branch on the outcome. Only unexpected
store or infrastructure failures propagate as exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Final


class ErrorCode(str, Enum):
    """Machine-readable error codes, stable across releases."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorReason(str, Enum):
    """Finer-grained reasons attached to FORBIDDEN and VALIDATION_ERROR outcomes."""

    NOT_A_MEMBER = "ERR_NOT_A_MEMBER"
    INSUFFICIENT_PERMISSIONS = "ERR_INSUFFICIENT_PERMISSIONS"
    LAST_OWNER = "ERR_LAST_OWNER"
    SYSTEM_ROLE_DELETE = "ERR_SYSTEM_ROLE_DELETE"
    ROLE_NOT_FOUND = "ERR_ROLE_NOT_FOUND"
    INVITATION_EMAIL_MISMATCH = "ERR_INVITATION_EMAIL_MISMATCH"
    INVITATION_NOT_PENDING = "ERR_INVITATION_NOT_PENDING"
    INVITATION_EXPIRED = "ERR_INVITATION_EXPIRED"


ERROR_STATUS_CODES: Final[dict[ErrorCode, int]] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.FORBIDDEN: 403,
    ErrorCode.RESOURCE_NOT_FOUND: 404,
    ErrorCode.DUPLICATE_RESOURCE: 409,
    ErrorCode.INTERNAL_ERROR: 500,
}


@dataclass(frozen=True, slots=True)
class ServiceError:
    """A single failure reported by a service operation."""

    code: ErrorCode
    message: str
    value: str | None = None
    reason: ErrorReason | None = None

    @property
    def status_code(self) -> int:
        return ERROR_STATUS_CODES[self.code]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.value is not None:
            data["value"] = self.value
        if self.reason is not None:
            data["reason"] = self.reason.value
        return data


def validation_error(
    message: str, value: str | None = None, reason: ErrorReason | None = None
) -> ServiceError:
    return ServiceError(ErrorCode.VALIDATION_ERROR, message, value, reason)


def unauthorized_error(message: str = "Authentication required") -> ServiceError:
    return ServiceError(ErrorCode.UNAUTHORIZED, message)


def forbidden_error(message: str, reason: ErrorReason | None = None) -> ServiceError:
    return ServiceError(ErrorCode.FORBIDDEN, message, reason=reason)


def not_found_error(resource: str, resource_id: object | None = None) -> ServiceError:
    value = str(resource_id) if resource_id is not None else None
    if value:
        return ServiceError(ErrorCode.RESOURCE_NOT_FOUND, f"{resource} {value} not found", value)
    return ServiceError(ErrorCode.RESOURCE_NOT_FOUND, f"{resource} not found")


def duplicate_error(resource: str, field: str, value: str) -> ServiceError:
    return ServiceError(
        ErrorCode.DUPLICATE_RESOURCE,
        f"{resource} with {field} '{value}' already exists",
        value,
    )
