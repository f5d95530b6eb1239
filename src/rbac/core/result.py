"""Discriminated success/failure results returned by guarded operations.

Usage:
    match await role_service.create_role(...):
        case Success(data=role):
            ...
        case Failure(errors=errors):
            ...
"""

from dataclasses import dataclass
from typing import Literal

from src.rbac.core.errors import ServiceError


@dataclass(frozen=True, slots=True)
class Success[T]:
    data: T
    is_success: Literal[True] = True


@dataclass(frozen=True, slots=True)
class Failure:
    errors: tuple[ServiceError, ...]
    is_success: Literal[False] = False

    @classmethod
    def of(cls, *errors: ServiceError) -> "Failure":
        return cls(errors=tuple(errors))

    @property
    def error(self) -> ServiceError:
        """The primary (first) error."""
        return self.errors[0]

    @property
    def status_code(self) -> int:
        return self.error.status_code


type ServiceResult[T] = Success[T] | Failure
