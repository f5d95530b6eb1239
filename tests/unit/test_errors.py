"""Tests for service errors and discriminated results."""

import pytest

from src.rbac.core.errors import (
    ErrorCode,
    ErrorReason,
    ServiceError,
    duplicate_error,
    forbidden_error,
    not_found_error,
    unauthorized_error,
    validation_error,
)
from src.rbac.core.result import Failure, Success

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (validation_error("bad"), 400),
        (unauthorized_error(), 401),
        (forbidden_error("no"), 403),
        (not_found_error("Role"), 404),
        (duplicate_error("Role", "name", "tutor"), 409),
        (ServiceError(ErrorCode.INTERNAL_ERROR, "boom"), 500),
    ],
)
def test_status_code_mapping(error: ServiceError, status: int):
    assert error.status_code == status


def test_not_found_message_includes_id():
    error = not_found_error("Invitation", "abc")
    assert error.message == "Invitation abc not found"
    assert error.value == "abc"


def test_duplicate_error_carries_value():
    error = duplicate_error("Invitation", "email", "bob@x.com")
    assert error.code is ErrorCode.DUPLICATE_RESOURCE
    assert error.value == "bob@x.com"
    assert "bob@x.com" in error.message


def test_to_dict_omits_empty_fields():
    assert unauthorized_error().to_dict() == {
        "code": "UNAUTHORIZED",
        "message": "Authentication required",
    }


def test_to_dict_includes_reason():
    error = forbidden_error("last owner", ErrorReason.LAST_OWNER)
    assert error.to_dict()["reason"] == "ERR_LAST_OWNER"


def test_failure_exposes_primary_error():
    failure = Failure.of(forbidden_error("first"), validation_error("second"))
    assert failure.error.message == "first"
    assert failure.status_code == 403
    assert not failure.is_success


def test_results_pattern_match():
    def describe(result: Success[int] | Failure) -> str:
        match result:
            case Success(data=value):
                return f"ok:{value}"
            case Failure(errors=errors):
                return f"err:{errors[0].code.value}"

    assert describe(Success(3)) == "ok:3"
    assert describe(Failure.of(not_found_error("Role"))) == "err:RESOURCE_NOT_FOUND"
