"""Translate service outcomes into HTTP responses."""

from typing import Any

from asgi_correlation_id import correlation_id
from fastapi.responses import JSONResponse

from src.rbac.core.result import Failure, ServiceResult, Success


class ServiceFailureError(Exception):
    """Raised at the HTTP boundary to short-circuit a route with a Failure."""

    def __init__(self, failure: Failure):
        super().__init__(failure.error.message)
        self.failure = failure


def unwrap[T](result: ServiceResult[T]) -> T:
    """Return the data of a Success, or raise so the app renders the Failure."""
    match result:
        case Success(data=data):
            return data
        case Failure() as failure:
            raise ServiceFailureError(failure)


def error_response(status_code: int, errors: list[dict[str, Any]]) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"errors": errors, "request_id": correlation_id.get()},
    )


def failure_response(failure: Failure) -> JSONResponse:
    return error_response(failure.status_code, [error.to_dict() for error in failure.errors])
