"""Caller identity resolution.

Authentication happens upstream. The application holds a `SessionLookup`
on `app.state.session_lookup` that turns an inbound request into the
authenticated caller, or None. The default trusts identity headers set by
an authenticating gateway; deployments with their own session store
replace it in `create_app(session_lookup=...)`.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Request

from src.rbac.core.logging import bind_user_context, get_logger

logger = get_logger(__name__)

USER_ID_HEADER = "X-User-Id"
USER_EMAIL_HEADER = "X-User-Email"


@dataclass(frozen=True, slots=True)
class Caller:
    user_id: UUID
    email: str


type SessionLookup = Callable[[Request], Awaitable[Caller | None]]


async def gateway_session_lookup(request: Request) -> Caller | None:
    """Read the caller forwarded by the authentication gateway."""
    raw_id = request.headers.get(USER_ID_HEADER)
    email = request.headers.get(USER_EMAIL_HEADER)
    if not raw_id or not email:
        return None
    try:
        user_id = UUID(raw_id)
    except ValueError:
        logger.warning("Malformed caller id header", header=USER_ID_HEADER)
        return None
    return Caller(user_id=user_id, email=email)


async def get_caller(request: Request) -> Caller | None:
    """Resolve the caller through the application's session lookup."""
    lookup: SessionLookup = getattr(request.app.state, "session_lookup", gateway_session_lookup)
    caller = await lookup(request)
    if caller is not None:
        tenant_id = request.path_params.get("tenant_id")
        bind_user_context(caller.user_id, tenant_id=tenant_id, email=caller.email)
    return caller


CurrentCaller = Annotated[Caller | None, Depends(get_caller)]


def caller_id(caller: Caller | None) -> UUID | None:
    return caller.user_id if caller else None
