"""FastAPI dependency injection definitions."""

from src.rbac.api.dependencies.caller import (
    Caller,
    CurrentCaller,
    SessionLookup,
    caller_id,
    gateway_session_lookup,
    get_caller,
)
from src.rbac.api.dependencies.db import DBSession, get_db_session
from src.rbac.api.dependencies.services import (
    Dispatcher,
    Guard,
    InvitationServiceDep,
    MemberServiceDep,
    RoleServiceDep,
    TenantServiceDep,
    get_notification_dispatcher,
)

__all__ = [
    # Caller
    "Caller",
    "CurrentCaller",
    "SessionLookup",
    "caller_id",
    "gateway_session_lookup",
    "get_caller",
    # Database
    "DBSession",
    "get_db_session",
    # Services
    "Dispatcher",
    "Guard",
    "InvitationServiceDep",
    "MemberServiceDep",
    "RoleServiceDep",
    "TenantServiceDep",
    "get_notification_dispatcher",
]
