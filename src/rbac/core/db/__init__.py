"""Database utilities - engine and session."""

from src.rbac.core.db.engine import build_engine, dispose_engine, get_engine
from src.rbac.core.db.session import get_session

__all__ = [
    "build_engine",
    "dispose_engine",
    "get_engine",
    "get_session",
]
