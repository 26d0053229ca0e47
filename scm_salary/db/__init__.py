"""Database helpers and SQLAlchemy session factories."""

from .engine import create_sync_engine
from .session import bind_sessionmaker, get_sessionmaker, session_scope

__all__ = [
    "bind_sessionmaker",
    "create_sync_engine",
    "get_sessionmaker",
    "session_scope",
]
