"""Database engine, session and store I/O helpers."""

from .guard import guarded
from .session import (
    AsyncSessionLocal,
    create_session_factory,
    engine,
    get_database_url,
    get_db,
    init_models,
)

__all__ = [
    "AsyncSessionLocal",
    "create_session_factory",
    "engine",
    "get_database_url",
    "get_db",
    "guarded",
    "init_models",
]
