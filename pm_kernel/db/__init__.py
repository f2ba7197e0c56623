"""Database layer - engine, declarative base, and the SQL gateway."""

from pm_kernel.db.base import Base
from pm_kernel.db.engine import (
    create_tables,
    get_engine,
    get_session,
    init_engine_from_url,
    session_scope,
)
from pm_kernel.db.gateway import SqlGateway

__all__ = [
    "Base",
    "SqlGateway",
    "create_tables",
    "get_engine",
    "get_session",
    "init_engine_from_url",
    "session_scope",
]
