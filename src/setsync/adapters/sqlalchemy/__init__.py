"""SQLAlchemy adapter package for setsync."""

from __future__ import annotations

from .engine import StartupError, configured_engine, is_started, shutdown, startup
from .mappings import create_all_tables, metadata, throttle_flag_table
from .throttle import SqlAlchemyThrottleStore

__all__ = [
    "SqlAlchemyThrottleStore",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
    "throttle_flag_table",
]
