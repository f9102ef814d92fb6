"""
Infrastructure package for the insert benchmark.

Centralizes database connectivity concerns (driver adapters, connection
lifecycle). Keep this layer focused on I/O and resource management, decoupled
from strategy/runner logic.
"""

from insert_bench.infrastructure.connection_manager import ConnectionManager
from insert_bench.infrastructure.drivers import (
    DriverAdapter,
    PsycopgAdapter,
    SqliteAdapter,
    available_drivers,
    resolve_adapter,
)

__all__ = [
    "ConnectionManager",
    "DriverAdapter",
    "PsycopgAdapter",
    "SqliteAdapter",
    "available_drivers",
    "resolve_adapter",
]
