"""
Domain package for the insert benchmark.

Exports the data definitions and error kinds shared by the connection,
runner, and reporting layers. Keep this package free of I/O.
"""

from insert_bench.domain.errors import (
    BusyError,
    ConnectionFailedError,
    DriverLoadError,
    ExecutionError,
    InsertBenchError,
    MetadataError,
    NotConnectedError,
)
from insert_bench.domain.models import (
    BenchmarkResult,
    ConnectOutcome,
    ConnectionConfig,
    ErrorKind,
    InsertStrategy,
    Row,
)

__all__ = [
    "BenchmarkResult",
    "ConnectOutcome",
    "ConnectionConfig",
    "ErrorKind",
    "InsertStrategy",
    "Row",
    "InsertBenchError",
    "DriverLoadError",
    "ConnectionFailedError",
    "MetadataError",
    "NotConnectedError",
    "ExecutionError",
    "BusyError",
]
