"""
Error kinds raised by the connection and benchmark layers.

Each exception carries an ``ErrorKind`` so callers that turn failures into
result values (the session facade, the runner) can record which kind of
failure happened without string matching.
"""

from __future__ import annotations

from insert_bench.domain.models import ErrorKind


class InsertBenchError(Exception):
    """Base class for all benchmark errors."""

    kind: ErrorKind = ErrorKind.EXECUTION


class DriverLoadError(InsertBenchError):
    """The requested driver is unknown or cannot be imported."""

    kind = ErrorKind.DRIVER_LOAD


class ConnectionFailedError(InsertBenchError):
    """Opening a connection failed (bad URL, rejected credentials, network)."""

    kind = ErrorKind.CONNECTION


class MetadataError(InsertBenchError):
    """Capability metadata could not be read from the open connection."""

    kind = ErrorKind.METADATA


class NotConnectedError(InsertBenchError):
    """An operation needed an open connection and there was none."""

    kind = ErrorKind.NOT_CONNECTED


class ExecutionError(InsertBenchError):
    """A statement (clear, insert, batch, commit) was rejected by the backend."""

    kind = ErrorKind.EXECUTION


class BusyError(InsertBenchError):
    """Another connect or run is already in flight on the same session."""

    kind = ErrorKind.BUSY


__all__ = [
    "InsertBenchError",
    "DriverLoadError",
    "ConnectionFailedError",
    "MetadataError",
    "NotConnectedError",
    "ExecutionError",
    "BusyError",
]
