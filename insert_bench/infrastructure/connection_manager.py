"""
Connection lifecycle management for the insert benchmark.

The ConnectionManager owns at most one open DB-API connection at a time. It
resolves and loads the driver, opens the connection in auto-commit mode,
reports the backend's batching capability, and closes the connection on
request or on exit from a ``with`` block. Reconnecting replaces the held
connection rather than adding a second one.
"""

from __future__ import annotations

from typing import Any, Optional

from insert_bench.domain.errors import (
    ConnectionFailedError,
    MetadataError,
    NotConnectedError,
)
from insert_bench.domain.models import ConnectionConfig
from insert_bench.infrastructure.drivers import DriverAdapter, resolve_adapter
from insert_bench.utils.logging import get_logger, redact_url

log = get_logger(__name__)


class ConnectionManager:
    """
    Holds a single database connection and the adapter that opened it.

    Example
    -------
        with ConnectionManager() as manager:
            manager.connect(config)
            if manager.supports_batching():
                ...
    """

    def __init__(self) -> None:
        self._connection: Optional[Any] = None
        self._adapter: Optional[DriverAdapter] = None

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    @property
    def connection(self) -> Any:
        """The open connection; raises NotConnectedError if there is none."""
        if self._connection is None:
            raise NotConnectedError("Please connect to a database first.")
        return self._connection

    @property
    def adapter(self) -> DriverAdapter:
        if self._adapter is None:
            raise NotConnectedError("Please connect to a database first.")
        return self._adapter

    def connect(self, config: ConnectionConfig) -> Any:
        """
        Open a connection described by ``config`` and make it the current one.

        The previously held connection, if any, is closed only after the new
        one has been opened successfully.

        Raises
        ------
        DriverLoadError
            If the driver identifier is unknown or its module is not installed.
        ConnectionFailedError
            If the backend refuses the connection, carrying its message.
        """
        adapter = resolve_adapter(config.driver, config.url)
        adapter.load()

        safe_url = redact_url(config.url)
        if not config.url:
            raise ConnectionFailedError("Database URL is empty")

        log.info(
            "Opening connection",
            extra={"driver": adapter.name, "url": safe_url, "user": config.username},
        )
        try:
            connection = adapter.connect(
                config.url, config.username, config.password.get_secret_value()
            )
        except adapter.errors + (ValueError, TypeError) as exc:
            # sqlite3 raises ValueError for a NUL in the path, outside its Error tree
            log.warning(
                "Connection failed",
                extra={"driver": adapter.name, "url": safe_url, "error": str(exc)},
            )
            raise ConnectionFailedError(str(exc).strip() or type(exc).__name__) from exc

        self.close()
        self._connection = connection
        self._adapter = adapter
        log.info("Connection opened", extra={"driver": adapter.name, "url": safe_url})
        return connection

    def supports_batching(self) -> bool:
        """
        Whether the backend reports support for batched execution.

        Returns False when no connection is open or when the capability cannot
        be read; the latter is logged, not raised.
        """
        if self._connection is None or self._adapter is None:
            return False
        try:
            return self.read_batching_capability()
        except MetadataError as exc:
            log.warning("Failed to read batching capability", extra={"error": str(exc)})
            return False

    def read_batching_capability(self) -> bool:
        """
        Read batching capability, raising MetadataError if it cannot be read.
        """
        adapter = self.adapter
        try:
            return adapter.supports_batching(self.connection)
        except adapter.errors as exc:
            raise MetadataError(str(exc).strip() or type(exc).__name__) from exc

    def close(self) -> None:
        """
        Close the held connection, if any.

        Idempotent; close errors are logged and swallowed (best-effort cleanup).
        """
        connection, self._connection = self._connection, None
        adapter, self._adapter = self._adapter, None
        if connection is None:
            return
        try:
            connection.close()
        except Exception as exc:  # noqa: BLE001 - best-effort cleanup
            log.debug("Ignoring error while closing connection", extra={"error": str(exc)})
        else:
            log.info("Connection closed", extra={"driver": adapter.name if adapter else None})

    def __enter__(self) -> "ConnectionManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __del__(self) -> None:
        """Ensure cleanup on garbage collection."""
        self.close()


__all__ = ["ConnectionManager"]
