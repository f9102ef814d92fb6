"""
Caller-facing facade for the insert benchmark.

A BenchmarkSession is what a front end (the Typer CLI, a GUI, a notebook)
drives: connect with user-supplied credentials, check batching capability,
run either strategy, close. Every outcome is returned as a value and also
reported as one-line status messages; no backend error escapes to the caller.

At most one connect or run is in flight per session. A second call made
while one is outstanding is rejected with a ``busy`` outcome rather than
being run concurrently against the same connection.
"""

from __future__ import annotations

import random
import threading
from contextlib import contextmanager
from typing import Dict, Generator, Optional, Tuple

from insert_bench.config import get_settings
from insert_bench.domain.errors import (
    BusyError,
    ConnectionFailedError,
    DriverLoadError,
    MetadataError,
)
from insert_bench.domain.models import (
    BenchmarkResult,
    ConnectOutcome,
    ConnectionConfig,
    ErrorKind,
    InsertStrategy,
)
from insert_bench.infrastructure.connection_manager import ConnectionManager
from insert_bench.reporter import StatusReporter
from insert_bench.runner import InsertBenchmarkRunner
from insert_bench.utils.logging import get_logger

log = get_logger(__name__)

# (success line, failure prefix) per strategy
_STATUS_LABELS: Dict[InsertStrategy, Tuple[str, str]] = {
    InsertStrategy.BATCHED: ("Batch update succeeded", "Batch update failed"),
    InsertStrategy.SEQUENTIAL: ("Non-batch update completed", "Non-batch update failed"),
}

NOT_CONNECTED_MESSAGE = "Please connect to a database first."
BATCH_UNSUPPORTED_WARNING = (
    "WARNING: Driver reports batch updates are NOT supported. Running anyway..."
)


class BenchmarkSession:
    """
    Owns one ConnectionManager, one runner, and one StatusReporter.

    Parameters
    ----------
    table : str, optional
        Target table; defaults to ``settings.target_table``.
    default_rows : int, optional
        Row count used when ``run`` is called without one; defaults to
        ``settings.benchmark_rows``.
    reporter : StatusReporter, optional
        Where status lines go; a fresh one is created when omitted.
    rng : random.Random, optional
        Row value generator handed to the runner (seed it in tests).
    """

    def __init__(
        self,
        table: Optional[str] = None,
        default_rows: Optional[int] = None,
        reporter: Optional[StatusReporter] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        settings = get_settings()
        self.manager = ConnectionManager()
        self.runner = InsertBenchmarkRunner(
            self.manager, table=table or settings.target_table, rng=rng
        )
        self.reporter = reporter if reporter is not None else StatusReporter()
        self.default_rows = settings.benchmark_rows if default_rows is None else default_rows
        self._supports_batch = False
        self._busy = threading.Lock()

    @contextmanager
    def _exclusive(self, operation: str) -> Generator[None, None, None]:
        if not self._busy.acquire(blocking=False):
            raise BusyError(f"Another operation is in progress; {operation} rejected.")
        try:
            yield
        finally:
            self._busy.release()

    @property
    def is_connected(self) -> bool:
        return self.manager.is_connected

    def connect(self, config: ConnectionConfig) -> ConnectOutcome:
        """Open (or replace) the session's connection and report capability."""
        try:
            with self._exclusive("connect"):
                return self._connect(config)
        except BusyError as exc:
            self.reporter.append(str(exc))
            return ConnectOutcome(
                connected=self.manager.is_connected,
                supports_batching=self._supports_batch,
                error=ErrorKind.BUSY,
                message=str(exc),
            )

    def _connect(self, config: ConnectionConfig) -> ConnectOutcome:
        try:
            self.manager.connect(config)
        except (DriverLoadError, ConnectionFailedError) as exc:
            prefix = (
                "Driver not available"
                if exc.kind is ErrorKind.DRIVER_LOAD
                else "Connection failed"
            )
            message = f"{prefix}: {exc}"
            self.reporter.append(message)
            # A failed reconnect keeps the previous connection open
            connected = self.manager.is_connected
            if not connected:
                self.reporter.append("Not connected.")
            return ConnectOutcome(
                connected=connected,
                supports_batching=self._supports_batch if connected else False,
                error=exc.kind,
                message=message,
            )

        try:
            self._supports_batch = self.manager.read_batching_capability()
        except MetadataError as exc:
            self._supports_batch = False
            log.warning("Connected without capability metadata", extra={"error": str(exc)})
            message = f"Connected, but failed to read metadata: {exc}"
            self.reporter.append(message)
            return ConnectOutcome(
                connected=True, supports_batching=False, error=exc.kind, message=message
            )

        self.reporter.append("Connected to database.")
        self.reporter.append(f"Batch updates supported: {self._supports_batch}")
        return ConnectOutcome(
            connected=True,
            supports_batching=self._supports_batch,
            message="Connected to database.",
        )

    def supports_batching(self) -> bool:
        return self.manager.supports_batching()

    def run(
        self, strategy: InsertStrategy | str, row_count: Optional[int] = None
    ) -> BenchmarkResult:
        """
        Run one benchmark and report its outcome.

        Raises
        ------
        ValueError
            If ``strategy`` is unknown or ``row_count`` is negative.
        """
        strategy = InsertStrategy(strategy)
        rows = self.default_rows if row_count is None else row_count
        try:
            with self._exclusive("run"):
                return self._run(strategy, rows)
        except BusyError as exc:
            self.reporter.append(str(exc))
            return BenchmarkResult.failed(strategy, rows, ErrorKind.BUSY, str(exc))

    def _run(self, strategy: InsertStrategy, rows: int) -> BenchmarkResult:
        if not self.manager.is_connected:
            self.reporter.append(NOT_CONNECTED_MESSAGE)
            return self.runner.run(strategy, rows)

        if strategy is InsertStrategy.BATCHED and not self._supports_batch:
            self.reporter.append(BATCH_UNSUPPORTED_WARNING)

        result = self.runner.run(strategy, rows)

        success_line, failure_prefix = _STATUS_LABELS[strategy]
        if result.ok:
            self.reporter.append(success_line)
            self.reporter.append(f"The elapsed time is {result.elapsed_millis} ms")
        else:
            self.reporter.append(f"{failure_prefix}: {result.message}")
        return result

    def close(self) -> None:
        """Close the connection; waits for an in-flight operation to finish."""
        with self._busy:
            self.manager.close()
            self._supports_batch = False

    def __enter__(self) -> "BenchmarkSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["BenchmarkSession", "NOT_CONNECTED_MESSAGE", "BATCH_UNSUPPORTED_WARNING"]
