"""
Insert benchmark runner.

One run clears the target table, then times row generation plus submission
with the chosen strategy. Clearing is kept outside the timed window; it only
exists so successive runs start from the same empty table.

Usage:
    from insert_bench.runner import InsertBenchmarkRunner

    runner = InsertBenchmarkRunner(manager, table="Temp")
    result = runner.run(InsertStrategy.BATCHED, 1000)
    print(result.elapsed_millis)
"""

from __future__ import annotations

import random
from contextlib import closing
from typing import Any, Optional

from insert_bench.domain.errors import ExecutionError
from insert_bench.domain.models import BenchmarkResult, ErrorKind, InsertStrategy
from insert_bench.generator import generate_rows
from insert_bench.infrastructure.connection_manager import ConnectionManager
from insert_bench.infrastructure.drivers import DriverAdapter, validate_identifier
from insert_bench.strategies import get_submitter
from insert_bench.utils.logging import get_logger
from insert_bench.utils.profiler import profile_block

log = get_logger(__name__)

DEFAULT_TABLE = "Temp"


def _describe(exc: BaseException) -> str:
    return str(exc).strip() or type(exc).__name__


class InsertBenchmarkRunner:
    """
    Runs a single insert workload against the manager's open connection.

    Parameters
    ----------
    manager : ConnectionManager
        Supplies the open connection and its driver adapter.
    table : str
        Target table with ``num1``, ``num2``, ``num3`` float columns.
    rng : random.Random, optional
        Generator for row values. Defaults to a fresh generator per run.
    """

    def __init__(
        self,
        manager: ConnectionManager,
        table: str = DEFAULT_TABLE,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._manager = manager
        self.table = validate_identifier(table)
        self._rng = rng

    def run(self, strategy: InsertStrategy | str, row_count: int) -> BenchmarkResult:
        """
        Clear the table, then generate and submit ``row_count`` rows.

        Backend failures never escape; they come back as a result with
        ``error`` set and ``elapsed_millis`` left as None.

        Raises
        ------
        ValueError
            If ``row_count`` is negative or ``strategy`` is unknown.
        """
        submitter = get_submitter(strategy)
        strategy = submitter.strategy
        if row_count < 0:
            raise ValueError(f"Row count must be non-negative, got {row_count}")

        if not self._manager.is_connected:
            log.warning("Run requested without an open connection", extra={"strategy": strategy.value})
            return BenchmarkResult.failed(
                strategy, row_count, ErrorKind.NOT_CONNECTED, "Please connect to a database first."
            )

        connection = self._manager.connection
        adapter = self._manager.adapter

        log.info(
            f"[RUN START] {strategy.value}",
            extra={"strategy": strategy.value, "rows": row_count, "table": self.table},
        )
        try:
            self._clear_table(connection, adapter)
        except ExecutionError as exc:
            log.error(
                f"[RUN FAILED] {strategy.value}: clear step",
                extra={"strategy": strategy.value, "error": str(exc)},
            )
            return BenchmarkResult.failed(strategy, row_count, exc.kind, str(exc))

        insert_sql = adapter.insert_statement(self.table)
        try:
            with profile_block(strategy.value) as stats:
                rows = generate_rows(row_count, self._rng)
                submitted = submitter.submit(connection, adapter, insert_sql, rows)
        except adapter.errors as exc:
            log.error(
                f"[RUN FAILED] {strategy.value}",
                extra={"strategy": strategy.value, "error": _describe(exc)},
            )
            return BenchmarkResult.failed(strategy, row_count, ErrorKind.EXECUTION, _describe(exc))

        result = BenchmarkResult(
            strategy=strategy,
            row_count=submitted,
            elapsed_millis=stats.elapsed_millis,
            peak_rss_bytes=stats.peak_rss_bytes,
            cpu_percent=stats.cpu_percent,
        )
        log.info(
            f"[RUN SUCCESS] {strategy.value}",
            extra={
                "strategy": strategy.value,
                "rows": result.row_count,
                "elapsed_ms": result.elapsed_millis,
            },
        )
        return result

    def _clear_table(self, connection: Any, adapter: DriverAdapter) -> None:
        sql = adapter.clear_statement(self.table)
        try:
            with closing(connection.cursor()) as cur:
                cur.execute(sql)
        except adapter.errors as exc:
            raise ExecutionError(_describe(exc)) from exc


__all__ = ["InsertBenchmarkRunner", "DEFAULT_TABLE"]
