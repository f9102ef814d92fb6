"""
Batched submission: queue every row locally, send them in one request.

The whole batch runs inside a single explicit transaction. Auto-commit is
suspended before the batch is sent, the transaction is committed only if the
batch succeeds, and any failure rolls the entire batch back. Auto-commit is
restored afterwards in every case, so the connection is left as it was found.
"""

from __future__ import annotations

from contextlib import closing
from typing import Any, Iterable

from insert_bench.domain.models import InsertStrategy, Row
from insert_bench.infrastructure.drivers import DriverAdapter
from insert_bench.strategies.abstract import AbstractInsertSubmitter
from insert_bench.utils.logging import get_logger

log = get_logger(__name__)


class BatchedSubmitter(AbstractInsertSubmitter):
    """Single executemany() inside one transaction."""

    strategy = InsertStrategy.BATCHED
    description = "executemany() of all rows, one commit (all-or-nothing)."

    def submit(
        self,
        connection: Any,
        adapter: DriverAdapter,
        sql: str,
        rows: Iterable[Row],
    ) -> int:
        batch = list(rows)

        adapter.set_autocommit(connection, False)
        try:
            with closing(connection.cursor()) as cur:
                cur.executemany(sql, batch)
            connection.commit()
        except Exception:
            self._rollback(connection, adapter)
            raise
        finally:
            self._restore_autocommit(connection, adapter)
        return len(batch)

    def _rollback(self, connection: Any, adapter: DriverAdapter) -> None:
        # The batch error is what gets reported; a failed rollback is only logged.
        try:
            connection.rollback()
        except adapter.errors as exc:
            log.warning("Rollback after failed batch also failed", extra={"error": str(exc)})
        else:
            log.info("Batch rolled back", extra={"strategy": self.strategy.value})

    def _restore_autocommit(self, connection: Any, adapter: DriverAdapter) -> None:
        try:
            adapter.set_autocommit(connection, True)
        except adapter.errors as exc:
            log.warning("Could not restore auto-commit", extra={"error": str(exc)})


__all__ = ["BatchedSubmitter"]
