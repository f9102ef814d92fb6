"""
Sequential (baseline) submission: one round trip per row.

Each row is bound and executed on its own. No transaction is opened, so the
connection's auto-commit applies to every statement and a failure partway
through leaves the rows inserted so far in the table.
"""

from __future__ import annotations

from contextlib import closing
from typing import Any, Iterable

from insert_bench.domain.models import InsertStrategy, Row
from insert_bench.infrastructure.drivers import DriverAdapter
from insert_bench.strategies.abstract import AbstractInsertSubmitter
from insert_bench.utils.logging import get_logger

log = get_logger(__name__)


class SequentialSubmitter(AbstractInsertSubmitter):
    """Execute the insert once per row."""

    strategy = InsertStrategy.SEQUENTIAL
    description = "One execute() per row, auto-commit per statement."

    def submit(
        self,
        connection: Any,
        adapter: DriverAdapter,
        sql: str,
        rows: Iterable[Row],
    ) -> int:
        submitted = 0
        with closing(connection.cursor()) as cur:
            try:
                for row in rows:
                    cur.execute(sql, row)
                    submitted += 1
            except adapter.errors:
                log.warning(
                    "Sequential insert stopped partway",
                    extra={"strategy": self.strategy.value, "rows_committed": submitted},
                )
                raise
        return submitted


__all__ = ["SequentialSubmitter"]
