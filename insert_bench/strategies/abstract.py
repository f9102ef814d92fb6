"""
Abstract submission interface for the insert benchmark.

A submitter decides how generated rows reach the backend: one statement per
row, or one batched request. Setup (clearing the table) and timing belong to
the runner; submitters only push rows and return how many they submitted.
"""

from __future__ import annotations

import abc
from typing import Any, Iterable, Protocol, runtime_checkable

from insert_bench.domain.models import InsertStrategy, Row
from insert_bench.infrastructure.drivers import DriverAdapter


@runtime_checkable
class InsertSubmitter(Protocol):
    """
    Common interface all submission strategies must implement.

    Attributes
    ----------
    strategy : InsertStrategy
        The strategy this submitter implements.
    description : str
        A human-friendly summary of the approach.
    """

    strategy: InsertStrategy
    description: str

    def submit(
        self,
        connection: Any,
        adapter: DriverAdapter,
        sql: str,
        rows: Iterable[Row],
    ) -> int:
        """
        Send ``rows`` to the backend using ``sql`` and return the row count.

        Parameters
        ----------
        connection : Any
            Open DB-API connection in auto-commit mode.
        adapter : DriverAdapter
            Adapter for the connection's driver.
        sql : str
            Parameterized insert statement.
        rows : Iterable[Row]
            Rows to bind, one parameter tuple each.

        Raises
        ------
        Exception
            Whatever the driver raises; the runner translates it.
        """
        ...


class AbstractInsertSubmitter(abc.ABC):
    """
    ABC helper for class-based submitters.

    Subclasses set ``strategy`` and ``description`` and implement ``submit``.
    """

    strategy: InsertStrategy
    description: str

    @abc.abstractmethod
    def submit(
        self,
        connection: Any,
        adapter: DriverAdapter,
        sql: str,
        rows: Iterable[Row],
    ) -> int:  # pragma: no cover - interface only
        """Submit rows and return how many were sent."""
        raise NotImplementedError


__all__ = [
    "InsertSubmitter",
    "AbstractInsertSubmitter",
]
