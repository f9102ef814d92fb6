"""
Strategies package for the insert benchmark.

This module re-exports the submitter interfaces and the concrete submitters,
and maps each ``InsertStrategy`` to the submitter that implements it.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from insert_bench.domain.models import InsertStrategy
from insert_bench.strategies.abstract import AbstractInsertSubmitter, InsertSubmitter
from insert_bench.strategies.batched import BatchedSubmitter
from insert_bench.strategies.sequential import SequentialSubmitter


def _submitter_factories() -> Dict[InsertStrategy, Callable[[], InsertSubmitter]]:
    """Registry of available submitters."""
    return {
        InsertStrategy.BATCHED: BatchedSubmitter,
        InsertStrategy.SEQUENTIAL: SequentialSubmitter,
    }


def available_strategies() -> List[str]:
    """List available strategy names."""
    return [strategy.value for strategy in _submitter_factories()]


def get_submitter(strategy: InsertStrategy | str) -> InsertSubmitter:
    """
    Build the submitter for ``strategy``.

    Raises
    ------
    ValueError
        If ``strategy`` is not a known strategy name.
    """
    try:
        key = InsertStrategy(strategy)
    except ValueError:
        raise ValueError(
            f"Unknown strategy '{strategy}'. Available: {', '.join(available_strategies())}"
        ) from None
    return _submitter_factories()[key]()


__all__ = [
    # Abstracts
    "AbstractInsertSubmitter",
    "InsertSubmitter",
    # Concrete submitters
    "BatchedSubmitter",
    "SequentialSubmitter",
    # Registry
    "available_strategies",
    "get_submitter",
]
