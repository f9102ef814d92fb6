"""
Synthetic row generation for the insert benchmark.

Rows are produced lazily so the runner can stream them straight into the
sequential path, or materialize them for the batched path.
"""

from __future__ import annotations

import random
from typing import Iterator, Optional

from insert_bench.domain.models import Row


def generate_rows(n: int, rng: Optional[random.Random] = None) -> Iterator[Row]:
    """
    Yield exactly ``n`` rows of three independent uniform values in [0, 1).

    Parameters
    ----------
    n : int
        Number of rows to produce. Zero yields nothing.
    rng : random.Random, optional
        Source of randomness. When omitted a fresh, unseeded generator is
        created for this call, so no state is shared between calls. Pass a
        seeded instance for reproducible output.

    Raises
    ------
    ValueError
        If ``n`` is negative.
    """
    if n < 0:
        raise ValueError(f"Row count must be non-negative, got {n}")
    return _rows(n, rng if rng is not None else random.Random())


def _rows(n: int, rng: random.Random) -> Iterator[Row]:
    draw = rng.random
    for _ in range(n):
        yield Row(draw(), draw(), draw())


__all__ = ["generate_rows"]
