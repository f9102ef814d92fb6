"""
Orchestrator for running both insert strategies back to back and persisting results.

Usage (example from CLI):
    from insert_bench.orchestrator import run_comparison

    with BenchmarkSession() as session:
        session.connect(config)
        results = run_comparison(session, row_count=1_000)

Outputs are saved to `results/` by default:
- `results/latest.json` (last run)
- `results/run-<timestamp>.json` (timestamped archive)
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from insert_bench.domain.models import BenchmarkResult, InsertStrategy
from insert_bench.session import BenchmarkSession
from insert_bench.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_ORDER = (InsertStrategy.BATCHED, InsertStrategy.SEQUENTIAL)


def _persist_results(payload: dict, results_dir: Path) -> Path:
    results_dir.mkdir(parents=True, exist_ok=True)
    latest_path = results_dir / "latest.json"
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    archive_path = results_dir / f"run-{timestamp}.json"

    with latest_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)
    with archive_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True)

    log.info("Results persisted", extra={"latest": str(latest_path), "archive": str(archive_path)})
    return latest_path


def _result_payload(result: BenchmarkResult) -> dict:
    payload = result.model_dump(mode="json")
    payload["throughput_rows_per_sec"] = (
        round(result.throughput_rows_per_sec, 2)
        if result.throughput_rows_per_sec is not None
        else None
    )
    if payload.get("cpu_percent") is not None:
        payload["cpu_percent"] = round(payload["cpu_percent"], 1)
    return payload


def run_comparison(
    session: BenchmarkSession,
    strategies: Optional[Iterable[InsertStrategy | str]] = None,
    row_count: Optional[int] = None,
    results_dir: Path | str = "results",
    persist: bool = True,
) -> List[BenchmarkResult]:
    """
    Run each strategy once on the session's connection, in order.

    Parameters
    ----------
    session : BenchmarkSession
        A session; it should already be connected.
    strategies : iterable of InsertStrategy or str, optional
        Strategies to run. Defaults to batched then sequential.
    row_count : int, optional
        Rows per run. Defaults to the session's ``default_rows``.
    results_dir : Path | str
        Directory to store JSON artifacts.
    persist : bool
        Whether to write results to disk.

    Returns
    -------
    List[BenchmarkResult]
        One result per strategy, in execution order.
    """
    order = [InsertStrategy(s) for s in strategies] if strategies is not None else list(DEFAULT_ORDER)
    effective_rows = session.default_rows if row_count is None else row_count

    results: List[BenchmarkResult] = []
    for index, strategy in enumerate(order, start=1):
        log.info(
            f"[RUN {index}/{len(order)}] {strategy.value.upper()}",
            extra={"strategy": strategy.value, "rows": effective_rows},
        )
        results.append(session.run(strategy, effective_rows))

    if persist:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "rows": effective_rows,
            "table": session.runner.table,
            "strategies": [s.value for s in order],
            "results": [_result_payload(r) for r in results],
        }
        _persist_results(payload, Path(results_dir))

    failed = [r.strategy.value for r in results if not r.ok]
    log.info(
        f"[COMPARISON COMPLETE] {len(results) - len(failed)}/{len(results)} strategies succeeded",
        extra={"failed": failed},
    )
    return results


__all__ = ["run_comparison"]
