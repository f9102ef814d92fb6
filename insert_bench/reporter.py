from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from insert_bench.domain.models import BenchmarkResult

LINE_SEPARATOR = "\n"


class StatusReporter:
    """
    Ordered, caller-visible log of human-readable status lines.

    ``sink`` (e.g. ``typer.echo``) is called with each line as it arrives.
    """

    def __init__(self, sink: Optional[Callable[[str], None]] = None) -> None:
        self._lines: List[str] = []
        self._sink = sink

    def append(self, line: str) -> None:
        self._lines.append(line)
        if self._sink is not None:
            self._sink(line)

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    @property
    def text(self) -> str:
        return "".join(line + LINE_SEPARATOR for line in self._lines)

    def clear(self) -> None:
        self._lines.clear()


def print_results(
    results: Sequence[BenchmarkResult], console: Optional[Console] = None
) -> None:
    """
    Render benchmark results as a rich table, fastest run first.

    Failed runs are listed last with their error instead of timing figures.
    """
    console = console or Console()

    if not results:
        console.print("[yellow]No results to display.[/yellow]")
        return

    table = Table(
        title="Insert Benchmark Results",
        box=box.ROUNDED,
        caption="Sorted by elapsed time (ascending)",
    )

    table.add_column("Strategy", style="cyan", no_wrap=True)
    table.add_column("Rows", justify="right", style="magenta")
    table.add_column("Elapsed (ms)", justify="right", style="green")
    table.add_column("Throughput (rows/s)", justify="right", style="bold green")
    table.add_column("Peak Memory (MB)", justify="right", style="yellow")
    table.add_column("Status", style="red")

    def get_sort_key(r: BenchmarkResult) -> tuple:
        return (not r.ok, r.elapsed_millis if r.elapsed_millis is not None else 0)

    for res in sorted(results, key=get_sort_key):
        rows = f"{res.row_count:,}"
        if not res.ok:
            error = res.error.value if res.error else "error"
            table.add_row(res.strategy.value, rows, "-", "-", "-", escape(f"{error}: {res.message}"))
            continue

        throughput = res.throughput_rows_per_sec
        throughput_str = f"{throughput:,.2f}" if throughput is not None else "N/A"

        mem_str = "N/A"
        if res.peak_rss_bytes:
            mem_str = f"{res.peak_rss_bytes / (1024 * 1024):.2f}"

        table.add_row(
            res.strategy.value, rows, f"{res.elapsed_millis:,}", throughput_str, mem_str, "ok"
        )

    console.print(table)


__all__ = ["StatusReporter", "print_results"]
