from __future__ import annotations

import sys
from typing import List, Optional

import typer

from insert_bench.config import get_settings
from insert_bench.domain.models import ConnectionConfig, InsertStrategy
from insert_bench.orchestrator import run_comparison
from insert_bench.reporter import StatusReporter, print_results
from insert_bench.session import BenchmarkSession
from insert_bench.strategies import available_strategies
from insert_bench.utils.logging import configure_logging, redact_url

app = typer.Typer(help="Batched vs sequential insert benchmark CLI.")


def _strategies_for(name: str) -> List[InsertStrategy]:
    if name == "both":
        return [InsertStrategy.BATCHED, InsertStrategy.SEQUENTIAL]
    try:
        return [InsertStrategy(name)]
    except ValueError:
        raise typer.BadParameter(
            f"Unknown strategy '{name}'. Available: {', '.join(available_strategies())}, both"
        ) from None


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"driver={settings.db_driver or '<from url>'} url={redact_url(settings.db_url)} "
        f"user={settings.db_user} | table={settings.target_table} "
        f"rows={settings.benchmark_rows}"
    )


@app.command()
def run(
    strategy: str = typer.Option(
        "both",
        "--strategy",
        "-s",
        help="Strategy to run (batched, sequential, both).",
    ),
    rows: Optional[int] = typer.Option(
        None,
        "--rows",
        "-r",
        min=0,
        help="Override number of rows to insert (default from settings).",
    ),
    driver: Optional[str] = typer.Option(
        None, "--driver", help="Driver identifier (psycopg, sqlite3); empty infers from URL."
    ),
    url: Optional[str] = typer.Option(None, "--url", help="Database URL."),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="Database username."),
    password: Optional[str] = typer.Option(
        None, "--password", "-p", help="Database password (never echoed)."
    ),
    table: Optional[str] = typer.Option(None, "--table", help="Target table."),
    persist: bool = typer.Option(True, "--persist/--no-persist", help="Write results JSON."),
) -> None:
    """
    Connect, run the selected strategies, and print timings.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    strategies = _strategies_for(strategy)

    config = ConnectionConfig(
        driver=settings.db_driver if driver is None else driver,
        url=url or settings.db_url,
        username=settings.db_user if user is None else user,
        password=settings.db_password if password is None else password,
    )

    reporter = StatusReporter(sink=typer.echo)
    with BenchmarkSession(table=table, default_rows=rows, reporter=reporter) as session:
        outcome = session.connect(config)
        if not outcome.connected:
            raise typer.Exit(code=1)
        results = run_comparison(
            session,
            strategies=strategies,
            results_dir=settings.results_dir,
            persist=persist,
        )
    print_results(results)
    if not all(r.ok for r in results):
        raise typer.Exit(code=1)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
