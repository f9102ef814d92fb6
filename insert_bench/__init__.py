"""
Insert Bench - batched vs row-by-row SQL insert timing.

This package measures how long it takes to write N randomized rows into a
three-column table using two submission disciplines:

- Batched: one executemany() inside a single all-or-nothing transaction
- Sequential: one execute() per row, each auto-committed

It is driven through a small facade (BenchmarkSession) that a CLI or GUI can
call to connect, run either strategy, and read back status lines.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from insert_bench.config import Settings, get_settings
from insert_bench.domain.models import (
    BenchmarkResult,
    ConnectOutcome,
    ConnectionConfig,
    ErrorKind,
    InsertStrategy,
    Row,
)
from insert_bench.generator import generate_rows
from insert_bench.infrastructure.connection_manager import ConnectionManager
from insert_bench.orchestrator import run_comparison
from insert_bench.reporter import StatusReporter, print_results
from insert_bench.runner import InsertBenchmarkRunner
from insert_bench.session import BenchmarkSession
from insert_bench.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "BenchmarkResult",
    "ConnectOutcome",
    "ConnectionConfig",
    "ErrorKind",
    "InsertStrategy",
    "Row",
    # Core
    "ConnectionManager",
    "InsertBenchmarkRunner",
    "generate_rows",
    # Facade and orchestration
    "BenchmarkSession",
    "run_comparison",
    # Reporting
    "StatusReporter",
    "print_results",
    # Logging
    "configure_logging",
    "get_logger",
]
