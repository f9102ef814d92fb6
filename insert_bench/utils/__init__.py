"""
Utilities package for the insert benchmark.

Exports shared helpers for logging, profiling, and other cross-cutting concerns.
Keep this package lightweight and free of domain-specific logic.
"""

from insert_bench.utils.logging import configure_logging, get_logger, redact_url
from insert_bench.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "redact_url",
    "ProfileStats",
    "profile_block",
]
