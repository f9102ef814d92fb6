"""
Domain models for the insert benchmark.

Defines the connection parameters, the synthetic row shape written to the
target table (``num1``, ``num2``, ``num3``), the two submission strategies,
and the immutable result produced by every benchmark run.
"""
from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Optional

from pydantic import BaseModel, Field, SecretStr, field_validator


class InsertStrategy(str, Enum):
    """Submission discipline used for a run."""

    BATCHED = "batched"
    SEQUENTIAL = "sequential"


class ErrorKind(str, Enum):
    DRIVER_LOAD = "driver_load"
    CONNECTION = "connection"
    METADATA = "metadata"
    NOT_CONNECTED = "not_connected"
    EXECUTION = "execution"
    BUSY = "busy"


class Row(NamedTuple):
    """One synthetic row; each value is drawn uniformly from [0, 1)."""

    num1: float
    num2: float
    num3: float


class ConnectionConfig(BaseModel):
    """
    Parameters needed to open a database connection.

    ``driver`` may be empty, in which case the driver is inferred from the URL.
    The password is stored as a ``SecretStr`` so it never shows up in reprs or
    log lines.
    """

    driver: str = Field("", description="DB-API driver module name or alias.")
    url: str = Field(..., description="Connection URL / conninfo / database path.")
    username: str = Field("", description="Login name; ignored by file-based drivers.")
    password: SecretStr = Field(SecretStr(""), description="Login password.")

    model_config = {
        "frozen": True,
    }

    @field_validator("driver", "url", "username", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value


class BenchmarkResult(BaseModel):
    """
    Outcome of a single benchmark run.

    ``elapsed_millis`` is only meaningful on success; failed runs carry
    ``None`` there together with the error kind and the backend message.
    """

    strategy: InsertStrategy
    row_count: int = Field(..., ge=0)
    elapsed_millis: Optional[int] = Field(None, ge=0)
    error: Optional[ErrorKind] = None
    message: Optional[str] = None
    peak_rss_bytes: Optional[int] = None
    cpu_percent: Optional[float] = None

    model_config = {
        "frozen": True,
    }

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def throughput_rows_per_sec(self) -> Optional[float]:
        if not self.ok or self.elapsed_millis is None:
            return None
        if self.elapsed_millis == 0:
            return None
        return self.row_count / (self.elapsed_millis / 1000.0)

    @classmethod
    def failed(
        cls,
        strategy: InsertStrategy,
        row_count: int,
        error: ErrorKind,
        message: str,
    ) -> "BenchmarkResult":
        return cls(
            strategy=strategy,
            row_count=row_count,
            elapsed_millis=None,
            error=error,
            message=message,
        )


class ConnectOutcome(BaseModel):
    """Result of a connect attempt as seen by the caller."""

    connected: bool
    supports_batching: bool = False
    error: Optional[ErrorKind] = None
    message: str = ""

    model_config = {
        "frozen": True,
    }


__all__ = [
    "BenchmarkResult",
    "ConnectOutcome",
    "ConnectionConfig",
    "ErrorKind",
    "InsertStrategy",
    "Row",
]
