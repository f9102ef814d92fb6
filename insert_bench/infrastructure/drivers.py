"""
DB-API driver adapters for the insert benchmark.

A driver identifier names a DB-API 2.0 module (``psycopg``, ``sqlite3``) or
one of its aliases. Each adapter hides the few places where drivers differ:

- how a connection is opened from url/username/password (always auto-commit)
- the bind placeholder, taken from the module's ``paramstyle``
- the full-table clear statement (SQLite has no TRUNCATE)
- how auto-commit is toggled around an explicit transaction
- how batching capability is read from the open connection

Driver modules are imported lazily so a missing optional driver only fails
the connect call that asks for it.
"""

from __future__ import annotations

import abc
import importlib
import re
from types import ModuleType
from typing import Any, Dict, Optional, Tuple, Type

from insert_bench.domain.errors import ConnectionFailedError, DriverLoadError

ROW_COLUMNS: Tuple[str, ...] = ("num1", "num2", "num3")

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")

_PLACEHOLDERS: Dict[str, str] = {
    "qmark": "?",
    "format": "%s",
    "pyformat": "%s",
}


def validate_identifier(table: str) -> str:
    """
    Return ``table`` if it is a plain (optionally schema-qualified) identifier.

    Table names cannot be bound as parameters, so they are checked instead.
    """
    if not _IDENTIFIER_RE.match(table):
        raise ValueError(f"Invalid table name: {table!r}")
    return table


class DriverAdapter(abc.ABC):
    """
    Per-driver behaviour needed by the connection manager and the runner.

    Subclasses set ``name`` and ``module_name`` and implement the
    connection-specific hooks.
    """

    name: str
    module_name: str
    clear_template: str = "DELETE FROM {table}"

    def __init__(self) -> None:
        self._module: Optional[ModuleType] = None

    def load(self) -> ModuleType:
        """Import the driver module, raising DriverLoadError if unavailable."""
        if self._module is None:
            try:
                self._module = importlib.import_module(self.module_name)
            except ImportError as exc:
                raise DriverLoadError(
                    f"Driver '{self.module_name}' is not installed: {exc}"
                ) from exc
        return self._module

    @property
    def module(self) -> ModuleType:
        return self.load()

    @property
    def errors(self) -> Tuple[Type[BaseException], ...]:
        """Exception types this driver raises for backend failures."""
        return (self.module.Error,)

    @property
    def placeholder(self) -> str:
        paramstyle = getattr(self.module, "paramstyle", "qmark")
        try:
            return _PLACEHOLDERS[paramstyle]
        except KeyError:
            raise DriverLoadError(
                f"Driver '{self.module_name}' uses unsupported paramstyle '{paramstyle}'"
            ) from None

    def insert_statement(self, table: str) -> str:
        """Parameterized three-column insert for ``table``."""
        columns = ", ".join(ROW_COLUMNS)
        params = ", ".join([self.placeholder] * len(ROW_COLUMNS))
        return f"INSERT INTO {validate_identifier(table)} ({columns}) VALUES ({params})"

    def clear_statement(self, table: str) -> str:
        return self.clear_template.format(table=validate_identifier(table))

    @abc.abstractmethod
    def connect(self, url: str, username: str, password: str) -> Any:
        """Open an auto-commit connection."""
        raise NotImplementedError

    @abc.abstractmethod
    def set_autocommit(self, connection: Any, enabled: bool) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def supports_batching(self, connection: Any) -> bool:
        """Read batching capability from the open connection."""
        raise NotImplementedError


class PsycopgAdapter(DriverAdapter):
    """PostgreSQL through psycopg 3."""

    name = "psycopg"
    module_name = "psycopg"
    clear_template = "TRUNCATE TABLE {table}"

    def connect(self, url: str, username: str, password: str) -> Any:
        psycopg = self.load()
        kwargs: Dict[str, Any] = {}
        if username:
            kwargs["user"] = username
        if password:
            kwargs["password"] = password
        return psycopg.connect(url, autocommit=True, **kwargs)

    def set_autocommit(self, connection: Any, enabled: bool) -> None:
        connection.autocommit = enabled

    def supports_batching(self, connection: Any) -> bool:
        if connection.closed:
            raise self.module.InterfaceError("the connection is closed")
        # executemany() collapses into a single pipeline round trip when libpq
        # supports pipeline mode.
        return bool(self.module.Pipeline.is_supported())


class SqliteAdapter(DriverAdapter):
    """SQLite through the standard library driver."""

    name = "sqlite3"
    module_name = "sqlite3"

    def connect(self, url: str, username: str, password: str) -> Any:
        sqlite3 = self.load()
        database, uri = _sqlite_target(url)
        # isolation_level=None keeps the connection in auto-commit mode.
        return sqlite3.connect(database, isolation_level=None, uri=uri, check_same_thread=False)

    def set_autocommit(self, connection: Any, enabled: bool) -> None:
        connection.isolation_level = None if enabled else "DEFERRED"

    def supports_batching(self, connection: Any) -> bool:
        # Raises ProgrammingError on a closed connection.
        connection.execute("SELECT sqlite_version()").fetchone()
        return True


def _sqlite_target(url: str) -> Tuple[str, bool]:
    """Map a sqlite URL or plain path to ``(database, uri)`` for sqlite3.connect."""
    if url.startswith("sqlite:///"):
        return url[len("sqlite:///"):], False
    if url.startswith("sqlite://"):
        raise ConnectionFailedError(f"Malformed SQLite URL: {url}")
    if url.startswith("file:"):
        return url, True
    return url, False


_ADAPTERS: Dict[str, Type[DriverAdapter]] = {
    "psycopg": PsycopgAdapter,
    "sqlite3": SqliteAdapter,
}

_ALIASES: Dict[str, str] = {
    "postgresql": "psycopg",
    "postgres": "psycopg",
    "sqlite": "sqlite3",
}

_SQLITE_SUFFIXES = (".db", ".sqlite", ".sqlite3")


def available_drivers() -> list[str]:
    """List registered driver identifiers."""
    return sorted(_ADAPTERS.keys())


def infer_driver(url: str) -> str:
    """Pick a driver from the URL when no driver identifier was given."""
    lowered = url.lower()
    if lowered.startswith(("sqlite:", "file:")) or lowered.endswith(_SQLITE_SUFFIXES):
        return "sqlite3"
    if lowered == ":memory:":
        return "sqlite3"
    return "psycopg"


def resolve_adapter(driver: str, url: str) -> DriverAdapter:
    """
    Return a fresh adapter for ``driver`` (or for ``url`` when driver is empty).

    Raises
    ------
    DriverLoadError
        If ``driver`` names no registered adapter.
    """
    key = driver.strip().lower() if driver else infer_driver(url)
    key = _ALIASES.get(key, key)
    if key not in _ADAPTERS:
        raise DriverLoadError(
            f"Unknown driver '{driver}'. Available: {', '.join(available_drivers())}"
        )
    return _ADAPTERS[key]()


__all__ = [
    "DriverAdapter",
    "PsycopgAdapter",
    "SqliteAdapter",
    "ROW_COLUMNS",
    "available_drivers",
    "infer_driver",
    "resolve_adapter",
    "validate_identifier",
]
