import pytest

from insert_bench.domain.errors import ConnectionFailedError, DriverLoadError
from insert_bench.infrastructure import drivers
from insert_bench.infrastructure.drivers import (
    PsycopgAdapter,
    SqliteAdapter,
    infer_driver,
    resolve_adapter,
    validate_identifier,
)


class _MissingDriverAdapter(SqliteAdapter):
    name = "missing"
    module_name = "insert_bench_no_such_driver"


def test_sqlite_statements_use_qmark_placeholders():
    adapter = SqliteAdapter()
    assert adapter.insert_statement("Temp") == (
        "INSERT INTO Temp (num1, num2, num3) VALUES (?, ?, ?)"
    )
    assert adapter.clear_statement("Temp") == "DELETE FROM Temp"


def test_psycopg_statements_use_format_placeholders_and_truncate():
    adapter = PsycopgAdapter()
    assert adapter.insert_statement("Temp") == (
        "INSERT INTO Temp (num1, num2, num3) VALUES (%s, %s, %s)"
    )
    assert adapter.clear_statement("Temp") == "TRUNCATE TABLE Temp"


@pytest.mark.parametrize("table", ["Temp", "public.Temp", "_t1"])
def test_validate_identifier_accepts_plain_names(table):
    assert validate_identifier(table) == table


@pytest.mark.parametrize("table", ["", "Temp; DROP TABLE x", "1abc", "a.b.c", "Temp--"])
def test_validate_identifier_rejects_everything_else(table):
    with pytest.raises(ValueError, match="Invalid table name"):
        validate_identifier(table)


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("sqlite:///bench.db", "sqlite3"),
        ("file:bench?mode=memory", "sqlite3"),
        ("/tmp/bench.sqlite3", "sqlite3"),
        (":memory:", "sqlite3"),
        ("postgresql://localhost/javabook", "psycopg"),
        ("host=localhost dbname=javabook", "psycopg"),
    ],
)
def test_infer_driver_from_url(url, expected):
    assert infer_driver(url) == expected


@pytest.mark.parametrize(
    ("driver", "adapter_type"),
    [
        ("psycopg", PsycopgAdapter),
        ("postgresql", PsycopgAdapter),
        ("  Postgres ", PsycopgAdapter),
        ("sqlite3", SqliteAdapter),
        ("sqlite", SqliteAdapter),
    ],
)
def test_resolve_adapter_accepts_names_and_aliases(driver, adapter_type):
    assert isinstance(resolve_adapter(driver, "ignored"), adapter_type)


def test_resolve_adapter_with_empty_driver_infers_from_url():
    assert isinstance(resolve_adapter("", "sqlite:///x.db"), SqliteAdapter)
    assert isinstance(resolve_adapter("", "postgresql://h/db"), PsycopgAdapter)


def test_resolve_adapter_rejects_unknown_driver():
    with pytest.raises(DriverLoadError, match="Unknown driver 'com.mysql.cj.jdbc.Driver'"):
        resolve_adapter("com.mysql.cj.jdbc.Driver", "jdbc:mysql://localhost/javabook")


def test_load_reports_missing_module_as_driver_load_error():
    with pytest.raises(DriverLoadError, match="not installed"):
        _MissingDriverAdapter().load()


def test_registry_lists_both_drivers():
    assert drivers.available_drivers() == ["psycopg", "sqlite3"]


def test_malformed_sqlite_url_is_a_connection_failure():
    with pytest.raises(ConnectionFailedError, match="Malformed SQLite URL"):
        SqliteAdapter().connect("sqlite://host/bench.db", "", "")
