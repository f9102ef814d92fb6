from rich.console import Console

from insert_bench.domain.models import BenchmarkResult, ErrorKind, InsertStrategy
from insert_bench.reporter import StatusReporter, print_results


def test_append_preserves_order_and_adds_separator():
    reporter = StatusReporter()
    reporter.append("Connected to database.")
    reporter.append("Batch updates supported: True")

    assert reporter.lines == ["Connected to database.", "Batch updates supported: True"]
    assert reporter.text == "Connected to database.\nBatch updates supported: True\n"


def test_append_forwards_each_line_to_sink():
    received = []
    reporter = StatusReporter(sink=received.append)
    reporter.append("one")
    reporter.append("two")

    assert received == ["one", "two"]


def test_clear_empties_log():
    reporter = StatusReporter()
    reporter.append("x")
    reporter.clear()
    assert reporter.lines == []
    assert reporter.text == ""


def test_print_results_renders_successes_and_failures():
    console = Console(record=True, width=160)
    results = [
        BenchmarkResult(strategy=InsertStrategy.SEQUENTIAL, row_count=1000, elapsed_millis=900),
        BenchmarkResult(strategy=InsertStrategy.BATCHED, row_count=1000, elapsed_millis=45),
        BenchmarkResult.failed(
            InsertStrategy.BATCHED, 1000, ErrorKind.EXECUTION, "[42P01] relation missing"
        ),
    ]

    print_results(results, console=console)
    output = console.export_text()

    assert "Insert Benchmark Results" in output
    assert output.index("45") < output.index("900")
    assert "execution: [42P01] relation missing" in output


def test_print_results_handles_empty_input():
    console = Console(record=True)
    print_results([], console=console)
    assert "No results to display." in console.export_text()
