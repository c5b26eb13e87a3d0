"""
Shared test fixtures and utilities for the specnest test suite.
"""

import io

import pytest

from specnest.reporting import Driver, Reporter, ReporterConfig


@pytest.fixture
def streams():
    """Pair of in-memory (out, err) streams for capturing reporter lines."""
    return io.StringIO(), io.StringIO()


@pytest.fixture
def reporter(streams):
    """Reporter writing to the `streams` fixture instead of the console."""
    out, err = streams
    return Reporter(ReporterConfig(out=out, err=err))


@pytest.fixture
def driver(reporter):
    """Driver using the capturing reporter.

    Usage:
        def test_something(driver, streams):
            result = driver.run(build_group("thing", block))
            out, err = streams
            assert out.getvalue() == "Success: ...\\n"
    """
    return Driver(reporter=reporter)


@pytest.fixture
def captured(streams):
    """Callable returning the (out, err) lines written so far."""

    def read() -> tuple[list[str], list[str]]:
        out, err = streams
        return out.getvalue().splitlines(), err.getvalue().splitlines()

    return read
