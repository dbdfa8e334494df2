"""
Shared fixtures of the benchgraph tests.
"""

import pytest

from benchgraph import Bench, HtmlSink, Result


@pytest.fixture
def sample_bench():
    """Bench titled "T" holding one series "S" with samples 1, 2, 3."""
    bench = Bench().title("T")
    bench.add_result(Result.from_samples("S", [1, 2, 3], bench.config))
    return bench


@pytest.fixture
def html_path(tmp_path):
    """Path of the report written by a test."""
    return tmp_path / "report.html"


@pytest.fixture
def sink():
    """Default session sink, not opened."""
    s = HtmlSink("violin").show_legend(True)
    yield s
    s.close()
