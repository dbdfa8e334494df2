"""
pytest plugin rendering benchmarks into one HTML report.

    pytest --renderto=report.html

Test cases call render_graph(bench) once their benchmark has run. Without
--renderto the call does nothing, so the same tests run with or without
a report.
"""

import logging
import pytest
from typing import Optional

from .config import apply_options, load_options
from .errors import OutputUnavailable
from .sink import HtmlSink

logger = logging.getLogger(__name__)

# Sink every render_graph() call writes into, None when no report is wanted.
_graph_sink: Optional[HtmlSink] = None

sink_key = pytest.StashKey[Optional[HtmlSink]]()


def get_sink() -> Optional[HtmlSink]:
    """The published sink, None unless --renderto was given"""
    return _graph_sink


def render_graph(bench, *extras: str):
    """
    Render an executed benchmark into the session report, if any.

    `extras` are forwarded to HtmlSink.render_to(): the DOM id of the
    plot, then an optional plot type override.
    """
    if _graph_sink is not None:
        _graph_sink.render_to(bench, *extras)


def pytest_addhooks(pluginmanager):
    from . import hookspecs
    pluginmanager.add_hookspecs(hookspecs)


def pytest_addoption(parser):
    """Add custom command-line options."""
    group = parser.getgroup("benchgraph", "benchmark HTML report")
    group.addoption(
        "--renderto",
        action="store",
        default="",
        metavar="PATH",
        help="Render benchmark graphs into the HTML file PATH"
    )
    group.addoption(
        "--renderto-options",
        action="store",
        default=None,
        metavar="FILE",
        help="YAML file with plot_type, show_legend, show_epochs and range_mode"
    )


def make_sink(config) -> HtmlSink:
    """Build the session sink: violin plots, legend shown, then user options"""
    sink = HtmlSink("violin").show_legend(True)

    options_file = config.getoption("--renderto-options", default=None)
    if options_file:
        try:
            apply_options(sink, load_options(options_file))
        except (OSError, ValueError) as e:
            raise pytest.UsageError(f"Cannot load {options_file}: {e}") from e

    config.hook.pytest_benchgraph_configure(sink=sink)
    return sink


@pytest.hookimpl(trylast=True)
def pytest_configure(config):
    """Open the report and publish its sink when --renderto is set."""
    global _graph_sink

    config.stash[sink_key] = None

    output = config.getoption("--renderto", default="")
    if not output:
        return

    sink = make_sink(config)
    try:
        sink.open(output)
    except OutputUnavailable as e:
        raise pytest.UsageError(str(e)) from e

    config.stash[sink_key] = sink
    _graph_sink = sink
    logger.debug("Rendering benchmark graphs to %s", output)


def pytest_report_header(config):
    sink = config.stash.get(sink_key, None)
    if sink is not None:
        return f"benchgraph: rendering to {sink.path}"


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    sink = config.stash.get(sink_key, None)
    if sink is not None:
        terminalreporter.write_line(
            f"[benchgraph] Rendered {sink.blocks} graph(s) to {sink.path}"
        )


def pytest_unconfigure(config):
    """Finish the report whatever the outcome of the session."""
    global _graph_sink

    sink = config.stash.get(sink_key, None)
    if sink is None:
        return

    sink.close()
    config.stash[sink_key] = None
    if _graph_sink is sink:
        _graph_sink = None


@pytest.fixture
def graph_sink(request) -> Optional[HtmlSink]:
    """Sink of the session report, None without --renderto."""
    return request.config.stash.get(sink_key, None)
