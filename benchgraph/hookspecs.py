"""
Hooks added to pytest by the benchgraph plugin.
"""

import pytest


@pytest.hookspec
def pytest_benchgraph_configure(sink):
    """Configure the HTML report sink before it is opened.

    Called once per session on a fresh sink drawing violin plots with
    the legend shown. Implementations apply builder calls, e.g.::

        def pytest_benchgraph_configure(sink):
            sink.show_epochs(True).range_mode("")

    Only called when --renderto is given. Only plugins and conftest files
    known when pytest configures itself (the rootdir conftest and those
    of the paths given on the command line) are asked; conftest files
    found later during collection are not.

    The return value is ignored.
    """
