"""
Report options of the example benchmarks.

Run with:  pytest examples --renderto=violin.html
"""


def pytest_benchgraph_configure(sink):
    sink.show_epochs(True).range_mode("tozero")
