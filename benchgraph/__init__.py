"""
benchgraph - box and violin plots of many micro-benchmarks in one HTML report.
"""

from .bench import Bench, BenchConfig, Measurement, Result
from .errors import BenchGraphError, OutputUnavailable, RenderError
from .render import render
from .sink import HtmlSink, SinkOptions
from .templates import skeleton
from .plugin import get_sink, render_graph

__version__ = "0.1.0"

__all__ = [
    "Bench",
    "BenchConfig",
    "BenchGraphError",
    "HtmlSink",
    "Measurement",
    "OutputUnavailable",
    "RenderError",
    "Result",
    "SinkOptions",
    "get_sink",
    "render",
    "render_graph",
    "skeleton",
]
