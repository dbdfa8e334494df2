"""
HTML report sink.

An HtmlSink collects the plots of many benchmarks into one HTML page
drawn with plotly:

    sink = HtmlSink("violin").show_legend(True).range_mode("")
    sink.open("report.html")
    sink.render_to(bench, "div1")
    sink.render_to(other_bench, "div2", "box")
    sink.close()

Box plots and violin plots are supported. Violin plots still show the
inner box, the mean line and every point, so quartiles can be read from
either kind of graph. Each series is labelled with its median absolute
percent error and, optionally, its number of epochs.

The sink is not thread safe: render_to() calls must come from one
thread at a time.
"""

import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Optional, TextIO

from .errors import OutputUnavailable
from .render import render
from .templates import EPILOGUE, PROLOGUE, skeleton

logger = logging.getLogger(__name__)


@dataclass
class SinkOptions:
    """Display options applied to every plot of a sink"""
    plot_type: str = "violin"
    show_legend: bool = False
    show_epochs: bool = False
    range_mode: Optional[str] = "tozero"


class HtmlSink:
    """Writes the plots of many benchmarks into a single HTML file"""

    def __init__(self, plot_type: str = "violin"):
        self.options = SinkOptions(plot_type=plot_type)
        self._path: Optional[Path] = None
        self._file: Optional[TextIO] = None
        self.blocks = 0

    def __copy__(self):
        raise TypeError("HtmlSink owns its output file and cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("HtmlSink owns its output file and cannot be copied")

    def __repr__(self) -> str:
        state = f"open at {self._path}" if self.is_open() else "closed"
        return f"<HtmlSink {self.options.plot_type} {state}>"

    # Builder style setters, usable before or after open()

    def show_legend(self, do_show: bool = True) -> "HtmlSink":
        """Display the plot legend on the side of each graph"""
        self.options.show_legend = bool(do_show)
        return self

    def show_epochs(self, do_show: bool = True) -> "HtmlSink":
        """Append the number of epochs to every series label"""
        self.options.show_epochs = bool(do_show)
        return self

    def range_mode(self, mode: Optional[str]) -> "HtmlSink":
        """Set the y-axis rangemode, an empty mode lets plotly choose"""
        self.options.range_mode = str(mode) if mode else None
        return self

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def open(self, path) -> "HtmlSink":
        """
        Create or truncate `path` and write the document head.

        Raises:
            OutputUnavailable: if `path` cannot be opened for writing
        """
        if self.is_open():
            self.close()

        path = Path(path)
        try:
            stream = open(path, "w", encoding="utf-8", newline="\n")
        except OSError as e:
            raise OutputUnavailable(path, e.strerror or str(e)) from e

        stream.write(PROLOGUE)
        self._file = stream
        self._path = path
        self.blocks = 0
        logger.debug("Opened HTML report %s", path)
        return self

    def is_open(self) -> bool:
        return self._file is not None and not self._file.closed

    __bool__ = is_open

    def stream(self) -> Optional[TextIO]:
        """Output stream the renderer writes into"""
        return self._file

    def render_to(self, bench, *extras: str):
        """
        Append the plot of an executed benchmark.

        `extras` are forwarded to skeleton(): the first one is the DOM id
        of the plot (default "mydiv"), the second one overrides the plot
        type. Ids must be unique within one document. Nothing is written
        when the sink is not open.
        """
        if not self.is_open():
            logger.debug("HTML report not open, skipping %r", bench)
            return

        render(skeleton(self.options, *extras), bench, self.stream())
        self.blocks += 1
        logger.debug("Rendered block %d into %s", self.blocks, self._path)

    def close(self):
        """Write the document tail and release the file, never raises"""
        if self._file is None:
            return

        stream, self._file = self._file, None
        try:
            stream.write(EPILOGUE)
        except (OSError, ValueError) as e:
            logger.warning("Could not finish HTML report %s: %s", self._path, e)
        finally:
            try:
                stream.close()
            except OSError as e:
                logger.warning("Could not close HTML report %s: %s", self._path, e)
        logger.debug("Closed HTML report %s (%d blocks)", self._path, self.blocks)

    def __enter__(self) -> "HtmlSink":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
