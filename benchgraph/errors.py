"""
Exceptions raised by benchgraph.
"""


class BenchGraphError(Exception):
    """Base class for all benchgraph errors"""


class OutputUnavailable(BenchGraphError, OSError):
    """The HTML report file cannot be opened for writing"""

    def __init__(self, path, reason: str = ""):
        self.path = str(path)
        message = f"Cannot render output to {self.path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class RenderError(BenchGraphError, ValueError):
    """A template could not be filled with benchmark results"""
