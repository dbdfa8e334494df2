"""
Sink options read from a YAML file.

    plot_type: box
    show_legend: false
    show_epochs: true
    range_mode: tozero   # null or "" lets plotly auto-range
"""

import yaml
from pathlib import Path
from typing import Any, Dict

from .sink import HtmlSink

OPTION_KEYS = ("plot_type", "show_legend", "show_epochs", "range_mode")


def load_options(path) -> Dict[str, Any]:
    """Load sink options, unknown keys are ignored"""
    with open(Path(path)) as f:
        try:
            config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: {e}") from e

    if not isinstance(config, dict):
        raise ValueError(f"{path}: expected a mapping of sink options")

    return {key: config[key] for key in OPTION_KEYS if key in config}


def apply_options(sink: HtmlSink, options: Dict[str, Any]) -> HtmlSink:
    """Apply loaded options on `sink` through its builder methods"""
    if "plot_type" in options and options["plot_type"]:
        sink.options.plot_type = str(options["plot_type"])
    if "show_legend" in options:
        sink.show_legend(bool(options["show_legend"]))
    if "show_epochs" in options:
        sink.show_epochs(bool(options["show_epochs"]))
    if "range_mode" in options:
        sink.range_mode(options["range_mode"])
    return sink
