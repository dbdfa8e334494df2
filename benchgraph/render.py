"""
Double-brace template engine.

Fills templates such as

    {{#result}}{{name}}: [{{#measurement}}{{elapsed}}{{^-last}}, {{/last}}{{/measurement}}]
    {{/result}}

with the results of a Bench. Only the small subset of mustache that
benchmark reports need is understood:

- ``{{#result}} ... {{/result}}`` repeats its body once per result.
- ``{{#measurement}} ... {{/measurement}}`` (inside a result) repeats
  its body once per epoch.
- ``{{#-first}}``, ``{{^-first}}``, ``{{#-last}}`` and ``{{^-last}}``
  keep their literal body only for the first / not-first / last /
  not-last item of the enclosing list.
- A closing tag ends the innermost open section whatever its name. A
  closing tag with no open section, or a section never closed, raises
  RenderError.
- ``{{title}}``, ``{{unit}}``, ``{{epochs}}``... print the configuration,
  ``{{median(elapsed)}}``, ``{{sumProduct(iterations, elapsed)}}``... print
  statistics and ``{{context(key)}}`` prints user supplied values.
"""

import re
import math
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, TextIO, Tuple, Union

from .bench import Bench, BenchConfig, Result
from .errors import RenderError

logger = logging.getLogger(__name__)

CONTENT = "content"
TAG = "tag"
SECTION = "section"
INVERTED = "inverted_section"

_COMMAND = re.compile(r"^\s*(\w+)\(\s*([\w-]+)\s*(?:,\s*([\w-]+)\s*)?\)\s*$")


@dataclass
class Node:
    kind: str
    text: str
    children: List["Node"] = field(default_factory=list)


def _parse(template: str, pos: int, depth: int = 0) -> Tuple[List[Node], int]:
    nodes = []
    while True:
        begin = template.find("{{", pos)
        end = template.find("}}", begin + 2) if begin >= 0 else -1
        if begin < 0 or end < 0:
            if depth > 0:
                raise RenderError("section left open at end of template")
            nodes.append(Node(CONTENT, template[pos:]))
            return nodes, len(template)

        nodes.append(Node(CONTENT, template[pos:begin]))
        tag = template[begin + 2:end]
        pos = end + 2

        if tag.startswith("/"):
            if depth == 0:
                raise RenderError(f"closing tag '{tag}' without an open section")
            return nodes, pos
        if tag.startswith("#"):
            children, pos = _parse(template, pos, depth + 1)
            nodes.append(Node(SECTION, tag[1:], children))
        elif tag.startswith("^"):
            children, pos = _parse(template, pos, depth + 1)
            nodes.append(Node(INVERTED, tag[1:], children))
        else:
            nodes.append(Node(TAG, tag))


def parse_template(template: str) -> List[Node]:
    """Split a template into a tree of content, tag and section nodes"""
    nodes, _ = _parse(template, 0)
    return nodes


def _number(value: float) -> str:
    # Written into JavaScript, where nan and inf are not literals
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return "%.15g" % value


def _config_tag(name: str, config: BenchConfig) -> Optional[str]:
    tags: Dict[str, Callable[[], str]] = {
        "title": lambda: config.title,
        "name": lambda: config.name,
        "unit": lambda: config.unit,
        "batch": lambda: _number(config.batch),
        "epochs": lambda: str(config.epochs),
        "epochIterations": lambda: str(config.epoch_iterations),
        "minEpochIterations": lambda: str(config.min_epoch_iterations),
        "minEpochTime": lambda: _number(config.min_epoch_time),
        "maxEpochTime": lambda: _number(config.max_epoch_time),
        "warmup": lambda: str(config.warmup),
        "relative": lambda: str(int(config.relative)),
    }
    getter = tags.get(name.strip())
    return getter() if getter is not None else None


def _result_tag(name: str, result: Result) -> str:
    text = _config_tag(name, result.config)
    if text is not None:
        return text

    match = _COMMAND.match(name)
    if match:
        command, arg1, arg2 = match.groups()
        if arg2 is None:
            if command == "context":
                if arg1 not in result.config.context:
                    raise RenderError(f"context '{arg1}' not found")
                return result.config.context[arg1]
            stats = {
                "median": result.median,
                "average": result.average,
                "medianAbsolutePercentError": result.median_absolute_percent_error,
                "sum": result.sum,
                "minimum": result.minimum,
                "maximum": result.maximum,
            }
            if command in stats:
                if not result.has(arg1):
                    return _number(0.0)
                return _number(stats[command](arg1))
        elif command == "sumProduct":
            if not (result.has(arg1) and result.has(arg2)):
                return _number(0.0)
            return _number(result.sum_product(arg1, arg2))

    raise RenderError(f"command '{name}' not understood")


def _first_last(node: Node, idx: int, size: int, out: TextIO) -> bool:
    """Handle -first/-last sections, return False for any other node"""
    if node.kind not in (SECTION, INVERTED) or node.text not in ("-first", "-last"):
        return False

    if node.text == "-first":
        selected = idx == 0
    else:
        selected = idx == size - 1
    if node.kind == INVERTED:
        selected = not selected

    if selected:
        for child in node.children:
            if child.kind == CONTENT:
                out.write(child.text)
    return True


def _render_measurement(nodes: List[Node], idx: int, result: Result, out: TextIO):
    for node in nodes:
        if _first_last(node, idx, len(result), out):
            continue
        if node.kind == CONTENT:
            out.write(node.text)
        elif node.kind == TAG:
            measure = node.text.strip()
            out.write(_number(result.get(idx, measure) if result.has(measure) else 0.0))
        else:
            raise RenderError(f"got a section '{node.text}' inside measurement")


def _render_result(nodes: List[Node], idx: int, results: List[Result], out: TextIO):
    result = results[idx]
    for node in nodes:
        if _first_last(node, idx, len(results), out):
            continue
        if node.kind == CONTENT:
            out.write(node.text)
        elif node.kind == TAG:
            out.write(_result_tag(node.text, result))
        elif node.kind == SECTION and node.text == "measurement":
            for i in range(len(result)):
                _render_measurement(node.children, i, result, out)
        else:
            raise RenderError(f"got a section '{node.text}' inside result")


def render(template: str, bench: Union[Bench, List[Result]], out: TextIO):
    """Fill `template` with the results of `bench` and write it to `out`

    `bench` is either a Bench or a plain list of Results. Top level tags
    are taken from the last result, or from the Bench configuration when
    there is none.
    """
    if isinstance(bench, Bench):
        results = bench.results()
        fallback = bench.config
    else:
        results = list(bench)
        fallback = None

    for node in parse_template(template):
        if node.kind == CONTENT:
            out.write(node.text)
        elif node.kind == SECTION and node.text == "result":
            for i in range(len(results)):
                _render_result(node.children, i, results, out)
        elif node.kind == TAG:
            config = results[-1].config if results else fallback
            text = _config_tag(node.text, config) if config is not None else None
            if text is None:
                raise RenderError(f"unknown tag '{node.text}'")
            out.write(text)
        else:
            raise RenderError(f"unknown list '{node.text}'")

    logger.debug("Rendered %d result(s)", len(results))
