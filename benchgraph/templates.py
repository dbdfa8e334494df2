"""
HTML fragments of the benchmark report.

skeleton() returns the template of one plot block. Sink level options
are spliced in as plain text, everything that depends on the benchmark
is left as {{...}} markers for render().
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .sink import SinkOptions

# Bump this when moving to a newer plotly release.
PLOTLY_URL = "https://cdn.plot.ly/plotly-3.0.1.min.js"

PROLOGUE = (
    "<!doctype html>\n"
    "<html>\n"
    "  <head>\n"
    f"    <script src=\"{PLOTLY_URL}\"></script>\n"
    "  </head>\n"
    "  <body>\n"
)

EPILOGUE = (
    "  </body>\n"
    "</html>\n"
)

DEFAULT_ID = "mydiv"

EPOCHS_SUFFIX = "; epochs: {{epochs}}"


def legend_fragment(show_legend: bool) -> str:
    return "true" if show_legend else "false"


def epochs_fragment(show_epochs: bool) -> str:
    return EPOCHS_SUFFIX if show_epochs else ""


def range_mode_fragment(range_mode) -> str:
    """y-axis rangemode directive, empty when plotly should auto-range"""
    return f", rangemode: '{range_mode}'" if range_mode else ""


def skeleton(options: "SinkOptions", id: str = DEFAULT_ID, plot_type: str = "") -> str:
    """
    Build the template of one plot block.

    Args:
        options: display options of the sink
        id: DOM id of the plot container, must be unique within a document
        plot_type: "box" or "violin", overrides options.plot_type when not empty

    Returns:
        A template to be filled by render()
    """
    resolved_type = plot_type or options.plot_type
    show_legend = legend_fragment(options.show_legend)
    show_epochs = epochs_fragment(options.show_epochs)
    range_mode = range_mode_fragment(options.range_mode)

    return (
        f"    <div id='{id}'>\n"
        # Keep graphs close to each other
        "      <div class='plot-container plotly' style='width: 100%;'></div>\n"
        "    </div>\n"
        "    <script>\n"
        "        var data = [\n"
        "            {{#result}}{\n"
        "                name: '{{name}} (error: ' + (100*{{medianAbsolutePercentError(elapsed)}}).toFixed(2) + '%"
        + show_epochs + ")',\n"
        "                y: [{{#measurement}}{{elapsed}}{{^-last}}, {{/last}}{{/measurement}}],\n"
        "            },\n"
        "            {{/result}}\n"
        "        ];\n"
        "        var title = '{{title}}';\n"
        "\n"
        "        data = data.map(a => Object.assign(a, { boxpoints: 'all', pointpos: 0, type: '"
        + resolved_type + "', box: {visible: true}, meanline: {visible: true} }));\n"
        "        var layout = { title: { text: title }, showlegend: " + show_legend
        + ", yaxis: { title: 'time per unit'" + range_mode + ", autorange: true } };\n"
        f"        Plotly.newPlot('{id}', data, layout, {{responsive: true}});\n"
        "    </script>\n"
    )
