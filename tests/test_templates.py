"""
Tests of the plot block templates.
"""

import pytest

from benchgraph.sink import SinkOptions
from benchgraph.templates import (
    EPILOGUE,
    PLOTLY_URL,
    PROLOGUE,
    range_mode_fragment,
    skeleton,
)


class TestDocumentFrame:
    """Test the fixed head and tail of the document."""

    def test_prologue(self):
        assert PROLOGUE == (
            "<!doctype html>\n"
            "<html>\n"
            "  <head>\n"
            "    <script src=\"https://cdn.plot.ly/plotly-3.0.1.min.js\"></script>\n"
            "  </head>\n"
            "  <body>\n"
        )

    def test_epilogue(self):
        assert EPILOGUE == "  </body>\n</html>\n"

    def test_plotly_url_in_prologue(self):
        assert PLOTLY_URL in PROLOGUE


class TestSkeleton:
    """Test skeleton() output for every option."""

    def test_default_id(self):
        text = skeleton(SinkOptions())
        assert text.startswith("    <div id='mydiv'>\n")
        assert "Plotly.newPlot('mydiv', data, layout, {responsive: true});" in text

    def test_custom_id(self):
        text = skeleton(SinkOptions(), "div1")
        assert "<div id='div1'>" in text
        assert "Plotly.newPlot('div1'" in text
        assert "mydiv" not in text

    def test_container(self):
        text = skeleton(SinkOptions())
        assert "<div class='plot-container plotly' style='width: 100%;'></div>" in text
        assert text.endswith("    </script>\n")

    def test_placeholders_kept(self):
        text = skeleton(SinkOptions())
        assert "{{#result}}" in text
        assert "{{/result}}" in text
        assert "{{medianAbsolutePercentError(elapsed)}}" in text
        assert "y: [{{#measurement}}{{elapsed}}{{^-last}}, {{/last}}{{/measurement}}]" in text
        assert "var title = '{{title}}';" in text

    def test_plot_type_from_options(self):
        assert "type: 'box'" in skeleton(SinkOptions(plot_type="box"))
        assert "type: 'violin'" in skeleton(SinkOptions(plot_type="violin"))

    def test_plot_type_override(self):
        text = skeleton(SinkOptions(plot_type="violin"), "a", "box")
        assert "type: 'box'" in text
        assert "type: 'violin'" not in text

    def test_empty_override_uses_options(self):
        assert "type: 'violin'" in skeleton(SinkOptions(plot_type="violin"), "a", "")

    def test_fixed_trace_attributes(self):
        text = skeleton(SinkOptions())
        assert ("boxpoints: 'all', pointpos: 0, type: 'violin', "
                "box: {visible: true}, meanline: {visible: true}") in text

    @pytest.mark.parametrize("show, expected", [(True, "true"), (False, "false")])
    def test_show_legend(self, show, expected):
        text = skeleton(SinkOptions(show_legend=show))
        assert f"showlegend: {expected}," in text

    def test_show_epochs(self):
        text = skeleton(SinkOptions(show_epochs=True))
        assert "toFixed(2) + '%; epochs: {{epochs}})'," in text

    def test_hide_epochs(self):
        text = skeleton(SinkOptions(show_epochs=False))
        assert "epochs" not in text
        assert "toFixed(2) + '%)'," in text

    def test_range_mode(self):
        text = skeleton(SinkOptions(range_mode="tozero"))
        assert text.count("rangemode: 'tozero'") == 1
        assert "yaxis: { title: 'time per unit', rangemode: 'tozero', autorange: true }" in text

    @pytest.mark.parametrize("mode", [None, ""])
    def test_no_range_mode(self, mode):
        text = skeleton(SinkOptions(range_mode=mode))
        assert "rangemode" not in text
        assert "yaxis: { title: 'time per unit', autorange: true }" in text

    def test_range_mode_fragment(self):
        assert range_mode_fragment("nonnegative") == ", rangemode: 'nonnegative'"
        assert range_mode_fragment("") == ""
