"""
Embeddable HTML snippet tests.
"""

import json

from chart_synthesizer.core import settings
from chart_synthesizer.models.chart_spec import ChartSpec
from chart_synthesizer.rendering.snippet import SnippetGenerator, serialize_config


class TestSnippetGenerator:
    def setup_method(self):
        self.generator = SnippetGenerator()

    def test_snippet_structure(self, totals_payload):
        spec = ChartSpec.model_validate(totals_payload)

        html = self.generator.generate(spec.to_chart_config(), "#FFFFFF", 400, 600)

        assert html.startswith("<div>")
        assert 'height="400" width="600"' in html
        assert 'style="background-color: #FFFFFF"' in html
        assert f'<script src="{settings.CHARTJS_CDN_URL}"></script>' in html
        assert "new Chart(ctx, {" in html
        assert '"type": "bar"' in html
        assert '"text": "Totals"' in html

    def test_canvas_id_matches_lookup(self, totals_payload):
        config = ChartSpec.model_validate(totals_payload).to_chart_config()

        html = self.generator.generate(config, "#FFFFFF", 400, 400)

        canvas_id = html.split('<canvas id="', 1)[1].split('"', 1)[0]
        assert canvas_id.startswith("chart-")
        assert f'document.getElementById("{canvas_id}")' in html

    def test_embedded_config_round_trips(self, totals_payload):
        config = ChartSpec.model_validate(totals_payload).to_chart_config()

        html = self.generator.generate(config, "#FFFFFF", 400, 400)

        embedded = html.split("new Chart(ctx, ", 1)[1].split(");\n", 1)[0]
        assert json.loads(embedded) == config

    def test_script_tags_in_labels_are_escaped(self):
        config = {"type": "bar", "data": {"labels": ["</script><script>alert(1)"]}}

        html = self.generator.generate(config, "#FFFFFF", 400, 400)

        assert html.count("</script>") == 2
        assert "<\\/script><script>alert(1)" in html

    def test_identical_charts_get_distinct_canvas_ids(self, totals_payload):
        config = ChartSpec.model_validate(totals_payload).to_chart_config()

        first = self.generator.generate(config, "#FFF", 300, 300)
        second = self.generator.generate(config, "#FFF", 300, 300)

        first_id = first.split('<canvas id="', 1)[1].split('"', 1)[0]
        second_id = second.split('<canvas id="', 1)[1].split('"', 1)[0]
        assert first_id != second_id
        assert f'document.getElementById("{second_id}")' in second
        assert first.replace(first_id, "") == second.replace(second_id, "")

    def test_custom_library_source(self):
        generator = SnippetGenerator(chartjs_src="/static/chart.umd.js")
        html = generator.generate({"type": "line"}, "#FFFFFF", 400, 400)
        assert '<script src="/static/chart.umd.js"></script>' in html


def test_serialize_config_escapes_closing_tags():
    assert serialize_config({"a": "</b>"}) == '{\n  "a": "<\\/b>"\n}'
