"""
SnippetGenerator - embeddable HTML for a chart configuration.

The snippet draws the chart client-side with Chart.js, using the same
configuration the renderer received, so the embedded chart and the raster
image describe the same data.
"""

import json
import uuid
from typing import Any, Dict, Optional

from jinja2 import Environment, BaseLoader

from chart_synthesizer.core import settings

SNIPPET_TEMPLATE = """\
<div>
  <canvas id="{{ canvas_id }}" height="{{ height }}" width="{{ width }}" style="background-color: {{ background_colour }}"></canvas>
</div>
<script src="{{ chartjs_src }}"></script>
<script>
  (function () {
    const ctx = document.getElementById("{{ canvas_id }}");
    new Chart(ctx, {{ config_json | indent(4) | safe }});
  })();
</script>
"""


def serialize_config(config: Dict[str, Any]) -> str:
    """Pretty JSON that is safe to inline in a <script> element."""
    return json.dumps(config, indent=2, ensure_ascii=False).replace("</", "<\\/")


class SnippetGenerator:
    """
    Formats a Chart.js configuration as an HTML fragment.

    Example:
        >>> html = SnippetGenerator().generate(spec.to_chart_config(), "#FFFFFF", 400, 400)
        >>> "new Chart(ctx" in html
        True
    """

    def __init__(self, chartjs_src: Optional[str] = None):
        self.chartjs_src = chartjs_src or settings.CHARTJS_CDN_URL
        self.env = Environment(loader=BaseLoader(), autoescape=True)
        self.template = self.env.from_string(SNIPPET_TEMPLATE)

    def generate(
        self,
        config: Dict[str, Any],
        background_colour: str,
        height: int,
        width: int,
    ) -> str:
        """
        Render the snippet.

        Args:
            config: Chart.js configuration ({"type", "data", "options"})
            background_colour: CSS colour for the canvas background
            height: Canvas height in pixels
            width: Canvas width in pixels

        Returns:
            HTML fragment (div + canvas, Chart.js loader, inline script)
        """
        config_json = serialize_config(config)
        # Fresh id per call so identical charts can share one page
        canvas_id = f"chart-{uuid.uuid4().hex[:12]}"
        return self.template.render(
            canvas_id=canvas_id,
            height=height,
            width=width,
            background_colour=background_colour,
            chartjs_src=self.chartjs_src,
            config_json=config_json,
        ).strip()
