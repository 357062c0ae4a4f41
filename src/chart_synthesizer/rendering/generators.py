"""
Per-chart-type figure generators.

Each generator translates a validated ChartSpec into Plotly traces. The
schema does not encode per-type structural rules, so every generator runs
its own ``validate`` first and raises RenderError for specs that are valid
JSON but cannot be drawn as that chart type.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import numpy as np
import plotly.graph_objects as go
from plotly.basedatatypes import BaseTraceType

from chart_synthesizer.core import settings
from chart_synthesizer.core.exceptions import RenderError
from chart_synthesizer.models.chart_spec import ChartSpec, Dataset
from chart_synthesizer.utils.logger import get_logger

logger = get_logger(__name__)

# Chart.js default colour cycle
DEFAULT_PALETTE: List[str] = [
    "#36A2EB",
    "#FF6384",
    "#4BC0C0",
    "#FF9F40",
    "#9966FF",
    "#FFCD56",
    "#C9CBCF",
]

LEGEND_LAYOUTS: Dict[str, Dict[str, Any]] = {
    "top": {"orientation": "h", "x": 0.5, "xanchor": "center", "y": 1.02, "yanchor": "bottom"},
    "bottom": {"orientation": "h", "x": 0.5, "xanchor": "center", "y": -0.12, "yanchor": "top"},
    "right": {"orientation": "v", "x": 1.02, "xanchor": "left", "y": 0.5, "yanchor": "middle"},
    "left": {"orientation": "v", "x": -0.12, "xanchor": "right", "y": 0.5, "yanchor": "middle"},
}


def to_plotly_color(value: str) -> str:
    """
    Convert a ChartSpec hex colour to a form Plotly accepts.

    Short forms are expanded and colours carrying an alpha channel
    (#RGBA, #RRGGBBAA) become ``rgba(...)`` strings.

    Example:
        >>> to_plotly_color("#F00")
        '#FF0000'
        >>> to_plotly_color("#36A2EB80")
        'rgba(54, 162, 235, 0.502)'
    """
    digits = value.lstrip("#")
    if len(digits) in (3, 4):
        digits = "".join(char * 2 for char in digits)
    if len(digits) == 6:
        return f"#{digits.upper()}"
    red, green, blue, alpha = (int(digits[i:i + 2], 16) for i in range(0, 8, 2))
    return f"rgba({red}, {green}, {blue}, {round(alpha / 255, 3)})"


class BaseChartGenerator(ABC):
    """
    Base class for all chart generators.

    Subclasses implement:
    - build_traces(): Plotly traces for the ChartSpec datasets
    and may override:
    - validate(): chart-type specific structural rules
    - apply_layout(): chart-type specific layout (barmode, polar axes, ...)

    ``generate`` ties them together with the layout shared by every chart
    (canvas size, background, title, legend, font).
    """

    chart_type: str = ""

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    def validate(self, spec: ChartSpec) -> None:
        if not spec.data.labels:
            raise RenderError("Chart has no labels to plot", chart_type=spec.chartType)

    @abstractmethod
    def build_traces(self, spec: ChartSpec) -> List[BaseTraceType]:
        """Return one or more traces per dataset."""

    def apply_layout(self, fig: go.Figure, spec: ChartSpec) -> None:
        """Hook for chart-type specific layout."""

    def generate(self, spec: ChartSpec) -> go.Figure:
        """
        Build the complete figure for a spec.

        Raises:
            RenderError: If the ChartSpec cannot be drawn as its chart type
        """
        self.validate(spec)
        fig = go.Figure(data=self.build_traces(spec))
        self._apply_common_layout(fig, spec)
        self.apply_layout(fig, spec)
        self.logger.debug(
            f"Figure built: {len(fig.data)} trace(s), {len(spec.data.labels)} label(s)"
        )
        return fig

    def _apply_common_layout(self, fig: go.Figure, spec: ChartSpec) -> None:
        legend = spec.options.plugins.legend
        # Chart.js shows the legend at the top unless told otherwise
        legend_position = legend.position if legend is not None else "top"
        title_text = spec.title_text

        fig.update_layout(
            width=spec.width,
            height=spec.height,
            autosize=False,
            paper_bgcolor=to_plotly_color(spec.backgroundColour),
            plot_bgcolor=to_plotly_color(spec.backgroundColour),
            font={"family": settings.FONT_FAMILY, "size": settings.FONT_SIZE},
            margin={"l": 50, "r": 30, "t": 60 if title_text else 30, "b": 50},
            showlegend=True,
            legend=LEGEND_LAYOUTS[legend_position],
        )
        if title_text:
            fig.update_layout(title={"text": title_text, "x": 0.5, "xanchor": "center"})

    # ------------------------------------------------------------------
    # Colour helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _palette_color(index: int) -> str:
        return DEFAULT_PALETTE[index % len(DEFAULT_PALETTE)]

    def _point_colors(self, dataset: Dataset, n_points: int, dataset_index: int) -> List[str]:
        """Per-point fill colours, cycling the dataset's list or the palette."""
        if dataset.backgroundColor:
            colors = dataset.backgroundColor
            return [to_plotly_color(colors[i % len(colors)]) for i in range(n_points)]
        if n_points and self._colors_per_point():
            return [self._palette_color(i) for i in range(n_points)]
        return [self._palette_color(dataset_index)] * n_points

    def _series_color(self, dataset: Dataset, dataset_index: int) -> str:
        if dataset.backgroundColor:
            return to_plotly_color(dataset.backgroundColor[0])
        return self._palette_color(dataset_index)

    def _colors_per_point(self) -> bool:
        """Whether an uncoloured dataset gets one palette colour per label."""
        return False

    @staticmethod
    def _numeric_labels(spec: ChartSpec) -> List[float]:
        """Labels as x coordinates for charts drawn on a linear x axis."""
        values = []
        for label in spec.data.labels:
            try:
                values.append(float(label))
            except ValueError:
                raise RenderError(
                    f"{spec.chartType} charts need numeric labels for the x axis, "
                    f"got '{label}'",
                    chart_type=spec.chartType,
                ) from None
        return values


class BarGenerator(BaseChartGenerator):
    """Vertical or horizontal (indexAxis=y) bars, grouped or stacked."""

    chart_type = "bar"

    def build_traces(self, spec: ChartSpec) -> List[BaseTraceType]:
        labels = spec.data.labels
        horizontal = spec.options.indexAxis == "y"
        traces = []
        for index, dataset in enumerate(spec.data.datasets):
            marker = {
                "color": self._point_colors(dataset, len(labels), index),
                "line": {"color": to_plotly_color(dataset.borderColor), "width": dataset.borderWidth},
            }
            if dataset.borderRadius:
                marker["cornerradius"] = dataset.borderRadius
            traces.append(
                go.Bar(
                    x=dataset.data if horizontal else labels,
                    y=labels if horizontal else dataset.data,
                    name=dataset.label,
                    orientation="h" if horizontal else "v",
                    marker=marker,
                )
            )
        return traces

    def apply_layout(self, fig: go.Figure, spec: ChartSpec) -> None:
        scales = spec.options.scales
        stacked = scales.x.stacked or scales.y.stacked
        fig.update_layout(barmode="stack" if stacked else "group")


class LineGenerator(BaseChartGenerator):
    chart_type = "line"

    def build_traces(self, spec: ChartSpec) -> List[BaseTraceType]:
        labels = spec.data.labels
        horizontal = spec.options.indexAxis == "y"
        stacked = spec.options.scales.y.stacked if not horizontal else spec.options.scales.x.stacked
        traces = []
        for index, dataset in enumerate(spec.data.datasets):
            trace_kwargs: Dict[str, Any] = {}
            if stacked:
                trace_kwargs["stackgroup"] = "stack"
            traces.append(
                go.Scatter(
                    x=dataset.data if horizontal else labels,
                    y=labels if horizontal else dataset.data,
                    name=dataset.label,
                    mode="lines+markers",
                    line={"color": to_plotly_color(dataset.borderColor), "width": dataset.borderWidth},
                    marker={"color": self._series_color(dataset, index)},
                    **trace_kwargs,
                )
            )
        return traces


class PieGenerator(BaseChartGenerator):
    """Pie chart; several datasets are laid out side by side."""

    chart_type = "pie"
    hole: float = 0.0

    def _colors_per_point(self) -> bool:
        return True

    def build_traces(self, spec: ChartSpec) -> List[BaseTraceType]:
        labels = spec.data.labels
        traces = []
        for index, dataset in enumerate(spec.data.datasets):
            traces.append(
                go.Pie(
                    labels=labels,
                    values=dataset.data,
                    name=dataset.label,
                    hole=self.hole,
                    sort=False,
                    direction="clockwise",
                    domain={"row": 0, "column": index},
                    marker={
                        "colors": self._point_colors(dataset, len(labels), index),
                        "line": {"color": to_plotly_color(dataset.borderColor), "width": dataset.borderWidth},
                    },
                )
            )
        return traces

    def validate(self, spec: ChartSpec) -> None:
        super().validate(spec)
        for dataset in spec.data.datasets:
            if any(value < 0 for value in dataset.data):
                raise RenderError(
                    f"{spec.chartType} dataset '{dataset.label}' contains negative values",
                    chart_type=spec.chartType,
                )

    def apply_layout(self, fig: go.Figure, spec: ChartSpec) -> None:
        n_datasets = len(spec.data.datasets)
        if n_datasets > 1:
            fig.update_layout(grid={"rows": 1, "columns": n_datasets})


class DoughnutGenerator(PieGenerator):
    chart_type = "doughnut"
    # Chart.js default cutout is 50%
    hole = 0.5


class PolarAreaGenerator(BaseChartGenerator):
    """Equal-angle sectors whose radius is the value."""

    chart_type = "polarArea"

    def _colors_per_point(self) -> bool:
        return True

    def build_traces(self, spec: ChartSpec) -> List[BaseTraceType]:
        labels = spec.data.labels
        return [
            go.Barpolar(
                r=dataset.data,
                theta=labels,
                name=dataset.label,
                marker={
                    "color": self._point_colors(dataset, len(labels), index),
                    "line": {"color": to_plotly_color(dataset.borderColor), "width": dataset.borderWidth},
                },
            )
            for index, dataset in enumerate(spec.data.datasets)
        ]

    def apply_layout(self, fig: go.Figure, spec: ChartSpec) -> None:
        fig.update_layout(polar={"bgcolor": to_plotly_color(spec.backgroundColour)})


class RadarGenerator(BaseChartGenerator):
    chart_type = "radar"

    def build_traces(self, spec: ChartSpec) -> List[BaseTraceType]:
        labels = list(spec.data.labels)
        traces = []
        for index, dataset in enumerate(spec.data.datasets):
            values = list(dataset.data)
            # Close the polygon
            traces.append(
                go.Scatterpolar(
                    r=values + values[:1],
                    theta=labels + labels[:1],
                    name=dataset.label,
                    fill="toself",
                    fillcolor=self._series_color(dataset, index),
                    opacity=0.6,
                    line={"color": to_plotly_color(dataset.borderColor), "width": dataset.borderWidth},
                )
            )
        return traces

    def apply_layout(self, fig: go.Figure, spec: ChartSpec) -> None:
        fig.update_layout(polar={"bgcolor": to_plotly_color(spec.backgroundColour)})


class ScatterGenerator(BaseChartGenerator):
    """Points at (label, value); labels must be numeric x coordinates."""

    chart_type = "scatter"

    def validate(self, spec: ChartSpec) -> None:
        super().validate(spec)
        self._numeric_labels(spec)

    def _marker_sizes(self, dataset: Dataset) -> Optional[List[float]]:
        return None

    def build_traces(self, spec: ChartSpec) -> List[BaseTraceType]:
        x_values = self._numeric_labels(spec)
        traces = []
        for index, dataset in enumerate(spec.data.datasets):
            marker: Dict[str, Any] = {
                "color": self._point_colors(dataset, len(x_values), index),
                "line": {"color": to_plotly_color(dataset.borderColor), "width": dataset.borderWidth},
            }
            sizes = self._marker_sizes(dataset)
            if sizes is not None:
                marker.update({"size": sizes, "sizemode": "diameter"})
            traces.append(
                go.Scatter(
                    x=x_values,
                    y=dataset.data,
                    name=dataset.label,
                    mode="markers",
                    marker=marker,
                )
            )
        return traces


class BubbleGenerator(ScatterGenerator):
    """Scatter whose marker diameter scales with the value."""

    chart_type = "bubble"
    min_size: float = 8.0
    max_size: float = 48.0

    def _marker_sizes(self, dataset: Dataset) -> Optional[List[float]]:
        magnitudes = np.abs(np.asarray(dataset.data, dtype=float))
        largest = magnitudes.max(initial=0.0)
        if largest == 0:
            return [self.min_size] * len(magnitudes)
        sizes = self.min_size + (self.max_size - self.min_size) * magnitudes / largest
        return sizes.tolist()
