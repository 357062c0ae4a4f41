"""
ChartRenderer - ChartSpec -> raster image data URL.

Figures are built by the per-type generators and rasterized with Plotly's
static image export (kaleido). Export is blocking, so ``render`` runs it in
a worker thread to keep concurrent requests from stalling each other.
"""

import asyncio
import base64
from typing import Callable, Optional

import plotly.graph_objects as go
import plotly.io as pio

from chart_synthesizer.core import settings
from chart_synthesizer.core.exceptions import RenderError
from chart_synthesizer.models.chart_spec import ChartSpec
from chart_synthesizer.rendering.router import GeneratorRouter
from chart_synthesizer.utils.logger import get_logger

logger = get_logger(__name__)

# (figure, width, height) -> encoded image bytes
ImageExporter = Callable[[go.Figure, int, int], bytes]

IMAGE_MIME_TYPES = {
    "png": "image/png",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
}


def plotly_image_exporter(fig: go.Figure, width: int, height: int) -> bytes:
    """
    Rasterize a figure with kaleido.

    Requires the 'kaleido' package (and the browser it drives) at runtime.
    """
    return pio.to_image(
        fig,
        format=settings.IMAGE_FORMAT,
        width=width,
        height=height,
        scale=settings.IMAGE_SCALE,
    )


class ChartRenderer:
    """
    Renders validated chart specs to images.

    Rendering is deterministic: the same spec always yields the same figure
    and therefore the same image bytes from the same exporter.

    Example:
        >>> renderer = ChartRenderer()
        >>> url = await renderer.render(spec)
        >>> url[:22]
        'data:image/png;base64,'
    """

    def __init__(
        self,
        router: Optional[GeneratorRouter] = None,
        exporter: Optional[ImageExporter] = None,
    ):
        self.router = router or GeneratorRouter()
        self.exporter = exporter or plotly_image_exporter
        self.image_format = settings.IMAGE_FORMAT
        if self.image_format not in IMAGE_MIME_TYPES:
            raise ValueError(
                f"Unsupported image format '{self.image_format}'. "
                f"Choose one of {list(IMAGE_MIME_TYPES)}"
            )

    @property
    def mime_type(self) -> str:
        return IMAGE_MIME_TYPES[self.image_format]

    def build_figure(self, spec: ChartSpec) -> go.Figure:
        """
        Build the Plotly figure for a spec without rasterizing it.

        Raises:
            RenderError: If the ChartSpec cannot be drawn
        """
        generator = self.router.get_generator(spec.chartType)
        try:
            return generator.generate(spec)
        except RenderError:
            raise
        except (ValueError, TypeError) as e:
            # Plotly property validation errors
            raise RenderError(
                f"Could not build {spec.chartType} figure: {e}", chart_type=spec.chartType
            ) from e

    def render_image(self, spec: ChartSpec) -> bytes:
        """
        Build and rasterize a spec synchronously.

        Raises:
            RenderError: If building or exporting the figure fails
        """
        fig = self.build_figure(spec)
        try:
            image = self.exporter(fig, spec.width, spec.height)
        except Exception as e:
            logger.error(f"[ChartRenderer] Image export failed: {e}", exc_info=True)
            raise RenderError(
                f"Image export failed: {e}", chart_type=spec.chartType
            ) from e
        logger.debug(
            f"[ChartRenderer] Exported {spec.chartType} {spec.width}x{spec.height} "
            f"({len(image)} bytes)"
        )
        return image

    async def render(self, spec: ChartSpec) -> str:
        """
        Render a spec to a ``data:<mime>;base64,...`` URL.

        Raises:
            RenderError: If the ChartSpec cannot be drawn or exported
        """
        image = await asyncio.to_thread(self.render_image, spec)
        encoded = base64.b64encode(image).decode("ascii")
        logger.info(f"[ChartRenderer] Rendered {spec.chartType} chart as {self.mime_type}")
        return f"data:{self.mime_type};base64,{encoded}"
