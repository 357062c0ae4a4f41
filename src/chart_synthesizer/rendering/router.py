"""
GeneratorRouter - selects the figure generator for a chart type.

Uses a registry so new chart types can be added without touching the
renderer.
"""

from typing import Dict, List, Type

from chart_synthesizer.core.exceptions import RenderError
from chart_synthesizer.rendering.generators import (
    BarGenerator,
    BaseChartGenerator,
    BubbleGenerator,
    DoughnutGenerator,
    LineGenerator,
    PieGenerator,
    PolarAreaGenerator,
    RadarGenerator,
    ScatterGenerator,
)
from chart_synthesizer.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_GENERATORS: List[Type[BaseChartGenerator]] = [
    BarGenerator,
    LineGenerator,
    PieGenerator,
    DoughnutGenerator,
    PolarAreaGenerator,
    RadarGenerator,
    ScatterGenerator,
    BubbleGenerator,
]


class GeneratorRouter:
    """
    Registry of chart type -> generator class.

    Example:
        >>> router = GeneratorRouter()
        >>> type(router.get_generator("doughnut")).__name__
        'DoughnutGenerator'
        >>> router.register("area", AreaGenerator)
    """

    def __init__(self):
        self._registry: Dict[str, Type[BaseChartGenerator]] = {}
        for generator_class in DEFAULT_GENERATORS:
            self.register(generator_class.chart_type, generator_class)
        logger.debug(f"GeneratorRouter initialized with {len(self._registry)} generators")

    def register(self, chart_type: str, generator_class: Type[BaseChartGenerator]) -> None:
        """
        Register (or replace) the generator for a chart type.

        Raises:
            TypeError: If generator_class does not inherit BaseChartGenerator
        """
        if not issubclass(generator_class, BaseChartGenerator):
            raise TypeError(f"{generator_class.__name__} must inherit from BaseChartGenerator")
        self._registry[chart_type] = generator_class

    def get_generator(self, chart_type: str) -> BaseChartGenerator:
        """
        Return a generator instance for ``chart_type``.

        Raises:
            RenderError: If no generator is registered for the chart type
        """
        if chart_type not in self._registry:
            raise RenderError(
                f"Chart type '{chart_type}' is not supported. "
                f"Supported types: {self.get_supported_chart_types()}",
                chart_type=chart_type,
            )
        return self._registry[chart_type]()

    def get_supported_chart_types(self) -> List[str]:
        return list(self._registry.keys())

    def is_supported(self, chart_type: str) -> bool:
        return chart_type in self._registry
