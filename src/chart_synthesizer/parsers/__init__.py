from chart_synthesizer.parsers.output_parser import ChartSpecOutputParser

__all__ = ["ChartSpecOutputParser"]
