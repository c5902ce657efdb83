"""Parser for the Prometheus text exposition format"""
from .exceptions import ExpositionError, GrammarError, ParseError
from .models import Metric, MetricType, Sample
from .parser import ExpositionParser, parse_complete

__all__ = [
    "ExpositionError",
    "ExpositionParser",
    "GrammarError",
    "Metric",
    "MetricType",
    "ParseError",
    "Sample",
    "parse_complete",
]
