"""Folding classified lines into one Metric per name"""
from operator import attrgetter
from typing import Dict, Iterable, List, Mapping
from .grammar import HelpDeclaration, SampleLine, TypeDeclaration
from .models import Metric, MetricType
from .reader import Line, LineKind
from logging_config import get_logger

logger = get_logger(__name__)


def _check_name(metric: Metric, name: str) -> None:
    # Only reachable through a bug in the lookup below
    if metric.name != name:
        raise AssertionError(f"Cannot merge a line for {name!r} into metric {metric.name!r}")


class MetricAggregator:
    """Accumulates metrics keyed by name.

    Metrics are created on their first sample or TYPE declaration and
    updated in place afterwards. TYPE and HELP declarations are
    last-write-wins, samples are appended in the order they are seen. HELP
    text never creates a metric on its own; it is held by name until the
    metric appears.
    """

    def __init__(self):
        self.metrics: Dict[str, Metric] = {}
        self.help_texts: Dict[str, str] = {}

    def _create(self, name: str, data_type: MetricType) -> Metric:
        metric = self.metrics[name] = Metric(name, data_type, help=self.help_texts.get(name))
        return metric

    def add_type(self, declaration: TypeDeclaration) -> None:
        metric = self.metrics.get(declaration.name)
        if metric is None:
            self._create(declaration.name, declaration.data_type)
            return
        _check_name(metric, declaration.name)
        metric.data_type = declaration.data_type

    def add_help(self, declaration: HelpDeclaration) -> None:
        if declaration.name is None:
            logger.debug("Ignoring HELP line without metric name", text=declaration.text)
            return
        self.help_texts[declaration.name] = declaration.doc
        metric = self.metrics.get(declaration.name)
        if metric is not None:
            _check_name(metric, declaration.name)
            metric.help = declaration.doc

    def add_sample(self, sample: SampleLine) -> None:
        metric = self.metrics.get(sample.name)
        if metric is None:
            metric = self._create(sample.name, MetricType.UNTYPED)
        _check_name(metric, sample.name)
        metric.push_sample(sample.to_sample())

    def add_line(self, line: Line) -> None:
        """Apply one classified line"""
        if line.kind is LineKind.SAMPLE:
            self.add_sample(line.content)
        elif line.kind is LineKind.COMMENT:
            if isinstance(line.content, TypeDeclaration):
                self.add_type(line.content)
            elif isinstance(line.content, HelpDeclaration):
                self.add_help(line.content)

    def add_lines(self, lines: Iterable[Line]) -> int:
        """Apply every line, returning how many were read"""
        count = 0
        for line in lines:
            self.add_line(line)
            count += 1
        return count

    def finalize(self) -> List[Metric]:
        return finalize(self.metrics)


def finalize(metrics: Mapping[str, Metric]) -> List[Metric]:
    """Return the metrics sorted by name"""
    return sorted(metrics.values(), key=attrgetter("name"))
