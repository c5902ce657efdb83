"""Metric data models"""
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from enum import Enum


class MetricType(Enum):
    """Prometheus metric types"""
    UNTYPED = "untyped"
    COUNTER = "counter"
    GAUGE = "gauge"
    HISTOGRAM = "histogram"
    SUMMARY = "summary"


def format_value(value: float) -> str:
    """Format a sample value the way the exposition format spells it"""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return repr(float(value))


def escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace('"', '\\"')


@dataclass
class Sample:
    """A single observation of a metric"""
    labels: Dict[str, str]
    value: float
    timestamp: Optional[int] = None

    def __post_init__(self):
        # Ensure labels is never None
        if self.labels is None:
            self.labels = {}

    def to_prometheus_line(self, name: str) -> str:
        """Convert to a Prometheus exposition sample line, without line break"""
        labels_str = ""
        if self.labels:
            label_pairs = [f'{k}="{escape_label_value(v)}"' for k, v in self.labels.items()]
            labels_str = "{" + ",".join(label_pairs) + "}"

        line = f"{name}{labels_str} {format_value(self.value)}"
        if self.timestamp is not None:
            line = f"{line} {self.timestamp}"
        return line


@dataclass
class Metric:
    """All samples and metadata collected under one metric name"""
    name: str
    data_type: MetricType = MetricType.UNTYPED
    samples: List[Sample] = field(default_factory=list)
    help: Optional[str] = None

    def push_sample(self, sample: Sample) -> None:
        self.samples.append(sample)
