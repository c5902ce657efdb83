"""Sample line recognizer"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple
from ..models import Sample
from .labels import parse_labels
from .tokens import (
    expect_line_ending,
    expect_space,
    parse_timestamp,
    parse_token,
    parse_value,
    skip_space,
)


@dataclass
class SampleLine:
    """A parsed sample line, still tagged with its metric name"""
    name: str
    value: float
    labels: Dict[str, str] = field(default_factory=dict)
    timestamp: Optional[int] = None

    def to_sample(self) -> Sample:
        return Sample(labels=dict(self.labels), value=self.value, timestamp=self.timestamp)


def parse_sample(text: str, pos: int = 0) -> Tuple[SampleLine, int]:
    """Parse one sample line, including its line break.

    ``name{labels} value [timestamp]``. Whitespace between the name and the
    label block is tolerated. Input after the line break is left untouched.
    """
    name, cursor = parse_token(text, pos)

    labels: Dict[str, str] = {}
    block_start = skip_space(text, cursor)
    if text.startswith("{", block_start):
        labels, cursor = parse_labels(text, block_start)

    cursor = expect_space(text, cursor, "sample")
    value, cursor = parse_value(text, cursor)

    timestamp = None
    field_start = skip_space(text, cursor)
    if field_start > cursor:
        timestamp, cursor = parse_timestamp(text, field_start)

    cursor = expect_line_ending(text, cursor, "sample")
    return SampleLine(name=name, value=value, labels=labels, timestamp=timestamp), cursor
