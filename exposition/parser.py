"""Entry points for parsing exposition text"""
import time
from pathlib import Path
from typing import List, Optional, Tuple, Union
from .aggregator import MetricAggregator
from .exceptions import ParseError
from .models import Metric
from .reader import iter_lines
from config import Config
from logging_config import get_logger, log_parse_completed, log_parse_failure


def _parse(text: str) -> Tuple[List[Metric], int]:
    aggregator = MetricAggregator()
    lines_count = aggregator.add_lines(iter_lines(text))
    return aggregator.finalize(), lines_count

def parse_complete(text: str) -> List[Metric]:
    """Parse a complete exposition text into metrics sorted by name.

    Raises ParseError on the first malformed line; nothing parsed before it
    is returned.
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")
    return _parse(text)[0]

class ExpositionParser:
    """Parses exposition text with logging and file helpers"""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()
        self.logger = get_logger(__name__).bind(service_name=self.config.service_name)

    def parse(self, text: str, source: Optional[str] = None) -> List[Metric]:
        """Parse text, logging the outcome"""
        if not isinstance(text, str):
            raise TypeError(f"Expected str, got {type(text).__name__}")

        start_time = time.perf_counter()
        try:
            metrics, lines_count = _parse(text)
        except ParseError as e:
            log_parse_failure(self.logger, e, self.config.error_context_chars, {"source": source})
            raise

        log_parse_completed(self.logger, len(metrics), lines_count, time.perf_counter() - start_time)
        return metrics

    def parse_file(self, path: Optional[Union[str, Path]] = None) -> List[Metric]:
        """Read and parse an exposition file, defaulting to the configured one"""
        target = path if path is not None else self.config.prometheus_file
        if target is None:
            raise ValueError("No exposition file given and PROMETHEUS_FILE is not set")

        target = Path(target)
        self.logger.debug("Reading exposition file", path=str(target))
        text = target.read_text(encoding=self.config.file_encoding)
        return self.parse(text, source=str(target))
