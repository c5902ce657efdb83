"""Prometheus text exporter for parsed metrics"""
from pathlib import Path
from typing import List, Optional, Union
from ..models import Metric
from config import Config
from logging_config import get_logger


logger = get_logger(__name__)


def help_line(metric: Metric) -> str:
    """Build the HELP line; the text is written as is, like the parser reads it"""
    if "\n" in metric.help or "\r" in metric.help:
        raise ValueError(f"HELP text of {metric.name!r} contains a line break")
    return f"# HELP {metric.name} {metric.help}"


class PrometheusTextExporter:
    """Renders metrics as exposition text and writes them to a file"""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()

    def render(self, metrics: List[Metric]) -> str:
        """Generate Prometheus exposition format output"""
        if not metrics:
            return "# No metrics available\n"

        lines = []
        for metric in metrics:
            if metric.help is not None:
                lines.append(help_line(metric))
            lines.append(f"# TYPE {metric.name} {metric.data_type.value}")

            for sample in metric.samples:
                lines.append(sample.to_prometheus_line(metric.name))

        lines.append("")  # Final newline
        return "\n".join(lines)

    def export(self, metrics: List[Metric], path: Optional[Union[str, Path]] = None) -> Path:
        """Write metrics to a file, replacing it atomically"""
        target = path if path is not None else self.config.prometheus_file
        if target is None:
            raise ValueError("No output file given and PROMETHEUS_FILE is not set")

        target = Path(target)
        content = self.render(metrics)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            # Write atomically using temporary file
            temp_file = target.with_suffix(target.suffix + '.tmp')
            temp_file.write_text(content, encoding=self.config.file_encoding)
            temp_file.replace(target)
        except OSError as e:
            logger.error("Failed to write Prometheus metrics", path=str(target), error=str(e))
            raise

        logger.debug("Exported metrics to Prometheus file", path=str(target), metrics_count=len(metrics))
        return target
