"""Structured logging configuration for the exposition parser"""
import logging
import os
import sys
from typing import Any, Dict
import structlog
from structlog.stdlib import LoggerFactory
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer, TimeStamper, StackInfoRenderer
from config import Config


def setup_structured_logging(config: Config) -> None:
    """Setup structured logging with JSON format for production and console for development"""

    # Configure processors
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        TimeStamper(fmt="iso"),
        StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    # Use JSON renderer for production, console for development
    is_development = os.getenv("ENVIRONMENT", "production").lower() == "development"
    if is_development:
        processors.append(ConsoleRenderer())
    else:
        processors.append(JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, config.log_level.upper())
    handlers = []

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    handlers.append(console_handler)

    # File handler, only when a log file is configured
    if config.log_file is not None:
        config.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(config.log_file))
        file_handler.setLevel(level)
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=handlers,
        force=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)


def log_parse_completed(logger: structlog.stdlib.BoundLogger, metrics_count: int, lines_count: int, parse_time: float) -> None:
    """Log a successful parse with structured data"""
    logger.info(
        "Exposition text parsed",
        metrics_count=metrics_count,
        lines_count=lines_count,
        parse_time_seconds=round(parse_time, 6),
        event_type="parse_completed"
    )


def log_parse_failure(logger: structlog.stdlib.BoundLogger, error: Exception, context_chars: int = 40, context: Dict[str, Any] = None) -> None:
    """Log a rejected exposition text with the location of the failure"""
    fields = {
        "error": str(error),
        "error_type": type(error).__name__,
        "context": context or {},
        "event_type": "parse_failure",
    }
    # ParseError carries position details, plain exceptions do not
    for attr in ("rule", "line", "column"):
        if hasattr(error, attr):
            fields[attr] = getattr(error, attr)
    if hasattr(error, "snippet"):
        fields["remainder"] = error.snippet(context_chars)
    logger.warning("Exposition text rejected", **fields)
