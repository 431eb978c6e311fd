"""structlog setup shared by the CLI commands."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

# Libraries that log every PDF object or HTTP request at DEBUG/INFO.
NOISY_LOGGERS = ("pdfminer", "pdfplumber", "httpx", "httpcore")


def _level_number(level: str) -> int:
    number = getattr(logging, level.upper(), None)
    if not isinstance(number, int):
        raise ValueError(f"Unknown log level '{level}'")
    return number


def configure_logging(level: str = "INFO") -> None:
    """
    Emit JSON log lines on stderr.

    stdout is left to the CLI, which prints one JSON record per application.
    Values bound with ``structlog.contextvars`` (the document being processed)
    are merged into every line.
    """
    threshold = _level_number(level)
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=threshold)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(threshold, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=False),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    return structlog.get_logger(name)
