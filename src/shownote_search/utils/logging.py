"""JSON log lines on stderr, one object per record.

Besides the free-form ``context`` dict, records can carry the episode
number and the search query they concern. Both are lifted to top-level
keys so a single episode or query can be followed with a plain grep.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional


SERVICE_NAME = "shownote-search"

# Record attributes copied verbatim into the JSON line when present
PROMOTED_FIELDS = ("episode", "query", "execution_time_ms", "error_code")

# Chatty at INFO, one line per HTTP request
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "service": SERVICE_NAME,
            "level": record.levelname,
            "component": record.name,
            "message": record.getMessage(),
        }

        for field_name in PROMOTED_FIELDS:
            value = getattr(record, field_name, None)
            if value is not None:
                log_data[field_name] = value

        context = getattr(record, "context", None)
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Titles and link texts are often Japanese; keep them readable
        return json.dumps(log_data, ensure_ascii=False, default=str)


def configure_logging(log_level: str = "INFO") -> None:
    """
    Route all logging to stderr through JSONFormatter.

    stdout stays untouched because the stdio MCP transport owns it.

    Args:
        log_level: Level name; unknown names fall back to INFO
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(JSONFormatter())
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a component ("RSSParser", "SearchEngine", ...)."""
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    context: Optional[Dict[str, Any]] = None,
    execution_time_ms: Optional[float] = None,
    error_code: Optional[str] = None,
    episode: Optional[str] = None,
    query: Optional[str] = None
) -> None:
    """
    Log message with structured extras.

    Args:
        logger: Component logger
        level: logging.INFO, logging.WARNING, ...
        message: Human-readable message
        context: Free-form details
        execution_time_ms: Elapsed time of the logged operation
        error_code: Machine-readable failure code
        episode: Display number (or guid) of the episode concerned
        query: Search query concerned, as typed
    """
    extra: Dict[str, Any] = {}

    if context:
        extra["context"] = context
    if execution_time_ms is not None:
        extra["execution_time_ms"] = round(execution_time_ms, 2)
    if error_code:
        extra["error_code"] = error_code
    if episode is not None:
        extra["episode"] = episode
    if query is not None:
        extra["query"] = query

    logger.log(level, message, extra=extra)
