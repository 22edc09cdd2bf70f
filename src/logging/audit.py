"""Structured JSON request logging for the cat API.

One JSON line per proxy event on stdout, which CloudWatch ingests
directly from Lambda. Optional file output via AUDIT_LOG_FILE env var.
"""

import json
import logging
import sys
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from datetime import datetime, timezone

from src.config.settings import get_settings

LOGGER_NAME = "cats.api"
SERVICE_NAME = "cat-api"

# Request-scoped context for correlating log entries
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects.

    Fields passed as `extra={"log_data": {...}}` are merged in.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "message": record.getMessage(),
            "request_id": request_id_var.get(""),
        }
        if hasattr(record, "log_data"):
            log_entry.update(record.log_data)
        return json.dumps(log_entry, default=str)


def setup_logging() -> None:
    """Configure the cat API logger with JSON output."""
    settings = get_settings()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    logger.handlers.clear()

    formatter = JSONFormatter()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)
    logger.addHandler(stdout_handler)

    if settings.audit_log_file:
        file_handler = logging.FileHandler(settings.audit_log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Lambda's root handler would print every line a second time
    logger.propagate = False


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def request_id_for(event: dict | None) -> str:
    """API Gateway's own request id when the event carries one, else a fresh id."""
    if event:
        request_id = (event.get("requestContext") or {}).get("requestId")
        if request_id:
            return str(request_id)
    return uuid.uuid4().hex[:12]


@dataclass
class RequestScope:
    request_id: str
    started: float

    @property
    def elapsed_ms(self) -> float:
        return round((time.perf_counter() - self.started) * 1000, 2)


@contextmanager
def request_scope(event: dict | None) -> Iterator[RequestScope]:
    """Bind the event's request id to every log line written inside the block."""
    scope = RequestScope(request_id=request_id_for(event), started=time.perf_counter())
    token = request_id_var.set(scope.request_id)
    try:
        yield scope
    finally:
        request_id_var.reset(token)


def log_request(event: dict | None, response: dict, latency_ms: float) -> None:
    """Log one handled event. Error responses log at WARNING with their message."""
    status_code = response["statusCode"]
    log_data = {
        "http_method": event.get("httpMethod") if event else None,
        "path": event.get("path") if event else None,
        "status_code": status_code,
        "latency_ms": latency_ms,
    }

    if status_code < 400:
        get_logger().info("Request handled", extra={"log_data": log_data})
        return

    try:
        log_data["error"] = json.loads(response["body"]).get("error")
    except (ValueError, TypeError, AttributeError):
        log_data["error"] = None
    get_logger().warning("Request rejected", extra={"log_data": log_data})


def log_table_failure(operation: str, error: Exception) -> None:
    get_logger().warning(
        "Table operation failed",
        extra={"log_data": {
            "operation": operation,
            "error_type": type(error).__name__,
            "error": str(error),
        }},
    )
