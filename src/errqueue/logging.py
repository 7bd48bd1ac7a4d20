"""errqueue Logging - Structured logging aware of error queues.

Provides structured JSON logging with automatic trace context injection.
When a record carries an ErrorQueue in exc_info, the queued messages and the
creation stacktrace are added as fields.

Usage:
    from errqueue.logging import json_handler

    logger = logging.getLogger("payments")
    logger.addHandler(json_handler())
    try:
        charge()
    except ErrorQueue as err:
        logger.exception("charge failed", extra={"order_id": "o-123"})
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from opentelemetry import trace

from errqueue.queue import ErrorQueue

_RESERVED = frozenset(
    (
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "thread", "threadName",
        "message", "taskName",
    )
)


def queue_fields(err: BaseException) -> dict[str, Any]:
    """Describe an error for a structured log entry.

    Args:
        err: Error to describe (ErrorQueue or any exception)

    Returns:
        Dictionary with error message, members and stacktrace
    """
    if isinstance(err, ErrorQueue):
        return {
            "error": str(err),
            "errors": [str(member) for member in err],
            "stacktrace": err.stacktrace.render(),
        }
    return {"error": str(err), "error_type": type(err).__name__}


class StructuredLogFormatter(logging.Formatter):
    """JSON formatter with trace context injection.

    Formats log records as JSON with:
    - timestamp (ISO 8601)
    - level
    - component (logger name)
    - message
    - trace_id (if available)
    - span_id (if available)
    - error, errors, stacktrace (if exc_info holds an error)
    - Additional fields from extra
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "component": record.name,
            "message": record.getMessage(),
        }

        span = trace.get_current_span()
        if span and span.is_recording():
            ctx = span.get_span_context()
            if ctx.is_valid:
                log_data["trace_id"] = format(ctx.trace_id, "032x")
                log_data["span_id"] = format(ctx.span_id, "016x")

        if record.exc_info and record.exc_info[1] is not None:
            log_data.update(queue_fields(record.exc_info[1]))

        for key, value in record.__dict__.items():
            if key not in _RESERVED:
                log_data[key] = value

        return json.dumps(log_data, default=str)


def json_handler(stream: Any = None) -> logging.Handler:
    """Return a stream handler that writes StructuredLogFormatter output.

    Args:
        stream: Stream to write to (defaults to sys.stderr)

    Returns:
        Handler ready to attach to any logger
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(StructuredLogFormatter())
    return handler
