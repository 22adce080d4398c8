"""
JSON logging for webhook deliveries.

Every record is written as one JSON object per line. Delivery correlation
ids (event type, notification id, subscription id, X-VSS-ActivityId and
Request-Id) are lifted to top-level keys so a single delivery can be
followed across the receiver, the dispatcher and Azure DevOps API calls.
Any other `extra` lands under "context".
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from logging import LogRecord
from typing import Any, Dict, IO, MutableMapping, Optional


CONTEXT_FIELDS = (
    "event_type",
    "notification_id",
    "subscription_id",
    "activity_id",
    "request_id",
)

# Attributes every LogRecord carries; anything else came in through `extra`.
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

_NOISY_LOGGERS = ("urllib3", "azure", "msrest", "httpx")


class JSONFormatter(logging.Formatter):
    """
    Render a record as a single JSON line.

    Keys: timestamp, level, logger, message, the correlation ids that are
    present, "context" for remaining extras, "error" when exception info
    is attached and "source" (file, line, function).
    """

    def format(self, record: LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        attributes = vars(record)
        entry.update({name: attributes[name] for name in CONTEXT_FIELDS if name in attributes})

        context = {
            name: value
            for name, value in attributes.items()
            if name not in _RECORD_ATTRIBUTES and name not in CONTEXT_FIELDS
        }
        if context:
            entry["context"] = context

        if record.exc_info:
            entry["error"] = self._describe_exception(record.exc_info)

        entry["source"] = {
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName,
        }
        return json.dumps(entry, default=str)

    @staticmethod
    def _describe_exception(exc_info) -> Dict[str, Any]:
        exc_type, exc_value, _ = exc_info
        return {
            "type": exc_type.__name__ if exc_type else None,
            "message": str(exc_value) if exc_value else None,
            "stack_trace": "".join(traceback.format_exception(*exc_info)),
        }


class ContextLoggerAdapter(logging.LoggerAdapter):
    """
    LoggerAdapter that stamps its context onto every record.

    Per-call `extra` wins over the adapter's own context on key clashes.
    """

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        super().__init__(logger, dict(extra or {}))

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> tuple[str, MutableMapping[str, Any]]:
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs

    def with_context(self, **context: Any) -> "ContextLoggerAdapter":
        """Return a sibling adapter with `context` added."""
        return ContextLoggerAdapter(self.logger, {**self.extra, **context})


class LogContext:
    """
    Temporarily add context to an adapter.

        with LogContext(logger, notification_id=4):
            dispatch(event)
    """

    def __init__(self, logger: logging.LoggerAdapter, **context: Any):
        self.logger = logger
        self.context = context
        self._saved: Optional[Dict[str, Any]] = None

    def __enter__(self) -> logging.LoggerAdapter:
        self._saved = dict(self.logger.extra or {})
        self.logger.extra = {**self._saved, **self.context}
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._saved is not None:
            self.logger.extra = self._saved
            self._saved = None


def setup_logging(log_level: str = "INFO", stream: Optional[IO[str]] = None) -> None:
    """
    Route all logging through one JSON handler on the root logger.

    Existing root handlers are replaced. Chatty HTTP and SDK loggers are
    held at WARNING.

    Args:
        log_level: Root level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Output stream, stdout by default
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.setLevel(log_level)

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str, **context: Any) -> ContextLoggerAdapter:
    """
    Return a context adapter for `name`.

        logger = get_logger(__name__, event_type="git.push")
    """
    return ContextLoggerAdapter(logging.getLogger(name), context)


def log_webhook_event(
    logger: logging.LoggerAdapter,
    event_type: Optional[str],
    status: str,
    notification_id: Optional[int] = None,
    subscription_id: Optional[str] = None,
    detail: Optional[str] = None,
) -> None:
    """
    Record how one delivery was handled.

    Rejected deliveries log at WARNING, everything else at INFO.

    Args:
        logger: Logger to use
        event_type: Event type tag, if the envelope had one
        status: 'accepted', 'ignored' or 'rejected'
        notification_id: Envelope notification id
        subscription_id: Envelope subscription id
        detail: Why the delivery was ignored or rejected
    """
    optional = {
        "notification_id": notification_id,
        "subscription_id": subscription_id,
        "detail": detail,
    }
    extra = {"event_type": event_type, "status": status}
    extra.update({key: value for key, value in optional.items() if value is not None})

    level = logging.WARNING if status == "rejected" else logging.INFO
    logger.log(level, f"Webhook {status}: {event_type}", extra=extra)


def log_api_call(
    logger: logging.LoggerAdapter,
    service: str,
    endpoint: str,
    method: str,
    status_code: Optional[int] = None,
    duration_ms: Optional[float] = None,
    error: Optional[str] = None
) -> None:
    """
    Record one outbound API call. Failed calls log at ERROR.

    Args:
        logger: Logger to use
        service: Remote service, e.g. 'azure_devops'
        endpoint: SDK method or REST path
        method: HTTP verb
        status_code: Response status, when known
        duration_ms: Wall time of the call
        error: Failure message
    """
    extra: Dict[str, Any] = {"service": service, "endpoint": endpoint, "method": method}
    if status_code is not None:
        extra["status_code"] = status_code
    if duration_ms is not None:
        extra["duration_ms"] = round(duration_ms, 2)

    if error is None:
        logger.info(f"API call: {method} {endpoint}", extra=extra)
    else:
        extra["error"] = error
        logger.error(f"API call failed: {method} {endpoint}", extra=extra)


def log_error_with_context(
    logger: logging.LoggerAdapter,
    message: str,
    error: Exception,
    **context: Any
) -> None:
    """Log `error` at ERROR with its traceback, its type name and `context`."""
    context["error_type"] = type(error).__name__
    logger.error(message, extra=context, exc_info=error)
