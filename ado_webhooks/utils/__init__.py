"""
Utility modules for the Azure DevOps webhook receiver.
"""

from ado_webhooks.utils.logging import (
    get_logger,
    setup_logging,
    LogContext,
    log_webhook_event,
    log_api_call,
    log_error_with_context,
)
from ado_webhooks.utils.metrics import (
    DeliveryMetrics,
    track_api_call,
    emit_metric,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "LogContext",
    "log_webhook_event",
    "log_api_call",
    "log_error_with_context",
    "DeliveryMetrics",
    "track_api_call",
    "emit_metric",
]
