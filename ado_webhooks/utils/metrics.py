"""
Log-based metrics for webhook handling.

Metrics are ordinary log records tagged with metric_name, metric_value and
metric_tags, so whatever ships the JSON logs also ships the metrics.
"""

import time
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from ado_webhooks.utils.logging import get_logger, log_api_call

logger = get_logger(__name__)


class DeliveryMetrics:
    """
    Timing and outcome of one webhook delivery.

    `complete()` emits a "webhook.delivery" metric tagged with the event
    type, the final status and the handling time. Azure DevOps calls made
    while handling the delivery are counted per service.
    """

    def __init__(self, event_type: Optional[str] = None, activity_id: Optional[str] = None):
        self.event_type = event_type
        self.activity_id = activity_id

        self.status = "received"
        self.error_message: Optional[str] = None
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None
        self.duration_ms: Optional[int] = None

        self.api_calls: Dict[str, int] = {}
        self.api_latencies: Dict[str, List[float]] = {}

    def start(self) -> None:
        self.start_time = datetime.now(timezone.utc)
        self.status = "received"

    def complete(self, status: str, error_message: Optional[str] = None) -> None:
        """
        Close the delivery and emit its metric.

        Args:
            status: 'accepted', 'ignored', 'rejected', or a background
                outcome such as 'build_queued'
            error_message: Reason, for anything other than success
        """
        self.end_time = datetime.now(timezone.utc)
        self.status = status
        self.error_message = error_message
        if self.start_time is not None:
            self.duration_ms = int((self.end_time - self.start_time).total_seconds() * 1000)

        emit_metric(
            "webhook.delivery",
            1,
            event_type=self.event_type,
            status=self.status,
            duration_ms=self.duration_ms,
        )

    def record_api_call(self, service: str, duration_ms: float) -> None:
        self.api_calls[service] = self.api_calls.get(service, 0) + 1
        self.api_latencies.setdefault(service, []).append(duration_ms)

    def get_metrics_summary(self) -> Dict[str, Any]:
        """Snapshot of everything collected so far, JSON-serializable."""
        def iso(moment: Optional[datetime]) -> Optional[str]:
            return moment.isoformat() if moment else None

        return {
            "event_type": self.event_type,
            "activity_id": self.activity_id,
            "status": self.status,
            "start_time": iso(self.start_time),
            "end_time": iso(self.end_time),
            "duration_ms": self.duration_ms,
            "error_message": self.error_message,
            "api_calls": dict(self.api_calls),
            "avg_api_latency_ms": {
                service: sum(samples) / len(samples)
                for service, samples in self.api_latencies.items()
                if samples
            },
        }


@contextmanager
def track_api_call(
    metrics: Optional[DeliveryMetrics],
    service: str,
    endpoint: str,
    method: str,
    logger_adapter=None,
) -> Iterator[None]:
    """
    Time the wrapped call, count it on `metrics` and log it.

    Exceptions propagate unchanged after being logged.

        with track_api_call(metrics, "azure_devops", "queue_build", "POST"):
            build_client.queue_build(build=build, project=project)
    """
    started = time.perf_counter()
    failure: Optional[BaseException] = None
    try:
        yield
    except Exception as e:
        failure = e
        raise
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        if metrics is not None:
            metrics.record_api_call(service, elapsed_ms)
        log_api_call(
            logger_adapter or logger,
            service=service,
            endpoint=endpoint,
            method=method,
            duration_ms=elapsed_ms,
            error=str(failure) if failure is not None else None,
        )


def emit_metric(metric_name: str, value: float, **tags: Any) -> None:
    """Emit one metric sample as an INFO record."""
    logger.info(
        f"Metric: {metric_name}",
        extra={"metric_name": metric_name, "metric_value": value, "metric_tags": tags},
    )
