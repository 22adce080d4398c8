"""
Webhook endpoint for Azure DevOps service hook deliveries.
"""

from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Header, HTTPException, Request

from ado_webhooks.config import Settings, get_settings
from ado_webhooks.errors import (
    AuthenticationError,
    DevOpsClientError,
    MalformedEnvelopeError,
    MissingEventTypeError,
    PayloadDecodeError,
    UnknownEventTypeError,
)
from ado_webhooks.models.api_response import WebhookResponse
from ado_webhooks.models.events import Event, EventType
from ado_webhooks.services.devops_client import get_devops_client
from ado_webhooks.services.dispatcher import dispatch
from ado_webhooks.services.envelope import parse_envelope
from ado_webhooks.services.validation import (
    get_activity_id,
    get_request_id,
    get_subscription_id,
    validate_payload,
)
from ado_webhooks.utils.logging import LogContext, get_logger, log_error_with_context, log_webhook_event
from ado_webhooks.utils.metrics import DeliveryMetrics

logger = get_logger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


def queue_build_for_push(event: Event, settings: Settings) -> None:
    """
    Queue the configured build after a push.

    Args:
        event: Dispatched git.push envelope
        settings: Settings naming the build definition and branch
    """
    metrics = DeliveryMetrics(event_type=event.event_type)
    metrics.start()
    try:
        client = get_devops_client(settings)
        client.queue_build(
            definition_id=settings.build_definition_id,
            source_branch=settings.build_source_branch,
            metrics=metrics,
        )
        metrics.complete("build_queued")
    except DevOpsClientError as e:
        log_error_with_context(
            logger,
            "Failed to queue build for push",
            e,
            event_type=event.event_type,
            notification_id=event.notification_id,
        )
        metrics.complete("build_failed", error_message=str(e))

    logger.info(
        "Push build handling finished",
        extra={"notification_id": event.notification_id, "metrics": metrics.get_metrics_summary()},
    )


@router.post("/azure-devops", response_model=WebhookResponse)
async def handle_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> WebhookResponse:
    """
    Receive and dispatch Azure DevOps service hook notifications.

    This endpoint:
    1. Validates basic-auth credentials (unless disabled)
    2. Decodes the envelope and dispatches its resource by event type
    3. Acknowledges unknown event types without processing them
    4. Queues the configured build for git.push events in the background

    Args:
        request: FastAPI request object
        background_tasks: FastAPI background tasks
        authorization: Authorization header
        settings: Application settings

    Returns:
        WebhookResponse with status and message

    Raises:
        HTTPException: 401 on failed authentication, 400 on undecodable payloads
    """
    context = {
        "activity_id": get_activity_id(request.headers),
        "subscription_id": get_subscription_id(request.headers),
        "request_id": get_request_id(request.headers),
    }
    request_logger = logger.with_context(**{k: v for k, v in context.items() if v})
    metrics = DeliveryMetrics(activity_id=context["activity_id"] or None)
    metrics.start()

    payload = await request.body()

    if settings.require_webhook_auth:
        try:
            validate_payload(payload, authorization, settings.webhook_credentials())
        except AuthenticationError as e:
            log_webhook_event(request_logger, None, "rejected", detail=str(e))
            metrics.complete("rejected", error_message=str(e))
            raise HTTPException(status_code=401, detail="Authentication failed")

    try:
        event = parse_envelope(payload)
    except MalformedEnvelopeError as e:
        log_webhook_event(request_logger, None, "rejected", detail=str(e))
        metrics.complete("rejected", error_message=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    metrics.event_type = event.event_type

    with LogContext(
        request_logger,
        notification_id=event.notification_id,
        subscription_id=event.subscription_id or context["subscription_id"] or None,
    ):
        try:
            resource = dispatch(event)
        except UnknownEventTypeError as e:
            log_webhook_event(request_logger, event.event_type, "ignored", detail=str(e))
            metrics.complete("ignored", error_message=str(e))
            return WebhookResponse(
                status="ignored",
                message=f"Event type {e.tag} not processed",
                event_type=event.event_type,
                notification_id=event.notification_id,
            )
        except (MissingEventTypeError, PayloadDecodeError) as e:
            log_webhook_event(request_logger, event.event_type, "rejected", detail=str(e))
            metrics.complete("rejected", error_message=str(e))
            raise HTTPException(status_code=400, detail=str(e))

        log_webhook_event(request_logger, event.event_type, "accepted")

    if event.known_event_type == EventType.GIT_PUSH and settings.build_definition_id is not None:
        background_tasks.add_task(queue_build_for_push, event, settings)

    metrics.complete("accepted")
    return WebhookResponse(
        status="accepted",
        message=f"{event.event_type} event accepted ({type(resource).__name__})",
        event_type=event.event_type,
        notification_id=event.notification_id,
    )
