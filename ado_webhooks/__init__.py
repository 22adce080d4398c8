"""
Typed decoding of Azure DevOps service hook notifications.

    event = parse_webhook(validate_payload(body, authorization, credentials))
    if isinstance(event.resource, GitPush):
        ...
"""

from ado_webhooks.errors import (
    AuthenticationError,
    DevOpsClientError,
    MalformedEnvelopeError,
    MissingEventTypeError,
    PayloadDecodeError,
    UnknownEventTypeError,
    WebhookError,
)
from ado_webhooks.models import Event, EventType, GitPullRequest, GitPush, WorkItem, WorkItemUpdate
from ado_webhooks.services import (
    WebhookCredentials,
    decode_resource,
    dispatch,
    parse_envelope,
    parse_webhook,
    validate_payload,
)

__version__ = "0.1.0"

__all__ = [
    "AuthenticationError",
    "DevOpsClientError",
    "MalformedEnvelopeError",
    "MissingEventTypeError",
    "PayloadDecodeError",
    "UnknownEventTypeError",
    "WebhookError",
    "Event",
    "EventType",
    "GitPullRequest",
    "GitPush",
    "WorkItem",
    "WorkItemUpdate",
    "WebhookCredentials",
    "decode_resource",
    "dispatch",
    "parse_envelope",
    "parse_webhook",
    "validate_payload",
]
