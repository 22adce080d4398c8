"""
Webhook ingestion services: authentication, envelope decoding and dispatch.
"""

from ado_webhooks.services.dispatcher import decode_resource, dispatch, parse_webhook
from ado_webhooks.services.envelope import parse_envelope
from ado_webhooks.services.registry import RESOURCE_SHAPES, lookup_shape, supported_event_types
from ado_webhooks.services.validation import (
    WebhookCredentials,
    get_activity_id,
    get_request_id,
    get_subscription_id,
    parse_basic_auth,
    validate_payload,
)

__all__ = [
    "decode_resource",
    "dispatch",
    "parse_webhook",
    "parse_envelope",
    "RESOURCE_SHAPES",
    "lookup_shape",
    "supported_event_types",
    "WebhookCredentials",
    "get_activity_id",
    "get_request_id",
    "get_subscription_id",
    "parse_basic_auth",
    "validate_payload",
]
