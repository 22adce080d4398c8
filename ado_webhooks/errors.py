"""
Exception hierarchy for webhook ingestion and Azure DevOps calls.

Every error here is recoverable by the caller: a webhook receiver maps
them onto HTTP responses, nothing in the library retries or exits.
"""

from typing import Any, Dict, List, Optional


class WebhookError(Exception):
    """Base exception for webhook ingestion errors."""
    pass


class AuthenticationError(WebhookError):
    """Presented basic-auth credentials are missing, malformed or wrong."""
    pass


class MalformedEnvelopeError(WebhookError):
    """Notification bytes could not be parsed into an envelope."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class MissingEventTypeError(WebhookError):
    """Envelope carries no event type, so it cannot be dispatched."""

    def __init__(self, message: str = "Webhook payload has no eventType"):
        super().__init__(message)


class UnknownEventTypeError(WebhookError):
    """Event type is not in the resource shape registry."""

    def __init__(self, tag: str):
        super().__init__(f"Unknown eventType in webhook payload: {tag}")
        self.tag = tag


class PayloadDecodeError(WebhookError):
    """
    Inner resource does not match the shape selected for its event type.

    Attributes:
        event_type: Event type the payload was decoded for
        field_path: Dotted wire path of the first offending field, if known
        expected: Kind of value expected at that path, if known
        errors: Full list of validation errors
    """

    def __init__(
        self,
        event_type: str,
        field_path: Optional[str] = None,
        expected: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        location = f" at '{field_path}'" if field_path else ""
        kind = f" (expected {expected})" if expected else ""
        super().__init__(f"Cannot decode {event_type} resource{location}{kind}")
        self.event_type = event_type
        self.field_path = field_path
        self.expected = expected
        self.errors = errors or []


class DevOpsClientError(Exception):
    """Azure DevOps REST call failed or returned an undecodable body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
