"""
Payload dispatcher.

Selects the resource model for an envelope's event type and decodes the
raw resource into it. Decoding is a pure function of (event type, bytes);
the envelope is only touched after decoding succeeded.
"""

from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from ado_webhooks.errors import MissingEventTypeError, PayloadDecodeError, UnknownEventTypeError
from ado_webhooks.models.events import Event, ResourceShape
from ado_webhooks.services.envelope import parse_envelope
from ado_webhooks.services.registry import lookup_shape
from ado_webhooks.utils.logging import get_logger

logger = get_logger(__name__)

_EXPECTED_KINDS = {
    "bool_type": "boolean",
    "int_type": "integer",
    "float_type": "number",
    "string_type": "string",
    "bytes_type": "string",
    "list_type": "array",
    "dict_type": "object",
    "model_type": "object",
    "model_attributes_type": "object",
    "datetime_type": "datetime",
    "datetime_parsing": "datetime",
    "json_invalid": "JSON",
    "json_type": "JSON",
}


def _describe_error(error: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    """Return (dotted field path, expected kind) for a validation error."""
    path = ".".join(str(part) for part in error.get("loc", ())) or None

    error_type = error.get("type", "")
    expected = _EXPECTED_KINDS.get(error_type)
    if expected is None:
        context = error.get("ctx") or {}
        if "class" in context:
            expected = str(context["class"])
        elif "expected" in context:
            expected = str(context["expected"])
        else:
            expected = error_type or None

    return path, expected


def decode_resource(event_type: str, raw_payload: Optional[bytes]) -> ResourceShape:
    """
    Decode a raw resource for an event type.

    Args:
        event_type: Event type tag
        raw_payload: JSON bytes of the envelope's resource

    Returns:
        Resource model instance for the event type

    Raises:
        UnknownEventTypeError: If the event type is not registered
        PayloadDecodeError: If the resource is absent or does not match the model
    """
    shape = lookup_shape(event_type)
    if shape is None:
        raise UnknownEventTypeError(event_type)

    if raw_payload is None:
        raise PayloadDecodeError(event_type, field_path="resource", expected="object")

    try:
        return shape.model_validate_json(raw_payload)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_input=False)
        field_path, expected = _describe_error(errors[0]) if errors else (None, None)
        raise PayloadDecodeError(
            event_type,
            field_path=field_path,
            expected=expected,
            errors=errors,
        ) from e


def dispatch(event: Event) -> ResourceShape:
    """
    Decode an envelope's resource and attach it to the envelope.

    Re-dispatching the same envelope is safe and yields an equal resource.
    On failure the envelope's resource slot is left as it was.

    Args:
        event: Decoded envelope

    Returns:
        The decoded resource (also available as event.resource)

    Raises:
        MissingEventTypeError: If the envelope has no event type
        UnknownEventTypeError: If the event type is not registered
        PayloadDecodeError: If the resource does not match the model
    """
    if not event.event_type:
        raise MissingEventTypeError()

    resource = decode_resource(event.event_type, event.raw_payload)
    event.attach_resource(resource)

    logger.debug(
        f"Dispatched {event.event_type} to {type(resource).__name__}",
        extra={"event_type": event.event_type, "notification_id": event.notification_id},
    )
    return resource


def parse_webhook(payload: bytes) -> Event:
    """
    Decode a notification and, when it names an event type, its resource.

    Args:
        payload: Raw request body

    Returns:
        Envelope, with its resource decoded if an event type was present

    Raises:
        MalformedEnvelopeError: If the envelope cannot be decoded
        UnknownEventTypeError: If the event type is not registered
        PayloadDecodeError: If the resource does not match the model
    """
    event = parse_envelope(payload)
    if event.event_type:
        dispatch(event)
    return event
