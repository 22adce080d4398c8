"""
Envelope decoding for service hook notifications.
"""

from pydantic import ValidationError

from ado_webhooks.errors import MalformedEnvelopeError
from ado_webhooks.models.events import Event
from ado_webhooks.utils.logging import get_logger

logger = get_logger(__name__)


def parse_envelope(payload: bytes) -> Event:
    """
    Decode the outer notification envelope.

    The inner resource is kept as compact, undecoded JSON bytes and the
    event type is not interpreted. Unknown top-level fields are ignored.

    Args:
        payload: Raw request body

    Returns:
        Decoded envelope with an empty resource slot

    Raises:
        MalformedEnvelopeError: If the body is not a JSON object or an
            envelope field has the wrong type
    """
    try:
        event = Event.model_validate_json(payload)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_input=False)
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        reason = first.get("msg", str(e))
        message = f"Malformed webhook envelope at '{location}': {reason}" if location else f"Malformed webhook envelope: {reason}"
        raise MalformedEnvelopeError(message, errors=errors) from e
    except ValueError as e:
        raise MalformedEnvelopeError(f"Malformed webhook envelope: {e}") from e

    logger.debug(
        "Decoded webhook envelope",
        extra={"event_type": event.event_type, "notification_id": event.notification_id},
    )
    return event
