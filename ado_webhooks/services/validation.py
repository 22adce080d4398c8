"""
Service hook request authentication.

Azure DevOps web hook subscriptions authenticate with HTTP basic auth:
the username and password typed into the subscription are sent in the
Authorization header of every delivery. There is no body signature.
"""

import base64
import binascii
import hmac
from typing import Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, SecretStr

from ado_webhooks.errors import AuthenticationError

ACTIVITY_ID_HEADER = "X-VSS-ActivityId"
SUBSCRIPTION_ID_HEADER = "X-VSS-SubscriptionId"
REQUEST_ID_HEADER = "Request-Id"


class WebhookCredentials(BaseModel):
    """Expected basic-auth credentials for service hook deliveries."""

    model_config = ConfigDict(frozen=True)

    username: str = ""
    password: SecretStr


def parse_basic_auth(authorization: Optional[str]) -> Tuple[str, str]:
    """
    Extract username and password from a Basic Authorization header.

    Args:
        authorization: Value of the Authorization header

    Returns:
        Tuple of (username, password)

    Raises:
        AuthenticationError: If the header is missing or not valid basic auth
    """
    if not authorization:
        raise AuthenticationError("Missing Authorization header")

    try:
        scheme, encoded = authorization.strip().split(" ", 1)
    except ValueError:
        raise AuthenticationError("Malformed Authorization header") from None

    if scheme.lower() != "basic":
        raise AuthenticationError(f"Unsupported authorization scheme: {scheme}")

    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise AuthenticationError("Malformed basic credentials") from None

    username, separator, password = decoded.partition(":")
    if not separator:
        raise AuthenticationError("Malformed basic credentials")

    return username, password


def validate_payload(
    payload: bytes,
    authorization: Optional[str],
    expected: WebhookCredentials,
) -> bytes:
    """
    Authenticate a service hook delivery.

    Both username and password are compared in constant time, and both
    comparisons always run.

    Args:
        payload: Raw request body
        authorization: Value of the Authorization header
        expected: Credentials configured on the subscription

    Returns:
        The payload, unchanged

    Raises:
        AuthenticationError: If the credentials are missing, malformed or wrong
    """
    username, password = parse_basic_auth(authorization)

    username_ok = hmac.compare_digest(
        username.encode("utf-8"), expected.username.encode("utf-8")
    )
    password_ok = hmac.compare_digest(
        password.encode("utf-8"), expected.password.get_secret_value().encode("utf-8")
    )

    if not (username_ok and password_ok):
        raise AuthenticationError("Invalid webhook credentials")

    return payload


def _header(headers: Mapping[str, str], name: str) -> str:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return ""


def get_activity_id(headers: Mapping[str, str]) -> str:
    """
    Return the X-VSS-ActivityId header, or "" when absent.

    Identifies the delivery attempt; a different id is present in the body.
    """
    return _header(headers, ACTIVITY_ID_HEADER)


def get_subscription_id(headers: Mapping[str, str]) -> str:
    """Return the X-VSS-SubscriptionId header, or "" when absent."""
    return _header(headers, SUBSCRIPTION_ID_HEADER)


def get_request_id(headers: Mapping[str, str]) -> str:
    """Return the Request-Id header, or "" when absent."""
    return _header(headers, REQUEST_ID_HEADER)
