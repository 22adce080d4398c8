"""API response data models."""

from typing import Optional

from pydantic import BaseModel


class WebhookResponse(BaseModel):
    """Response from webhook handler."""

    status: str
    message: str
    event_type: Optional[str] = None
    notification_id: Optional[int] = None
