"""Shared Azure DevOps wire models."""

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, JsonValue
from pydantic.alias_generators import to_camel


def parse_wire_datetime(value: Any) -> Any:
    """
    Parse an Azure DevOps timestamp into an aware UTC-based datetime.

    The service sends up to seven fractional digits
    ("2016-11-01T16:30:31.6655471Z"); digits beyond microseconds are
    truncated. Values without an offset are taken as UTC. Unparseable
    values are returned unchanged for validation to reject.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


WireDateTime = Annotated[datetime, BeforeValidator(parse_wire_datetime)]

# Work item field values are open-ended: strings, numbers, flags, identity
# objects or lists of any of these, nested to any depth.
FieldValue = JsonValue


class WireModel(BaseModel):
    """
    Base for models decoded from Azure DevOps JSON.

    Fields are snake_case in Python and camelCase on the wire. Decoding is
    strict: unknown fields are ignored, but a value of the wrong JSON type
    is rejected instead of coerced.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        strict=True,
        frozen=True,
    )

    def to_wire(self) -> Dict[str, Any]:
        """Serialize to the wire format, omitting unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Link(WireModel):
    """A single entry of a REST reference link collection."""

    href: Optional[str] = None


ReferenceLinks = Dict[str, Link]


class IdentityRef(WireModel):
    """Reference to a user, group or service principal."""

    id: Optional[str] = None
    display_name: Optional[str] = None
    unique_name: Optional[str] = None
    url: Optional[str] = None
    image_url: Optional[str] = None
    descriptor: Optional[str] = None
    directory_alias: Optional[str] = None
    is_container: Optional[bool] = None
    inactive: Optional[bool] = None
    links: Optional[ReferenceLinks] = Field(default=None, alias="_links")


class IdentityRefWithVote(IdentityRef):
    """Pull request reviewer and their vote (-10 rejected to 10 approved)."""

    vote: Optional[int] = None
    reviewer_url: Optional[str] = None
    is_required: Optional[bool] = None
    is_flagged: Optional[bool] = None
    has_declined: Optional[bool] = None
    voted_for: Optional[List[IdentityRef]] = None


class ResourceRef(WireModel):
    """Identifies a resource container (collection, account or project)."""

    id: Optional[str] = None
    base_url: Optional[str] = None
    url: Optional[str] = None


class ResourceContainers(WireModel):
    """Containers the webhook resource belongs to."""

    collection: Optional[ResourceRef] = None
    account: Optional[ResourceRef] = None
    project: Optional[ResourceRef] = None
    server: Optional[ResourceRef] = None


class Message(WireModel):
    """Notification message in plain text, HTML and markdown."""

    text: Optional[str] = None
    html: Optional[str] = None
    markdown: Optional[str] = None


class WebApiTagDefinition(WireModel):
    """Tag (label) definition."""

    active: Optional[bool] = None
    id: Optional[str] = None
    name: Optional[str] = None
    url: Optional[str] = None
