"""Webhook notification envelope and event types."""

import json
from enum import Enum
from typing import Any, Optional, Union

from pydantic import Field, PrivateAttr, field_validator

from .common import Message, ResourceContainers, WireDateTime, WireModel
from .git import GitPullRequest, GitPush, PullRequestCommentEvent
from .work_items import WorkItem, WorkItemUpdate


class EventType(str, Enum):
    """Event types with a registered resource shape."""

    GIT_PULL_REQUEST_CREATED = "git.pullrequest.created"
    GIT_PULL_REQUEST_MERGED = "git.pullrequest.merged"
    GIT_PULL_REQUEST_UPDATED = "git.pullrequest.updated"
    GIT_PULL_REQUEST_COMMENTED = "ms.vss-code.git-pullrequest-comment-event"
    GIT_PUSH = "git.push"
    WORK_ITEM_COMMENTED = "workitem.commented"
    WORK_ITEM_CREATED = "workitem.created"
    WORK_ITEM_DELETED = "workitem.deleted"
    WORK_ITEM_RESTORED = "workitem.restored"
    WORK_ITEM_UPDATED = "workitem.updated"


ResourceShape = Union[GitPullRequest, GitPush, PullRequestCommentEvent, WorkItem, WorkItemUpdate]


class Event(WireModel):
    """
    Service hook notification envelope.

    The inner "resource" is kept as undecoded JSON bytes until the
    dispatcher decodes it for the event type. The bytes are a compact
    re-serialization of the received value, not the original text:
    whitespace is dropped and numbers are normalized (1.0E2 becomes
    100.0), which decodes to the same resource.

    The decoded resource is written once, by a successful dispatch; the
    envelope is otherwise immutable.
    """

    subscription_id: Optional[str] = None
    notification_id: Optional[int] = None
    id: Optional[str] = None
    event_type: Optional[str] = None
    publisher_id: Optional[str] = None
    message: Optional[Message] = None
    detailed_message: Optional[Message] = None
    raw_payload: Optional[bytes] = Field(default=None, alias="resource")
    resource_version: Optional[str] = None
    resource_containers: Optional[ResourceContainers] = None
    created_date: Optional[WireDateTime] = None

    _resource: Optional[ResourceShape] = PrivateAttr(default=None)

    @field_validator("raw_payload", mode="before")
    @classmethod
    def _normalize_resource(cls, value: Any) -> Any:
        """Re-serialize the parsed resource to compact JSON bytes."""
        if value is None or isinstance(value, bytes):
            return value
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False).encode("utf-8")

    @property
    def resource(self) -> Optional[ResourceShape]:
        """Decoded resource, or None until dispatch succeeds."""
        return self._resource

    @property
    def known_event_type(self) -> Optional[EventType]:
        """Registered event type for this envelope, or None."""
        try:
            return EventType(self.event_type)
        except ValueError:
            return None

    def attach_resource(self, resource: ResourceShape) -> None:
        """Store the decoded resource. Called by the dispatcher only."""
        self._resource = resource
