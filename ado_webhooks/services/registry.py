"""
Resource shape registry.

Closed table from event type to the model its "resource" decodes into.
Tags outside the table are unknown; there is no fallback shape.
"""

from types import MappingProxyType
from typing import Mapping, Optional, Type

from ado_webhooks.models.common import WireModel
from ado_webhooks.models.events import EventType
from ado_webhooks.models.git import GitPullRequest, GitPush, PullRequestCommentEvent
from ado_webhooks.models.work_items import WorkItem, WorkItemUpdate


RESOURCE_SHAPES: Mapping[EventType, Type[WireModel]] = MappingProxyType({
    EventType.GIT_PULL_REQUEST_CREATED: GitPullRequest,
    EventType.GIT_PULL_REQUEST_MERGED: GitPullRequest,
    EventType.GIT_PULL_REQUEST_UPDATED: GitPullRequest,
    EventType.GIT_PULL_REQUEST_COMMENTED: PullRequestCommentEvent,
    EventType.GIT_PUSH: GitPush,
    EventType.WORK_ITEM_COMMENTED: WorkItem,
    EventType.WORK_ITEM_CREATED: WorkItem,
    EventType.WORK_ITEM_DELETED: WorkItem,
    EventType.WORK_ITEM_RESTORED: WorkItem,
    EventType.WORK_ITEM_UPDATED: WorkItemUpdate,
})


def lookup_shape(event_type: Optional[str]) -> Optional[Type[WireModel]]:
    """
    Return the resource model registered for an event type.

    Args:
        event_type: Event type tag from the envelope

    Returns:
        Model class, or None if the tag is not registered
    """
    try:
        return RESOURCE_SHAPES.get(EventType(event_type))
    except ValueError:
        return None


def supported_event_types() -> list[str]:
    """Registered event type tags, in registry order."""
    return [event_type.value for event_type in RESOURCE_SHAPES]
