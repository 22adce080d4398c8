"""Work item models."""

from typing import Dict, List, Optional

from pydantic import Field

from .common import FieldValue, IdentityRef, ReferenceLinks, WireDateTime, WireModel


class CommentVersionRef(WireModel):
    """Reference to a specific version of a work item comment."""

    comment_id: Optional[int] = None
    version: Optional[int] = None
    url: Optional[str] = None


class WorkItemRelation(WireModel):
    """Link from a work item to another work item or artifact."""

    rel: Optional[str] = None
    url: Optional[str] = None
    attributes: Optional[Dict[str, FieldValue]] = None


class WorkItem(WireModel):
    """Resource of the workitem.commented, created, deleted and restored events."""

    id: Optional[int] = None
    rev: Optional[int] = None
    fields: Optional[Dict[str, FieldValue]] = None
    relations: Optional[List[WorkItemRelation]] = None
    comment_version_ref: Optional[CommentVersionRef] = None
    url: Optional[str] = None
    links: Optional[ReferenceLinks] = Field(default=None, alias="_links")

    def field(self, name: str) -> FieldValue:
        """Return a field value by reference name, or None if absent."""
        return (self.fields or {}).get(name)


class WorkItemFieldUpdate(WireModel):
    """Old and new value of a changed field."""

    old_value: FieldValue = None
    new_value: FieldValue = None


class WorkItemRelationUpdates(WireModel):
    """Relations added, removed or updated by a revision."""

    added: Optional[List[WorkItemRelation]] = None
    removed: Optional[List[WorkItemRelation]] = None
    updated: Optional[List[WorkItemRelation]] = None


class WorkItemUpdate(WireModel):
    """Resource of the workitem.updated event."""

    id: Optional[int] = None
    work_item_id: Optional[int] = None
    rev: Optional[int] = None
    revised_by: Optional[IdentityRef] = None
    revised_date: Optional[WireDateTime] = None
    fields: Optional[Dict[str, WorkItemFieldUpdate]] = None
    relations: Optional[WorkItemRelationUpdates] = None
    revision: Optional[WorkItem] = None
    url: Optional[str] = None
    links: Optional[ReferenceLinks] = Field(default=None, alias="_links")
