"""Build models."""

from typing import Optional

from pydantic import Field

from .common import IdentityRef, ReferenceLinks, WireDateTime, WireModel


class DefinitionReference(WireModel):
    """Reference to a build definition."""

    id: Optional[int] = None
    name: Optional[str] = None
    path: Optional[str] = None
    url: Optional[str] = None


class Build(WireModel):
    """A queued or finished build."""

    id: Optional[int] = None
    build_number: Optional[str] = None
    status: Optional[str] = None
    result: Optional[str] = None
    definition: Optional[DefinitionReference] = None
    source_branch: Optional[str] = None
    source_version: Optional[str] = None
    queue_time: Optional[WireDateTime] = None
    start_time: Optional[WireDateTime] = None
    finish_time: Optional[WireDateTime] = None
    requested_for: Optional[IdentityRef] = None
    url: Optional[str] = None
    links: Optional[ReferenceLinks] = Field(default=None, alias="_links")
