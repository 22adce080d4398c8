"""Data models for Azure DevOps webhook payloads."""

from .api_response import WebhookResponse
from .builds import Build, DefinitionReference
from .common import (
    FieldValue,
    IdentityRef,
    IdentityRefWithVote,
    Link,
    Message,
    ResourceContainers,
    ResourceRef,
    WebApiTagDefinition,
    WireModel,
)
from .enums import (
    CommentThreadStatus,
    CommentType,
    GitObjectType,
    GitPullRequestMergeStrategy,
    ProjectState,
    PullRequestAsyncStatus,
    PullRequestMergeFailureType,
    PullRequestStatus,
    VersionControlChangeType,
)
from .events import Event, EventType, ResourceShape
from .git import (
    Comment,
    CommentPosition,
    GitChange,
    GitCommitRef,
    GitItem,
    GitPullRequest,
    GitPullRequestCommentThread,
    GitPullRequestCommentThreadContext,
    GitPullRequestCompletionOptions,
    GitPullRequestMergeOptions,
    GitPush,
    GitRefUpdate,
    GitRepository,
    GitUserDate,
    PullRequestCommentEvent,
    TeamProjectReference,
)
from .work_items import (
    CommentVersionRef,
    WorkItem,
    WorkItemFieldUpdate,
    WorkItemRelation,
    WorkItemRelationUpdates,
    WorkItemUpdate,
)

__all__ = [
    # Envelope models
    "Event",
    "EventType",
    "ResourceShape",
    # Shared models
    "WireModel",
    "FieldValue",
    "IdentityRef",
    "IdentityRefWithVote",
    "Link",
    "Message",
    "ResourceContainers",
    "ResourceRef",
    "WebApiTagDefinition",
    # Enumerations
    "CommentThreadStatus",
    "CommentType",
    "GitObjectType",
    "GitPullRequestMergeStrategy",
    "ProjectState",
    "PullRequestAsyncStatus",
    "PullRequestMergeFailureType",
    "PullRequestStatus",
    "VersionControlChangeType",
    # Build models
    "Build",
    "DefinitionReference",
    # Git models
    "Comment",
    "CommentPosition",
    "GitChange",
    "GitCommitRef",
    "GitItem",
    "GitPullRequest",
    "GitPullRequestCommentThread",
    "GitPullRequestCommentThreadContext",
    "GitPullRequestCompletionOptions",
    "GitPullRequestMergeOptions",
    "GitPush",
    "GitRefUpdate",
    "GitRepository",
    "GitUserDate",
    "PullRequestCommentEvent",
    "TeamProjectReference",
    # Work item models
    "CommentVersionRef",
    "WorkItem",
    "WorkItemFieldUpdate",
    "WorkItemRelation",
    "WorkItemRelationUpdates",
    "WorkItemUpdate",
    # API response models
    "WebhookResponse",
]
