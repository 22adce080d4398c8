"""Git repository, push and pull request models."""

from typing import Dict, List, Optional

from pydantic import Field

from .common import (
    IdentityRef,
    IdentityRefWithVote,
    ReferenceLinks,
    ResourceRef,
    WebApiTagDefinition,
    WireDateTime,
    WireModel,
)
from .enums import (
    CommentThreadStatusField,
    CommentTypeField,
    GitObjectTypeField,
    GitPullRequestMergeStrategyField,
    ProjectStateField,
    PullRequestAsyncStatusField,
    PullRequestMergeFailureTypeField,
    PullRequestStatusField,
    VersionControlChangeTypeField,
)


class TeamProjectReference(WireModel):
    """Shallow reference to a team project."""

    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    state: Optional[ProjectStateField] = None
    revision: Optional[int] = None
    visibility: Optional[str] = None
    last_update_time: Optional[WireDateTime] = None


class GitRepository(WireModel):
    """Git repository."""

    id: Optional[str] = None
    name: Optional[str] = None
    url: Optional[str] = None
    project: Optional[TeamProjectReference] = None
    default_branch: Optional[str] = None
    remote_url: Optional[str] = None
    ssh_url: Optional[str] = None
    web_url: Optional[str] = None
    size: Optional[int] = None
    is_fork: Optional[bool] = None
    is_disabled: Optional[bool] = None
    links: Optional[ReferenceLinks] = Field(default=None, alias="_links")


class GitUserDate(WireModel):
    """Author or committer of a commit and when they acted."""

    name: Optional[str] = None
    email: Optional[str] = None
    date: Optional[WireDateTime] = None


class GitItem(WireModel):
    """Item (file or folder) at a version of a repository."""

    object_id: Optional[str] = None
    original_object_id: Optional[str] = None
    git_object_type: Optional[GitObjectTypeField] = None
    commit_id: Optional[str] = None
    path: Optional[str] = None
    is_folder: Optional[bool] = None
    url: Optional[str] = None


class GitChange(WireModel):
    """Change made to an item by a commit."""

    change_type: Optional[VersionControlChangeTypeField] = None
    item: Optional[GitItem] = None
    original_path: Optional[str] = None
    source_server_item: Optional[str] = None
    url: Optional[str] = None


class GitCommitRef(WireModel):
    """Reference to a commit."""

    commit_id: Optional[str] = None
    author: Optional[GitUserDate] = None
    committer: Optional[GitUserDate] = None
    comment: Optional[str] = None
    comment_truncated: Optional[bool] = None
    parents: Optional[List[str]] = None
    change_counts: Optional[Dict[str, int]] = None
    changes: Optional[List[GitChange]] = None
    url: Optional[str] = None
    remote_url: Optional[str] = None


class GitRefUpdate(WireModel):
    """Change of a ref from one object id to another."""

    name: Optional[str] = None
    old_object_id: Optional[str] = None
    new_object_id: Optional[str] = None
    is_locked: Optional[bool] = None
    repository_id: Optional[str] = None


class GitPush(WireModel):
    """Resource of a git.push event."""

    push_id: Optional[int] = None
    date: Optional[WireDateTime] = None
    pushed_by: Optional[IdentityRef] = None
    ref_updates: Optional[List[GitRefUpdate]] = None
    commits: Optional[List[GitCommitRef]] = None
    repository: Optional[GitRepository] = None
    url: Optional[str] = None
    links: Optional[ReferenceLinks] = Field(default=None, alias="_links")


class GitPullRequestCompletionOptions(WireModel):
    """Options applied when a pull request is completed."""

    auto_complete_ignore_config_ids: Optional[List[int]] = None
    bypass_policy: Optional[bool] = None
    bypass_reason: Optional[str] = None
    delete_source_branch: Optional[bool] = None
    merge_commit_message: Optional[str] = None
    merge_strategy: Optional[GitPullRequestMergeStrategyField] = None
    squash_merge: Optional[bool] = None
    transition_work_items: Optional[bool] = None
    triggered_by_auto_complete: Optional[bool] = None


class GitPullRequestMergeOptions(WireModel):
    """Options used when the pull request merge is created."""

    conflict_authorship_commits: Optional[bool] = None
    detect_rename_false_positives: Optional[bool] = None
    disable_renames: Optional[bool] = None


class GitPullRequest(WireModel):
    """Resource of the git.pullrequest.* events."""

    pull_request_id: Optional[int] = None
    code_review_id: Optional[int] = None
    repository: Optional[GitRepository] = None
    status: Optional[PullRequestStatusField] = None
    created_by: Optional[IdentityRef] = None
    creation_date: Optional[WireDateTime] = None
    closed_by: Optional[IdentityRef] = None
    closed_date: Optional[WireDateTime] = None
    title: Optional[str] = None
    description: Optional[str] = None
    source_ref_name: Optional[str] = None
    target_ref_name: Optional[str] = None
    is_draft: Optional[bool] = None
    merge_status: Optional[PullRequestAsyncStatusField] = None
    merge_failure_type: Optional[PullRequestMergeFailureTypeField] = None
    merge_failure_message: Optional[str] = None
    merge_id: Optional[str] = None
    last_merge_commit: Optional[GitCommitRef] = None
    last_merge_source_commit: Optional[GitCommitRef] = None
    last_merge_target_commit: Optional[GitCommitRef] = None
    reviewers: Optional[List[IdentityRefWithVote]] = None
    labels: Optional[List[WebApiTagDefinition]] = None
    commits: Optional[List[GitCommitRef]] = None
    auto_complete_set_by: Optional[IdentityRef] = None
    completion_options: Optional[GitPullRequestCompletionOptions] = None
    completion_queue_time: Optional[WireDateTime] = None
    merge_options: Optional[GitPullRequestMergeOptions] = None
    work_item_refs: Optional[List[ResourceRef]] = None
    supports_iterations: Optional[bool] = None
    artifact_id: Optional[str] = None
    url: Optional[str] = None
    links: Optional[ReferenceLinks] = Field(default=None, alias="_links")

    @property
    def source_branch(self) -> Optional[str]:
        """Source ref name without the refs/heads/ prefix."""
        return _short_ref(self.source_ref_name)

    @property
    def target_branch(self) -> Optional[str]:
        """Target ref name without the refs/heads/ prefix."""
        return _short_ref(self.target_ref_name)


class CommentPosition(WireModel):
    """Line and offset of a comment in a file."""

    line: Optional[int] = None
    offset: Optional[int] = None


class Comment(WireModel):
    """A comment in a pull request thread."""

    id: Optional[int] = None
    parent_comment_id: Optional[int] = None
    author: Optional[IdentityRef] = None
    content: Optional[str] = None
    comment_type: Optional[CommentTypeField] = None
    is_deleted: Optional[bool] = None
    published_date: Optional[WireDateTime] = None
    last_updated_date: Optional[WireDateTime] = None
    last_content_updated_date: Optional[WireDateTime] = None
    users_liked: Optional[List[IdentityRef]] = None
    links: Optional[ReferenceLinks] = Field(default=None, alias="_links")


class GitPullRequestCommentThreadContext(WireModel):
    """File location a comment thread was left on."""

    file_path: Optional[str] = None
    left_file_start: Optional[CommentPosition] = None
    left_file_end: Optional[CommentPosition] = None
    right_file_start: Optional[CommentPosition] = None
    right_file_end: Optional[CommentPosition] = None


class GitPullRequestCommentThread(WireModel):
    """A comment thread: an initial comment and its replies."""

    id: Optional[int] = None
    status: Optional[CommentThreadStatusField] = None
    comments: Optional[List[Comment]] = None
    identities: Optional[Dict[str, IdentityRef]] = None
    is_deleted: Optional[bool] = None
    published_date: Optional[WireDateTime] = None
    last_updated_date: Optional[WireDateTime] = None
    thread_context: Optional[GitPullRequestCommentThreadContext] = None
    links: Optional[ReferenceLinks] = Field(default=None, alias="_links")


class PullRequestCommentEvent(WireModel):
    """Resource of the ms.vss-code.git-pullrequest-comment-event event."""

    comment: Optional[Comment] = None
    pull_request: Optional[GitPullRequest] = None


def _short_ref(ref_name: Optional[str]) -> Optional[str]:
    if ref_name is None:
        return None
    return ref_name[len("refs/heads/"):] if ref_name.startswith("refs/heads/") else ref_name
