"""
Azure DevOps enumerations with a canonical wire decode table.

The service emits these as camelCase strings, but older API versions and
some endpoints send the numeric value instead. Each enum field decodes
either form (and case-insensitive spellings) to one member and always
serializes back to the canonical string.
"""

from enum import Enum
from functools import partial
from typing import Annotated, Any, Dict, Type

from pydantic import BeforeValidator


class PullRequestStatus(str, Enum):
    """Status of a pull request."""

    NOT_SET = "notSet"
    ACTIVE = "active"
    ABANDONED = "abandoned"
    COMPLETED = "completed"
    ALL = "all"


class PullRequestAsyncStatus(str, Enum):
    """Status of the merge attempt of a pull request."""

    NOT_SET = "notSet"
    QUEUED = "queued"
    CONFLICTS = "conflicts"
    SUCCEEDED = "succeeded"
    REJECTED_BY_POLICY = "rejectedByPolicy"
    FAILURE = "failure"


class PullRequestMergeFailureType(str, Enum):
    """Specific reason a pull request merge failed."""

    NONE = "none"
    UNKNOWN = "unknown"
    CASE_SENSITIVE = "caseSensitive"
    OBJECT_TOO_LARGE = "objectTooLarge"


class CommentThreadStatus(str, Enum):
    """Status of a pull request comment thread."""

    UNKNOWN = "unknown"
    ACTIVE = "active"
    FIXED = "fixed"
    WONT_FIX = "wontFix"
    CLOSED = "closed"
    BY_DESIGN = "byDesign"
    PENDING = "pending"


class CommentType(str, Enum):
    """Kind of comment left on a pull request."""

    UNKNOWN = "unknown"
    TEXT = "text"
    CODE_CHANGE = "codeChange"
    SYSTEM = "system"


class GitObjectType(str, Enum):
    """Type of a git object."""

    BAD = "bad"
    COMMIT = "commit"
    TREE = "tree"
    BLOB = "blob"
    TAG = "tag"
    EXT2 = "ext2"
    OFS_DELTA = "ofsDelta"
    REF_DELTA = "refDelta"


class VersionControlChangeType(str, Enum):
    """Type of change made to an item in a commit."""

    NONE = "none"
    ADD = "add"
    EDIT = "edit"
    ENCODING = "encoding"
    RENAME = "rename"
    DELETE = "delete"
    UNDELETE = "undelete"
    BRANCH = "branch"
    MERGE = "merge"
    LOCK = "lock"
    ROLLBACK = "rollback"
    SOURCE_RENAME = "sourceRename"
    TARGET_RENAME = "targetRename"
    PROPERTY = "property"
    ALL = "all"


class GitPullRequestMergeStrategy(str, Enum):
    """Strategy used to complete a pull request."""

    NO_FAST_FORWARD = "noFastForward"
    SQUASH = "squash"
    REBASE = "rebase"
    REBASE_MERGE = "rebaseMerge"


class ProjectState(str, Enum):
    """Lifecycle state of a team project."""

    NEW = "new"
    WELL_FORMED = "wellFormed"
    DELETING = "deleting"
    CREATE_PENDING = "createPending"
    DELETED = "deleted"
    ALL = "all"
    UNCHANGED = "unchanged"


# Numeric wire values that do not follow member order.
_ORDINALS: Dict[Type[Enum], Dict[int, Enum]] = {
    VersionControlChangeType: {
        0: VersionControlChangeType.NONE,
        1: VersionControlChangeType.ADD,
        2: VersionControlChangeType.EDIT,
        4: VersionControlChangeType.ENCODING,
        8: VersionControlChangeType.RENAME,
        16: VersionControlChangeType.DELETE,
        32: VersionControlChangeType.UNDELETE,
        64: VersionControlChangeType.BRANCH,
        128: VersionControlChangeType.MERGE,
        256: VersionControlChangeType.LOCK,
        512: VersionControlChangeType.ROLLBACK,
        1024: VersionControlChangeType.SOURCE_RENAME,
        2048: VersionControlChangeType.TARGET_RENAME,
        4096: VersionControlChangeType.PROPERTY,
        8191: VersionControlChangeType.ALL,
    },
    GitPullRequestMergeStrategy: {
        1: GitPullRequestMergeStrategy.NO_FAST_FORWARD,
        2: GitPullRequestMergeStrategy.SQUASH,
        3: GitPullRequestMergeStrategy.REBASE,
        4: GitPullRequestMergeStrategy.REBASE_MERGE,
    },
    ProjectState: {
        0: ProjectState.NEW,
        1: ProjectState.WELL_FORMED,
        2: ProjectState.DELETING,
        3: ProjectState.CREATE_PENDING,
        4: ProjectState.DELETED,
        -1: ProjectState.ALL,
        -2: ProjectState.UNCHANGED,
    },
}


def decode_wire_enum(enum_cls: Type[Enum], value: Any) -> Any:
    """
    Map a wire value onto a member of enum_cls.

    Accepts a member, the canonical string, any casing of it, or the
    service's numeric value. Anything else is returned unchanged so that
    model validation reports it against the field.

    Args:
        enum_cls: Target enumeration
        value: Raw value from the payload

    Returns:
        Enum member, or the original value when no member matches
    """
    if isinstance(value, enum_cls):
        return value

    if isinstance(value, str):
        folded = value.strip().lower()
        for member in enum_cls:
            if member.value.lower() == folded:
                return member
        return value

    if isinstance(value, int) and not isinstance(value, bool):
        ordinals = _ORDINALS.get(enum_cls) or dict(enumerate(enum_cls))
        return ordinals.get(value, value)

    return value


def _wire(enum_cls: Type[Enum]) -> Any:
    return Annotated[enum_cls, BeforeValidator(partial(decode_wire_enum, enum_cls))]


PullRequestStatusField = _wire(PullRequestStatus)
PullRequestAsyncStatusField = _wire(PullRequestAsyncStatus)
PullRequestMergeFailureTypeField = _wire(PullRequestMergeFailureType)
CommentThreadStatusField = _wire(CommentThreadStatus)
CommentTypeField = _wire(CommentType)
GitObjectTypeField = _wire(GitObjectType)
VersionControlChangeTypeField = _wire(VersionControlChangeType)
GitPullRequestMergeStrategyField = _wire(GitPullRequestMergeStrategy)
ProjectStateField = _wire(ProjectState)
