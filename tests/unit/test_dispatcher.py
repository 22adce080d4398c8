"""
Unit tests for payload dispatch.
"""

import json

import pytest

from ado_webhooks.errors import (
    MalformedEnvelopeError,
    MissingEventTypeError,
    PayloadDecodeError,
    UnknownEventTypeError,
)
from ado_webhooks.models import (
    GitPullRequest,
    GitPush,
    PullRequestAsyncStatus,
    PullRequestCommentEvent,
    PullRequestStatus,
    WorkItem,
    WorkItemUpdate,
)
from ado_webhooks.services.dispatcher import decode_resource, dispatch, parse_webhook
from ado_webhooks.services.envelope import parse_envelope
from ado_webhooks.services.registry import RESOURCE_SHAPES

from conftest import (
    PULL_REQUEST_RESOURCE,
    PUSH_RESOURCE,
    WORK_ITEM_RESOURCE,
    WORK_ITEM_UPDATE_RESOURCE,
    make_envelope,
    to_bytes,
)


def envelope_for(event_type, resource):
    """Decode an envelope carrying a resource."""
    return parse_envelope(to_bytes(make_envelope(event_type, resource)))


def test_dispatch_pull_request_created():
    """Test the pull request created scenario."""
    raw = {
        "pullRequestId": 22,
        "status": "active",
        "sourceRefName": "refs/heads/npaulk/my_work",
        "targetRefName": "refs/heads/new_feature",
    }
    event = envelope_for("git.pullrequest.created", raw)

    resource = dispatch(event)

    assert isinstance(resource, GitPullRequest)
    assert resource.pull_request_id == 22
    assert resource.status == PullRequestStatus.ACTIVE
    assert resource.source_ref_name == "refs/heads/npaulk/my_work"
    assert resource.target_ref_name == "refs/heads/new_feature"
    assert resource.source_branch == "npaulk/my_work"
    assert resource.target_branch == "new_feature"
    assert event.resource is resource


def test_dispatch_push():
    """Test the push scenario with one ref update."""
    event = envelope_for("git.push", PUSH_RESOURCE)

    resource = dispatch(event)

    assert isinstance(resource, GitPush)
    assert len(resource.ref_updates) == 1
    update = resource.ref_updates[0]
    assert update.name == "refs/heads/master"
    assert update.old_object_id == "aad331d8d3b131fa9ae03cf5e53965b51942618a"
    assert update.new_object_id == "33b55f7cb7e7e245323987634f960cf4a6e6bc74"
    assert resource.pushed_by.display_name == "Jamal Hartnett"
    assert resource.commits[0].author.email == "fabrikamfiber4@hotmail.com"


def test_dispatch_unknown_event_type():
    """Test that an unregistered tag is reported and leaves the slot empty."""
    event = envelope_for("release.deployment.completed", {"id": 1})

    with pytest.raises(UnknownEventTypeError) as exc_info:
        dispatch(event)

    assert exc_info.value.tag == "release.deployment.completed"
    assert "release.deployment.completed" in str(exc_info.value)
    assert event.resource is None


def test_dispatch_missing_event_type():
    """Test that the envelope decodes but dispatch reports the missing tag."""
    event = parse_envelope(to_bytes(make_envelope(resource=PUSH_RESOURCE)))

    with pytest.raises(MissingEventTypeError):
        dispatch(event)

    assert event.resource is None


@pytest.mark.parametrize("event_type,resource", [
    ("git.pullrequest.merged", PULL_REQUEST_RESOURCE),
    ("git.push", PUSH_RESOURCE),
    ("workitem.created", WORK_ITEM_RESOURCE),
    ("workitem.updated", WORK_ITEM_UPDATE_RESOURCE),
])
def test_dispatch_matches_direct_decode(event_type, resource):
    """Test that dispatch equals decoding the bytes against the shape directly."""
    event = envelope_for(event_type, resource)
    shape = RESOURCE_SHAPES[event_type]

    assert dispatch(event) == shape.model_validate_json(json.dumps(resource))


def test_dispatch_is_idempotent():
    """Test that dispatching twice yields equal resources."""
    event = envelope_for("git.pullrequest.updated", PULL_REQUEST_RESOURCE)

    first = dispatch(event)
    second = dispatch(event)

    assert first == second
    assert event.resource == first


def test_dispatch_type_mismatch():
    """Test that a mistyped resource field names its path."""
    resource = dict(PULL_REQUEST_RESOURCE, pullRequestId="22")
    event = envelope_for("git.pullrequest.created", resource)

    with pytest.raises(PayloadDecodeError) as exc_info:
        dispatch(event)

    error = exc_info.value
    assert error.event_type == "git.pullrequest.created"
    assert error.field_path == "pullRequestId"
    assert error.expected == "integer"
    assert "pullRequestId" in str(error)
    assert event.resource is None


def test_dispatch_nested_type_mismatch():
    """Test that nested paths are reported with list indexes."""
    resource = {"refUpdates": [{"name": 42}]}
    event = envelope_for("git.push", resource)

    with pytest.raises(PayloadDecodeError) as exc_info:
        dispatch(event)

    assert exc_info.value.field_path == "refUpdates.0.name"
    assert exc_info.value.expected == "string"


def test_dispatch_failure_keeps_previous_resource():
    """Test that a failed dispatch does not overwrite the resource slot."""
    event = envelope_for("git.push", PUSH_RESOURCE)
    resource = dispatch(event)
    redelivered = event.model_copy(update={"raw_payload": b'{"pushId": "fourteen"}'})

    with pytest.raises(PayloadDecodeError):
        dispatch(redelivered)

    assert redelivered.resource is resource
    assert event.resource is resource


def test_decode_resource_unknown_event_type():
    """Test decoding bytes for an unregistered tag."""
    with pytest.raises(UnknownEventTypeError):
        decode_resource("build.complete", b"{}")


def test_dispatch_null_resource():
    """Test that an absent resource cannot be decoded."""
    event = envelope_for("git.push", None)

    with pytest.raises(PayloadDecodeError) as exc_info:
        dispatch(event)

    assert exc_info.value.field_path == "resource"


def test_dispatch_resource_not_an_object():
    """Test that a scalar resource is rejected."""
    event = envelope_for("workitem.created", "297")

    with pytest.raises(PayloadDecodeError) as exc_info:
        dispatch(event)

    assert exc_info.value.expected == "object"


def test_dispatch_invalid_enum_value():
    """Test that an unknown status is rejected."""
    event = envelope_for("git.pullrequest.created", {"pullRequestId": 1, "status": "merged"})

    with pytest.raises(PayloadDecodeError) as exc_info:
        dispatch(event)

    assert exc_info.value.field_path == "status"


def test_dispatch_enum_values_ignore_case():
    """Test that enum casing on a pull request notification does not matter."""
    resource = dict(PULL_REQUEST_RESOURCE, status="Active", mergeStatus="SUCCEEDED")

    pull_request = dispatch(envelope_for("git.pullrequest.created", resource))

    assert pull_request.status is PullRequestStatus.ACTIVE
    assert pull_request.merge_status is PullRequestAsyncStatus.SUCCEEDED
    assert pull_request.to_wire()["status"] == "active"
    assert pull_request.to_wire()["mergeStatus"] == "succeeded"
    assert pull_request == dispatch(envelope_for("git.pullrequest.created", PULL_REQUEST_RESOURCE))


def test_dispatch_enum_casing_does_not_widen_values():
    """Test that case folding still rejects names outside the enumeration."""
    resource = dict(PULL_REQUEST_RESOURCE, mergeStatus="Merged")

    with pytest.raises(PayloadDecodeError) as exc_info:
        dispatch(envelope_for("git.pullrequest.created", resource))

    assert exc_info.value.field_path == "mergeStatus"


def test_dispatch_pull_request_details():
    """Test the nested pull request resource."""
    event = envelope_for("git.pullrequest.created", PULL_REQUEST_RESOURCE)

    resource = dispatch(event)

    assert resource.merge_status == PullRequestAsyncStatus.SUCCEEDED
    assert resource.created_by.display_name == "Normal Paulk"
    assert resource.repository.project.name == "Fabrikam"
    assert resource.reviewers[0].vote == 0
    assert resource.reviewers[0].is_container is True
    assert resource.reviewers[0].reviewer_url is None
    assert resource.last_merge_commit.commit_id == "eef717f69257a6333f221566c1c987dc94cc0d72"


def test_dispatch_pull_request_comment():
    """Test the pull request comment event."""
    raw = {
        "comment": {
            "id": 2,
            "parentCommentId": 1,
            "author": {"displayName": "Jamal Hartnett"},
            "content": "This is my comment",
            "commentType": "text",
            "publishedDate": "2016-11-01T16:30:31.6655471Z",
        },
        "pullRequest": {"pullRequestId": 1, "status": "active"},
    }
    event = envelope_for("ms.vss-code.git-pullrequest-comment-event", raw)

    resource = dispatch(event)

    assert isinstance(resource, PullRequestCommentEvent)
    assert resource.comment.content == "This is my comment"
    assert resource.comment.parent_comment_id == 1
    assert resource.pull_request.pull_request_id == 1


def test_dispatch_work_item():
    """Test work item fields keep their JSON types."""
    event = envelope_for("workitem.commented", WORK_ITEM_RESOURCE)

    resource = dispatch(event)

    assert isinstance(resource, WorkItem)
    assert resource.id == 297
    assert resource.field("System.Title") == "Welcome back"
    assert resource.field("Microsoft.VSTS.Scheduling.Effort") == 8
    assert isinstance(resource.field("Microsoft.VSTS.Scheduling.Effort"), int)
    assert resource.field("Microsoft.VSTS.Common.BacklogPriority") == 1000.5
    assert resource.field("WEF_6CB513B6E70E43499D9FC94E5BBFB784_Kanban.Column.Done") is False
    assert resource.field("System.Missing") is None
    assert resource.links["self"].href.endswith("/workItems/297")


def test_dispatch_work_item_update():
    """Test work item update field changes and revision."""
    event = envelope_for("workitem.updated", WORK_ITEM_UPDATE_RESOURCE)

    resource = dispatch(event)

    assert isinstance(resource, WorkItemUpdate)
    assert resource.work_item_id == 5
    assert resource.fields["System.Rev"].old_value == 4
    assert resource.fields["System.Rev"].new_value == 5
    assert resource.fields["System.State"].new_value == "Approved"
    assert resource.revision.field("System.Title") == "Fix null reference"
    assert resource.revised_by.display_name == "Jamal Hartnett"
    assert resource.links["self"].href.endswith("/updates/5")


def test_parse_webhook(pull_request_payload):
    """Test decoding envelope and resource in one call."""
    event = parse_webhook(pull_request_payload)

    assert event.event_type == "git.pullrequest.created"
    assert isinstance(event.resource, GitPullRequest)
    assert event.resource.pull_request_id == 22


def test_parse_webhook_without_event_type():
    """Test that an envelope without a tag is returned undispatched."""
    event = parse_webhook(to_bytes(make_envelope(resource=PUSH_RESOURCE)))

    assert event.event_type is None
    assert event.resource is None


def test_parse_webhook_malformed():
    """Test that a malformed body is reported before dispatch."""
    with pytest.raises(MalformedEnvelopeError):
        parse_webhook(b"<xml/>")
