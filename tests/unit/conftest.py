"""
Shared fixtures: sample service hook notifications.
"""

import base64
import json

import pytest


PULL_REQUEST_RESOURCE = {
    "repository": {
        "id": "4bc14d40-c903-45e2-872e-0462c7748079",
        "name": "Fabrikam",
        "url": "https://fabrikam.visualstudio.com/DefaultCollection/_apis/repos/git/repositories/4bc14d40-c903-45e2-872e-0462c7748079",
        "project": {
            "id": "6ce954b1-ce1f-45d1-b94d-e6bf2464ba2c",
            "name": "Fabrikam",
            "url": "https://fabrikam.visualstudio.com/DefaultCollection/_apis/projects/6ce954b1-ce1f-45d1-b94d-e6bf2464ba2c",
            "state": "wellFormed",
        },
        "defaultBranch": "refs/heads/master",
        "remoteUrl": "https://fabrikam.visualstudio.com/DefaultCollection/_git/Fabrikam",
    },
    "pullRequestId": 22,
    "status": "active",
    "createdBy": {
        "id": "54d125f7-69f7-4191-904f-c5b96b6261c8",
        "displayName": "Normal Paulk",
        "uniqueName": "fabrikamfiber16@hotmail.com",
    },
    "creationDate": "2014-06-17T16:55:46.589889Z",
    "title": "my first pull request",
    "description": " - test2\r\n",
    "sourceRefName": "refs/heads/npaulk/my_work",
    "targetRefName": "refs/heads/new_feature",
    "mergeStatus": "succeeded",
    "mergeId": "a10bb228-6ba6-4362-abd7-49ea21333dbd",
    "lastMergeSourceCommit": {
        "commitId": "53d54ac915144006c2c9e90d2c7d3880920db49c",
    },
    "lastMergeTargetCommit": {
        "commitId": "a511f535b1ea495ee0c903badb68fbc83772c882",
    },
    "lastMergeCommit": {
        "commitId": "eef717f69257a6333f221566c1c987dc94cc0d72",
    },
    "reviewers": [
        {
            "reviewerUrl": None,
            "vote": 0,
            "id": "2ea2d095-48f9-4cd6-9966-62f6f574096c",
            "displayName": "[Mobile]\\Mobile Team",
            "isContainer": True,
        }
    ],
    "url": "https://fabrikam.visualstudio.com/DefaultCollection/_apis/repos/git/repositories/4bc14d40-c903-45e2-872e-0462c7748079/pullRequests/22",
}

PUSH_RESOURCE = {
    "commits": [
        {
            "commitId": "33b55f7cb7e7e245323987634f960cf4a6e6bc74",
            "author": {
                "name": "Jamal Hartnett",
                "email": "fabrikamfiber4@hotmail.com",
                "date": "2015-02-25T19:01:00Z",
            },
            "comment": "Fixed bug in web.config file",
        }
    ],
    "refUpdates": [
        {
            "name": "refs/heads/master",
            "oldObjectId": "aad331d8d3b131fa9ae03cf5e53965b51942618a",
            "newObjectId": "33b55f7cb7e7e245323987634f960cf4a6e6bc74",
        }
    ],
    "repository": {
        "id": "278d5cd2-584d-4b63-824a-2ba458937249",
        "name": "Fabrikam-Fiber-Git",
    },
    "pushedBy": {
        "id": "00067FFED5C7AF52@Live.com",
        "displayName": "Jamal Hartnett",
        "uniqueName": "Windows Live ID\\fabrikamfiber4@hotmail.com",
    },
    "pushId": 14,
    "date": "2014-05-02T19:17:13.3309587Z",
}

WORK_ITEM_RESOURCE = {
    "id": 297,
    "rev": 4,
    "fields": {
        "System.AreaPath": "FabrikamCloud",
        "System.WorkItemType": "Product Backlog Item",
        "System.State": "New",
        "System.Title": "Welcome back",
        "Microsoft.VSTS.Common.BacklogPriority": 1000.5,
        "Microsoft.VSTS.Scheduling.Effort": 8,
        "System.History": "This is a test comment",
        "WEF_6CB513B6E70E43499D9FC94E5BBFB784_Kanban.Column.Done": False,
    },
    "_links": {
        "self": {"href": "https://fabrikam.visualstudio.com/DefaultCollection/_apis/wit/workItems/297"},
    },
    "url": "https://fabrikam.visualstudio.com/DefaultCollection/_apis/wit/workItems/297",
}

WORK_ITEM_UPDATE_RESOURCE = {
    "id": 5,
    "workItemId": 5,
    "rev": 5,
    "revisedBy": {"id": "1", "displayName": "Jamal Hartnett"},
    "revisedDate": "9999-01-01T00:00:00Z",
    "fields": {
        "System.Rev": {"oldValue": 4, "newValue": 5},
        "System.State": {"oldValue": "New", "newValue": "Approved"},
        "Microsoft.VSTS.Common.StateChangeDate": {
            "oldValue": "2014-07-15T16:48:44.663Z",
            "newValue": "2014-07-15T17:42:44.663Z",
        },
    },
    "revision": {
        "id": 5,
        "rev": 5,
        "fields": {"System.State": "Approved", "System.Title": "Fix null reference"},
    },
    "_links": {
        "self": {"href": "https://fabrikam.visualstudio.com/DefaultCollection/_apis/wit/workItems/5/updates/5"},
    },
}


def make_envelope(event_type=None, resource=None, **overrides):
    """Build a notification envelope dict around a resource."""
    envelope = {
        "subscriptionId": "00000000-0000-0000-0000-000000000000",
        "notificationId": 1,
        "id": "2ab4e3d3-b7a6-425e-92b1-5a9982c1269e",
        "publisherId": "tfs",
        "message": {
            "text": "Jamal Hartnett created a new pull request",
            "html": "Jamal Hartnett created a new pull request",
            "markdown": "Jamal Hartnett created a new pull request",
        },
        "resource": resource,
        "resourceVersion": "1.0",
        "resourceContainers": {
            "collection": {"id": "c12d0eb8-e382-443b-9f9c-c52cba5014c2"},
            "account": {"id": "f844ec47-a9db-4511-8281-8b63f4eaf94e"},
            "project": {"id": "be9b3917-87e6-42a4-a549-2bc06a7a878f"},
        },
        "createdDate": "2016-09-19T13:03:27.2879096Z",
    }
    if event_type is not None:
        envelope["eventType"] = event_type
    envelope.update(overrides)
    return envelope


def to_bytes(envelope) -> bytes:
    """Serialize an envelope the way the service sends it."""
    return json.dumps(envelope).encode("utf-8")


def basic_auth(username: str, password: str) -> str:
    """Build a Basic Authorization header value."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


@pytest.fixture
def pull_request_payload():
    """Envelope bytes for a git.pullrequest.created notification."""
    return to_bytes(make_envelope("git.pullrequest.created", PULL_REQUEST_RESOURCE))


@pytest.fixture
def push_payload():
    """Envelope bytes for a git.push notification."""
    return to_bytes(make_envelope("git.push", PUSH_RESOURCE))


@pytest.fixture
def work_item_payload():
    """Envelope bytes for a workitem.commented notification."""
    return to_bytes(make_envelope("workitem.commented", WORK_ITEM_RESOURCE))


@pytest.fixture
def work_item_update_payload():
    """Envelope bytes for a workitem.updated notification."""
    return to_bytes(make_envelope("workitem.updated", WORK_ITEM_UPDATE_RESOURCE))
