"""
Azure DevOps REST collaborator.

Thin wrapper over the Azure DevOps Python SDK. Results are serialized back
to their wire JSON and decoded into the same models the webhook
dispatcher produces, so a pull request fetched over REST and one received
in a notification compare equal. No retries: failures surface as
DevOpsClientError.
"""

import json
from typing import Any, List, Optional, Type, TypeVar

from azure.devops.connection import Connection
from azure.devops.v7_1.build.models import Build as SdkBuild
from azure.devops.v7_1.build.models import DefinitionReference as SdkDefinitionReference
from msrest.authentication import BasicAuthentication
from msrest.exceptions import ClientException
from pydantic import ValidationError

from ado_webhooks.errors import DevOpsClientError
from ado_webhooks.models.builds import Build
from ado_webhooks.models.common import WireModel
from ado_webhooks.models.git import GitPullRequest, GitPullRequestCommentThread
from ado_webhooks.models.work_items import WorkItem
from ado_webhooks.utils.logging import get_logger
from ado_webhooks.utils.metrics import DeliveryMetrics, track_api_call

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=WireModel)


def format_ref(branch: str) -> str:
    """
    Qualify a branch name as a ref.

    Examples:
        "main" -> "refs/heads/main"
        "refs/heads/main" -> "refs/heads/main"
    """
    if branch.startswith("refs/"):
        return branch
    return f"refs/heads/{branch}"


class DevOpsClient:
    """
    Reads pull requests, their comment threads and work items, and queues
    builds.

    Uses the Azure DevOps Python SDK with personal access token basic
    authentication (empty username).
    """

    def __init__(
        self,
        organization_url: str,
        personal_access_token: str,
        project: Optional[str] = None,
        connection: Optional[Connection] = None,
    ):
        """
        Initialize the client with an Azure DevOps connection.

        Args:
            organization_url: Azure DevOps organization URL
            personal_access_token: PAT for authentication
            project: Default project for project-scoped calls
            connection: Pre-built SDK connection (tests inject a mock)
        """
        self.organization_url = organization_url
        self.project = project

        if connection is None:
            credentials = BasicAuthentication('', personal_access_token)
            connection = Connection(base_url=organization_url, creds=credentials)
        self.connection = connection

        logger.info(f"DevOpsClient initialized for organization: {organization_url}")

    def get_pull_request(
        self,
        repository_id: str,
        pull_request_id: int,
        project: Optional[str] = None,
        metrics: Optional[DeliveryMetrics] = None,
    ) -> GitPullRequest:
        """
        Retrieve a pull request.

        Args:
            repository_id: Repository ID or name
            pull_request_id: Pull request ID
            project: Project, defaults to the client's project
            metrics: Delivery metrics to record the call into

        Returns:
            Decoded pull request

        Raises:
            DevOpsClientError: If the call fails or the result cannot be decoded
        """
        git_client = self.connection.clients.get_git_client()
        result = self._call(
            "get_pull_request",
            "GET",
            metrics,
            git_client.get_pull_request,
            repository_id=repository_id,
            pull_request_id=pull_request_id,
            project=project or self.project,
        )
        return self._decode(GitPullRequest, result, "get_pull_request")

    def get_pull_request_threads(
        self,
        repository_id: str,
        pull_request_id: int,
        project: Optional[str] = None,
        metrics: Optional[DeliveryMetrics] = None,
    ) -> List[GitPullRequestCommentThread]:
        """
        Retrieve the comment threads of a pull request.

        Args:
            repository_id: Repository ID or name
            pull_request_id: Pull request ID
            project: Project, defaults to the client's project
            metrics: Delivery metrics to record the call into

        Returns:
            Decoded threads, in the order the service returned them

        Raises:
            DevOpsClientError: If the call fails or a thread cannot be decoded
        """
        git_client = self.connection.clients.get_git_client()
        results = self._call(
            "get_threads",
            "GET",
            metrics,
            git_client.get_threads,
            repository_id=repository_id,
            pull_request_id=pull_request_id,
            project=project or self.project,
        )
        return [
            self._decode(GitPullRequestCommentThread, result, "get_threads")
            for result in results or []
        ]

    def get_work_item(
        self,
        work_item_id: int,
        project: Optional[str] = None,
        expand: Optional[str] = "relations",
        metrics: Optional[DeliveryMetrics] = None,
    ) -> WorkItem:
        """
        Retrieve a work item.

        Args:
            work_item_id: Work item ID
            project: Project, defaults to the client's project
            expand: Expansion of the result ('relations', 'fields', 'all', ...)
            metrics: Delivery metrics to record the call into

        Returns:
            Decoded work item

        Raises:
            DevOpsClientError: If the call fails or the result cannot be decoded
        """
        wit_client = self.connection.clients.get_work_item_tracking_client()
        result = self._call(
            "get_work_item",
            "GET",
            metrics,
            wit_client.get_work_item,
            id=work_item_id,
            project=project or self.project,
            expand=expand,
        )
        return self._decode(WorkItem, result, "get_work_item")

    def queue_build(
        self,
        definition_id: int,
        source_branch: str,
        project: Optional[str] = None,
        metrics: Optional[DeliveryMetrics] = None,
    ) -> Build:
        """
        Queue a build of a definition on a branch.

        Args:
            definition_id: Build definition ID (the number, not the name)
            source_branch: Branch name or full ref to build
            project: Project, defaults to the client's project
            metrics: Delivery metrics to record the call into

        Returns:
            The queued build

        Raises:
            DevOpsClientError: If no project is known, the call fails or
                the result cannot be decoded
        """
        project = project or self.project
        if not project:
            raise DevOpsClientError("A project is required to queue a build")

        build = SdkBuild(
            definition=SdkDefinitionReference(id=definition_id),
            source_branch=format_ref(source_branch),
        )
        build_client = self.connection.clients.get_build_client()
        result = self._call(
            "queue_build",
            "POST",
            metrics,
            build_client.queue_build,
            build=build,
            project=project,
        )
        queued = self._decode(Build, result, "queue_build")
        logger.info(
            f"Queued build {queued.id} of definition {definition_id} on {build.source_branch}"
        )
        return queued

    def _call(self, endpoint: str, method: str, metrics: Optional[DeliveryMetrics], func, **kwargs) -> Any:
        try:
            with track_api_call(metrics, "azure_devops", endpoint, method, logger):
                return func(**kwargs)
        except ClientException as e:
            raise DevOpsClientError(f"Azure DevOps call {endpoint} failed: {e}") from e

    def _decode(self, model: Type[ModelT], result: Any, endpoint: str) -> ModelT:
        if result is None:
            raise DevOpsClientError(f"Azure DevOps call {endpoint} returned no result")

        data = result.serialize() if hasattr(result, "serialize") else result
        try:
            return model.model_validate_json(json.dumps(data, default=str))
        except (TypeError, ValidationError) as e:
            raise DevOpsClientError(f"Cannot decode {endpoint} result: {e}") from e


def get_devops_client(settings=None) -> DevOpsClient:
    """
    Factory function to create DevOpsClient with settings from config.

    Returns:
        DevOpsClient instance configured with application settings

    Raises:
        DevOpsClientError: If the organization or PAT is not configured
    """
    if settings is None:
        from ado_webhooks.config import get_settings
        settings = get_settings()

    if not settings.organization_url or settings.azure_devops_pat is None:
        raise DevOpsClientError("AZURE_DEVOPS_ORG and AZURE_DEVOPS_PAT must be configured")

    return DevOpsClient(
        organization_url=settings.organization_url,
        personal_access_token=settings.azure_devops_pat.get_secret_value(),
        project=settings.azure_devops_project,
    )
