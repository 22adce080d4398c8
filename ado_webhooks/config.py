"""
Application configuration management.
"""

from functools import lru_cache
from typing import Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from ado_webhooks.services.validation import WebhookCredentials


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Webhook basic authentication, as entered on the service hook subscription
    webhook_username: str = ""
    webhook_password: SecretStr = SecretStr("")
    require_webhook_auth: bool = True

    # Azure DevOps
    azure_devops_org: Optional[str] = None
    azure_devops_project: Optional[str] = None
    azure_devops_pat: Optional[SecretStr] = None
    azure_devops_base_url: str = "https://dev.azure.com"

    # Build queued for git.push events, when configured
    build_definition_id: Optional[int] = None
    build_source_branch: str = "main"

    # Application
    log_level: str = "INFO"

    @property
    def organization_url(self) -> Optional[str]:
        """Organization URL, or None when no organization is configured."""
        if not self.azure_devops_org:
            return None
        return f"{self.azure_devops_base_url.rstrip('/')}/{self.azure_devops_org}"

    def webhook_credentials(self) -> WebhookCredentials:
        """Expected credentials for incoming service hook requests."""
        return WebhookCredentials(
            username=self.webhook_username,
            password=self.webhook_password,
        )


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
