"""Configuration for the GitHub Actions API client."""

from pydantic import BaseModel, SecretStr, field_validator

DEFAULT_API_BASE_URL = "https://api.github.com"
USER_AGENT = "GitHub-Workflow-Monitor"


class GitHubClientConfig(BaseModel):
    """Configuration for the GitHub Actions API client."""

    # Without a token requests are unauthenticated and get a lower rate limit
    token: SecretStr | None = None
    # GitHub Enterprise roots carry a path, e.g. https://ghe.example.com/api/v3
    api_base_url: str = DEFAULT_API_BASE_URL
    user_agent: str = USER_AGENT

    @field_validator("api_base_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        """Keep the base URL path when request paths are joined onto it."""
        return value if value.endswith("/") else f"{value}/"
