"""GitHub REST client used by the codeowner review action."""

from github_api.api import GitHubAPI

__all__ = ["GitHubAPI"]
