"""GitHub API client for the codeowner review action.

Covers the three REST calls the action needs (list PR files, request
reviewers, comment on a PR) behind typed Pydantic models, using
urllib.request with token-based auth.
"""

from __future__ import annotations

import json
import logging
import urllib.request
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel

# GitHub API constants
GITHUB_API = "https://api.github.com"

# API paths
API_PR_FILES = "/repos/{owner}/{repo}/pulls/{pr_number}/files"
API_PR_REQUESTED_REVIEWERS = "/repos/{owner}/{repo}/pulls/{pr_number}/requested_reviewers"
API_ISSUE_COMMENTS = "/repos/{owner}/{repo}/issues/{number}/comments"

# GitHub caps per_page at 100 and the PR files listing at 3000 entries
FILES_PER_PAGE = 100
MAX_FILE_PAGES = 30

logger = logging.getLogger(__name__)


# =============================================================================
# Pydantic models: Pull Request
# =============================================================================


class PullRequestFile(BaseModel):
    """A file changed by a pull request (REST API format)."""

    filename: str
    status: str = ""
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    previous_filename: str | None = None


class RequestedTeam(BaseModel):
    """A team whose review was requested."""

    slug: str = ""


class RequestedUser(BaseModel):
    """A user whose review was requested."""

    login: str = ""


class ReviewRequestResult(BaseModel):
    """The pull request as returned after requesting reviewers."""

    number: int = 0
    requested_reviewers: list[RequestedUser] = []
    requested_teams: list[RequestedTeam] = []


class IssueComment(BaseModel):
    """A comment created on an issue or pull request."""

    id: int = 0
    html_url: str = ""
    body: str = ""


# =============================================================================
# GitHubAPI client
# =============================================================================


class GitHubAPI:
    """GitHub REST API client using urllib.request with token-based auth."""

    def __init__(
        self,
        token_provider: Callable[[], str],
        owner: str,
        repo: str,
        api_url: str = GITHUB_API,
    ) -> None:
        self._get_token = token_provider
        self._owner = owner
        self._repo = repo
        self._api_url = api_url.rstrip("/")

    # --- Low-level request methods ---

    def _rest_request(
        self,
        method: str,
        path: str,
        body: dict | None = None,
        timeout: int = 15,
        accept: str = "application/vnd.github+json",
    ) -> Any:
        """Make a REST API request to GitHub."""
        url = f"{self._api_url}{path}"
        token = self._get_token()
        data = json.dumps(body).encode() if body is not None else None
        req = urllib.request.Request(url, data=data, method=method)
        req.add_header("Authorization", f"Bearer {token}")
        req.add_header("Accept", accept)
        req.add_header("X-GitHub-Api-Version", "2022-11-28")
        if data:
            req.add_header("Content-Type", "application/json")
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            raw = resp.read()
            if not raw:
                return None
            content_type = resp.headers.get("Content-Type", "")
            if "json" in content_type:
                return json.loads(raw)
            return raw.decode()

    # --- Pull requests (REST) ---

    def list_pull_request_files(self, pr_number: int) -> list[PullRequestFile]:
        """List every file changed by a pull request.

        Pages through the listing until a short page comes back.
        """
        path = API_PR_FILES.format(
            owner=self._owner,
            repo=self._repo,
            pr_number=pr_number,
        )
        files: list[PullRequestFile] = []
        for page in range(1, MAX_FILE_PAGES + 1):
            raw_files = self._rest_request("GET", f"{path}?per_page={FILES_PER_PAGE}&page={page}")
            batch = [PullRequestFile.model_validate(f) for f in (raw_files or [])]
            files.extend(batch)
            if len(batch) < FILES_PER_PAGE:
                break
        return files

    def request_reviewers(
        self,
        pr_number: int,
        reviewers: list[str],
        team_reviewers: list[str],
    ) -> ReviewRequestResult:
        """Request reviews from users and teams on a pull request.

        Raises on failure (caller handles error semantics).
        """
        path = API_PR_REQUESTED_REVIEWERS.format(
            owner=self._owner,
            repo=self._repo,
            pr_number=pr_number,
        )
        payload = {"reviewers": reviewers, "team_reviewers": team_reviewers}
        result = self._rest_request("POST", path, body=payload, timeout=30)
        return ReviewRequestResult.model_validate(result or {})

    # --- Issues (REST) ---

    def comment_issue(self, number: int, body: str) -> IssueComment:
        """Post a comment on a GitHub issue or pull request.

        Raises on failure (caller handles error semantics).
        """
        path = API_ISSUE_COMMENTS.format(
            owner=self._owner,
            repo=self._repo,
            number=number,
        )
        result = self._rest_request("POST", path, body={"body": body}, timeout=30)
        return IssueComment.model_validate(result or {})
