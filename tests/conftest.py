"""Shared test fixtures and helpers for codeowner review tests.

Provides a recording GitHub API double, a stand-in ownership ruleset,
and fixtures that lay out CODEOWNERS files and webhook payloads the way
the Actions runner would.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from codeowner_review.context import PullRequestContext
from github_api.api import IssueComment, PullRequestFile, ReviewRequestResult

# --- Constants ---

OWNER = "testowner"
REPO = "testrepo"
PR_NUMBER = 123

CODEOWNERS_CONTENT = "*.ts @user1 @testowner/team1\n"

ENV_KEYS = [
    "INPUT_TOKEN",
    "INPUT_FAIL-ON-ERROR",
    "INPUT_OUTPUT-MODE",
    "GITHUB_ACTIONS",
    "GITHUB_EVENT_PATH",
    "GITHUB_REPOSITORY",
    "GITHUB_WORKSPACE",
    "GITHUB_API_URL",
    "LOG_LEVEL",
]


# --- Data builders ---


def pull_request_event(number: int = PR_NUMBER) -> dict:
    """Create a minimal pull_request webhook payload."""
    return {
        "action": "opened",
        "number": number,
        "pull_request": {"number": number, "title": "Update things"},
        "repository": {"name": REPO, "owner": {"login": OWNER}},
    }


def push_event() -> dict:
    """Create a minimal push webhook payload (no pull_request)."""
    return {
        "ref": "refs/heads/main",
        "repository": {"name": REPO, "owner": {"login": OWNER}},
    }


# --- Mock classes ---


class FakeRuleset:
    """Stands in for OwnershipRules with fixed raw owners per path."""

    def __init__(self, owners_by_path: dict[str, list[str]]):
        self._owners_by_path = owners_by_path
        self.queried: list[str] = []

    def owners_of(self, filepath: str) -> list[str]:
        self.queried.append(filepath)
        return list(self._owners_by_path.get(filepath, []))


class MockGitHubAPI:
    """Records calls instead of talking to GitHub."""

    def __init__(self, files: list[str] | None = None, error: Exception | None = None):
        self.files = files or []
        self.error = error
        self.listed: list[int] = []
        self.review_requests: list[dict] = []
        self.comments: list[dict] = []
        self.factory_args: tuple = ()

    def list_pull_request_files(self, pr_number: int) -> list[PullRequestFile]:
        self.listed.append(pr_number)
        if self.error is not None:
            raise self.error
        return [PullRequestFile(filename=f) for f in self.files]

    def request_reviewers(
        self, pr_number: int, reviewers: list[str], team_reviewers: list[str]
    ) -> ReviewRequestResult:
        self.review_requests.append(
            {"pr_number": pr_number, "reviewers": reviewers, "team_reviewers": team_reviewers}
        )
        return ReviewRequestResult(number=pr_number)

    def comment_issue(self, number: int, body: str) -> IssueComment:
        self.comments.append({"number": number, "body": body})
        return IssueComment(id=1, body=body)

    @property
    def write_calls(self) -> int:
        return len(self.review_requests) + len(self.comments)

    def factory(self, token_provider, owner, repo, api_url):
        """Drop-in for the GitHubAPI constructor."""
        self.factory_args = (token_provider(), owner, repo, api_url)
        return self


# --- Fixtures ---


@pytest.fixture(autouse=True)
def isolate_env(tmp_path, monkeypatch):
    """Keep the runner's own environment and any local .env out of tests.

    The whole environment is restored afterwards since python-dotenv
    writes straight into os.environ.
    """
    with patch.dict(os.environ):
        for key in ENV_KEYS:
            os.environ.pop(key, None)
        monkeypatch.chdir(tmp_path)
        yield


@pytest.fixture
def pr_context() -> PullRequestContext:
    return PullRequestContext(owner=OWNER, repo=REPO, pull_number=PR_NUMBER)


@pytest.fixture
def project_root(tmp_path) -> Path:
    """Create a temporary checkout with a .github/CODEOWNERS file."""
    root = tmp_path / "checkout"
    github_dir = root / ".github"
    github_dir.mkdir(parents=True)
    (github_dir / "CODEOWNERS").write_text(CODEOWNERS_CONTENT)
    return root


@pytest.fixture
def write_event(tmp_path, monkeypatch):
    """Write a webhook payload and point GITHUB_EVENT_PATH/GITHUB_REPOSITORY at it."""

    def factory(payload: dict, repository: str | None = f"{OWNER}/{REPO}") -> Path:
        event_path = tmp_path / "event.json"
        event_path.write_text(json.dumps(payload))
        monkeypatch.setenv("GITHUB_EVENT_PATH", str(event_path))
        if repository is not None:
            monkeypatch.setenv("GITHUB_REPOSITORY", repository)
        return event_path

    return factory


@pytest.fixture
def action_env(monkeypatch):
    """Set action inputs the way the runner exports them."""

    def factory(
        token: str = "ghs_fake_token",
        fail_on_error: str | None = None,
        output_mode: str | None = None,
    ) -> None:
        monkeypatch.setenv("INPUT_TOKEN", token)
        if fail_on_error is not None:
            monkeypatch.setenv("INPUT_FAIL-ON-ERROR", fail_on_error)
        if output_mode is not None:
            monkeypatch.setenv("INPUT_OUTPUT-MODE", output_mode)

    return factory
