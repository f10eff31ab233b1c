"""Pull request context for the running workflow.

Reads the webhook payload the Actions runner writes to GITHUB_EVENT_PATH,
checks that the run was triggered by a pull request, and lists the files
that pull request changes.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from codeowner_review.constants import ActionConstants
from codeowner_review.errors import PreconditionError
from github_api.api import GitHubAPI

logger = logging.getLogger(__name__)


class PullRequestContext(BaseModel):
    """The repository and number of the pull request under review."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    pull_number: int


# =============================================================================
# Pydantic models: webhook event payload
# =============================================================================


class _PayloadOwner(BaseModel):
    login: str = ""


class _PayloadRepository(BaseModel):
    name: str = ""
    owner: _PayloadOwner = _PayloadOwner()


class _PayloadPullRequest(BaseModel):
    number: int


class EventPayload(BaseModel):
    """The subset of a webhook event payload the action reads."""

    pull_request: _PayloadPullRequest | None = None
    repository: _PayloadRepository | None = None


def load_event_payload(event_path: str | Path | None) -> EventPayload:
    """Load the webhook payload, or an empty one if there is none."""
    if not event_path:
        return EventPayload()
    path = Path(event_path)
    if not path.is_file():
        logger.debug(f"Event payload not found at {path}")
        return EventPayload()
    return EventPayload.model_validate(json.loads(path.read_text(encoding="utf-8")))


def validate_pull_request_context(
    event_path: str | Path | None,
    repository: str | None = None,
) -> PullRequestContext:
    """Return the PR context, raising PreconditionError outside of a pull request.

    Args:
        event_path: Path to the webhook payload (GITHUB_EVENT_PATH)
        repository: "owner/repo" (GITHUB_REPOSITORY); falls back to the
            payload's repository block when unset
    """
    payload = load_event_payload(event_path)
    if payload.pull_request is None:
        raise PreconditionError(ActionConstants.NOT_A_PULL_REQUEST)

    if repository and "/" in repository:
        owner, repo = repository.split("/", 1)
    elif payload.repository is not None:
        owner, repo = payload.repository.owner.login, payload.repository.name
    else:
        raise PreconditionError(
            f"Cannot determine repository: set {ActionConstants.ENV_REPOSITORY} to owner/repo"
        )

    return PullRequestContext(owner=owner, repo=repo, pull_number=payload.pull_request.number)


def get_changed_files(api: GitHubAPI, context: PullRequestContext) -> list[str]:
    """List the paths of all files changed by the pull request."""
    logger.info(f"Processing PR #{context.pull_number} in {context.owner}/{context.repo}")

    files = api.list_pull_request_files(context.pull_number)

    logger.info(f"Found {len(files)} changed files")
    return [f.filename for f in files]
