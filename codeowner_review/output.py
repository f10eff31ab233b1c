"""Notify resolved codeowners on the pull request.

Either requests formal reviews or posts a single comment mentioning the
owners, depending on the configured output mode.
"""

from __future__ import annotations

import logging

from codeowner_review.codeowners import ReviewerSet
from codeowner_review.constants import ActionConstants
from codeowner_review.context import PullRequestContext
from codeowner_review.errors import ConfigurationError
from github_api.api import GitHubAPI

logger = logging.getLogger(__name__)


def request_reviews(api: GitHubAPI, context: PullRequestContext, reviewers: ReviewerSet) -> None:
    """Request reviews from codeowners using GitHub's review request feature."""
    api.request_reviewers(
        context.pull_number,
        reviewers=list(reviewers.individuals),
        team_reviewers=list(reviewers.teams),
    )

    logger.info(
        f"Successfully requested reviews from {reviewers.total} reviewers "
        f"({len(reviewers.individuals)} individuals, {len(reviewers.teams)} teams)"
    )


def format_codeowner_comment(owner: str, reviewers: ReviewerSet) -> str:
    """Build the comment body; sections with no reviewers are left out.

    Teams are mentioned as @<owner>/<team>, owner being the repository's
    owning organization.
    """
    lines = [
        ActionConstants.COMMENT_HEADING,
        "",
        ActionConstants.COMMENT_INTRO,
        "",
    ]
    if reviewers.individuals:
        mentions = " ".join(f"@{user}" for user in reviewers.individuals)
        lines.append(f"{ActionConstants.COMMENT_INDIVIDUALS} {mentions}")
    if reviewers.teams:
        mentions = " ".join(f"@{owner}/{team}" for team in reviewers.teams)
        lines.append(f"{ActionConstants.COMMENT_TEAMS} {mentions}")
    lines.extend(["", ActionConstants.COMMENT_OUTRO])
    return "\n".join(lines)


def create_codeowner_comment(
    api: GitHubAPI, context: PullRequestContext, reviewers: ReviewerSet
) -> None:
    """Create a comment on the pull request notifying codeowners."""
    body = format_codeowner_comment(context.owner, reviewers)
    api.comment_issue(context.pull_number, body)

    logger.info(
        f"Successfully notified {reviewers.total} codeowners via comment "
        f"({len(reviewers.individuals)} individuals, {len(reviewers.teams)} teams)"
    )


def handle_output(
    api: GitHubAPI,
    context: PullRequestContext,
    reviewers: ReviewerSet,
    output_mode: str,
) -> None:
    """Dispatch to the handler for output_mode.

    Raises:
        ConfigurationError: If output_mode is not "review" or "comment"
    """
    if output_mode == ActionConstants.OutputMode.REVIEW:
        request_reviews(api, context, reviewers)
    elif output_mode == ActionConstants.OutputMode.COMMENT:
        create_codeowner_comment(api, context, reviewers)
    else:
        raise ConfigurationError(f"Invalid output mode: {output_mode}")
