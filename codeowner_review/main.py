"""Codeowner review request orchestrator.

Finds the CODEOWNERS of every file a pull request changes and requests
their review (or mentions them in a comment).

Usage:
    python -m codeowner_review                        # Run against $GITHUB_WORKSPACE
    python -m codeowner_review --project-root path/   # Read CODEOWNERS from another checkout
"""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Callable
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel

from codeowner_review.codeowners import find_required_reviewers, load_codeowners
from codeowner_review.config import ActionInputs, setup_logging
from codeowner_review.constants import ActionConstants
from codeowner_review.context import get_changed_files, validate_pull_request_context
from codeowner_review.output import handle_output
from github_api.api import GitHubAPI

logger = logging.getLogger(__name__)


class RunStatus(StrEnum):
    """How a run ended, as seen by the workflow."""

    SUCCESS = "success"
    WARNING = "warning"
    FAILED = "failed"


class RunResult(BaseModel):
    """Outcome of one run; inspected once by main() to pick the exit code."""

    status: RunStatus = RunStatus.SUCCESS
    message: str | None = None

    @property
    def exit_code(self) -> int:
        return 1 if self.status == RunStatus.FAILED else 0


def _error_message(error: Exception) -> str:
    return str(error) or ActionConstants.UNKNOWN_ERROR


def process_codeowner_review_request(
    project_root: Path,
    inputs: ActionInputs | None = None,
    api_factory: Callable[..., GitHubAPI] | None = None,
) -> RunResult:
    """Run the whole flow and classify the outcome.

    Every failure is caught here. With fail-on-error set it becomes a
    FAILED result, otherwise a WARNING. A failure to load the inputs is
    always FAILED since the flag itself is unknown at that point.
    """
    try:
        if inputs is None:
            inputs = ActionInputs.load()
        token = inputs.token

        context = validate_pull_request_context(
            os.getenv(ActionConstants.ENV_EVENT_PATH),
            os.getenv(ActionConstants.ENV_REPOSITORY),
        )
        factory = api_factory or GitHubAPI
        api = factory(lambda: token, context.owner, context.repo, inputs.api_url)

        files = get_changed_files(api, context)

        owners = load_codeowners(project_root)
        if owners is None:
            return RunResult(status=RunStatus.SUCCESS)

        reviewers = find_required_reviewers(files, owners)
        if reviewers.is_empty:
            logger.info("No reviewers found in CODEOWNERS for changed files")
            return RunResult(status=RunStatus.SUCCESS)

        logger.info(
            f"Found reviewers - individuals: {', '.join(reviewers.individuals)}, "
            f"teams: {', '.join(reviewers.teams)}"
        )

        handle_output(api, context, reviewers, inputs.output_mode)
    except Exception as e:
        message = _error_message(e)
        logger.debug(f"Run aborted: {type(e).__name__}: {message}")
        if inputs is None or inputs.fail_on_error:
            return RunResult(status=RunStatus.FAILED, message=message)
        return RunResult(status=RunStatus.WARNING, message=message)

    return RunResult(status=RunStatus.SUCCESS)


def report(result: RunResult) -> int:
    """Log the outcome and return the process exit code."""
    if result.status == RunStatus.FAILED:
        logger.error(result.message)
    elif result.status == RunStatus.WARNING:
        logger.warning(f"Action completed with errors: {result.message}")
    return result.exit_code


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Request reviews from CODEOWNERS")
    parser.add_argument(
        "--project-root",
        type=Path,
        default=None,
        help="Checkout containing the CODEOWNERS file (default: $GITHUB_WORKSPACE or cwd)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="DEBUG, INFO, WARNING or ERROR (default: $LOG_LEVEL or INFO)",
    )
    args = parser.parse_args(argv)

    setup_logging(
        args.log_level
        or os.getenv(ActionConstants.ENV_LOG_LEVEL, ActionConstants.DEFAULT_LOG_LEVEL)
    )

    project_root = args.project_root or Path(
        os.getenv(ActionConstants.ENV_WORKSPACE) or Path.cwd()
    )
    return report(process_codeowner_review_request(project_root))
