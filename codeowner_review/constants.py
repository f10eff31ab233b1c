"""Shared constants for the codeowner review action."""

from __future__ import annotations

from enum import StrEnum


class ActionConstants:
    """All constants for the codeowner review action."""

    class OutputMode(StrEnum):
        """How resolved codeowners are notified."""

        REVIEW = "review"
        COMMENT = "comment"

    # =========================================================================
    # Action inputs (read from INPUT_<NAME> environment variables)
    # =========================================================================

    INPUT_TOKEN = "token"
    INPUT_FAIL_ON_ERROR = "fail-on-error"
    INPUT_OUTPUT_MODE = "output-mode"
    INPUT_ENV_PREFIX = "INPUT_"

    DEFAULT_OUTPUT_MODE = OutputMode.REVIEW

    # YAML 1.2 core schema booleans, as accepted by GitHub Actions
    TRUE_VALUES = {"true", "True", "TRUE"}
    FALSE_VALUES = {"false", "False", "FALSE"}

    # =========================================================================
    # GitHub Actions runner environment
    # =========================================================================

    ENV_GITHUB_ACTIONS = "GITHUB_ACTIONS"
    ENV_EVENT_PATH = "GITHUB_EVENT_PATH"
    ENV_REPOSITORY = "GITHUB_REPOSITORY"
    ENV_WORKSPACE = "GITHUB_WORKSPACE"
    ENV_API_URL = "GITHUB_API_URL"
    ENV_LOG_LEVEL = "LOG_LEVEL"

    DEFAULT_API_URL = "https://api.github.com"
    DEFAULT_LOG_LEVEL = "INFO"
    ENV_FILENAME = ".env"

    # =========================================================================
    # CODEOWNERS
    # =========================================================================

    # Standard CODEOWNERS file locations, in GitHub's lookup order
    CODEOWNERS_PATHS = [
        ".github/CODEOWNERS",
        "CODEOWNERS",
        "docs/CODEOWNERS",
    ]

    OWNER_PREFIX = "@"
    TEAM_SEPARATOR = "/"
    COMMENT_PREFIX = "#"

    # =========================================================================
    # Messages
    # =========================================================================

    UNKNOWN_ERROR = "An unknown error occurred"
    NOT_A_PULL_REQUEST = "This action can only be run on pull request events"

    COMMENT_HEADING = "## 👋 Codeowner Review Request"
    COMMENT_INTRO = "The following codeowners have been identified for the changed files:"
    COMMENT_INDIVIDUALS = "**Individual reviewers:**"
    COMMENT_TEAMS = "**Team reviewers:**"
    COMMENT_OUTRO = "Please review the changes when you have a chance. Thank you! 🙏"
