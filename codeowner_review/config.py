"""Configuration management for the codeowner review action."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from codeowner_review.constants import ActionConstants
from codeowner_review.errors import ConfigurationError


def running_in_actions() -> bool:
    return os.getenv(ActionConstants.ENV_GITHUB_ACTIONS) == "true"


def load_dotenv_file() -> None:
    """Load a local .env file when running outside of GitHub Actions."""
    if running_in_actions():
        return
    env_path = Path.cwd() / ActionConstants.ENV_FILENAME
    if env_path.exists():
        load_dotenv(env_path)


def get_input(name: str, required: bool = False) -> str:
    """Read an action input the way the Actions runner exposes it.

    Input "output-mode" lives in INPUT_OUTPUT-MODE: spaces become
    underscores, everything else is upper-cased as-is.
    """
    env_key = f"{ActionConstants.INPUT_ENV_PREFIX}{name.replace(' ', '_').upper()}"
    value = os.getenv(env_key, "").strip()
    if required and not value:
        raise ConfigurationError(f"Input required and not supplied: {name}")
    return value


def get_boolean_input(name: str, default: bool = False) -> bool:
    value = get_input(name)
    if not value:
        return default
    if value in ActionConstants.TRUE_VALUES:
        return True
    if value in ActionConstants.FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"Input does not meet YAML 1.2 core schema boolean specification: {name}. "
        "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


@dataclass
class ActionInputs:
    """Action configuration loaded from INPUT_* environment variables."""

    token: str
    fail_on_error: bool = False

    # Validated at dispatch time, see output.handle_output
    output_mode: str = ActionConstants.DEFAULT_OUTPUT_MODE

    api_url: str = ActionConstants.DEFAULT_API_URL

    @classmethod
    def load(cls) -> ActionInputs:
        """Load inputs, raising ConfigurationError if a required one is absent."""
        load_dotenv_file()
        return cls(
            token=get_input(ActionConstants.INPUT_TOKEN, required=True),
            fail_on_error=get_boolean_input(ActionConstants.INPUT_FAIL_ON_ERROR),
            output_mode=(
                get_input(ActionConstants.INPUT_OUTPUT_MODE)
                or ActionConstants.DEFAULT_OUTPUT_MODE
            ),
            api_url=os.getenv(ActionConstants.ENV_API_URL, ActionConstants.DEFAULT_API_URL),
        )


class WorkflowCommandFormatter(logging.Formatter):
    """Render log records as GitHub Actions workflow commands.

    Warnings and errors become annotations on the workflow run; debug
    output only shows up when step debug logging is enabled.
    """

    COMMANDS = {
        logging.DEBUG: "debug",
        logging.WARNING: "warning",
        logging.ERROR: "error",
        logging.CRITICAL: "error",
    }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        command = self.COMMANDS.get(record.levelno)
        if command is None:
            return message
        return f"::{command}::{_escape_data(message)}"


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def setup_logging(log_level: str = ActionConstants.DEFAULT_LOG_LEVEL) -> None:
    """
    Configure logging for the action.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    if running_in_actions():
        formatter: logging.Formatter = WorkflowCommandFormatter(fmt="%(message)s")
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
