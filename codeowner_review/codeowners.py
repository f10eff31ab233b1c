"""CODEOWNERS lookup for changed files.

Loads the repository's CODEOWNERS file and turns the owners of a set of
changed files into the individual and team reviewers to notify. Pattern
matching (last matching rule wins) is delegated to the codeowners package.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from codeowners import CodeOwners
from pydantic import BaseModel, ConfigDict

from codeowner_review.constants import ActionConstants

logger = logging.getLogger(__name__)

# Whitespace not escaped with a backslash ("docs/my\ file.md" is one pattern)
_RULE_FIELD_SEPARATOR = re.compile(r"(?<!\\)\s+")


class ReviewerSet(BaseModel):
    """Deduplicated reviewers for one run, in first-seen order."""

    model_config = ConfigDict(frozen=True)

    individuals: tuple[str, ...] = ()
    teams: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.individuals and not self.teams

    @property
    def total(self) -> int:
        return len(self.individuals) + len(self.teams)


class OwnershipRules(CodeOwners):
    """CODEOWNERS rules that report owners exactly as written.

    CodeOwners.of() only passes on owners it can classify, which drops
    "user" and "org/team" written without "@". The matching line still
    comes from CodeOwners; its owner tokens are read back from the text.
    """

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.lines = text.splitlines()

    def owners_of(self, filepath: str) -> list[str]:
        _, line_num, _, _ = self.matching_line(filepath)
        if line_num is None:
            return []

        fields = _RULE_FIELD_SEPARATOR.split(self.lines[line_num - 1].strip())
        owners = []
        for token in fields[1:]:
            if token.startswith(ActionConstants.COMMENT_PREFIX):
                break
            owners.append(token)
        return owners


def load_codeowners(project_root: Path) -> OwnershipRules | None:
    """Load the CODEOWNERS file under project_root.

    Searches standard CODEOWNERS locations. Returns None if no CODEOWNERS
    file is found.
    """
    for relative_path in ActionConstants.CODEOWNERS_PATHS:
        codeowners_path = project_root / relative_path
        if codeowners_path.is_file():
            logger.debug(f"Using CODEOWNERS file at {codeowners_path}")
            return OwnershipRules(codeowners_path.read_text(encoding="utf-8"))

    logger.warning("No CODEOWNERS file found")
    return None


def match_file(path: str, ruleset: OwnershipRules) -> list[str]:
    """Raw owner identifiers of the last CODEOWNERS rule matching path."""
    return ruleset.owners_of(path)


def find_required_reviewers(files: Iterable[str], ruleset: OwnershipRules) -> ReviewerSet:
    """Collect the individuals and teams that own any of the given files.

    A leading "@" is optional on owners. "org/team" owners contribute the
    segment right after the first "/" as a team slug; everything else is a
    user login.
    """
    individuals: dict[str, None] = {}
    teams: dict[str, None] = {}

    for file in files:
        owners = match_file(file, ruleset)
        if not owners:
            logger.debug(f"No owners found for file: {file}")
            continue

        logger.debug(f"File {file} has owners: {', '.join(owners)}")

        for owner in owners:
            clean_owner = owner.removeprefix(ActionConstants.OWNER_PREFIX)
            if ActionConstants.TEAM_SEPARATOR in clean_owner:
                bucket = teams
                name = clean_owner.split(ActionConstants.TEAM_SEPARATOR)[1]
            else:
                bucket = individuals
                name = clean_owner

            # "org/" or a bare "@" would name nobody
            if not name:
                logger.warning(f"Skipping owner with empty name: {owner!r} (file {file})")
                continue
            bucket.setdefault(name)

    return ReviewerSet(individuals=tuple(individuals), teams=tuple(teams))
