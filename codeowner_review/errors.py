"""Error types raised by the codeowner review action."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """An action input is missing or has an unsupported value."""


class PreconditionError(ValueError):
    """The action is running somewhere it cannot do its job (e.g. not on a PR)."""
