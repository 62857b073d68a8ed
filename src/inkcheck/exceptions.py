"""Exception hierarchy for inkcheck."""

from __future__ import annotations


class InkcheckError(Exception):
    """Base class for all inkcheck errors."""


class ConfigurationError(InkcheckError):
    """Raised when a configuration cannot be turned into a runnable rule set.

    Covers unknown rule names, rules declaring no recognized target and rules
    that break the flat plugin hierarchy.
    """


class ConstructionError(InkcheckError):
    """Raised when a resolved rule cannot be instantiated or initialized."""

    def __init__(self, rule_name: str, cause: BaseException) -> None:
        self.rule_name = rule_name
        self.cause = cause
        super().__init__(f"Failed to construct validator '{rule_name}': {cause!s}")


class SinkError(InkcheckError):
    """Raised by a result sink when a finding cannot be written."""
