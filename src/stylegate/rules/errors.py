# SPDX-License-Identifier: MIT
"""Exceptions raised while loading and evaluating style rules."""

from __future__ import annotations


class StyleGateError(Exception):
    """Base class for stylegate configuration failures."""


class MalformedRuleError(StyleGateError):
    """Raised when a rule set description cannot be turned into a RuleSet."""

    def __init__(self, reason: str, rule_id: str | None = None) -> None:
        self.reason = reason
        self.rule_id = rule_id
        where = f"rule {rule_id!r}: " if rule_id is not None else ""
        super().__init__(f"Malformed rule set: {where}{reason}")


class PatternError(StyleGateError):
    """Raised when a rule's matcher cannot be compiled or evaluated."""

    def __init__(self, rule_id: str, pattern: str, reason: str) -> None:
        self.rule_id = rule_id
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern for rule {rule_id!r} ({pattern!r}): {reason}")
