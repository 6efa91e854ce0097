# SPDX-License-Identifier: MIT
"""Style rule engine — rule sets are data, the checker applies them line by line."""

from __future__ import annotations

from collections.abc import Iterable

from stylegate.rules.base import MatcherKind, Rule, RuleSet, RuleSeverity, Violation
from stylegate.rules.config import ProfileConfig, load_profile
from stylegate.rules.engine import STDIN_PATH, Checker, FileReport, check_gate
from stylegate.rules.errors import MalformedRuleError, PatternError, StyleGateError
from stylegate.rules.loader import load_builtin_ruleset, load_ruleset, parse_ruleset

__all__ = [
    "Checker",
    "FileReport",
    "MalformedRuleError",
    "MatcherKind",
    "PatternError",
    "ProfileConfig",
    "Rule",
    "RuleSet",
    "RuleSeverity",
    "StyleGateError",
    "Violation",
    "check_gate",
    "load_builtin_ruleset",
    "load_profile",
    "load_ruleset",
    "parse_ruleset",
    "run_rules",
]


def run_rules(lines: Iterable[str], ruleset: RuleSet, path: str = STDIN_PATH) -> list[Violation]:
    """Convenience: check *lines* against *ruleset* and collect the violations."""
    return list(Checker(ruleset).check_lines(lines, path))
