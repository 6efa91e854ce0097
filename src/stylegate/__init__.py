"""stylegate — line-local style rule conformance checker for C-family sources."""

from stylegate.diff import AddedLine, added_lines
from stylegate.report import format_violation, render_json, render_text, summarize
from stylegate.rules import (
    Checker,
    FileReport,
    MalformedRuleError,
    PatternError,
    Rule,
    RuleSet,
    RuleSeverity,
    Violation,
    check_gate,
    load_builtin_ruleset,
    load_ruleset,
    parse_ruleset,
    run_rules,
)

__all__ = [
    "AddedLine",
    "Checker",
    "FileReport",
    "MalformedRuleError",
    "PatternError",
    "Rule",
    "RuleSet",
    "RuleSeverity",
    "Violation",
    "added_lines",
    "check_gate",
    "format_violation",
    "load_builtin_ruleset",
    "load_ruleset",
    "parse_ruleset",
    "render_json",
    "render_text",
    "run_rules",
    "summarize",
]
