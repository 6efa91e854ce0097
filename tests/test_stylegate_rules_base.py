# SPDX-License-Identifier: MIT
"""Tests for stylegate.rules.base — severities, Rule globs, RuleSet invariants."""

from __future__ import annotations

import dataclasses

import pytest

from stylegate.rules.base import MatcherKind, Rule, RuleSet, RuleSeverity, rule_id_key
from stylegate.rules.errors import MalformedRuleError


def _rule(rule_id: str, **kwargs: object) -> Rule:
    return Rule(id=rule_id, message=f"message {rule_id}", pattern="x", **kwargs)  # type: ignore[arg-type]


class TestRuleSeverity:
    def test_ordering(self) -> None:
        assert RuleSeverity.EXCEPTION < RuleSeverity.CONSIDER < RuleSeverity.MANDATORY

    def test_parse_case_insensitive(self) -> None:
        assert RuleSeverity.parse("Mandatory") is RuleSeverity.MANDATORY
        assert RuleSeverity.parse(" consider ") is RuleSeverity.CONSIDER
        assert RuleSeverity.parse("EXCEPTION") is RuleSeverity.EXCEPTION

    def test_parse_unknown_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown severity"):
            RuleSeverity.parse("fatal")


class TestRule:
    def test_defaults(self) -> None:
        rule = _rule("6.6")
        assert rule.kind == MatcherKind.LITERAL
        assert rule.severity == RuleSeverity.MANDATORY
        assert rule.files == ()
        assert rule.ignore_case is False

    def test_immutable(self) -> None:
        rule = _rule("6.6")
        with pytest.raises(dataclasses.FrozenInstanceError):
            rule.message = "changed"  # type: ignore[misc]

    def test_applies_to_everything_without_globs(self) -> None:
        assert _rule("1").applies_to("src/widget.cpp")

    def test_applies_to_matches_basename(self) -> None:
        rule = _rule("8.4", files=("*.h",))
        assert rule.applies_to("include/widget.h")
        assert not rule.applies_to("src/widget.cpp")

    def test_applies_to_matches_full_path(self) -> None:
        rule = _rule("8.4", files=("platform/*",))
        assert rule.applies_to("platform/win.cpp")
        assert not rule.applies_to("core/win.cpp")


class TestRuleIdKey:
    def test_numeric_components_compare_numerically(self) -> None:
        ids = ["7", "6.10", "6.2", "10.1", "6"]
        assert sorted(ids, key=rule_id_key) == ["6", "6.2", "6.10", "7", "10.1"]

    def test_mixed_identifiers(self) -> None:
        ids = ["naming-b", "naming-a", "3.1"]
        assert sorted(ids, key=rule_id_key) == ["3.1", "naming-a", "naming-b"]


class TestRuleSet:
    def test_lookup_and_len(self) -> None:
        rs = RuleSet(name="t", rules=(_rule("6.2"), _rule("6.6")))
        assert len(rs) == 2
        assert "6.6" in rs
        assert "9.9" not in rs
        assert rs["6.2"].id == "6.2"
        assert rs.get("9.9") is None

    def test_iteration_keeps_load_order(self) -> None:
        rs = RuleSet(name="t", rules=(_rule("6.6"), _rule("6.2")))
        assert [r.id for r in rs] == ["6.6", "6.2"]

    def test_ordered_is_identifier_order(self) -> None:
        rs = RuleSet(name="t", rules=(_rule("6.10"), _rule("6.6"), _rule("6.2")))
        assert [r.id for r in rs.ordered()] == ["6.2", "6.6", "6.10"]

    def test_duplicate_ids_rejected(self) -> None:
        with pytest.raises(MalformedRuleError, match="duplicate") as exc_info:
            RuleSet(name="t", rules=(_rule("6.6"), _rule("6.2"), _rule("6.6")))
        assert exc_info.value.rule_id == "6.6"

    def test_blank_id_rejected(self) -> None:
        with pytest.raises(MalformedRuleError, match="empty"):
            RuleSet(name="t", rules=(_rule("  "),))

    def test_empty_ruleset(self) -> None:
        rs = RuleSet(name="empty")
        assert len(rs) == 0
        assert rs.ordered() == []

    def test_rules_coerced_to_tuple(self) -> None:
        rs = RuleSet(name="t", rules=[_rule("1")])  # type: ignore[arg-type]
        assert isinstance(rs.rules, tuple)
