# SPDX-License-Identifier: MIT
"""Rule severity, Rule and Violation dataclasses, and the RuleSet container."""

from __future__ import annotations

import fnmatch
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from pathlib import PurePath

from stylegate.rules.errors import MalformedRuleError


class RuleSeverity(IntEnum):
    """Severity levels for style rules, ordered for gate comparison."""

    EXCEPTION = 0
    CONSIDER = 1
    MANDATORY = 2

    @classmethod
    def parse(cls, text: str) -> RuleSeverity:
        """Resolve a case-insensitive severity name."""
        try:
            return cls[text.strip().upper()]
        except KeyError:
            valid = [s.name.lower() for s in cls]
            msg = f"Unknown severity: {text!r}. Valid severities: {valid}"
            raise ValueError(msg) from None


class MatcherKind(StrEnum):
    LITERAL = "literal"
    REGEX = "regex"
    TOKENS = "tokens"


@dataclass(frozen=True)
class Rule:
    """A single checkable style prescription."""

    id: str
    message: str
    pattern: str
    kind: MatcherKind = MatcherKind.LITERAL
    severity: RuleSeverity = RuleSeverity.MANDATORY
    category: str = ""
    files: tuple[str, ...] = ()
    ignore_case: bool = False

    def applies_to(self, path: str) -> bool:
        """Return True if the rule's file globs select *path* (no globs = every file)."""
        if not self.files:
            return True
        name = PurePath(path).name
        return any(fnmatch.fnmatch(path, g) or fnmatch.fnmatch(name, g) for g in self.files)


@dataclass(frozen=True)
class Violation:
    """A source line failing a rule's matcher."""

    rule_id: str
    severity: RuleSeverity
    message: str
    path: str
    line: int
    text: str
    column: int = 0


_ID_PART_RE = re.compile(r"\d+|\D+")


def rule_id_key(rule_id: str) -> tuple[tuple[int, int, str], ...]:
    """Natural sort key for rule identifiers: "6.2" < "6.10" < "7"."""
    key: list[tuple[int, int, str]] = []
    for part in _ID_PART_RE.findall(rule_id):
        if part.isdigit():
            key.append((0, int(part), ""))
        else:
            key.append((1, 0, part))
    return tuple(key)


@dataclass(frozen=True)
class RuleSet:
    """Named, ordered collection of Rules keyed by unique identifier."""

    name: str
    rules: tuple[Rule, ...] = ()
    _index: dict[str, Rule] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[str, Rule] = {}
        for rule in self.rules:
            if not rule.id.strip():
                raise MalformedRuleError("rule identifier must not be empty")
            if rule.id in index:
                raise MalformedRuleError("duplicate rule identifier", rule_id=rule.id)
            index[rule.id] = rule
        object.__setattr__(self, "rules", tuple(self.rules))
        object.__setattr__(self, "_index", index)

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._index

    def __getitem__(self, rule_id: str) -> Rule:
        return self._index[rule_id]

    def get(self, rule_id: str) -> Rule | None:
        return self._index.get(rule_id)

    def ordered(self) -> list[Rule]:
        """Return rules in rule-identifier order."""
        return sorted(self.rules, key=lambda r: rule_id_key(r.id))
