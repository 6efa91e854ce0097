# SPDX-License-Identifier: MIT
"""RuleSet loader — validate structured rule descriptions into an immutable RuleSet.

Rule sets are YAML, JSON, or TOML documents of the shape::

    name: qt-client
    rules:
      - id: "6.6"
        category: functions
        pattern: "void setColor ("
        message: no space before parameter list
        severity: mandatory      # mandatory | consider | exception
        kind: literal            # literal | regex | tokens
        files: ["*.h", "*.cpp"]  # optional
        ignore_case: false       # optional

A bare list of rule mappings is accepted as well.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from stylegate.rules.base import MatcherKind, Rule, RuleSet, RuleSeverity
from stylegate.rules.errors import MalformedRuleError, PatternError
from stylegate.rules.matchers import compile_matcher

log = logging.getLogger(__name__)

BUILTIN_RULESET = Path(__file__).resolve().parent.parent / "data" / "qt_client.yml"


class RuleSpec(BaseModel):
    """Schema of a single rule entry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1)
    pattern: str = Field(min_length=1)
    message: str = Field(min_length=1)
    category: str = ""
    kind: MatcherKind = MatcherKind.LITERAL
    severity: RuleSeverity = RuleSeverity.MANDATORY
    files: list[str] = Field(default_factory=list)
    ignore_case: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # YAML reads an unquoted 6.6 as a float; 6.10 would then collapse to 6.1.
        if isinstance(value, float):
            msg = "rule id must be quoted, numeric ids lose precision"
            raise ValueError(msg)
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("severity", mode="before")
    @classmethod
    def _parse_severity(cls, value: Any) -> Any:
        if isinstance(value, str):
            return RuleSeverity.parse(value)
        return value

    @field_validator("kind", mode="before")
    @classmethod
    def _normalize_kind(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def to_rule(self) -> Rule:
        return Rule(
            id=self.id,
            message=self.message,
            pattern=self.pattern,
            kind=self.kind,
            severity=self.severity,
            category=self.category,
            files=tuple(self.files),
            ignore_case=self.ignore_case,
        )


class RuleSetSpec(BaseModel):
    """Schema of a whole rule set document."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    rules: list[RuleSpec] = Field(default_factory=list)


def _safe_error_summary(e: ValidationError) -> str:
    """Reduce a ValidationError to field paths and error type codes."""
    parts: list[str] = []
    for err in e.errors():
        loc = ".".join(str(loc) for loc in err["loc"])
        parts.append(f"{loc}: {err['type']}")
    return "; ".join(parts)


def _offending_id(data: Any, e: ValidationError) -> str | None:
    """Best-effort: the id of the first rule entry named in a validation error."""
    for err in e.errors():
        loc = err["loc"]
        if len(loc) >= 2 and loc[0] == "rules" and isinstance(loc[1], int):
            try:
                raw = data["rules"][loc[1]]
            except (KeyError, IndexError, TypeError):
                return None
            if isinstance(raw, dict) and isinstance(raw.get("id"), str):
                return raw["id"]
            return None
    return None


def parse_ruleset(data: Any, *, name: str | None = None) -> RuleSet:
    """Validate a decoded rule set document and build a RuleSet.

    Args:
        data: Mapping with ``name``/``rules`` keys, or a bare list of rules.
        name: Fallback name when the document does not set one.

    Raises:
        MalformedRuleError: On missing or invalid fields, duplicate ids, or
            a pattern that does not compile.
    """
    if data is None:
        data = {}
    if isinstance(data, list):
        data = {"rules": data}
    if not isinstance(data, dict):
        msg = f"expected a mapping or a list of rules, got {type(data).__name__}"
        raise MalformedRuleError(msg)

    try:
        spec = RuleSetSpec.model_validate(data)
    except ValidationError as exc:
        raise MalformedRuleError(_safe_error_summary(exc), rule_id=_offending_id(data, exc)) from exc

    rules = [r.to_rule() for r in spec.rules]
    ruleset = RuleSet(name=spec.name or name or "rules", rules=tuple(rules))

    for rule in ruleset:
        try:
            compile_matcher(rule)
        except PatternError as exc:
            raise MalformedRuleError(f"invalid pattern syntax: {exc.reason}", rule_id=rule.id) from exc

    log.debug("Loaded rule set %r with %d rule(s)", ruleset.name, len(ruleset))
    return ruleset


def _decode(text: str, suffix: str) -> Any:
    if suffix == ".json":
        return json.loads(text)
    if suffix == ".toml":
        return tomllib.loads(text)
    return yaml.safe_load(text)


def load_ruleset(path: Path | str) -> RuleSet:
    """Read and validate a rule set file (YAML, JSON, or TOML by suffix).

    Raises:
        MalformedRuleError: If the file cannot be decoded or fails validation.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    try:
        data = _decode(path.read_text(encoding="utf-8"), path.suffix.lower())
    except (UnicodeDecodeError, json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
        msg = f"cannot decode {path.name}: {exc}"
        raise MalformedRuleError(msg) from exc
    return parse_ruleset(data, name=path.stem)


def load_builtin_ruleset() -> RuleSet:
    """Load the Qt client rule set bundled with the package."""
    return load_ruleset(BUILTIN_RULESET)
