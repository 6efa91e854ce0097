# SPDX-License-Identifier: MIT
"""Matcher compilation — literal, regex, and structural token patterns."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NamedTuple, Protocol, runtime_checkable

from stylegate.rules.base import MatcherKind, Rule
from stylegate.rules.errors import PatternError
from stylegate.rules.tokens import Token, tokenize


class Match(NamedTuple):
    column: int
    text: str


@runtime_checkable
class Matcher(Protocol):
    """Protocol every compiled matcher satisfies."""

    def search(self, line: str) -> Match | None: ...


@dataclass(frozen=True)
class LiteralMatcher:
    needle: str

    def search(self, line: str) -> Match | None:
        col = line.find(self.needle)
        if col < 0:
            return None
        return Match(col, line[col : col + len(self.needle)])


@dataclass(frozen=True)
class RegexMatcher:
    regex: re.Pattern[str]

    def search(self, line: str) -> Match | None:
        m = self.regex.search(line)
        if m is None:
            return None
        return Match(m.start(), m.group(0))


# --- Token patterns ---

_ANY = "*"
_GAP = "..."
_CLASS_RE = re.compile(r"^<(\w+)>$")
_TOKEN_CLASSES = frozenset({"ident", "number", "string", "char", "op"})


@dataclass(frozen=True)
class _Element:
    """One element of a compiled token pattern."""

    op: str  # "any" | "gap" | "kind" | "regex" | "text"
    value: str = ""
    regex: re.Pattern[str] | None = None

    def accepts(self, tok: Token, ignore_case: bool) -> bool:
        if self.op == "any":
            return True
        if self.op == "kind":
            return tok.kind == self.value
        if self.op == "regex":
            assert self.regex is not None
            return self.regex.fullmatch(tok.text) is not None
        if ignore_case:
            return tok.text.casefold() == self.value.casefold()
        return tok.text == self.value


@dataclass(frozen=True)
class TokenMatcher:
    elements: tuple[_Element, ...]
    ignore_case: bool = False

    def search(self, line: str) -> Match | None:
        tokens = [t for t in tokenize(line) if t.kind != "comment"]
        for start in range(len(tokens)):
            end = self._match_from(tokens, start, 0)
            if end is not None and end > start:
                first, last = tokens[start], tokens[end - 1]
                return Match(first.start, line[first.start : last.end])
        return None

    def _match_from(self, tokens: list[Token], pos: int, idx: int) -> int | None:
        """Return the end token index if elements[idx:] match at tokens[pos:]."""
        if idx == len(self.elements):
            return pos
        elem = self.elements[idx]
        if elem.op == "gap":
            # Shortest gap first keeps the reported span tight.
            for skip in range(pos, len(tokens) + 1):
                end = self._match_from(tokens, skip, idx + 1)
                if end is not None:
                    return end
            return None
        if pos < len(tokens) and elem.accepts(tokens[pos], self.ignore_case):
            return self._match_from(tokens, pos + 1, idx + 1)
        return None


def _compile_token_pattern(rule: Rule) -> TokenMatcher:
    elements: list[_Element] = []
    for chunk in rule.pattern.split():
        if chunk == _ANY:
            elements.append(_Element("any"))
        elif chunk == _GAP:
            if elements and elements[-1].op == "gap":
                continue
            elements.append(_Element("gap"))
        elif class_match := _CLASS_RE.match(chunk):
            kind = class_match.group(1)
            if kind not in _TOKEN_CLASSES:
                reason = f"unknown token class <{kind}>; expected one of {sorted(_TOKEN_CLASSES)}"
                raise PatternError(rule.id, rule.pattern, reason)
            elements.append(_Element("kind", kind))
        elif len(chunk) > 2 and chunk.startswith("/") and chunk.endswith("/"):
            flags = re.IGNORECASE if rule.ignore_case else 0
            try:
                regex = re.compile(chunk[1:-1], flags)
            except re.error as exc:
                raise PatternError(rule.id, rule.pattern, f"bad token regex {chunk}: {exc}") from exc
            elements.append(_Element("regex", chunk, regex))
        else:
            elements.extend(_Element("text", tok.text) for tok in tokenize(chunk))
    # Leading and trailing gaps never change whether a line matches.
    while elements and elements[0].op == "gap":
        elements.pop(0)
    while elements and elements[-1].op == "gap":
        elements.pop()
    if not elements:
        raise PatternError(rule.id, rule.pattern, "token pattern must match at least one token")
    return TokenMatcher(elements=tuple(elements), ignore_case=rule.ignore_case)


def compile_matcher(rule: Rule) -> Matcher:
    """Build the matcher for *rule*.

    Raises:
        PatternError: If the pattern is empty or syntactically invalid,
            or a token pattern matches no token at all.
    """
    if not rule.pattern:
        raise PatternError(rule.id, rule.pattern, "pattern must not be empty")

    if rule.kind == MatcherKind.LITERAL:
        if rule.ignore_case:
            return RegexMatcher(regex=re.compile(re.escape(rule.pattern), re.IGNORECASE))
        return LiteralMatcher(needle=rule.pattern)

    if rule.kind == MatcherKind.REGEX:
        flags = re.IGNORECASE if rule.ignore_case else 0
        try:
            regex = re.compile(rule.pattern, flags)
        except re.error as exc:
            raise PatternError(rule.id, rule.pattern, str(exc)) from exc
        # Zero-width matches (``^\s*$``, ``\b``) are reported by column with empty text.
        return RegexMatcher(regex=regex)

    if rule.kind == MatcherKind.TOKENS:
        return _compile_token_pattern(rule)

    raise PatternError(rule.id, rule.pattern, f"unknown matcher kind {rule.kind!r}")
