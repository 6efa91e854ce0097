# SPDX-License-Identifier: MIT
"""Conformance checker — applies a RuleSet line by line and yields violations."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from stylegate.diff import added_lines, split_lines
from stylegate.rules.base import Rule, RuleSet, Violation
from stylegate.rules.config import DEFAULT_EXTENSIONS
from stylegate.rules.matchers import Matcher, compile_matcher
from stylegate.rules.tokens import tokenize

if TYPE_CHECKING:
    from stylegate.rules.config import ProfileConfig

log = logging.getLogger(__name__)

STDIN_PATH = "<stdin>"

_SUPPRESS_RE = re.compile(r"stylegate:\s*ignore(?:\[([^\]]*)\])?")

EXCLUDED_DIRS = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        ".tox",
        ".venv",
        "__pycache__",
        "node_modules",
        "build",
        "dist",
    }
)


@dataclass
class FileReport:
    """Outcome of checking one file: its violations, or the I/O error that prevented it."""

    path: str
    violations: list[Violation] = field(default_factory=list)
    error: str | None = None


def _suppressed_ids(line: str) -> frozenset[str] | None:
    """Rule ids silenced by an inline comment marker; an empty set silences every rule.

    Only comments count: a marker inside a string literal is code, not an
    instruction. ``ignore[]`` names no rules and silences nothing.
    """
    if "stylegate" not in line:
        return None
    for tok in tokenize(line):
        if tok.kind != "comment":
            continue
        m = _SUPPRESS_RE.search(tok.text)
        if m is None:
            continue
        if m.group(1) is None:
            return frozenset()
        ids = frozenset(part.strip() for part in m.group(1).split(",") if part.strip())
        return ids or None
    return None


class Checker:
    """Evaluates a RuleSet against source lines.

    Holds only the RuleSet and the matchers compiled from it, so one
    Checker may be shared by concurrent file checks.
    """

    def __init__(self, ruleset: RuleSet) -> None:
        self.ruleset = ruleset
        self._ordered: list[Rule] = ruleset.ordered()
        self._matchers: dict[str, Matcher] = {}

    def _matcher(self, rule: Rule) -> Matcher:
        matcher = self._matchers.get(rule.id)
        if matcher is None:
            # PatternError propagates: a bad pattern aborts the whole run.
            matcher = compile_matcher(rule)
            self._matchers[rule.id] = matcher
        return matcher

    def check_lines(self, lines: Iterable[str], path: str = STDIN_PATH) -> Iterator[Violation]:
        """Lazily yield violations for *lines*, numbered from 1, in rule-id order per line."""
        rules = [r for r in self._ordered if r.applies_to(path)]
        if not rules:
            return
        for lineno, raw in enumerate(lines, start=1):
            yield from self._check_line(rules, raw.rstrip("\r\n"), lineno, path)

    def _check_line(self, rules: list[Rule], line: str, lineno: int, path: str) -> Iterator[Violation]:
        suppressed = _suppressed_ids(line)
        if suppressed is not None and not suppressed:
            return
        for rule in rules:
            if suppressed and rule.id in suppressed:
                continue
            match = self._matcher(rule).search(line)
            if match is None:
                continue
            yield Violation(
                rule_id=rule.id,
                severity=rule.severity,
                message=rule.message,
                path=path,
                line=lineno,
                text=match.text,
                column=match.column,
            )

    def check_file(self, path: Path | str) -> FileReport:
        """Check one file. Read failures are reported, not raised."""
        display = str(path)
        try:
            text = Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            log.debug("Cannot read %s: %s", display, exc)
            return FileReport(path=display, error=exc.strerror or str(exc))
        return FileReport(path=display, violations=list(self.check_lines(split_lines(text), display)))

    def check_paths(
        self,
        paths: Iterable[Path | str],
        *,
        extensions: tuple[str, ...] = DEFAULT_EXTENSIONS,
        jobs: int = 1,
    ) -> Iterator[FileReport]:
        """Check files and directory trees, yielding one report per file in input order."""
        files = list(iter_source_files(paths, extensions))
        log.info("Checking %d file(s) against %d rule(s)", len(files), len(self.ruleset))
        if jobs <= 1 or len(files) <= 1:
            for f in files:
                yield self.check_file(f)
            return
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            yield from pool.map(self.check_file, files)

    def check_diff(self, diff_text: str) -> Iterator[Violation]:
        """Yield violations for the lines a unified diff adds, at their new line numbers."""
        for added in added_lines(diff_text):
            rules = [r for r in self._ordered if r.applies_to(added.path)]
            yield from self._check_line(rules, added.content, added.line, added.path)


def iter_source_files(paths: Iterable[Path | str], extensions: tuple[str, ...]) -> Iterator[Path]:
    """Expand directories recursively (sorted, filtered by suffix); pass files through.

    Explicit file paths are yielded whatever their suffix, and so are paths
    that do not exist, so the caller reports them.
    """
    for p in paths:
        p = Path(p)
        if not p.is_dir():
            yield p
            continue
        for fp in sorted(p.rglob("*")):
            if not fp.is_file() or fp.suffix.lower() not in extensions:
                continue
            if any(part in EXCLUDED_DIRS for part in fp.relative_to(p).parts):
                continue
            yield fp


def check_gate(violations: Iterable[Violation], config: ProfileConfig) -> bool:
    """Return True if any violation meets or exceeds the profile's fail_on threshold."""
    return any(v.severity.value >= config.fail_on.value for v in violations)
