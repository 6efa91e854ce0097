# SPDX-License-Identifier: MIT
"""Violation rendering — compiler-style text lines and a JSON document."""

from __future__ import annotations

import json
from collections import Counter
from collections.abc import Iterable
from typing import Any

import navi_sanitize

from stylegate.rules.base import RuleSeverity, Violation
from stylegate.rules.engine import FileReport


def _clean(text: str) -> str:
    """Neutralize invisible characters, bidi overrides, and homoglyphs before display.

    Source lines can carry Trojan Source style bidi controls; echoing them
    raw would make the terminal show something other than the code.
    """
    return navi_sanitize.clean(text)


def format_violation(v: Violation) -> str:
    """Render one violation as ``<path>:<line>: [<rule-id>] <message>``."""
    return f"{_clean(v.path)}:{v.line}: [{v.rule_id}] {v.message}"


def render_text(reports: Iterable[FileReport], *, show_match: bool = False) -> list[str]:
    """Render violations in report order, then one line per unreadable file."""
    lines: list[str] = []
    errors: list[str] = []
    for report in reports:
        if report.error is not None:
            errors.append(f"{_clean(report.path)}: error: {report.error}")
            continue
        for v in report.violations:
            lines.append(format_violation(v))
            if show_match:
                lines.append(f"    {' ' * v.column}{_clean(v.text)}")
    return lines + errors


def severity_counts(reports: Iterable[FileReport]) -> dict[str, int]:
    counts = Counter(v.severity for r in reports for v in r.violations)
    return {sev.name.lower(): counts.get(sev, 0) for sev in sorted(RuleSeverity, reverse=True)}


def summarize(reports: list[FileReport]) -> str:
    """One-line human summary: files, violations per severity, unreadable files."""
    total = sum(len(r.violations) for r in reports)
    unreadable = sum(1 for r in reports if r.error is not None)
    counts = severity_counts(reports)
    detail = ", ".join(f"{n} {name}" for name, n in counts.items() if n)
    text = f"{len(reports)} file(s) checked, {total} violation(s)"
    if detail:
        text += f" ({detail})"
    if unreadable:
        text += f", {unreadable} unreadable"
    return text


def _violation_dict(v: Violation) -> dict[str, Any]:
    return {
        "rule_id": v.rule_id,
        "severity": v.severity.name.lower(),
        "message": v.message,
        "line": v.line,
        "column": v.column,
        "text": _clean(v.text),
    }


def render_json(reports: list[FileReport]) -> str:
    """Render reports as a JSON document with a per-severity summary."""
    doc = {
        "files": [
            {
                "path": _clean(r.path),
                "error": r.error,
                "violations": [_violation_dict(v) for v in r.violations],
            }
            for r in reports
        ],
        "summary": {
            "files": len(reports),
            "violations": sum(len(r.violations) for r in reports),
            "unreadable": sum(1 for r in reports if r.error is not None),
            "by_severity": severity_counts(reports),
        },
    }
    return json.dumps(doc, indent=2)
