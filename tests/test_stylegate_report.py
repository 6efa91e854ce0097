# SPDX-License-Identifier: MIT
"""Tests for stylegate.report — text and JSON rendering of check results."""

from __future__ import annotations

import json
from dataclasses import replace

from stylegate.report import format_violation, render_json, render_text, summarize
from stylegate.rules.base import RuleSeverity, Violation
from stylegate.rules.engine import FileReport


def _v(rule_id: str, line: int, severity: RuleSeverity = RuleSeverity.MANDATORY, text: str = "x") -> Violation:
    return Violation(
        rule_id=rule_id,
        severity=severity,
        message=f"message for {rule_id}",
        path="src/w.cpp",
        line=line,
        text=text,
        column=2,
    )


class TestFormatViolation:
    def test_format(self) -> None:
        v = Violation(
            rule_id="6.6",
            severity=RuleSeverity.MANDATORY,
            message="no space before parameter list",
            path="widget.h",
            line=12,
            text="void setColor (",
        )
        assert format_violation(v) == "widget.h:12: [6.6] no space before parameter list"


class TestRenderText:
    def test_violations_then_errors(self) -> None:
        reports = [
            FileReport(path="missing.cpp", error="No such file or directory"),
            FileReport(path="src/w.cpp", violations=[_v("3.1", 1), _v("8.1", 4)]),
        ]
        assert render_text(reports) == [
            "src/w.cpp:1: [3.1] message for 3.1",
            "src/w.cpp:4: [8.1] message for 8.1",
            "missing.cpp: error: No such file or directory",
        ]

    def test_show_match_indents_to_column(self) -> None:
        reports = [FileReport(path="src/w.cpp", violations=[_v("8.1", 4, text="NULL")])]
        lines = render_text(reports, show_match=True)
        assert lines[1] == "      NULL"

    def test_show_match_strips_bidi_controls(self) -> None:
        reports = [FileReport(path="src/w.cpp", violations=[_v("8.1", 4, text="NULL‮//")])]
        lines = render_text(reports, show_match=True)
        assert "‮" not in lines[1]

    def test_path_strips_bidi_controls(self) -> None:
        path = "evil\u202egnp.h"
        v = replace(_v("8.1", 4), path=path)
        reports = [FileReport(path=path, violations=[v]), FileReport(path=path, error="Permission denied")]
        lines = render_text(reports)
        assert len(lines) == 2
        assert all("\u202e" not in line for line in lines)
        assert lines[0].endswith(":4: [8.1] message for 8.1")

    def test_empty(self) -> None:
        assert render_text([]) == []


class TestSummarize:
    def test_counts(self) -> None:
        reports = [
            FileReport(path="a.cpp", violations=[_v("3.1", 1), _v("7.1", 2, RuleSeverity.CONSIDER)]),
            FileReport(path="b.cpp"),
            FileReport(path="c.cpp", error="denied"),
        ]
        assert summarize(reports) == "3 file(s) checked, 2 violation(s) (1 mandatory, 1 consider), 1 unreadable"

    def test_clean(self) -> None:
        assert summarize([FileReport(path="a.cpp")]) == "1 file(s) checked, 0 violation(s)"


class TestRenderJson:
    def test_document_shape(self) -> None:
        reports = [
            FileReport(path="src/w.cpp", violations=[_v("8.1", 4, RuleSeverity.EXCEPTION, text="NULL")]),
            FileReport(path="gone.cpp", error="No such file or directory"),
        ]
        doc = json.loads(render_json(reports))
        assert doc["files"][0] == {
            "path": "src/w.cpp",
            "error": None,
            "violations": [
                {
                    "rule_id": "8.1",
                    "severity": "exception",
                    "message": "message for 8.1",
                    "line": 4,
                    "column": 2,
                    "text": "NULL",
                }
            ],
        }
        assert doc["files"][1]["error"] == "No such file or directory"
        assert doc["summary"] == {
            "files": 2,
            "violations": 1,
            "unreadable": 1,
            "by_severity": {"mandatory": 0, "consider": 0, "exception": 1},
        }

    def test_zero_width_removed_from_text(self) -> None:
        reports = [FileReport(path="a.cpp", violations=[_v("8.1", 1, text="NU​LL")])]
        doc = json.loads(render_json(reports))
        assert "​" not in doc["files"][0]["violations"][0]["text"]

    def test_path_strips_bidi_controls(self) -> None:
        reports = [FileReport(path="evil\u202egnp.h", violations=[_v("8.1", 1)])]
        doc = json.loads(render_json(reports))
        assert "\u202e" not in doc["files"][0]["path"]
