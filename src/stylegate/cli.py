# SPDX-License-Identifier: MIT
"""stylegate command line — load a rule set, check sources, gate on severity.

Usage:
    stylegate src/ include/widget.h
    stylegate --rules team-style.yml --profile strict src/
    git diff origin/main | stylegate --diff -

Environment variables:
    STYLEGATE_PROFILE  — gate profile when --profile is not given (default: default)
    STYLEGATE_RULES    — rule set file when --rules is not given (default: built-in)

Exit status: 0 clean, 1 gate failed, 2 configuration, usage, or file read error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from stylegate.report import render_json, render_text, summarize
from stylegate.rules import (
    Checker,
    FileReport,
    RuleSet,
    StyleGateError,
    check_gate,
    load_builtin_ruleset,
    load_profile,
    load_ruleset,
)
from stylegate.rules.config import PROFILES, parse_extensions, resolve_rules_path
from stylegate.rules.engine import STDIN_PATH

EXIT_OK = 0
EXIT_GATE_FAILED = 1
EXIT_ERROR = 2

log = logging.getLogger("stylegate")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stylegate",
        description="Check source files against a line-local style rule set.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Files or directories to check (directories are scanned recursively); '-' reads stdin.",
    )
    parser.add_argument(
        "--rules",
        default=None,
        help="Rule set file (.yml, .json, .toml). Overrides STYLEGATE_RULES; default: built-in Qt client rules.",
    )
    parser.add_argument(
        "--profile",
        choices=sorted(PROFILES),
        default=None,
        help="Gate profile (overrides STYLEGATE_PROFILE env var)",
    )
    parser.add_argument("--format", choices=["text", "json"], default="text", dest="output_format")
    parser.add_argument(
        "--diff",
        metavar="FILE",
        default=None,
        help="Check only the lines added by a unified diff ('-' reads stdin).",
    )
    parser.add_argument(
        "--ext",
        default=None,
        help="Comma-separated extensions scanned in directories (default: C/C++ sources and headers).",
    )
    parser.add_argument("--jobs", "-j", type=int, default=1, help="Check files on N threads.")
    parser.add_argument("--show-match", action="store_true", help="Print the matched text under each violation.")
    parser.add_argument("--list-rules", action="store_true", help="Print the loaded rules and exit.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging on stderr.")
    return parser


def _load_rules(cli_rules: str | None) -> RuleSet:
    rules_path = resolve_rules_path(cli_rules)
    if rules_path is None:
        return load_builtin_ruleset()
    return load_ruleset(Path(rules_path))


def _list_rules(ruleset: RuleSet, out: TextIO) -> None:
    print(f"{ruleset.name}: {len(ruleset)} rule(s)", file=out)
    for rule in ruleset.ordered():
        category = f" ({rule.category})" if rule.category else ""
        print(f"  [{rule.id}] {rule.severity.name.lower()}{category}: {rule.message}", file=out)


def _diff_reports(checker: Checker, diff_text: str) -> list[FileReport]:
    by_path: dict[str, FileReport] = {}
    for v in checker.check_diff(diff_text):
        by_path.setdefault(v.path, FileReport(path=v.path)).violations.append(v)
    return list(by_path.values())


def _collect(checker: Checker, args: argparse.Namespace, stdin: TextIO) -> list[FileReport]:
    if args.diff is not None:
        if args.diff == "-":
            diff_text = stdin.read()
        else:
            try:
                diff_text = Path(args.diff).read_text(encoding="utf-8", errors="replace")
            except OSError as exc:
                return [FileReport(path=args.diff, error=exc.strerror or str(exc))]
        return _diff_reports(checker, diff_text)

    reports: list[FileReport] = []
    file_paths = [p for p in args.paths if p != "-"]
    if "-" in args.paths:
        reports.append(FileReport(path=STDIN_PATH, violations=list(checker.check_lines(stdin, STDIN_PATH))))
    reports.extend(
        checker.check_paths(file_paths, extensions=parse_extensions(args.ext), jobs=args.jobs)
    )
    return reports


def main(
    argv: Sequence[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Run the checker and return the process exit status."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=stderr,
    )

    if args.jobs < 1:
        print("error: --jobs must be at least 1", file=stderr)
        return EXIT_ERROR

    try:
        profile = load_profile(args.profile)
        ruleset = _load_rules(args.rules)
    except (StyleGateError, ValueError) as exc:
        print(f"error: {exc}", file=stderr)
        return EXIT_ERROR
    except OSError as exc:
        print(f"error: cannot read rule set {exc.filename}: {exc.strerror}", file=stderr)
        return EXIT_ERROR

    log.debug("Rule set %r, profile %s (fail on %s)", ruleset.name, profile.name, profile.fail_on.name)

    if args.list_rules:
        _list_rules(ruleset, stdout)
        return EXIT_OK

    if not args.paths and args.diff is None:
        print("error: nothing to check; pass paths, '-' or --diff", file=stderr)
        return EXIT_ERROR

    checker = Checker(ruleset)
    try:
        reports = _collect(checker, args, stdin)
    except StyleGateError as exc:
        print(f"error: {exc}", file=stderr)
        return EXIT_ERROR

    if args.output_format == "json":
        print(render_json(reports), file=stdout)
    else:
        for line in render_text(reports, show_match=args.show_match):
            print(line, file=stdout)
        print(summarize(reports), file=stderr)

    if any(r.error is not None for r in reports):
        return EXIT_ERROR
    if check_gate((v for r in reports for v in r.violations), profile):
        return EXIT_GATE_FAILED
    return EXIT_OK
