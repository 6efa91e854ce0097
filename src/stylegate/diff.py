# SPDX-License-Identifier: MIT
"""Unified diff reader — extract the added lines a change introduces."""

from __future__ import annotations

import re
from typing import NamedTuple

_FILE_HEADER_RE = re.compile(r"^diff --git a/.+ b/(.+)$")
_NEW_PATH_RE = re.compile(r"^\+\+\+ (?:b/)?(.+?)(?:\t.*)?$")
_HUNK_HEADER_RE = re.compile(r"^@@ -\d+(?:,\d+)? \+(\d+)(?:,\d+)? @@")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


class AddedLine(NamedTuple):
    path: str
    line: int
    content: str


def split_lines(text: str) -> list[str]:
    """Split on \\n, \\r\\n and \\r only; form feeds and Unicode separators stay in the line."""
    lines = _LINE_BREAK_RE.split(text)
    if lines and not lines[-1]:
        lines.pop()
    return lines


def added_lines(diff_text: str) -> list[AddedLine]:
    """Return every ``+`` line inside a hunk with its new-side line number.

    Deleted files (``+++ /dev/null``) contribute nothing. Lines that do not
    fit the unified diff grammar end the current hunk; malformed input
    never raises.
    """
    results: list[AddedLine] = []
    path: str | None = None
    new_line = 0
    in_hunk = False

    for line in split_lines(diff_text):
        header = _FILE_HEADER_RE.match(line)
        if header:
            path = header.group(1)
            in_hunk = False
            continue

        if not in_hunk and line.startswith("+++ "):
            if line.startswith("+++ /dev/null"):
                path = None
            else:
                target = _NEW_PATH_RE.match(line)
                if target:
                    path = target.group(1)
            continue

        hunk = _HUNK_HEADER_RE.match(line)
        if hunk:
            new_line = int(hunk.group(1))
            in_hunk = path is not None
            continue

        if not in_hunk:
            continue

        if line.startswith("+"):
            assert path is not None
            results.append(AddedLine(path, new_line, line[1:]))
            new_line += 1
        elif line.startswith(" ") or not line:
            # Some tools strip the lone space of an empty context line.
            new_line += 1
        elif line.startswith("-") or line.startswith("\\"):
            # Removed lines and "\ No newline at end of file" leave the new side alone.
            continue
        else:
            in_hunk = False

    return results
