# SPDX-License-Identifier: MIT
"""Line tokenizer for C-family source — the basis of structural token patterns."""

from __future__ import annotations

import re
from dataclasses import dataclass

TOKEN_KINDS = frozenset({"ident", "number", "string", "char", "comment", "op", "other"})

# Longest operators first so "<<=" wins over "<<" and "<".
_OPERATORS = sorted(
    [
        "::", "->*", "->", ".*", "...", "++", "--", "<<=", ">>=", "<=>", "<<", ">>",
        "<=", ">=", "==", "!=", "&&", "||", "+=", "-=", "*=", "/=", "%=", "&=",
        "|=", "^=", "##",
    ],
    key=len,
    reverse=True,
)

_TOKEN_RE = re.compile(
    "|".join(
        [
            r"(?P<comment>//.*|/\*.*?(?:\*/|$))",
            r"(?P<string>(?:u8|[uUL])?\"(?:\\.|[^\"\\])*(?:\"|\\?$))",
            r"(?P<char>(?:u8|[uUL])?'(?:\\.|[^'\\])*(?:'|\\?$))",
            r"(?P<number>(?:0[xX][0-9A-Fa-f']+|\d[\d']*\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)[uUlLfF]*)",
            r"(?P<ident>[A-Za-z_]\w*)",
            "(?P<op>" + "|".join(re.escape(op) for op in _OPERATORS) + r"|[{}()\[\];,<>=+\-*/%&|^!~?:.#])",
            r"(?P<other>\S)",
        ]
    )
)


@dataclass(frozen=True)
class Token:
    """A lexical token of one source line with its character span."""

    kind: str
    text: str
    start: int
    end: int


def tokenize(line: str) -> list[Token]:
    """Split a single source line into tokens. Never raises; whitespace is dropped."""
    tokens: list[Token] = []
    pos = 0
    length = len(line)
    while pos < length:
        if line[pos].isspace():
            pos += 1
            continue
        match = _TOKEN_RE.match(line, pos)
        if match is None:  # pragma: no cover - the "other" branch matches any non-space
            tokens.append(Token("other", line[pos], pos, pos + 1))
            pos += 1
            continue
        kind = match.lastgroup or "other"
        tokens.append(Token(kind, match.group(0), match.start(), match.end()))
        pos = match.end()
    return tokens
