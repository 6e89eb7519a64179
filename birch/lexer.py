from __future__ import annotations

import re
from dataclasses import dataclass

from birch.ast import INT64_MAX, INT64_MIN

_INT_RE = re.compile(r"[+-]?[0-9]+")

# Unicode White_Space. Narrower than str.isspace, which also splits on \x1c-\x1f.
_WHITESPACE = frozenset(
    "\t\n\v\f\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


@dataclass(frozen=True, slots=True)
class Token:
    kind: str
    text: str
    line: int
    col: int


def tokenize(src: str) -> list[Token]:
    """Split ``src`` on whitespace, tagging each word as INT, LBRACKET, RBRACKET or WORD."""
    tokens: list[Token] = []
    line, col = 1, 1
    i, n = 0, len(src)
    while i < n:
        ch = src[i]
        if ch in _WHITESPACE:
            if ch == "\n":
                line += 1
                col = 1
            else:
                col += 1
            i += 1
            continue
        j = i
        while j < n and src[j] not in _WHITESPACE:
            j += 1
        text = src[i:j]
        tokens.append(Token(kind=_classify(text), text=text, line=line, col=col))
        col += j - i
        i = j
    return tokens


def parse_int(text: str) -> int | None:
    """Signed 64-bit decimal literal, or None when ``text`` is not one."""
    if not _INT_RE.fullmatch(text):
        return None
    value = int(text)
    if value < INT64_MIN or value > INT64_MAX:
        return None
    return value


def _classify(text: str) -> str:
    if text == "[":
        return "LBRACKET"
    if text == "]":
        return "RBRACKET"
    if parse_int(text) is not None:
        return "INT"
    return "WORD"
