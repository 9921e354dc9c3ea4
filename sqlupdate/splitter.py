"""
Line‑oriented splitting of a SQL text file into individual statements.

This is deliberately *not* a SQL parser: quoting, literals and inline
comments are not understood.  Two modes exist:

• ``separator=None``   – every non‑blank, non‑``#`` line is one statement.
• ``separator="..."``  – lines are concatenated until the separator is seen;
  lines starting with ``#`` or ``--`` discard the pending statement.
"""
from __future__ import annotations

import re
import typing as t

_LINE_BREAK_RE = re.compile(r"[\r\n]+")

# Space and all ASCII control characters, as stripped by the reference tool.
_TRIM_CHARS = "".join(chr(c) for c in range(0x21))

COMMENT_PREFIXES: tuple[str, ...] = ("#", "--")


def lines(text: str) -> t.Iterator[str]:
    """Yield the non‑empty lines of *text*; any run of CR/LF is one break."""
    for token in _LINE_BREAK_RE.split(text):
        if token:
            yield token


def split_sql(text: str, separator: str | None = None) -> list[str]:
    """
    Split *text* into SQL statements, in order of appearance.

    Without a *separator* each line is trimmed and returned unless it is
    blank or starts with ``#``.  Lines starting with ``--`` are kept in this
    mode; only separator mode treats them as comments.

    With a *separator* (possibly empty) the raw, untrimmed lines are joined
    without any newline until the first occurrence of *separator* on a line;
    the text before it completes the statement and the rest of that line is
    dropped.  Statements are returned untrimmed, empty ones included, and
    text left over after the last separator is discarded.
    """
    if separator is None:
        return _split_lines(text)
    return _split_separated(text, separator)


def _split_lines(text: str) -> list[str]:
    statements: list[str] = []
    for line in lines(text):
        token = line.strip(_TRIM_CHARS)
        # `--` is not a comment here (kept for compatibility with old files)
        if token and not token.startswith("#"):
            statements.append(token)
    return statements


def _split_separated(text: str, separator: str) -> list[str]:
    statements: list[str] = []
    buf: list[str] = []
    for line in lines(text):
        if line.startswith(COMMENT_PREFIXES):
            buf.clear()
            continue
        pos = line.find(separator)
        if pos >= 0:
            buf.append(line[:pos])
            statements.append("".join(buf))
            buf.clear()
        else:
            buf.append(line)
    return statements
