"""Reader layer: turns raw ``name = value`` lines into Options."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from .errors import ConfSyntaxError, LineTooLongError
from .model import DEFAULT_DIALECT, Dialect, Option, name_problem

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Line classification
# ---------------------------------------------------------------------------

def is_skippable(line: str, dialect: Dialect = DEFAULT_DIALECT) -> bool:
    """True for comment lines and blank lines.

    Only the very first character is checked for the comment marker, so an
    indented ``#`` is not a comment.
    """
    if not line.strip():
        return True
    return line[0] == dialect.comment


# ---------------------------------------------------------------------------
# parse_line
# ---------------------------------------------------------------------------

def _at_end(line: str, i: int) -> bool:
    return i >= len(line) or line[i] == "\n"


def parse_line(
    line: str,
    dialect: Dialect = DEFAULT_DIALECT,
    lineno: int | None = None,
) -> Option:
    """Scan one line into a scalar or array Option.

    - Spaces outside quotes are dropped everywhere, inside quotes kept.
    - The first unquoted delimiter ends the name; a second one is an error.
      A delimiter inside quotes is part of the value.
    - The name must be writable again: no tabs or other whitespace, and no
      leading comment character.
    - A closing ``"`` or ``)`` must be the last character on the line.
    - ``(a, b, c)`` as the whole value yields an array; empty tokens are
      discarded.

    Raises ConfSyntaxError for anything else.
    """

    def fail(reason: str) -> ConfSyntaxError:
        logger.debug("rejected line %r: %s", line, reason)
        return ConfSyntaxError(reason, line, lineno)

    limit = dialect.max_line_length
    if limit is not None and len(line.rstrip("\n")) > limit:
        logger.debug("rejected line of %d characters (limit %d)", len(line), limit)
        raise LineTooLongError(f"line longer than {limit} characters", line[:limit], lineno)

    name: list[str] = []
    value: list[str] = []
    tokens: list[str] | None = None  # None until '(' opens an array
    have_name = in_quote = array_closed = False

    i = 0
    while i < len(line):
        c = line[i]
        i += 1

        if c == "\n":
            break

        if c == '"':
            if not have_name:
                raise fail("unexpected '\"' before delimiter")
            if tokens is not None:
                raise fail("unexpected '\"' inside array")
            if in_quote and not _at_end(line, i):
                raise fail(f"unexpected {line[i]!r} after closing '\"'")
            in_quote = not in_quote
        elif in_quote:
            value.append(c)
        elif c == " ":
            continue
        elif c == dialect.delim:
            if have_name:
                raise fail(f"unexpected {dialect.delim!r}")
            have_name = True
        elif not have_name:
            name.append(c)
        elif tokens is not None:
            if c == ",":
                tokens.append("".join(value))
                value = []
            elif c == ")":
                if not _at_end(line, i):
                    raise fail(f"unexpected {line[i]!r} after ')'")
                tokens.append("".join(value))
                value = []
                array_closed = True
            else:
                value.append(c)
        elif c == "(" and not value:
            tokens = []
        else:
            value.append(c)

    if in_quote:
        raise fail("unterminated quote")
    if not have_name:
        raise fail(f"missing {dialect.delim!r}")
    key = "".join(name)
    problem = name_problem(key, dialect)
    if problem is not None:
        raise fail(problem)

    if tokens is None:
        return Option.scalar(key, "".join(value))

    if not array_closed:
        raise fail("unterminated array")
    tokens = [t for t in tokens if t]
    if not tokens:
        raise fail("empty array")
    return Option.array(key, tokens)


# ---------------------------------------------------------------------------
# Multi-line input
# ---------------------------------------------------------------------------

def iter_options(
    lines: Iterable[str],
    dialect: Dialect = DEFAULT_DIALECT,
    path: str | None = None,
) -> Iterator[Option]:
    """Parse every non-comment line of *lines*, stopping at the first error.

    Errors are re-raised with *path* and the 1-based line number attached.
    """
    for lineno, line in enumerate(lines, 1):
        if is_skippable(line, dialect):
            continue
        try:
            yield parse_line(line, dialect)
        except ConfSyntaxError as exc:
            raise exc.located(path, lineno) from None
