"""Translate selection file lines into literal names or wildcard regexes.

Function names and file names use different wildcard markers:

- function lines use ``#`` for "any sequence". Parentheses and ``*`` are
  part of a signature such as ``double getnorm(int, double *)`` and are
  escaped before the marker is expanded.
- file lines use ``*`` for "any sequence" and ``?`` for "at most one
  character". Nothing else is escaped, so ``.`` or ``+`` in a file line
  keep their regex meaning.

Either way a wildcard line must match the whole candidate.
"""

from __future__ import annotations

import re

from .types import Literal, RegexPattern, SectionKind, SelectionPattern

FUNCTION_WILDCARD = "#"
FILE_WILDCARD_ANY = "*"
FILE_WILDCARD_ONE = "?"

_OPEN_PAREN_SPACE = re.compile(r"\(\s")
_SPACE_CLOSE_PAREN = re.compile(r"\s\)")


def normalize_function_line(line: str) -> str:
    """Collapse ``"( "`` and ``" )"`` left over from pretty-printed signatures."""
    line = _OPEN_PAREN_SPACE.sub("(", line)
    return _SPACE_CLOSE_PAREN.sub(")", line)


def function_wildcard_to_regex(line: str) -> str:
    escaped = line.replace("(", r"\(").replace(")", r"\)").replace("*", r"\*")
    return escaped.replace(FUNCTION_WILDCARD, "(.*)")


def file_wildcard_to_regex(line: str) -> str:
    return line.replace(FILE_WILDCARD_ANY, "(.*)").replace(FILE_WILDCARD_ONE, "(.?)")


def is_wildcard(line: str, kind: SectionKind) -> bool:
    if kind.is_file:
        return FILE_WILDCARD_ANY in line or FILE_WILDCARD_ONE in line
    return FUNCTION_WILDCARD in line


def prepare_line(line: str, kind: SectionKind) -> str:
    """Return the text that will be classified for a line of ``kind``."""
    line = line.strip()
    if not kind.is_file:
        line = normalize_function_line(line)
    return line


def compile_line(line: str, kind: SectionKind) -> SelectionPattern:
    """Classify and compile one non-blank selection file line.

    Args:
        line: Raw line text (surrounding whitespace is ignored).
        kind: Section the line was read from.

    Returns:
        A Literal, or a RegexPattern when the line carries a wildcard marker
        for its dimension.

    Raises:
        re.error: If the translated wildcard is not a valid expression.
    """
    text = prepare_line(line, kind)
    if not is_wildcard(text, kind):
        return Literal(text)
    if kind.is_file:
        expression = file_wildcard_to_regex(text)
    else:
        expression = function_wildcard_to_regex(text)
    return RegexPattern(source=text, regex=re.compile(expression))
