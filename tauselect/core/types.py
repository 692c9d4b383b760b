"""Type definitions for the instrumentation selection engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Pattern, Union


class SectionKind(Enum):
    """The four sections of a selection file.

    Each member carries its begin and end token.
    """

    FUNCTION_INCLUDE = ("BEGIN_INCLUDE_LIST", "END_INCLUDE_LIST")
    FUNCTION_EXCLUDE = ("BEGIN_EXCLUDE_LIST", "END_EXCLUDE_LIST")
    FILE_INCLUDE = ("BEGIN_FILE_INCLUDE_LIST", "END_FILE_INCLUDE_LIST")
    FILE_EXCLUDE = ("BEGIN_FILE_EXCLUDE_LIST", "END_FILE_EXCLUDE_LIST")

    @property
    def begin_token(self) -> str:
        return self.value[0]

    @property
    def end_token(self) -> str:
        return self.value[1]

    @property
    def is_file(self) -> bool:
        return self in (SectionKind.FILE_INCLUDE, SectionKind.FILE_EXCLUDE)

    @property
    def is_exclude(self) -> bool:
        return self in (SectionKind.FUNCTION_EXCLUDE, SectionKind.FILE_EXCLUDE)


@dataclass(frozen=True)
class Literal:
    """Exact, case-sensitive name.

    Attributes:
        text: The name as written in the selection file.
    """

    text: str


@dataclass(frozen=True)
class RegexPattern:
    """Wildcard line compiled into a full-match regular expression.

    Attributes:
        source: The line as written in the selection file.
        regex: Compiled expression, matched against the whole candidate.
    """

    source: str
    regex: Pattern[str]

    def fullmatch(self, candidate: str) -> bool:
        return self.regex.fullmatch(candidate) is not None


SelectionPattern = Union[Literal, RegexPattern]


@dataclass(frozen=True)
class MatchRequest:
    """One function to decide on.

    Attributes:
        function_name: Readable (demangled) function name.
        source_file: Resolved source file of the function.
    """

    function_name: str
    source_file: str


@dataclass(frozen=True)
class Diagnostic:
    """A message emitted on the diagnostic channel.

    Attributes:
        level: Logging level name ('INFO', 'WARNING', 'ERROR').
        message: Human readable text.
        line_number: Line of the selection file, when the message is about one.
    """

    level: str
    message: str
    line_number: Optional[int] = None


@dataclass(frozen=True)
class HookPlan:
    """What the mutation step has to insert into one function.

    Attributes:
        function_name: Readable name, passed as the hook label.
        start_func: Hook called before the function's entry point.
        stop_func: Hook called before each return point.
    """

    function_name: str
    start_func: str
    stop_func: str
