"""Diagnostic channel for selection file loading and decisions."""

from __future__ import annotations

import logging
import sys
from typing import List, Optional

from .types import Diagnostic, SectionKind

logger = logging.getLogger(__name__)

_SECTION_HEADERS = {
    SectionKind.FUNCTION_INCLUDE: "Included functions:",
    SectionKind.FUNCTION_EXCLUDE: "Excluded functions:",
    SectionKind.FILE_INCLUDE: "Included files:",
    SectionKind.FILE_EXCLUDE: "Excluded files:",
}


class Reporter:
    """Report what was included, excluded and instrumented.

    Every message goes to the ``tauselect`` logger. Load messages are also
    kept in ``diagnostics`` so callers can inspect them afterwards; per
    function decisions are kept only with ``record_decisions``, since
    there is one per selected function. Reporting never influences a
    decision.
    """

    def __init__(
        self,
        log: Optional[logging.Logger] = None,
        verbose: bool = False,
        record_decisions: bool = False,
    ):
        """Initialize the reporter.

        Args:
            log: Logger to write to (defaults to this module's logger).
            verbose: Also echo informational messages to stderr. Warnings
                and errors always reach stderr through logging.
            record_decisions: Keep ``Instrument``/``Adding instrumentation``
                messages in ``diagnostics`` too.
        """
        self.log = log or logger
        self.verbose = verbose
        self.record_decisions = record_decisions
        self.diagnostics: List[Diagnostic] = []

    def _emit(
        self,
        level: int,
        message: str,
        line_number: Optional[int] = None,
        record: bool = True,
    ) -> None:
        if record:
            self.diagnostics.append(
                Diagnostic(
                    level=logging.getLevelName(level),
                    message=message,
                    line_number=line_number,
                )
            )
        self.log.log(level, message)
        if self.verbose and level < logging.WARNING:
            print(message, file=sys.stderr)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.level == "ERROR"]

    def section_opened(self, kind: SectionKind) -> None:
        self._emit(logging.INFO, _SECTION_HEADERS[kind])

    def entry_loaded(self, kind: SectionKind, text: str, is_regex: bool) -> None:
        verb = "Exclude" if kind.is_exclude else "Include"
        if kind.is_file:
            message = f"{verb} file {text}"
        else:
            message = f"{verb} function: {text}"
        if is_regex:
            message += " (regex)"
        self._emit(logging.INFO, message)

    def syntax_error(self, line_number: int, text: str) -> None:
        self._emit(
            logging.ERROR,
            f"line {line_number}: unexpected {text!r}. Wrong syntax: the lists must be between "
            f"{SectionKind.FUNCTION_INCLUDE.begin_token} and {SectionKind.FUNCTION_INCLUDE.end_token} "
            "for the list of functions to instrument and "
            f"{SectionKind.FUNCTION_EXCLUDE.begin_token} and {SectionKind.FUNCTION_EXCLUDE.end_token} "
            "for the list of functions to exclude.",
            line_number,
        )

    def unterminated_section(self, kind: SectionKind) -> None:
        self._emit(
            logging.ERROR,
            "Error while reading the instrumentation list in the input file. "
            f"Did you close it with {kind.end_token}?",
        )

    def invalid_pattern(self, line_number: int, text: str, reason: str) -> None:
        self._emit(
            logging.ERROR,
            f"line {line_number}: cannot compile wildcard {text!r}: {reason}",
            line_number,
        )

    def unreadable(self, path: str, reason: str) -> None:
        self._emit(logging.WARNING, f"Could not read selection file {path}: {reason}")

    def loaded(self, path: str) -> None:
        self._emit(logging.INFO, f"functions were loaded from file {path}")

    def instrument(self, name: str) -> None:
        self._emit(logging.INFO, f"Instrument {name}", record=self.record_decisions)

    def adding_instrumentation(self, name: str) -> None:
        self._emit(
            logging.INFO, f"Adding instrumentation in {name}", record=self.record_decisions
        )
