"""Exceptions raised by tauselect."""

from __future__ import annotations


class SelectionError(Exception):
    """Base class for selection errors."""


class InvalidRegexError(SelectionError, ValueError):
    """Raised when a command-line regular expression does not compile."""

    def __init__(self, option: str, pattern: str, reason: str):
        self.option = option
        self.pattern = pattern
        super().__init__(f"Invalid {option} regular expression {pattern!r}: {reason}")
