"""Per-function instrumentation decision."""

from __future__ import annotations

from typing import Callable, Optional

from .config import Config
from .filters import matches
from .reporter import Reporter
from .types import MatchRequest

Demangler = Callable[[str], str]


def identity_demangle(name: str) -> str:
    return name


class Selector:
    """Decide whether a function gets start/stop hooks.

    Files and functions default in opposite directions: with no file
    sections every file is allowed, while a function needs a positive
    match in the include section or one of the command-line regexes.
    Exclusion always wins over inclusion.

    The selector only reads its Config and can be queried from several
    threads once built.
    """

    def __init__(
        self,
        config: Config,
        reporter: Optional[Reporter] = None,
        demangle: Demangler = identity_demangle,
    ):
        self.config = config
        self.reporter = reporter or Reporter()
        self.demangle = demangle

    def file_allowed(self, source_file: str) -> bool:
        cfg = self.config
        if not cfg.has_file_constraints():
            return True
        included = cfg.file_include.is_empty() or matches(source_file, cfg.file_include)
        return included and not matches(source_file, cfg.file_exclude)

    def function_allowed(self, name: str) -> bool:
        cfg = self.config
        # command-line regexes only take part in the include test
        included = matches(name, cfg.func_include, cfg.cli_regexes)
        return included and not matches(name, cfg.func_exclude)

    def decide(self, request: MatchRequest) -> bool:
        """Decide for one function.

        Args:
            request: Readable function name and its resolved source file.

        Returns:
            True if the function should be instrumented. An empty name
            (failed demangling) is never instrumented.
        """
        name = request.function_name
        if not name:
            return False
        if self.file_allowed(request.source_file) and self.function_allowed(name):
            self.reporter.instrument(name)
            return True
        return False

    def decide_raw(self, raw_name: str, source_file: str) -> bool:
        """Demangle ``raw_name`` and decide for it."""
        readable = self.demangle(raw_name) or ""
        return self.decide(MatchRequest(function_name=readable, source_file=source_file))
