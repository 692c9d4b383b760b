from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Pattern, Tuple, Union

from .errors import InvalidRegexError
from .filters import PatternSet
from .reporter import Reporter
from .types import SectionKind

DEFAULT_START_FUNC = "Tau_start"
DEFAULT_STOP_FUNC = "Tau_stop"


@dataclass(frozen=True)
class SelectionOptions:
    """Values of the command-line flags the engine depends on.

    Attributes:
        input_file: Selection file (``--tau-input-file``); None for no file.
        start_func: Hook called on function entry (``--tau-start-func``).
        stop_func: Hook called on function exit (``--tau-stop-func``).
        regex: Case-sensitive include regex (``--tau-regex``).
        iregex: Case-insensitive include regex (``--tau-iregex``).
        dry_run: Decide and report but never instrument (``--tau-dry-run``).
    """

    input_file: Optional[Union[str, Path]] = None
    start_func: str = DEFAULT_START_FUNC
    stop_func: str = DEFAULT_STOP_FUNC
    regex: str = ""
    iregex: str = ""
    dry_run: bool = False


def _compile_cli_regex(option: str, pattern: str, flags: int = 0) -> Optional[Pattern[str]]:
    if not pattern:
        return None
    try:
        return re.compile(pattern, flags)
    except re.error as e:
        raise InvalidRegexError(option, pattern, str(e)) from e


@dataclass(frozen=True)
class Config:
    """Immutable selection configuration.

    Built once, before any decision is taken, and shared read-only by
    every query afterwards.
    """

    func_include: PatternSet = field(default_factory=PatternSet)
    func_exclude: PatternSet = field(default_factory=PatternSet)
    file_include: PatternSet = field(default_factory=PatternSet)
    file_exclude: PatternSet = field(default_factory=PatternSet)
    cli_regex: Optional[Pattern[str]] = None
    cli_iregex: Optional[Pattern[str]] = None

    @classmethod
    def from_options(
        cls, options: SelectionOptions, reporter: Optional[Reporter] = None
    ) -> "Config":
        """Load the selection file named by the options and compile the CLI regexes.

        Args:
            options: Command-line values.
            reporter: Diagnostic channel for the load.

        Returns:
            The run's Config.

        Raises:
            InvalidRegexError: If ``regex`` or ``iregex`` does not compile.
        """
        from .config_loader import ConfigLoader

        cli_regex = _compile_cli_regex("--tau-regex", options.regex)
        cli_iregex = _compile_cli_regex("--tau-iregex", options.iregex, re.IGNORECASE)

        cfg = ConfigLoader(options.input_file, reporter=reporter).load()
        return replace(cfg, cli_regex=cli_regex, cli_iregex=cli_iregex)

    @property
    def cli_regexes(self) -> Tuple[Optional[Pattern[str]], ...]:
        return (self.cli_regex, self.cli_iregex)

    def pattern_set(self, kind: SectionKind) -> PatternSet:
        return {
            SectionKind.FUNCTION_INCLUDE: self.func_include,
            SectionKind.FUNCTION_EXCLUDE: self.func_exclude,
            SectionKind.FILE_INCLUDE: self.file_include,
            SectionKind.FILE_EXCLUDE: self.file_exclude,
        }[kind]

    def has_file_constraints(self) -> bool:
        return not (self.file_include.is_empty() and self.file_exclude.is_empty())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "function_include": self.func_include.to_dict(),
            "function_exclude": self.func_exclude.to_dict(),
            "file_include": self.file_include.to_dict(),
            "file_exclude": self.file_exclude.to_dict(),
            "regex": self.cli_regex.pattern if self.cli_regex else None,
            "iregex": self.cli_iregex.pattern if self.cli_iregex else None,
        }
