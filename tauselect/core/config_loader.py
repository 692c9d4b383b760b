"""Loader for selection files.

A selection file is a sequence of sections, one token per line::

    BEGIN_INCLUDE_LIST
    compute_#
    END_INCLUDE_LIST
    BEGIN_FILE_EXCLUDE_LIST
    *test*
    END_FILE_EXCLUDE_LIST

Sections can appear in any order and any number of times; repeated
sections of the same kind merge.
"""

from __future__ import annotations

import re
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Union

from .config import Config
from .filters import PatternSetBuilder
from .patterns import compile_line, prepare_line
from .reporter import Reporter
from .types import RegexPattern, SectionKind

BEGIN_TOKENS: Mapping[str, SectionKind] = MappingProxyType(
    {kind.begin_token: kind for kind in SectionKind}
)


class ConfigLoader:
    """Reads a selection file into a Config.

    Malformed input never raises: bad lines are reported on the
    diagnostic channel and the rest of the file is still used.
    """

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        reporter: Optional[Reporter] = None,
    ):
        """Initialize config loader.

        Args:
            config_path: Path to the selection file. None means no file,
                which yields an empty Config.
            reporter: Diagnostic channel (a fresh Reporter if omitted).
        """
        self.config_path = Path(config_path) if config_path else None
        self.reporter = reporter or Reporter()
        self._config: Optional[Config] = None

    def load(self) -> Config:
        """Load the selection file.

        Returns:
            Parsed Config, or an empty one if there is no readable file.
        """
        if self._config is not None:
            return self._config

        if self.config_path is None:
            self._config = Config()
            return self._config

        try:
            with open(self.config_path, "r", encoding="utf-8", errors="replace") as f:
                self._config = self.parse(f)
        except OSError as e:
            self.reporter.unreadable(str(self.config_path), str(e))
            self._config = Config()
            return self._config

        self.reporter.loaded(str(self.config_path))
        return self._config

    def parse(self, lines: Iterable[str]) -> Config:
        """Parse selection file lines.

        Args:
            lines: Lines of the file, with or without line terminators.

        Returns:
            Config holding the four pattern sets.
        """
        builders: Dict[SectionKind, PatternSetBuilder] = {
            kind: PatternSetBuilder() for kind in SectionKind
        }
        current: Optional[SectionKind] = None

        for line_number, raw in enumerate(lines, 1):
            text = raw.strip()
            if not text:
                continue

            if current is None:
                kind = BEGIN_TOKENS.get(text)
                if kind is None:
                    self.reporter.syntax_error(line_number, text)
                    continue
                current = kind
                self.reporter.section_opened(kind)
                continue

            if text == current.end_token:
                current = None
                continue

            try:
                pattern = compile_line(text, current)
            except re.error as e:
                self.reporter.invalid_pattern(line_number, prepare_line(text, current), str(e))
                continue
            builders[current].add(pattern)
            self.reporter.entry_loaded(
                current,
                pattern.source if isinstance(pattern, RegexPattern) else pattern.text,
                isinstance(pattern, RegexPattern),
            )

        if current is not None:
            # lines read before EOF are kept
            self.reporter.unterminated_section(current)

        return Config(
            func_include=builders[SectionKind.FUNCTION_INCLUDE].build(),
            func_exclude=builders[SectionKind.FUNCTION_EXCLUDE].build(),
            file_include=builders[SectionKind.FILE_INCLUDE].build(),
            file_exclude=builders[SectionKind.FILE_EXCLUDE].build(),
        )

    def parse_text(self, text: str) -> Config:
        return self.parse(text.splitlines())
