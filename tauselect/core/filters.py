"""Pattern sets for including/excluding functions and files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Pattern, Set, Tuple

from .types import Literal, RegexPattern, SelectionPattern


@dataclass(frozen=True)
class PatternSet:
    """Literal names and compiled wildcards for one section kind.

    Attributes:
        literals: Exact names.
        patterns: Compiled wildcards, in the order they were read.
    """

    literals: FrozenSet[str] = frozenset()
    patterns: Tuple[RegexPattern, ...] = ()

    def is_empty(self) -> bool:
        return not self.literals and not self.patterns

    def matches(self, candidate: str) -> bool:
        """Check a name against the literals, then the wildcards.

        Args:
            candidate: Function name or file name.

        Returns:
            True if the candidate equals a literal or fully matches a wildcard.
        """
        if candidate in self.literals:
            return True
        return any(p.fullmatch(candidate) for p in self.patterns)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "literals": sorted(self.literals),
            "patterns": [p.source for p in self.patterns],
            "regexes": [p.regex.pattern for p in self.patterns],
        }


@dataclass
class PatternSetBuilder:
    """Append-only accumulator used while a selection file is read."""

    literals: Set[str] = field(default_factory=set)
    patterns: List[RegexPattern] = field(default_factory=list)

    def add(self, pattern: SelectionPattern) -> None:
        if isinstance(pattern, Literal):
            self.literals.add(pattern.text)
        else:
            self.patterns.append(pattern)

    def build(self) -> PatternSet:
        return PatternSet(literals=frozenset(self.literals), patterns=tuple(self.patterns))


def matches(
    candidate: str,
    pattern_set: PatternSet,
    cli_regexes: Tuple[Optional[Pattern[str]], ...] = (),
) -> bool:
    """Check if a name is selected by a pattern set or a command-line regex.

    Command-line regexes are searched (they may match anywhere in the
    name); unset ones are passed as None and skipped.

    Args:
        candidate: Function name or file name.
        pattern_set: Set read from the selection file.
        cli_regexes: Global regexes taking part in this test.

    Returns:
        True if the candidate is selected.
    """
    for regex in cli_regexes:
        if regex is not None and regex.search(candidate):
            return True
    return pattern_set.matches(candidate)
