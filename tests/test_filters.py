"""Unit tests for the filters module."""

from __future__ import annotations

import dataclasses
import re

import pytest

from tauselect.core.filters import PatternSet, PatternSetBuilder, matches
from tauselect.core.patterns import compile_line
from tauselect.core.types import Literal, SectionKind


def _build(*lines: str, kind: SectionKind = SectionKind.FUNCTION_INCLUDE) -> PatternSet:
    builder = PatternSetBuilder()
    for line in lines:
        builder.add(compile_line(line, kind))
    return builder.build()


class TestPatternSet:
    """Test suite for PatternSet."""

    def test_empty(self):
        """Test a default PatternSet is empty and matches nothing."""
        ps = PatternSet()
        assert ps.is_empty()
        assert not ps.matches("")
        assert not ps.matches("anything")

    def test_literal_is_exact_and_case_sensitive(self):
        """Test literals match only the identical string."""
        ps = _build("foo")
        assert ps.matches("foo")
        assert not ps.matches("Foo")
        assert not ps.matches("foo2")

    def test_builder_classifies_lines(self):
        """Test literals and wildcards land in their own collection."""
        ps = _build("foo", "bar#", "foo")
        assert ps.literals == frozenset({"foo"})
        assert [p.source for p in ps.patterns] == ["bar#"]
        assert not ps.is_empty()

    def test_wildcard_match(self):
        """Test compiled wildcards are consulted after literals."""
        ps = _build("bar#")
        assert ps.matches("bar")
        assert ps.matches("barista")
        assert not ps.matches("rebar")

    def test_frozen(self):
        """Test a built PatternSet cannot be reassigned."""
        ps = _build("foo")
        with pytest.raises(dataclasses.FrozenInstanceError):
            ps.literals = frozenset()  # type: ignore[misc]

    def test_builder_is_append_only_snapshot(self):
        """Test later additions do not leak into an already built set."""
        builder = PatternSetBuilder()
        builder.add(Literal("a"))
        first = builder.build()
        builder.add(Literal("b"))
        assert first.literals == frozenset({"a"})

    def test_to_dict(self):
        """Test the serializable view."""
        ps = _build("*.c", "main.c", kind=SectionKind.FILE_INCLUDE)
        assert ps.to_dict() == {
            "literals": ["main.c"],
            "patterns": ["*.c"],
            "regexes": ["(.*).c"],
        }


class TestMatches:
    """Test suite for the matches helper."""

    def test_without_cli_regexes(self):
        """Test it falls back to the pattern set."""
        ps = _build("foo")
        assert matches("foo", ps)
        assert not matches("bar", ps)

    def test_cli_regex_searches(self):
        """Test command-line regexes match anywhere in the name."""
        assert matches("profile_init", PatternSet(), (re.compile("init"),))

    def test_unset_cli_regex_skipped(self):
        """Test None entries are ignored."""
        assert not matches("foo", PatternSet(), (None, None))

    def test_case_insensitive_regex(self):
        """Test the flags of the compiled regex are honoured."""
        assert matches("Profile_X", PatternSet(), (None, re.compile("^profile", re.IGNORECASE)))
