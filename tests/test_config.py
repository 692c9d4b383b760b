"""Unit tests for the Config class."""

from __future__ import annotations

import dataclasses
import re

import pytest

from tauselect.core.config import Config, SelectionOptions
from tauselect.core.errors import InvalidRegexError, SelectionError
from tauselect.core.reporter import Reporter
from tauselect.core.types import SectionKind


class TestSelectionOptions:
    """Test suite for SelectionOptions."""

    def test_defaults(self):
        """Test the command-line defaults."""
        opts = SelectionOptions()
        assert opts.input_file is None
        assert opts.start_func == "Tau_start"
        assert opts.stop_func == "Tau_stop"
        assert opts.regex == ""
        assert opts.iregex == ""
        assert opts.dry_run is False


class TestConfig:
    """Test suite for Config class."""

    def test_empty(self):
        """Test a default Config has no constraints."""
        cfg = Config()
        assert cfg.func_include.is_empty()
        assert not cfg.has_file_constraints()
        assert cfg.cli_regexes == (None, None)

    def test_frozen(self):
        """Test a Config cannot be mutated after construction."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            Config().cli_regex = re.compile("x")  # type: ignore[misc]

    def test_from_options_without_file(self):
        """Test options with no file give empty pattern sets."""
        cfg = Config.from_options(SelectionOptions())
        assert cfg == Config()

    def test_from_options_loads_file(self, tmp_path):
        """Test the input file is read."""
        config_file = tmp_path / "select.tau"
        config_file.write_text("BEGIN_FILE_EXCLUDE_LIST\ngen.c\nEND_FILE_EXCLUDE_LIST\n")
        reporter = Reporter()

        cfg = Config.from_options(SelectionOptions(input_file=config_file), reporter=reporter)
        assert cfg.file_exclude.literals == frozenset({"gen.c"})
        assert cfg.has_file_constraints()
        assert any("loaded from file" in d.message for d in reporter.diagnostics)

    def test_cli_regexes_compiled(self):
        """Test the command-line regexes are compiled once."""
        cfg = Config.from_options(SelectionOptions(regex="^profile_", iregex="^MPI_"))
        assert cfg.cli_regex.pattern == "^profile_"
        assert not cfg.cli_regex.flags & re.IGNORECASE
        assert cfg.cli_iregex.pattern == "^MPI_"
        assert cfg.cli_iregex.flags & re.IGNORECASE

    def test_empty_cli_regex_unset(self):
        """Test empty regex strings mean no regex."""
        cfg = Config.from_options(SelectionOptions(regex="", iregex=""))
        assert cfg.cli_regex is None
        assert cfg.cli_iregex is None

    def test_invalid_cli_regex(self):
        """Test an invalid command-line regex is rejected."""
        with pytest.raises(InvalidRegexError) as exc_info:
            Config.from_options(SelectionOptions(iregex="(unclosed"))
        assert exc_info.value.option == "--tau-iregex"
        assert isinstance(exc_info.value, ValueError)
        assert isinstance(exc_info.value, SelectionError)

    def test_pattern_set_by_kind(self):
        """Test sets are looked up by section kind."""
        cfg = Config.from_options(SelectionOptions())
        for kind in SectionKind:
            assert cfg.pattern_set(kind).is_empty()

    def test_to_dict(self, tmp_path):
        """Test the serializable view."""
        config_file = tmp_path / "select.tau"
        config_file.write_text("BEGIN_INCLUDE_LIST\nmain\nEND_INCLUDE_LIST\n")
        cfg = Config.from_options(SelectionOptions(input_file=str(config_file), regex="x"))
        data = cfg.to_dict()
        assert data["function_include"]["literals"] == ["main"]
        assert data["file_exclude"] == {"literals": [], "patterns": [], "regexes": []}
        assert data["regex"] == "x"
        assert data["iregex"] is None
