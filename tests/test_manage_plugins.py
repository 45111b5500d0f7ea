"""Tests for the manage_plugins command line tool."""

import argparse
import sys
from unittest.mock import patch

import pytest
from rich.console import Console

import manage_plugins


def run_cli(*args):
    # Wide console so table cells are not wrapped
    with patch.object(sys, "argv", ["manage_plugins.py", *args]), \
            patch.object(manage_plugins, "console", Console(width=200)):
        manage_plugins.main()


class TestParseConfigPairs:
    """Tests for parse_config_pairs."""

    def test_pairs(self):
        assert manage_plugins.parse_config_pairs(["a=1", "b=x=y", "c="]) == {"a": "1", "b": "x=y", "c": ""}

    def test_missing_separator(self):
        with pytest.raises(argparse.ArgumentTypeError):
            manage_plugins.parse_config_pairs(["novalue"])


class TestCommands:
    """Tests for the CLI commands."""

    def test_validate_valid(self, capsys):
        run_cli(
            "validate",
            "exampleConfigProperty=helloworld",
            "exampleEnumConfigProperty=OPTION_ONE",
            "secretExampleConfigProperty=abcde",
        )
        assert "valid" in capsys.readouterr().out

    def test_validate_invalid_exits_1(self):
        with pytest.raises(SystemExit) as exc_info:
            run_cli("validate", "exampleConfigProperty=wrong")
        assert exc_info.value.code == 1

    def test_search(self, capsys):
        run_cli("search", "Portal", "--max-results", "1")
        assert "Hello World Game" in capsys.readouterr().out

    def test_search_with_invalid_config_exits_1(self):
        with pytest.raises(SystemExit) as exc_info:
            run_cli("search", "Portal", "--config", "exampleConfigProperty=wrong")
        assert exc_info.value.code == 1

    def test_lookup(self, capsys):
        run_cli("lookup", "my-game")
        assert "my-game" in capsys.readouterr().out

    def test_schema_and_info(self, capsys):
        run_cli("schema")
        run_cli("info")
        out = capsys.readouterr().out
        assert "exampleConfigProperty" in out
        assert "Plugin Template" in out

    def test_no_command_exits_1(self):
        with pytest.raises(SystemExit) as exc_info:
            run_cli()
        assert exc_info.value.code == 1
