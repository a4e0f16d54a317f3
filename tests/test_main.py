"""
Tests for the command-line entry point.
"""

import pytest

from chipdex import main as cli


class TestParser:
    def test_lookup_arguments(self):
        args = cli.build_parser().parse_args(["lookup", "Air", "--kind", "chip", "--limit", "3"])

        assert args.func is cli.lookup_cmd
        assert args.query == "Air"
        assert args.kind == "chip"
        assert args.limit == 3

    def test_lookup_defaults(self):
        args = cli.build_parser().parse_args(["lookup", "Mettaur"])
        assert args.kind == "all"
        assert args.limit == 5

    def test_unknown_kind_is_rejected(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["lookup", "Air", "--kind", "navi"])

    def test_roll_arguments(self):
        args = cli.build_parser().parse_args(["roll", "2d6+3", "--reroll"])
        assert args.func is cli.roll_cmd
        assert args.reroll is True


class TestRollCommand:
    def test_prints_total(self, capsys):
        args = cli.build_parser().parse_args(["roll", "3"])
        cli.roll_cmd(args)

        out = capsys.readouterr().out
        assert "You rolled: 3" in out

    def test_bad_expression_exits(self, capsys):
        args = cli.build_parser().parse_args(["roll", "fire"])
        with pytest.raises(SystemExit) as exc:
            cli.roll_cmd(args)

        assert exc.value.code == 2
        assert capsys.readouterr().err


class TestMain:
    def test_no_command_prints_help(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.argv", ["chipdex"])
        with pytest.raises(SystemExit) as exc:
            cli.main()

        assert exc.value.code == 1
        assert "usage: chipdex" in capsys.readouterr().out
