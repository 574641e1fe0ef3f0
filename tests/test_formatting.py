"""Unit tests for bmregression.formatting."""

import io
import logging
from unittest.mock import patch

from bmregression.config import RegressionConfig
from bmregression.exceptions import CommandFailed, OutputMissing
from bmregression.executor import Action, Outcome, Verdict
from bmregression.formatting import Colors, OutputFormatter

CONFIG = RegressionConfig(
    regbase="basys3_blink",
    sourcedata="working_dir/output.sv",
    targetdata="output.sv",
    regcommand="make hdl",
    tags=("default", "quick"),
)


class TestColorsTTY:
    def test_colors_enabled_on_tty(self):
        """Cover the isatty=True branch of Colors.__init__."""
        fake_tty = io.StringIO()
        fake_tty.isatty = lambda: True
        with patch("sys.stdout", fake_tty):
            c = Colors()
        assert c.RED == "\033[31m"
        assert c.GREEN == "\033[32m"
        assert c.YELLOW == "\033[33m"
        assert c.RESET == "\033[0m"

    def test_colors_disabled_when_piped(self, capsys):
        c = Colors()
        assert c.GREEN == "" and c.RESET == ""


class TestPrintOutcome:
    def test_listing(self, capsys):
        OutputFormatter().print_listing(["basys3_blink", "zedboard_counter"])
        assert capsys.readouterr().out == "Regressions found:\n\tbasys3_blink\n\tzedboard_counter\n"

    def test_description(self, capsys):
        OutputFormatter().print_outcome(Outcome("basys3_blink", Action.DESCRIBE, Verdict.DESCRIBED, CONFIG))
        out = capsys.readouterr().out
        assert "Regression: basys3_blink" in out
        assert "  regbase: basys3_blink" in out
        assert "  sourcedata: working_dir/output.sv" in out
        assert "  targetdata: output.sv" in out
        assert "  regcommand: make hdl" in out
        assert "  tags: ['default', 'quick']" in out

    def test_status_words(self, capsys):
        formatter = OutputFormatter()
        formatter.print_outcome(Outcome("one", Action.RUN, Verdict.PASSED, CONFIG))
        formatter.print_outcome(Outcome("two", Action.RUN, Verdict.FAILED, CONFIG))
        formatter.print_outcome(Outcome("three", Action.RESET, Verdict.RESET, CONFIG))
        formatter.print_outcome(Outcome("four", Action.DIFF, Verdict.NO_DIFFERENCES, CONFIG))
        assert capsys.readouterr().out.splitlines() == [
            "Regression one: passed",
            "Regression two: failed",
            "Regression three: reset",
            "Regression four: no differences",
        ]

    def test_diff_body_printed(self, capsys):
        outcome = Outcome("five", Action.DIFF, Verdict.DIFFERENCES_FOUND, CONFIG, diff="B | X")
        OutputFormatter().print_outcome(outcome)
        assert capsys.readouterr().out == "Regression five: differences found\nB | X\n"


class TestPrintError:
    def test_plain_error(self, capsys):
        OutputFormatter().print_error("silent", OutputMissing("regression result not found: out.txt"))
        out = capsys.readouterr().out
        assert out == "Regression silent: error (OutputMissing): regression result not found: out.txt\n"

    def test_command_failure_shows_output(self, capsys):
        error = CommandFailed("exit code 2", returncode=2, stdout="building\n", stderr="")
        OutputFormatter().print_error("crash", error)
        out = capsys.readouterr().out
        assert "error (CommandFailed)" in out
        assert "=== STDOUT from crash ===" in out
        assert "building" in out
        assert "=== STDERR from crash is empty ===" in out

    def test_long_output_truncated(self, capsys, caplog):
        stdout = "".join(f"line {i}\n" for i in range(20))
        caplog.set_level(logging.WARNING)
        OutputFormatter().print_command_output(stdout, "", "crash")
        out = capsys.readouterr().out
        assert "showing last 10 lines" in out
        assert "line 19" in out
        assert "line 9\n" not in out

    def test_long_output_in_full_at_debug(self, capsys, caplog):
        stdout = "".join(f"line {i}\n" for i in range(20))
        caplog.set_level(logging.DEBUG)
        OutputFormatter().print_command_output(stdout, "", "crash")
        out = capsys.readouterr().out
        assert "line 0\n" in out
        assert "showing last 10 lines" not in out


class TestPrintSummary:
    def test_counts(self, capsys):
        OutputFormatter().print_summary(3, 1, 1)
        out = capsys.readouterr().out
        assert "Regressions :     3" in out
        assert "Failed      :     1" in out
        assert "Errors      :     1" in out
