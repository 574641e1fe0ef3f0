"""Terminal formatting, color output, and display helpers for bmregression."""

import logging
import sys
from collections.abc import Iterable

from bmregression.exceptions import CommandFailed, RegressionError
from bmregression.executor import Outcome, Verdict


class Colors:
    """ANSI color codes for terminal output.

    Automatically detects if stdout is a TTY and disables colors if not.
    This ensures clean output when redirecting to files or pipes.
    """

    def __init__(self):
        """Initialize color codes based on TTY detection."""
        if sys.stdout.isatty():
            self.BLUE = "\033[34m"
            self.RED = "\033[31m"
            self.GREEN = "\033[32m"
            self.YELLOW = "\033[33m"
            self.RESET = "\033[0m"
        else:
            # No colors for non-TTY output (files, pipes, etc.)
            self.BLUE = ""
            self.RED = ""
            self.GREEN = ""
            self.YELLOW = ""
            self.RESET = ""


class OutputFormatter:
    """Prints regression listings, descriptions, verdicts and errors.

    Accepts a Colors instance via constructor rather than creating its own.
    """

    def __init__(self, colors: Colors | None = None):
        self.colors = colors or Colors()

    def _verdict_color(self, verdict: Verdict) -> str:
        if verdict is Verdict.RESET:
            return self.colors.YELLOW
        return self.colors.GREEN if verdict.success else self.colors.RED

    def print_listing(self, case_names: Iterable[str]) -> None:
        print("Regressions found:")
        for name in case_names:
            print(f"\t{name}")

    def print_outcome(self, outcome: Outcome) -> None:
        """Print the verdict of one regression, or its description for ``describe``."""
        if outcome.verdict is Verdict.DESCRIBED:
            config = outcome.config
            print(f"Regression: {self.colors.GREEN}{outcome.case_name}{self.colors.RESET}")
            print(f"  regbase: {config.regbase}")
            print(f"  sourcedata: {config.sourcedata}")
            print(f"  targetdata: {config.targetdata}")
            print(f"  regcommand: {config.regcommand}")
            print(f"  tags: {list(config.tags)}")
            return

        color = self._verdict_color(outcome.verdict)
        print(f"Regression {outcome.case_name}: {color}{outcome.verdict.value}{self.colors.RESET}")
        if outcome.diff:
            print(outcome.diff)

    def print_error(self, case_name: str, error: RegressionError) -> None:
        """Print a per-case error, including captured command output when there is some."""
        print(f"Regression {case_name}: {self.colors.RED}error ({error.kind}){self.colors.RESET}: {error}")
        if isinstance(error, CommandFailed):
            self.print_command_output(error.stdout, error.stderr, case_name)

    def print_command_output(self, stdout: str, stderr: str, case_name: str) -> None:
        """Print stdout and stderr captured from a failed regression command.

        Args:
            stdout: Captured standard output
            stderr: Captured standard error
            case_name: Name of the regression for context
        """
        # Check current logging level to determine how much to show
        show_full_output = logging.getLogger().isEnabledFor(logging.DEBUG)

        for content, output_name in [(stdout, "STDOUT"), (stderr, "STDERR")]:
            if not content.strip():
                print(f"{self.colors.RED}=== {output_name} from {case_name} is empty ==={self.colors.RESET}")
                continue

            lines = content.splitlines()
            print(f"{self.colors.RED}=== {output_name} from {case_name} ==={self.colors.RESET}")
            if show_full_output or len(lines) <= 10:
                print(content.rstrip("\n"))
            else:
                print("... (showing last 10 lines, use -vv to see full output)")
                print("\n".join(lines[-10:]))
            print(f"{self.colors.RED}=== End {output_name} ==={self.colors.RESET}")

    def print_summary(self, total: int, failed: int, errors: int) -> None:
        print("Summary:")
        print(f"  Regressions : {total:-5}")
        print(f"  Failed      : {failed:-5}")
        print(f"  Errors      : {errors:-5}")
