"""Batch execution of regression actions.

The runner selects the cases of the catalog, applies one action to each of them in turn, prints every outcome as soon
as it is known and turns the collected verdicts into a process exit code. A failing case never stops the batch: its
error is reported against its name and the runner proceeds to the next case. Only an unreadable catalog aborts the
command.
"""

import logging

from bmregression.discovery import discover
from bmregression.exceptions import ExitCode, RegressionError
from bmregression.executor import Action, Outcome, RegressionExecutor
from bmregression.formatting import OutputFormatter
from bmregression.report import ReportWriter
from bmregression.settings import Settings


class RegressionRunner:
    """Main class for running regression actions over the catalog.

    Args:
        settings: Run-wide settings
        executor: Executor applying actions to single cases
        output_formatter: Formatter used to display outcomes
    """

    def __init__(
        self,
        settings: Settings,
        executor: RegressionExecutor | None = None,
        output_formatter: OutputFormatter | None = None,
    ):
        self.settings = settings
        self.executor = executor or RegressionExecutor(timeout=settings.timeout)
        self.output_formatter = output_formatter or OutputFormatter()
        self.results: dict[str, Outcome | RegressionError] = {}
        self.failed_regressions = 0
        self.errored_regressions = 0

    def list_regressions(self, name_pattern: str = "") -> int:
        """Print the names of the selected regressions."""
        names = discover(self.settings.catalog_root, name_pattern, self.settings.tags)
        self.output_formatter.print_listing(names)
        return ExitCode.OK

    def run(self, action: Action, name_pattern: str = "") -> int:
        """Apply *action* to every selected regression.

        Args:
            action: Action to apply
            name_pattern: Substring selecting regressions by name; empty selects all

        Returns:
            ``ExitCode.OK`` when every regression succeeded, ``ExitCode.TEST_FAILURE`` when at least one failed its
            comparison or raised an error
        """
        case_names = discover(self.settings.catalog_root, name_pattern, self.settings.tags)
        logging.info(f"{action.value}: {len(case_names)} regression(s) selected")

        report_entries = {}
        for case_name in case_names:
            try:
                outcome = self.executor.execute(
                    self.settings.source_root,
                    self.settings.catalog_root,
                    action,
                    case_name,
                )
            except RegressionError as e:
                self.errored_regressions += 1
                self.results[case_name] = e
                self.output_formatter.print_error(case_name, e)
                report_entries[case_name] = ReportWriter.build_error_entry(action, e)
                continue

            if not outcome.verdict.success:
                self.failed_regressions += 1
            self.results[case_name] = outcome
            self.output_formatter.print_outcome(outcome)
            report_entries[case_name] = ReportWriter.build_outcome_entry(outcome)

        if action is not Action.DESCRIBE:
            self.output_formatter.print_summary(len(case_names), self.failed_regressions, self.errored_regressions)

        if self.settings.report_file:
            ReportWriter.write(self.settings.report_file, action, self.settings.tags, report_entries)

        if self.failed_regressions == 0 and self.errored_regressions == 0:
            return ExitCode.OK
        return ExitCode.TEST_FAILURE
