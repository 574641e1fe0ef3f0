"""YAML report generation for bmregression.

The :class:`ReportWriter` class builds structured entries from per-case outcomes and errors and writes the final YAML
report to disk. The runner orchestrates the regressions while the report writer owns serialisation.
"""

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

from bmregression.exceptions import CommandFailed, RegressionError, ReportError
from bmregression.executor import Action, Outcome

yaml = YAML()
yaml.default_flow_style = False


class ReportWriter:
    """Builds and writes YAML regression reports."""

    @staticmethod
    def build_outcome_entry(outcome: Outcome) -> dict[str, Any]:
        """Build the report entry of a regression that completed its action."""
        entry: dict[str, Any] = {
            "action": outcome.action.value,
            "status": outcome.verdict.value,
            "regbase": outcome.config.regbase,
            "tags": list(outcome.config.tags),
        }
        if outcome.diff:
            entry["diff"] = outcome.diff
        return entry

    @staticmethod
    def build_error_entry(action: Action, error: RegressionError) -> dict[str, Any]:
        """Build the report entry of a regression whose action raised *error*."""
        entry: dict[str, Any] = {
            "action": action.value,
            "status": "error",
            "error": error.kind,
            "message": str(error),
        }
        if isinstance(error, CommandFailed) and error.returncode is not None:
            entry["returncode"] = error.returncode
        return entry

    @staticmethod
    def write(report_file: str | Path, action: Action, tags: Iterable[str], entries: dict[str, Any]) -> None:
        """Serialise the full report to *report_file*.

        Args:
            report_file: Destination path for the YAML report
            action: Action applied to the regressions
            tags: Requested tag set
            entries: Per-case entries keyed by regression name
        """
        report = {
            "Action": action.value,
            "Tags": sorted(tags),
            "Regressions": entries,
        }
        try:
            with Path(report_file).open("w") as f:
                yaml.dump(report, f)
        except OSError as e:
            raise ReportError(f"cannot write report {report_file}: {e}") from e
        logging.info(f"Report written to {report_file}")
