"""Execution of a single regression action.

``RegressionExecutor.execute`` loads a case, runs its command inside the example sources and applies one of the four
actions to the produced file. Every failing step raises its own ``RegressionError`` subclass so callers can tell, for
instance, a command that produced nothing (``OutputMissing``) from a catalog entry with no reference (``ExpectedMissing``).

Commands are run through ``/bin/sh -c``: ``regcommand`` may use pipes, redirections and other shell syntax, and is
never split into words by this tool.
"""

import enum
import logging
import os
import signal
import subprocess
from dataclasses import dataclass
from pathlib import Path

from bmregression.comparator import contents_match, decode_for_display, side_by_side_diff
from bmregression.config import RegressionConfig, load_config
from bmregression.exceptions import (
    BaseMissing,
    CaseMissing,
    CommandFailed,
    CommandTimeout,
    ExpectedMissing,
    OutputMissing,
    UsageError,
    WriteFailed,
)


class Action(enum.Enum):
    """Action applied to each selected regression."""

    DESCRIBE = "describe"
    RUN = "run"
    RESET = "reset"
    DIFF = "diff"


class Verdict(enum.Enum):
    """Outcome of one action on one regression; the value is the status word shown to the user."""

    DESCRIBED = "described"
    PASSED = "passed"
    FAILED = "failed"
    RESET = "reset"
    NO_DIFFERENCES = "no differences"
    DIFFERENCES_FOUND = "differences found"

    @property
    def success(self) -> bool:
        return self not in (Verdict.FAILED, Verdict.DIFFERENCES_FOUND)


@dataclass(frozen=True)
class Outcome:
    """Result of applying an action to a regression."""

    case_name: str
    action: Action
    verdict: Verdict
    config: RegressionConfig
    diff: str = ""


class RegressionExecutor:
    """Apply actions to regression cases.

    Args:
        timeout: Seconds a regression command may run, ``None`` to wait indefinitely.
    """

    def __init__(self, timeout: float | None = None):
        self.timeout = timeout

    # --------------------------------------------------------------------- #
    # Public API
    # --------------------------------------------------------------------- #

    def execute(self, source_root: Path, catalog_root: Path, action: Action, case_name: str) -> Outcome:
        """Apply *action* to the regression *case_name*.

        Args:
            source_root: Root of the example sources, holding the ``regbase`` directories
            catalog_root: Root of the regression catalog, holding one directory per case
            action: Action to apply
            case_name: Name of the case directory in the catalog

        Returns:
            The outcome of the action

        Raises:
            RegressionError: a subclass naming the step that failed
        """
        if not isinstance(action, Action):
            raise UsageError(f"Unknown action: {action}")
        logging.debug(f"Execute regression: \"{case_name}\" ({action.value})")

        case_dir = Path(catalog_root) / case_name
        if not case_dir.is_dir():
            raise CaseMissing(f"regression directory not found: {case_dir}")

        config = load_config(catalog_root, case_name)

        if action is Action.DESCRIBE:
            return Outcome(case_name, action, Verdict.DESCRIBED, config)

        work_dir = self._resolve_base(source_root, config)
        self._run_command(config.regcommand, work_dir)
        actual = self._read_output(work_dir, config)
        expected_file = case_dir / config.targetdata

        if action is Action.RESET:
            self._write_expected(expected_file, actual)
            return Outcome(case_name, action, Verdict.RESET, config)

        expected = self._read_expected(expected_file)

        if action is Action.RUN:
            verdict = Verdict.PASSED if contents_match(actual, expected) else Verdict.FAILED
            return Outcome(case_name, action, verdict, config)

        if contents_match(actual, expected):
            return Outcome(case_name, action, Verdict.NO_DIFFERENCES, config)
        body = side_by_side_diff(decode_for_display(actual), decode_for_display(expected))
        if not body:
            body = f"{config.sourcedata} and {config.targetdata} differ"
        return Outcome(case_name, action, Verdict.DIFFERENCES_FOUND, config, diff=body)

    # --------------------------------------------------------------------- #
    # Private helpers
    # --------------------------------------------------------------------- #

    @staticmethod
    def _resolve_base(source_root: Path, config: RegressionConfig) -> Path:
        """Return the working directory of the regression command."""

        work_dir = Path(source_root) / config.regbase
        logging.debug(f"examplesource: {work_dir}")
        if not work_dir.is_dir():
            raise BaseMissing(f"regression base directory not found: {work_dir}")
        return work_dir

    def _run_command(self, command: str, work_dir: Path) -> None:
        """Run *command* through the shell in *work_dir*, raising on a non-zero exit.

        The shell starts its own session so that, on timeout, every process it spawned is killed along with it.
        """

        logging.info(f"Executing: {command} (in {work_dir})")
        try:
            process = subprocess.Popen(
                command,
                shell=True,
                cwd=work_dir,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                start_new_session=True,
            )
        except OSError as e:
            raise CommandFailed(f"cannot execute regression command '{command}': {e}") from e

        try:
            stdout, stderr = process.communicate(timeout=self.timeout)
        except subprocess.TimeoutExpired as e:
            _kill_process_group(process)
            stdout, stderr = process.communicate()
            raise CommandTimeout(
                f"regression command timed out after {self.timeout} seconds: {command}",
                stdout=stdout,
                stderr=stderr,
            ) from e

        if process.returncode != 0:
            logging.debug(f"Command failed with exit code {process.returncode}")
            raise CommandFailed(
                f"regression command failed with exit code {process.returncode}: {command}",
                returncode=process.returncode,
                stdout=stdout,
                stderr=stderr,
            )
        if stderr:
            logging.debug(f"STDERR: {stderr}")

    @staticmethod
    def _read_output(work_dir: Path, config: RegressionConfig) -> bytes:
        """Read the file produced by the regression command."""

        result_file = work_dir / config.sourcedata
        logging.debug(f"result: {result_file}")
        if not result_file.is_file():
            raise OutputMissing(f"regression result not found: {result_file}")
        try:
            return result_file.read_bytes()
        except OSError as e:
            raise OutputMissing(f"cannot read regression result {result_file}: {e}") from e

    @staticmethod
    def _read_expected(expected_file: Path) -> bytes:
        logging.debug(f"targetdatafull: {expected_file}")
        if not expected_file.is_file():
            raise ExpectedMissing(f"regression expected data not found: {expected_file}")
        try:
            return expected_file.read_bytes()
        except OSError as e:
            raise ExpectedMissing(f"cannot read regression expected data {expected_file}: {e}") from e

    @staticmethod
    def _write_expected(expected_file: Path, content: bytes) -> None:
        """Overwrite the expected file with *content*, creating it if needed."""

        try:
            expected_file.parent.mkdir(parents=True, exist_ok=True)
            expected_file.write_bytes(content)
        except OSError as e:
            raise WriteFailed(f"cannot write {expected_file}: {e}") from e
        logging.debug(f"Updated {expected_file}")


def _kill_process_group(process: subprocess.Popen) -> None:
    """Kill the session leader *process* and every process in its group."""
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        logging.debug(f"Process group {process.pid} already exited")
